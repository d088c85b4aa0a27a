# bytebraise

Lossless syntax trees for BitBake metadata (`.bb`, `.bbclass`, `.inc`, `.conf`).
The package gives you a parser that turns a stream of tokens into a tree, typed
views over that tree, and a small in-place tree editor, all in plain Python with
no third-party dependencies.

## Installation

```
pip install bytebraise
```

## What is inside

- `bytebraise.syntax_kind` – `SyntaxKind`, the enumeration of every token and node
  kind (`SyntaxKind.IDENTIFIER`, `SyntaxKind.ASSIGNMENT_NODE`, ...), with
  `is_token()`, `is_node()`, `is_whitespace()`, `is_end_of_input()` and
  `is_assignment_operator()`.
- `bytebraise.tree` – the untyped tree: `SyntaxNode`, `SyntaxToken`,
  `SyntaxElement`, `TextRange` (half-open character offsets) and `TreeBuilder`
  (with `checkpoint()` / `start_node_at()` for wrapping children already added).
  Nodes support `children()`, `children_with_tokens()`, `descendants()`,
  `splice_children()` and `clone_subtree()`.
- `bytebraise.parser` – `parse_tokens(tokens)` builds a `Root` from an iterable of
  `(SyntaxKind, text)` pairs and raises `ParseError` (carrying `line_no` and
  `message`) on malformed input; `format_tree(element)` returns an indented
  outline of a tree for debugging. `BitBakeParserMode` names the two kinds of file
  (`CONF`, `BB`).
- `bytebraise.nodes` – typed node views: `Root` (`items()`, `tasks()`,
  `assignments()`, `identifier_assignments(name)`), `Assignment`, `Export`,
  `Include`, `Require`, `Inherit`, `Unset`, `ExportFunctions`, `AddTask`
  (`task_name()`, `after_names()`, `before_names()`), `DelTask`, `AddHandler`,
  `Task` (`name_or_anonymous()`, `is_python()`, `is_fakeroot()`,
  `is_anonymous_python()`), `PythonDef`, `Comment`, `IdentifierExpression`, plus
  `cast_directive()` and `cast_root_item()`.
- `bytebraise.tokens` – typed token views such as `Identifier`, `Varflag`
  (`value()` strips the brackets), `AssignmentOperator`, `UnquotedValue`,
  `DirectiveArgument`, and `first_token(parent, token_class)`.
- `bytebraise.quoted_value` – `QuotedValue` for the quoted right-hand side of an
  assignment: `raw_value()`, `value()` (escaped newlines removed),
  `line_ranges()` and `lines()`; plus the layout option types
  `QuotedValueFormat`, `SubValuePacking` and `SubValueAlignment`.
- `bytebraise.ted` – in-place tree editing: `Position` (`after`, `before`,
  `first_child_of`, `last_child_of`), `insert`, `insert_all`, `remove`,
  `remove_all`, `remove_all_iter`, `replace`, `replace_with_many`, `replace_all`,
  `append_child` and their `_raw` variants.
- `bytebraise.split_var_value` – `split_var_value(s)` returns the `TextRange`s of
  the whitespace-separated parts of a value, keeping `${...}` expressions whole.
- `bytebraise.utils` – `which(path, item, reversed, executable)` searches a
  colon-separated path; `contains(variable, check_values, true_value,
  false_value, d)` checks words of a variable held in a mapping;
  `approved_variables(environ)` lists the environment variable names allowed
  through, sorted.
- `bytebraise.fixups` – `fixup_oe_import(code)` adjusts the `oe_import` function
  text so it can find `os` and `bb`; `ensure_no_python_expansion(text)` raises
  `PythonExpansionError` if the text holds a `${@...}` expression.

## Example

```python
from bytebraise.syntax_kind import SyntaxKind as K
from bytebraise.parser import parse_tokens

root = parse_tokens([
    (K.IDENTIFIER, "A"),
    (K.WHITESPACE, " "),
    (K.EQUALS, "="),
    (K.WHITESPACE, " "),
    (K.DOUBLE_QUOTED_VALUE, '"hello \\\nworld"'),
    (K.NEWLINE, "\n"),
])

assignment = next(root.assignments())
print(assignment.left().identifier().text())  # A
print(assignment.right().value())             # hello world
```

Splitting a value:

```python
from bytebraise.split_var_value import split_var_value

text = "  A B ${'Q B P'} G"
print([text[r.start:r.end] for r in split_var_value(text)])
# ['A', 'B', "${'Q B P'}", 'G']
```

## What it does not do

- There is no tokenizer: `parse_tokens` expects tokens that have already been
  produced as `(SyntaxKind, text)` pairs.
- There is no variable data store and no evaluation of metadata: assignments,
  includes, inherits and tasks are parsed into a tree but not executed.
- Python expressions in values (`${@...}`) are never evaluated; they can only be
  detected with `ensure_no_python_expansion`.
- There is no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```