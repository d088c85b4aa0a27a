"""Parse a stream of BitBake tokens into a syntax tree."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from bytebraise.nodes import Root
from bytebraise.syntax_kind import SyntaxKind
from bytebraise.tree import SyntaxElement, SyntaxNode, TreeBuilder

_QUOTED_VALUES = (SyntaxKind.DOUBLE_QUOTED_VALUE, SyntaxKind.SINGLE_QUOTED_VALUE)
_ARGUMENT_LISTS = (
    SyntaxKind.EXPORT_FUNCTIONS,
    SyntaxKind.DEL_TASK,
    SyntaxKind.ADD_HANDLER,
)
_ARGUMENT_LIST_NODES = {
    SyntaxKind.EXPORT_FUNCTIONS: SyntaxKind.EXPORT_FUNCTIONS_NODE,
    SyntaxKind.DEL_TASK: SyntaxKind.DEL_TASK_NODE,
    SyntaxKind.ADD_HANDLER: SyntaxKind.ADD_HANDLER_NODE,
}


class ParseError(Exception):
    """Raised when the tokens do not form valid metadata."""

    def __init__(self, line_no: int, message: str) -> None:
        super().__init__(f"{line_no}: {message}")
        self.line_no = line_no
        self.message = message


class BitBakeParserMode(Enum):
    """The kind of file being parsed."""

    CONF = "conf"  # .conf
    BB = "bb"  # .bb, .bbclass, .inc

    def is_conf(self) -> bool:
        return self is BitBakeParserMode.CONF

    def is_bb(self) -> bool:
        return self is BitBakeParserMode.BB


def _describe(kind: Optional[SyntaxKind]) -> str:
    return "end of input" if kind is None else kind.name


class _Parser:
    def __init__(self, tokens: Iterable[tuple[SyntaxKind, str]]) -> None:
        self._tokens: list[tuple[SyntaxKind, str]] = []
        line = 1
        for kind, text in tokens:
            kind = SyntaxKind(kind)
            if kind is SyntaxKind.ERROR:
                raise ParseError(line, f"error token {text!r}")
            if not kind.is_token():
                raise ParseError(line, f"{kind.name} is not a token kind")
            self._tokens.append((kind, text))
            line += text.count("\n")
        self._position = 0
        self._line = 1
        self._builder = TreeBuilder()

    def _error(self, message: str) -> ParseError:
        return ParseError(self._line, message)

    def _peek_no_ws(self) -> Optional[SyntaxKind]:
        if self._position < len(self._tokens):
            return self._tokens[self._position][0]
        return None

    def _bump(self) -> None:
        if self._position < len(self._tokens):
            kind, text = self._tokens[self._position]
            self._position += 1
            self._line += text.count("\n")
            self._builder.token(kind, text)

    def _eat_ws(self) -> None:
        while self._peek_no_ws() is SyntaxKind.WHITESPACE:
            self._bump()

    def _peek(self) -> Optional[SyntaxKind]:
        self._eat_ws()
        return self._peek_no_ws()

    def _allow(self, kind: SyntaxKind) -> bool:
        if self._peek() is kind:
            self._bump()
            return True
        return False

    def _allow_no_ws(self, kind: SyntaxKind) -> bool:
        if self._peek_no_ws() is kind:
            self._bump()
            return True
        return False

    def _expect(self, kind: SyntaxKind) -> None:
        if not self._allow(kind):
            raise self._error(f"expected {kind.name}, got {_describe(self._peek())}")

    def _bump_quoted_value(self) -> None:
        found = self._peek()
        if found not in _QUOTED_VALUES:
            raise self._error(f"expected a quoted value, got {_describe(found)}")
        self._bump()

    def _bump_assignment_operator(self) -> None:
        found = self._peek()
        if found is None or not found.is_assignment_operator():
            raise self._error(f"expected an assignment operator, got {_describe(found)}")
        self._bump()

    def _parse_identifier_expression(self) -> bool:
        self._eat_ws()
        checkpoint = self._builder.checkpoint()
        if self._allow(SyntaxKind.IDENTIFIER):
            self._builder.start_node_at(checkpoint, SyntaxKind.IDENTIFIER_EXPRESSION_NODE)
            self._allow_no_ws(SyntaxKind.VARFLAG)
            self._builder.finish_node()
            self._eat_ws()
            return True
        return False

    def _parse_include_or_require(self) -> None:
        checkpoint = self._builder.checkpoint()
        kind = self._peek()
        node_kind = (
            SyntaxKind.REQUIRE_NODE if kind is SyntaxKind.REQUIRE else SyntaxKind.INCLUDE_NODE
        )
        self._builder.start_node_at(checkpoint, node_kind)
        self._bump()
        self._expect(SyntaxKind.UNQUOTED_VALUE)
        self._builder.finish_node()

    def _parse_export(self) -> None:
        self._builder.start_node(SyntaxKind.EXPORT_NODE)
        self._expect(SyntaxKind.EXPORT)
        self._eat_ws()

        checkpoint = self._builder.checkpoint()
        self._parse_identifier_expression()
        found = self._peek()
        if found is not None and found.is_assignment_operator():
            self._builder.start_node_at(checkpoint, SyntaxKind.ASSIGNMENT_NODE)
            self._bump()
            self._bump_quoted_value()
            self._builder.finish_node()
        elif found is not None and found is not SyntaxKind.NEWLINE:
            raise self._error(f"unexpected {found.name} after export")

        self._builder.finish_node()

    def _parse_assignment_or_task(
        self, task_checkpoint=None, maybe_anonymous_python: bool = False
    ) -> bool:
        checkpoint = self._builder.checkpoint()
        if not self._parse_identifier_expression() and not maybe_anonymous_python:
            return False

        if self._allow(SyntaxKind.OPEN_PARENTHESIS):
            self._expect(SyntaxKind.CLOSE_PARENTHESIS)
            self._expect(SyntaxKind.TASK)
            start = task_checkpoint if task_checkpoint is not None else checkpoint
            self._builder.start_node_at(start, SyntaxKind.TASK_NODE)
            self._builder.finish_node()
            return True
        if task_checkpoint is not None:
            raise self._error("required a task in this context")

        self._builder.start_node_at(checkpoint, SyntaxKind.ASSIGNMENT_NODE)
        self._bump_assignment_operator()
        self._bump_quoted_value()
        self._builder.finish_node()
        return True

    def _python_keyword(self) -> None:
        checkpoint = self._builder.checkpoint()
        self._expect(SyntaxKind.PYTHON)
        self._allow(SyntaxKind.FAKEROOT)
        self._parse_assignment_or_task(checkpoint, True)

    def _fakeroot_keyword(self) -> None:
        checkpoint = self._builder.checkpoint()
        self._expect(SyntaxKind.FAKEROOT)
        maybe_anonymous_python = self._allow(SyntaxKind.PYTHON)
        self._parse_assignment_or_task(checkpoint, maybe_anonymous_python)

    def _parse_unset(self) -> None:
        self._builder.start_node(SyntaxKind.UNSET_NODE)
        self._expect(SyntaxKind.UNSET)
        self._parse_identifier_expression()
        self._builder.finish_node()

    def _parse_argument_list(self, keyword: SyntaxKind) -> None:
        self._builder.start_node(_ARGUMENT_LIST_NODES[keyword])
        self._expect(keyword)
        while self._peek() is SyntaxKind.DIRECTIVE_ARGUMENT:
            self._bump()
        self._builder.finish_node()

    def _parse_inherit(self) -> None:
        self._builder.start_node(SyntaxKind.INHERIT_NODE)
        self._expect(SyntaxKind.INHERIT)
        self._expect(SyntaxKind.UNQUOTED_VALUE)
        self._builder.finish_node()

    def _parse_python_def(self) -> None:
        self._builder.start_node(SyntaxKind.PYTHON_DEF_NODE)
        for kind in (
            SyntaxKind.PYTHON_DEF_KEYWORD,
            SyntaxKind.PYTHON_DEF_FUNCTION_NAME,
            SyntaxKind.PYTHON_DEF_FUNCTION_ARGS,
            SyntaxKind.COLON,
            SyntaxKind.PYTHON_DEF_FUNCTION_BODY,
        ):
            self._expect(kind)
        self._builder.finish_node()

    def _parse_add_task(self) -> None:
        self._builder.start_node(SyntaxKind.ADD_TASK_NODE)
        self._expect(SyntaxKind.ADD_TASK)
        while True:
            found = self._peek()
            if found is None or found is SyntaxKind.NEWLINE:
                break
            if found in (
                SyntaxKind.DIRECTIVE_ARGUMENT,
                SyntaxKind.AFTER,
                SyntaxKind.BEFORE,
                SyntaxKind.ESCAPED_NEWLINE,
            ):
                self._bump()
            else:
                raise self._error(f"unexpected token: {found.name}")
        self._builder.finish_node()

    def _parse_next(self) -> bool:
        found = self._peek()
        if found is None:
            return False
        if found in (SyntaxKind.NEWLINE, SyntaxKind.COMMENT):
            self._bump()
        elif found is SyntaxKind.EXPORT:
            self._parse_export()
        elif found in (SyntaxKind.INCLUDE, SyntaxKind.REQUIRE):
            self._parse_include_or_require()
        elif found is SyntaxKind.IDENTIFIER:
            self._parse_assignment_or_task()
        elif found is SyntaxKind.PYTHON:
            self._python_keyword()
        elif found is SyntaxKind.FAKEROOT:
            self._fakeroot_keyword()
        elif found is SyntaxKind.UNSET:
            self._parse_unset()
        elif found in _ARGUMENT_LISTS:
            self._parse_argument_list(found)
        elif found is SyntaxKind.INHERIT:
            self._parse_inherit()
        elif found is SyntaxKind.PYTHON_DEF_KEYWORD:
            self._parse_python_def()
        elif found is SyntaxKind.ADD_TASK:
            self._parse_add_task()
        else:
            raise self._error(f"unexpected token: {found.name}")
        return True

    def parse(self) -> Root:
        self._builder.start_node(SyntaxKind.ROOT_NODE)
        while self._parse_next():
            pass
        self._builder.finish_node()
        return Root(self._builder.finish())


def parse_tokens(tokens: Iterable[tuple[SyntaxKind, str]]) -> Root:
    """Build the syntax tree of a file from its ``(kind, text)`` tokens.

    Raises :class:`ParseError` when the tokens do not form valid metadata.
    """
    return _Parser(tokens).parse()


def _format_lines(element: SyntaxElement, indent: int) -> list[str]:
    prefix = " " * indent
    if isinstance(element, SyntaxNode):
        lines = [f"{prefix}- {element.kind.name}"]
        for child in element.children_with_tokens():
            lines.extend(_format_lines(child, indent + 2))
        return lines
    return [f"{prefix}- {element.text()!r} {element.kind.name}"]


def format_tree(element) -> str:
    """An indented outline of ``element`` and everything below it."""
    syntax = getattr(element, "syntax", element)
    return "\n".join(_format_lines(syntax, 0))