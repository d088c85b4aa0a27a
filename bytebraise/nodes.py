"""Typed views over the nodes of a syntax tree."""

from __future__ import annotations

from itertools import dropwhile, takewhile
from typing import ClassVar, Iterator, Optional, Type, TypeVar, Union

from bytebraise.quoted_value import QuotedValue
from bytebraise.syntax_kind import SyntaxKind
from bytebraise.tokens import (
    AssignmentOperator,
    DirectiveArgument,
    ExportKeyword,
    Fakeroot,
    Identifier,
    Python,
    PythonDefFunctionName,
    TaskBody,
    UnquotedValue,
    Varflag,
    first_token,
)
from bytebraise.tree import SyntaxNode, SyntaxToken

N = TypeVar("N", bound="AstNode")

ANONYMOUS = "__anonymous"


class AstNode:
    """A typed wrapper around a :class:`SyntaxNode` of one kind."""

    kinds: ClassVar[frozenset] = frozenset()

    def __init__(self, syntax: SyntaxNode) -> None:
        if not self.can_cast(syntax.kind):
            raise ValueError(
                f"{type(self).__name__} cannot wrap a {syntax.kind.name} node"
            )
        self.syntax = syntax

    @classmethod
    def can_cast(cls, kind: SyntaxKind) -> bool:
        return kind in cls.kinds

    @classmethod
    def cast(cls: Type[N], node: object) -> Optional[N]:
        """Wrap ``node`` if it is a node of a matching kind, else ``None``."""
        if isinstance(node, SyntaxNode) and cls.can_cast(node.kind):
            return cls(node)
        return None

    def clone_subtree(self: N) -> N:
        """A detached deep copy of this node, wrapped the same way."""
        return type(self)(self.syntax.clone_subtree())

    def _child(self, node_class: Type[N]) -> Optional[N]:
        for child in self.syntax.children():
            found = node_class.cast(child)
            if found is not None:
                return found
        return None

    def _require(self, found, what: str):
        if found is None:
            raise ValueError(f"{type(self).__name__} node has no {what}")
        return found

    def _tokens(self) -> Iterator[SyntaxToken]:
        return (e for e in self.syntax.children_with_tokens() if isinstance(e, SyntaxToken))

    def _unquoted_value(self) -> UnquotedValue:
        return self._require(first_token(self.syntax, UnquotedValue), "value")

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.syntax is self.syntax

    def __hash__(self) -> int:
        return hash((type(self), id(self.syntax)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.syntax.text()!r})"


def _kinds(*kinds: SyntaxKind) -> frozenset:
    return frozenset(kinds)


class IdentifierExpression(AstNode):
    """An identifier with an optional ``[varflag]``."""

    kinds = _kinds(SyntaxKind.IDENTIFIER_EXPRESSION_NODE)

    def identifier(self) -> Identifier:
        return self._require(first_token(self.syntax, Identifier), "identifier")

    def varflag(self) -> Optional[Varflag]:
        return first_token(self.syntax, Varflag)


class Assignment(AstNode):
    kinds = _kinds(SyntaxKind.ASSIGNMENT_NODE)

    def left(self) -> IdentifierExpression:
        return self._require(self._child(IdentifierExpression), "identifier expression")

    def right(self) -> QuotedValue:
        return self._require(first_token(self.syntax, QuotedValue), "quoted value")

    def op(self) -> AssignmentOperator:
        return self._require(
            first_token(self.syntax, AssignmentOperator), "assignment operator"
        )


class Export(AstNode):
    kinds = _kinds(SyntaxKind.EXPORT_NODE)

    def export_kw(self) -> ExportKeyword:
        return self._require(first_token(self.syntax, ExportKeyword), "export keyword")

    def var(self) -> IdentifierExpression:
        return self._require(self._child(IdentifierExpression), "identifier expression")

    def assignment(self) -> Optional[Assignment]:
        return self._child(Assignment)


class Include(AstNode):
    kinds = _kinds(SyntaxKind.INCLUDE_NODE)

    def value(self) -> UnquotedValue:
        return self._unquoted_value()


class Require(AstNode):
    kinds = _kinds(SyntaxKind.REQUIRE_NODE)

    def value(self) -> UnquotedValue:
        return self._unquoted_value()


class Unset(AstNode):
    kinds = _kinds(SyntaxKind.UNSET_NODE)


class ExportFunctions(AstNode):
    kinds = _kinds(SyntaxKind.EXPORT_FUNCTIONS_NODE)


class Inherit(AstNode):
    kinds = _kinds(SyntaxKind.INHERIT_NODE)

    def value(self) -> UnquotedValue:
        return self._unquoted_value()


class PythonDef(AstNode):
    kinds = _kinds(SyntaxKind.PYTHON_DEF_NODE)

    def function_name(self) -> PythonDefFunctionName:
        """The function name token; its text may have trailing spaces."""
        return self._require(
            first_token(self.syntax, PythonDefFunctionName), "function name"
        )


class AddTask(AstNode):
    kinds = _kinds(SyntaxKind.ADD_TASK_NODE)

    def task_name(self) -> DirectiveArgument:
        leading = takewhile(
            lambda t: t.kind not in (SyntaxKind.AFTER, SyntaxKind.BEFORE), self._tokens()
        )
        found = next(
            (a for a in map(DirectiveArgument.cast, leading) if a is not None), None
        )
        return self._require(found, "task name")

    def _section(self, start: SyntaxKind, stop: SyntaxKind) -> list[DirectiveArgument]:
        tokens = dropwhile(lambda t: t.kind is not start, self._tokens())
        section = takewhile(lambda t: t.kind is not stop, tokens)
        return [a for a in map(DirectiveArgument.cast, section) if a is not None]

    def after(self) -> list[DirectiveArgument]:
        return self._section(SyntaxKind.AFTER, SyntaxKind.BEFORE)

    def after_names(self) -> list[str]:
        return [arg.text() for arg in self.after()]

    def before(self) -> list[DirectiveArgument]:
        return self._section(SyntaxKind.BEFORE, SyntaxKind.AFTER)

    def before_names(self) -> list[str]:
        return [arg.text() for arg in self.before()]


class DelTask(AstNode):
    kinds = _kinds(SyntaxKind.DEL_TASK_NODE)


class AddHandler(AstNode):
    kinds = _kinds(SyntaxKind.ADD_HANDLER_NODE)


class Comment(AstNode):
    kinds = _kinds(SyntaxKind.COMMENT)


class Task(AstNode):
    kinds = _kinds(SyntaxKind.TASK_NODE)

    def name(self) -> Optional[Identifier]:
        expression = self._child(IdentifierExpression)
        return expression.identifier() if expression is not None else None

    def body(self) -> TaskBody:
        return self._require(first_token(self.syntax, TaskBody), "body")

    def name_or_anonymous(self) -> str:
        name = self.name()
        return name.text() if name is not None else ANONYMOUS

    def is_python(self) -> bool:
        return first_token(self.syntax, Python) is not None

    def is_fakeroot(self) -> bool:
        return first_token(self.syntax, Fakeroot) is not None

    def is_anonymous_python(self) -> bool:
        if not self.is_python():
            return False
        name = self.name()
        return name is None or name.text() == ANONYMOUS


Directive = Union[
    AddHandler, AddTask, DelTask, Unset, Inherit, Include, Require, Export, ExportFunctions
]
RootItem = Union[Task, Comment, Directive, PythonDef, Assignment]

_DIRECTIVE_CLASSES = {
    next(iter(cls.kinds)): cls
    for cls in (
        AddHandler,
        AddTask,
        DelTask,
        Unset,
        Inherit,
        Include,
        Require,
        Export,
        ExportFunctions,
    )
}

_ROOT_ITEM_CLASSES = {
    SyntaxKind.TASK_NODE: Task,
    SyntaxKind.COMMENT: Comment,
    SyntaxKind.PYTHON_DEF_NODE: PythonDef,
    SyntaxKind.ASSIGNMENT_NODE: Assignment,
    **_DIRECTIVE_CLASSES,
}


def cast_directive(node: object) -> Optional[Directive]:
    """Wrap ``node`` in the directive class for its kind, or ``None``."""
    if not isinstance(node, SyntaxNode):
        return None
    cls = _DIRECTIVE_CLASSES.get(node.kind)
    return cls(node) if cls is not None else None


def cast_root_item(node: object) -> Optional[RootItem]:
    """Wrap ``node`` in the class of a top-level item for its kind, or ``None``."""
    if not isinstance(node, SyntaxNode):
        return None
    cls = _ROOT_ITEM_CLASSES.get(node.kind)
    return cls(node) if cls is not None else None


class Root(AstNode):
    """A whole metadata or configuration file."""

    kinds = _kinds(SyntaxKind.ROOT_NODE)

    def items(self) -> Iterator[RootItem]:
        for child in self.syntax.children():
            item = cast_root_item(child)
            if item is not None:
                yield item

    def tasks(self) -> Iterator[Task]:
        return (t for t in map(Task.cast, self.syntax.children()) if t is not None)

    def assignments(self) -> Iterator[Assignment]:
        return (
            a for a in map(Assignment.cast, self.syntax.children()) if a is not None
        )

    def identifier_assignments(self, identifier: str) -> Iterator[Assignment]:
        """Assignments whose left-hand side reads exactly ``identifier``."""
        return (a for a in self.assignments() if a.left().syntax.text() == identifier)