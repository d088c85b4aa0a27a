"""Typed views over the tokens of a syntax tree."""

from __future__ import annotations

from typing import ClassVar, Optional, Type, TypeVar

from bytebraise.syntax_kind import SyntaxKind
from bytebraise.tree import SyntaxNode, SyntaxToken, TextRange

T = TypeVar("T", bound="AstToken")


class AstToken:
    """A typed wrapper around a :class:`SyntaxToken` of particular kinds."""

    kinds: ClassVar[frozenset] = frozenset()

    def __init__(self, syntax: SyntaxToken) -> None:
        if not self.can_cast(syntax.kind):
            raise ValueError(
                f"{type(self).__name__} cannot wrap a {syntax.kind.name} token"
            )
        self.syntax = syntax

    @classmethod
    def can_cast(cls, kind: SyntaxKind) -> bool:
        return kind in cls.kinds

    @classmethod
    def cast(cls: Type[T], token: object) -> Optional[T]:
        """Wrap ``token`` if it is a token of a matching kind, else ``None``."""
        if isinstance(token, SyntaxToken) and cls.can_cast(token.kind):
            return cls(token)
        return None

    @property
    def kind(self) -> SyntaxKind:
        return self.syntax.kind

    def text(self) -> str:
        return self.syntax.text()

    def text_range(self) -> TextRange:
        return self.syntax.text_range()

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.syntax is self.syntax

    def __hash__(self) -> int:
        return hash((type(self), id(self.syntax)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text()!r})"


def _kinds(*kinds: SyntaxKind) -> frozenset:
    return frozenset(kinds)


class Identifier(AstToken):
    kinds = _kinds(SyntaxKind.IDENTIFIER)


class TaskBody(AstToken):
    kinds = _kinds(SyntaxKind.TASK)


class Python(AstToken):
    kinds = _kinds(SyntaxKind.PYTHON)


class Fakeroot(AstToken):
    kinds = _kinds(SyntaxKind.FAKEROOT)


class ExportKeyword(AstToken):
    kinds = _kinds(SyntaxKind.EXPORT)


class UnquotedValue(AstToken):
    kinds = _kinds(SyntaxKind.UNQUOTED_VALUE)


class DirectiveArgument(AstToken):
    kinds = _kinds(SyntaxKind.DIRECTIVE_ARGUMENT)


class PythonDefKeyword(AstToken):
    kinds = _kinds(SyntaxKind.PYTHON_DEF_KEYWORD)


class PythonDefFunctionName(AstToken):
    """The name of a ``def`` function; may carry trailing spaces."""

    kinds = _kinds(SyntaxKind.PYTHON_DEF_FUNCTION_NAME)


class PythonDefFunctionArgs(AstToken):
    kinds = _kinds(SyntaxKind.PYTHON_DEF_FUNCTION_ARGS)


class Colon(AstToken):
    kinds = _kinds(SyntaxKind.COLON)


class PythonDefFunctionBody(AstToken):
    kinds = _kinds(SyntaxKind.PYTHON_DEF_FUNCTION_BODY)


class Varflag(AstToken):
    """A ``[flag]`` suffix on an identifier."""

    kinds = _kinds(SyntaxKind.VARFLAG)

    def value(self) -> str:
        """The flag name without its square brackets."""
        return self.text()[1:-1]


class AssignmentOperator(AstToken):
    """Any of the assignment operators, such as ``=``, ``?=`` or ``+=``."""

    kinds = frozenset(k for k in SyntaxKind if k.is_assignment_operator())


def first_token(parent: SyntaxNode, token_class: Type[T]) -> Optional[T]:
    """The first direct child token of ``parent`` castable to ``token_class``."""
    for element in parent.children_with_tokens():
        found = token_class.cast(element)
        if found is not None:
            return found
    return None