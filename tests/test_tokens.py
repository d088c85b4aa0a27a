import pytest

from bytebraise.syntax_kind import SyntaxKind
from bytebraise.tokens import (
    AssignmentOperator,
    DirectiveArgument,
    Identifier,
    TaskBody,
    Varflag,
    first_token,
)
from bytebraise.tree import SyntaxNode, SyntaxToken


def tok(kind, text):
    return SyntaxToken(kind, text)


def test_varflag_value_strips_brackets():
    flag = Varflag.cast(tok(SyntaxKind.VARFLAG, "[my_flag]"))
    assert flag.value() == "my_flag"
    assert flag.text() == "[my_flag]"


@pytest.mark.parametrize(
    "kind", [k for k in SyntaxKind if k.is_assignment_operator()]
)
def test_assignment_operator_casts_every_operator(kind):
    op = AssignmentOperator.cast(tok(kind, "="))
    assert op.kind is kind


def test_assignment_operator_rejects_other_tokens():
    assert AssignmentOperator.cast(tok(SyntaxKind.IDENTIFIER, "A")) is None
    assert AssignmentOperator.can_cast(SyntaxKind.WHITESPACE) is False


def test_cast_rejects_nodes_and_wrong_kinds():
    node = SyntaxNode(SyntaxKind.IDENTIFIER_EXPRESSION_NODE, [tok(SyntaxKind.IDENTIFIER, "A")])
    assert Identifier.cast(node) is None
    assert TaskBody.cast(tok(SyntaxKind.IDENTIFIER, "A")) is None


def test_constructor_rejects_wrong_kind():
    with pytest.raises(ValueError):
        Identifier(tok(SyntaxKind.TASK, "{}"))


def test_first_token_finds_first_match():
    parent = SyntaxNode(
        SyntaxKind.DEL_TASK_NODE,
        [
            tok(SyntaxKind.DEL_TASK, "deltask"),
            tok(SyntaxKind.WHITESPACE, " "),
            tok(SyntaxKind.DIRECTIVE_ARGUMENT, "do_configure"),
            tok(SyntaxKind.WHITESPACE, " "),
            tok(SyntaxKind.DIRECTIVE_ARGUMENT, "do_fetch"),
        ],
    )
    found = first_token(parent, DirectiveArgument)
    assert found.text() == "do_configure"
    assert found.text_range().start == len("deltask ")
    assert first_token(parent, Varflag) is None


def test_equality_follows_wrapped_token():
    token = tok(SyntaxKind.IDENTIFIER, "A")
    assert Identifier.cast(token) == Identifier.cast(token)
    assert Identifier.cast(token) != Identifier.cast(tok(SyntaxKind.IDENTIFIER, "A"))
    assert len({Identifier.cast(token), Identifier.cast(token)}) == 1