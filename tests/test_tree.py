import pytest

from bytebraise.syntax_kind import SyntaxKind
from bytebraise.tree import Checkpoint, SyntaxNode, SyntaxToken, TextRange, TreeBuilder

K = SyntaxKind

PIECES = [
    (K.IDENTIFIER, "A"),
    (K.WHITESPACE, " "),
    (K.EQUALS, "="),
    (K.WHITESPACE, " "),
    (K.DOUBLE_QUOTED_VALUE, '"x"'),
]
SOURCE = "".join(text for _, text in PIECES)


def build_assignment():
    builder = TreeBuilder()
    builder.start_node(K.ROOT_NODE)
    checkpoint = builder.checkpoint()
    for kind, text in PIECES:
        builder.token(kind, text)
    builder.start_node_at(checkpoint, K.ASSIGNMENT_NODE)
    builder.finish_node()
    builder.finish_node()
    return builder.finish()


def test_text_round_trip():
    root = build_assignment()
    assert root.text() == SOURCE
    assert str(root) == SOURCE
    assert root.kind is K.ROOT_NODE


def test_start_node_at_wraps_tokens():
    root = build_assignment()
    [assignment] = list(root.children())
    assert assignment.kind is K.ASSIGNMENT_NODE
    assert [t.kind for t in assignment.children_with_tokens()] == [k for k, _ in PIECES]


def test_token_ranges_slice_source():
    root = build_assignment()
    [assignment] = list(root.children())
    for element in assignment.children_with_tokens():
        rng = element.text_range()
        assert SOURCE[rng.as_slice()] == element.text()
        assert len(rng) == len(element.text())


def test_root_range_covers_text():
    root = build_assignment()
    assert root.text_range() == TextRange(0, len(SOURCE))


def test_siblings_and_index():
    root = build_assignment()
    [assignment] = list(root.children())
    leaves = list(assignment.children_with_tokens())
    assert leaves[0].prev_sibling_or_token() is None
    assert leaves[-1].next_sibling_or_token() is None
    for i, element in enumerate(leaves):
        assert element.index() == i
    assert leaves[1].next_sibling_or_token() is leaves[2]
    assert leaves[2].prev_sibling_or_token() is leaves[1]
    assert assignment.first_child_or_token() is leaves[0]
    assert assignment.last_child_or_token() is leaves[-1]


def test_descendants_preorder_includes_self():
    root = build_assignment()
    kinds = [n.kind for n in root.descendants()]
    assert kinds == [K.ROOT_NODE, K.ASSIGNMENT_NODE]


def test_detach_removes_element():
    root = build_assignment()
    [assignment] = list(root.children())
    last = assignment.last_child_or_token()
    last.detach()
    assert last.parent is None
    assert root.text() == SOURCE[: -len(last.text())]


def test_splice_children_replaces_range():
    root = build_assignment()
    [assignment] = list(root.children())
    old = list(assignment.children_with_tokens())
    new = SyntaxToken(K.PLUS_EQUALS, "+=")
    assignment.splice_children(2, 3, [new])
    assert old[2].parent is None
    assert new.parent is assignment
    assert root.text() == SOURCE.replace("=", "+=")


def test_splice_rejects_attached_element():
    root = build_assignment()
    [assignment] = list(root.children())
    first = assignment.first_child_or_token()
    with pytest.raises(ValueError):
        assignment.splice_children(0, 0, [first])


def test_splice_rejects_ancestor():
    root = build_assignment()
    [assignment] = list(root.children())
    with pytest.raises(ValueError):
        assignment.splice_children(0, 0, [root])


def test_clone_subtree_is_detached_copy():
    root = build_assignment()
    [assignment] = list(root.children())
    clone = assignment.clone_subtree()
    assert clone.parent is None
    assert clone.text() == assignment.text()
    assert clone.text_range().start == 0
    clone.first_child_or_token().detach()
    assert assignment.text() == SOURCE


def test_finish_requires_single_root():
    builder = TreeBuilder()
    builder.token(K.IDENTIFIER, "A")
    with pytest.raises(ValueError):
        builder.finish()


def test_finish_node_without_start():
    with pytest.raises(ValueError):
        TreeBuilder().finish_node()


def test_invalid_checkpoint():
    builder = TreeBuilder()
    builder.start_node(K.ROOT_NODE)
    builder.token(K.IDENTIFIER, "A")
    builder.start_node(K.ASSIGNMENT_NODE)
    with pytest.raises(ValueError):
        builder.start_node_at(Checkpoint(0), K.TASK_NODE)


def test_text_range_validation():
    with pytest.raises(ValueError):
        TextRange(3, 1)
    assert TextRange(1, 3).shift(2) == TextRange(3, 5)


def test_node_rejects_owned_child():
    leaf = SyntaxToken(K.IDENTIFIER, "A")
    SyntaxNode(K.IDENTIFIER_EXPRESSION_NODE, [leaf])
    with pytest.raises(ValueError):
        SyntaxNode(K.ROOT_NODE, [leaf])