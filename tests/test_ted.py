import pytest

from bytebraise import ted
from bytebraise.parser import parse_tokens
from bytebraise.syntax_kind import SyntaxKind as K
from bytebraise.ted import Position
from bytebraise.tree import SyntaxNode, SyntaxToken


def tok(text):
    return SyntaxToken(K.IDENTIFIER, text)


@pytest.fixture
def tree():
    a, b, c = tok("a"), tok("b"), tok("c")
    root = SyntaxNode(K.ROOT_NODE, [a, b, c])
    return root, a, b, c


def children(node):
    return list(node.children_with_tokens())


def test_insert_after(tree):
    root, a, b, c = tree
    x = tok("x")
    ted.insert(Position.after(b), x)
    assert children(root) == [a, b, x, c]
    assert x.parent is root
    assert root.text() == "abxc"


def test_insert_before_first_and_middle(tree):
    root, a, b, c = tree
    x, y = tok("x"), tok("y")
    ted.insert(Position.before(a), x)
    ted.insert_raw(Position.before(b), y)
    assert children(root) == [x, a, y, b, c]


def test_first_and_last_child_positions(tree):
    root, a, b, c = tree
    x, y = tok("x"), tok("y")
    ted.insert(Position.first_child_of(root), x)
    ted.insert(Position.last_child_of(root), y)
    assert children(root) == [x, a, b, c, y]


def test_last_child_of_empty_node():
    node = SyntaxNode(K.ROOT_NODE)
    x = tok("x")
    ted.append_child(node, x)
    assert children(node) == [x]


def test_insert_all(tree):
    root, a, b, c = tree
    x, y = tok("x"), tok("y")
    ted.insert_all(Position.after(a), [x, y])
    assert children(root) == [a, x, y, b, c]
    z = tok("z")
    ted.insert_all_raw(Position.after(c), [z])
    assert children(root)[-1] is z


def test_remove(tree):
    root, a, b, c = tree
    ted.remove(b)
    assert children(root) == [a, c]
    assert b.parent is None


def test_remove_all(tree):
    root, a, b, c = tree
    ted.remove_all(a, b)
    assert children(root) == [c]
    assert a.parent is None and b.parent is None


def test_remove_all_iter_swaps_reversed_range(tree):
    root, a, b, c = tree
    ted.remove_all_iter([c, a])
    assert children(root) == []


def test_remove_all_iter_single_and_empty(tree):
    root, a, b, c = tree
    ted.remove_all_iter([])
    assert children(root) == [a, b, c]
    ted.remove_all_iter([b])
    assert children(root) == [a, c]


def test_replace(tree):
    root, a, b, c = tree
    x = tok("x")
    ted.replace(b, x)
    assert children(root) == [a, x, c]
    assert b.parent is None


def test_replace_with_many(tree):
    root, a, b, c = tree
    x, y = tok("x"), tok("y")
    ted.replace_with_many(b, [x, y])
    assert children(root) == [a, x, y, c]


def test_replace_all(tree):
    root, a, b, c = tree
    x = tok("x")
    ted.replace_all(b, c, [x])
    assert children(root) == [a, x]


def test_append_child_raw(tree):
    root, a, b, c = tree
    x = tok("x")
    ted.append_child_raw(root, x)
    assert children(root) == [a, b, c, x]


def test_replace_value_through_ast_wrappers():
    root = parse_tokens([(K.IDENTIFIER, "A"), (K.WHITESPACE, " "), (K.EQUALS, "="),
                         (K.WHITESPACE, " "), (K.DOUBLE_QUOTED_VALUE, '"old"')])
    (assignment,) = list(root.assignments())
    ted.replace(assignment.right(), SyntaxToken(K.DOUBLE_QUOTED_VALUE, '"new"'))
    assert assignment.right().value() == "new"
    assert root.syntax.text() == 'A = "new"'


def test_before_detached_element_raises():
    with pytest.raises(ValueError):
        Position.before(tok("x"))


def test_insert_after_detached_element_raises():
    with pytest.raises(ValueError):
        ted.insert(Position.after(tok("x")), tok("y"))


def test_insert_attached_element_raises(tree):
    root, a, b, c = tree
    with pytest.raises(ValueError):
        ted.insert(Position.after(a), c)
    assert children(root) == [a, b, c]


def test_first_child_of_token_raises():
    with pytest.raises(TypeError):
        Position.first_child_of(tok("x"))


def test_non_element_raises(tree):
    root, a, b, c = tree
    with pytest.raises(TypeError):
        ted.insert(Position.after(a), "text")


def test_replace_all_requires_siblings(tree):
    root, a, b, c = tree
    other = SyntaxNode(K.ROOT_NODE, [tok("z")])
    with pytest.raises(ValueError):
        ted.replace_all(a, other.first_child_or_token(), [])