"""Primitive in-place editing of syntax trees.

The ``_raw`` functions insert elements exactly as given; the others are the
place to adjust surrounding whitespace.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from bytebraise.nodes import AstNode
from bytebraise.tokens import AstToken
from bytebraise.tree import SyntaxElement, SyntaxNode


def _element(item) -> SyntaxElement:
    if isinstance(item, SyntaxElement):
        return item
    if isinstance(item, (AstNode, AstToken)):
        return item.syntax
    raise TypeError(f"cannot edit a tree with {type(item).__name__}")


def _node(item) -> SyntaxNode:
    element = _element(item)
    if not isinstance(element, SyntaxNode):
        raise TypeError("expected a node, got a token")
    return element


def _parent(element: SyntaxElement) -> SyntaxNode:
    if element.parent is None:
        raise ValueError("element has no parent")
    return element.parent


@dataclass(frozen=True, eq=False)
class Position:
    """A place between children of a node where elements can be inserted."""

    anchor: SyntaxElement
    first_child: bool

    @classmethod
    def after(cls, elem) -> Position:
        return cls(_element(elem), False)

    @classmethod
    def before(cls, elem) -> Position:
        element = _element(elem)
        previous = element.prev_sibling_or_token()
        if previous is not None:
            return cls(previous, False)
        return cls(_parent(element), True)

    @classmethod
    def first_child_of(cls, node) -> Position:
        return cls(_node(node), True)

    @classmethod
    def last_child_of(cls, node) -> Position:
        parent = _node(node)
        last = parent.last_child_or_token()
        if last is not None:
            return cls(last, False)
        return cls(parent, True)

    def _resolve(self) -> tuple[SyntaxNode, int]:
        if self.first_child:
            return self.anchor, 0
        return _parent(self.anchor), self.anchor.index() + 1


def insert(position: Position, elem) -> None:
    insert_all(position, [elem])


def insert_raw(position: Position, elem) -> None:
    insert_all_raw(position, [elem])


def insert_all(position: Position, elements: Iterable) -> None:
    insert_all_raw(position, elements)


def insert_all_raw(position: Position, elements: Iterable) -> None:
    parent, index = position._resolve()
    parent.splice_children(index, index, [_element(e) for e in elements])


def remove(elem) -> None:
    _element(elem).detach()


def remove_all(first, last) -> None:
    """Remove the siblings from ``first`` to ``last``, both included."""
    replace_all(first, last, [])


def remove_all_iter(elements: Iterable) -> None:
    """Remove the run of siblings spanned by the first and last of ``elements``."""
    items = [_element(e) for e in elements]
    if not items:
        return
    if len(items) == 1:
        remove(items[0])
        return
    first, last = items[0], items[-1]
    if first.index() > last.index():
        first, last = last, first
    remove_all(first, last)


def replace(old, new) -> None:
    replace_with_many(old, [new])


def replace_with_many(old, new: Iterable) -> None:
    element = _element(old)
    replace_all(element, element, new)


def replace_all(first, last, new: Iterable) -> None:
    """Replace the siblings from ``first`` to ``last`` with ``new``."""
    first, last = _element(first), _element(last)
    parent = _parent(first)
    if last.parent is not parent:
        raise ValueError("range ends are not siblings")
    start, end = first.index(), last.index()
    parent.splice_children(start, end + 1, [_element(e) for e in new])


def append_child(node, child) -> None:
    insert(Position.last_child_of(node), child)


def append_child_raw(node, child) -> None:
    insert_raw(Position.last_child_of(node), child)