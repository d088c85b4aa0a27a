"""A mutable concrete syntax tree of tokens and nodes.

Offsets are character offsets into the text the tree was built from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from bytebraise.syntax_kind import SyntaxKind


@dataclass(frozen=True)
class TextRange:
    """A half-open range ``[start, end)`` of character offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"invalid text range {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def shift(self, offset: int) -> TextRange:
        return TextRange(self.start + offset, self.end + offset)

    def as_slice(self) -> slice:
        return slice(self.start, self.end)


@dataclass(frozen=True)
class Checkpoint:
    """A position in a :class:`TreeBuilder` a node may later be started at."""

    position: int


class SyntaxElement:
    """Common behaviour of tokens and nodes."""

    def __init__(self, kind: SyntaxKind) -> None:
        self.kind = kind
        self.parent: Optional[SyntaxNode] = None

    @property
    def text_len(self) -> int:
        raise NotImplementedError

    def index(self) -> int:
        """Position of this element among its parent's children."""
        if self.parent is None:
            return 0
        for position, sibling in enumerate(self.parent._children):
            if sibling is self:
                return position
        raise RuntimeError("element missing from its parent")

    def prev_sibling_or_token(self) -> Optional[SyntaxElement]:
        if self.parent is None:
            return None
        position = self.index()
        return self.parent._children[position - 1] if position > 0 else None

    def next_sibling_or_token(self) -> Optional[SyntaxElement]:
        if self.parent is None:
            return None
        position = self.index() + 1
        siblings = self.parent._children
        return siblings[position] if position < len(siblings) else None

    def ancestors(self) -> Iterator[SyntaxNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def detach(self) -> None:
        """Remove this element from its parent, if it has one."""
        if self.parent is not None:
            del self.parent._children[self.index()]
            self.parent = None

    def _offset(self) -> int:
        if self.parent is None:
            return 0
        offset = self.parent._offset()
        for sibling in self.parent._children:
            if sibling is self:
                break
            offset += sibling.text_len
        return offset

    def text_range(self) -> TextRange:
        start = self._offset()
        return TextRange(start, start + self.text_len)

    def _clone(self) -> SyntaxElement:
        raise NotImplementedError


class SyntaxToken(SyntaxElement):
    """A leaf holding a piece of source text."""

    def __init__(self, kind: SyntaxKind, text: str) -> None:
        super().__init__(kind)
        self._text = text

    @property
    def text_len(self) -> int:
        return len(self._text)

    def text(self) -> str:
        return self._text

    def _clone(self) -> SyntaxToken:
        return SyntaxToken(self.kind, self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"SyntaxToken({self.kind.name}, {self._text!r})"


class SyntaxNode(SyntaxElement):
    """An interior node whose text is the text of its children."""

    def __init__(self, kind: SyntaxKind, children: Iterable[SyntaxElement] = ()) -> None:
        super().__init__(kind)
        self._children: list[SyntaxElement] = []
        for child in children:
            if child.parent is not None:
                raise ValueError("child already has a parent")
            child.parent = self
            self._children.append(child)

    @property
    def text_len(self) -> int:
        return sum(child.text_len for child in self._children)

    def text(self) -> str:
        return "".join(
            child.text() if isinstance(child, SyntaxToken) else child.text()
            for child in self._children
        )

    def children(self) -> Iterator[SyntaxNode]:
        return (c for c in list(self._children) if isinstance(c, SyntaxNode))

    def children_with_tokens(self) -> Iterator[SyntaxElement]:
        return iter(list(self._children))

    def descendants(self) -> Iterator[SyntaxNode]:
        """All nodes of this subtree in preorder, starting with this node."""
        yield self
        for child in self.children():
            yield from child.descendants()

    def first_child_or_token(self) -> Optional[SyntaxElement]:
        return self._children[0] if self._children else None

    def last_child_or_token(self) -> Optional[SyntaxElement]:
        return self._children[-1] if self._children else None

    def splice_children(
        self, start: int, end: int, elements: Iterable[SyntaxElement]
    ) -> None:
        """Replace the children in ``[start, end)`` with detached ``elements``."""
        elements = list(elements)
        if not 0 <= start <= end <= len(self._children):
            raise IndexError(f"splice range {start}..{end} out of bounds")
        for element in elements:
            if element.parent is not None:
                raise ValueError("elements to insert must be detached")
            if element is self or (
                isinstance(element, SyntaxNode)
                and any(a is element for a in self.ancestors())
            ):
                raise ValueError("cannot insert a node into itself")
        for removed in self._children[start:end]:
            removed.parent = None
        for element in elements:
            element.parent = self
        self._children[start:end] = elements

    def clone_subtree(self) -> SyntaxNode:
        """A deep, detached copy of this node."""
        return self._clone()

    def _clone(self) -> SyntaxNode:
        return SyntaxNode(self.kind, (child._clone() for child in self._children))

    def __str__(self) -> str:
        return self.text()

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.name}, {self.text()!r})"


class TreeBuilder:
    """Builds a tree from a flat stream of tokens and node markers."""

    def __init__(self) -> None:
        self._parents: list[tuple[SyntaxKind, int]] = []
        self._children: list[SyntaxElement] = []

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(len(self._children))

    def start_node(self, kind: SyntaxKind) -> None:
        self._parents.append((kind, len(self._children)))

    def start_node_at(self, checkpoint: Checkpoint, kind: SyntaxKind) -> None:
        """Start a node that wraps everything added since ``checkpoint``."""
        if checkpoint.position > len(self._children):
            raise ValueError("checkpoint no longer valid, was an element removed?")
        if self._parents and checkpoint.position < self._parents[-1][1]:
            raise ValueError("checkpoint no longer valid, was finish_node called early?")
        self._parents.append((kind, checkpoint.position))

    def token(self, kind: SyntaxKind, text: str) -> None:
        self._children.append(SyntaxToken(kind, text))

    def finish_node(self) -> None:
        if not self._parents:
            raise ValueError("finish_node called without a started node")
        kind, first = self._parents.pop()
        children = self._children[first:]
        del self._children[first:]
        self._children.append(SyntaxNode(kind, children))

    def finish(self) -> SyntaxNode:
        if self._parents:
            raise ValueError("unfinished nodes remain")
        if len(self._children) != 1 or not isinstance(self._children[0], SyntaxNode):
            raise ValueError("builder must hold exactly one root node")
        return self._children.pop()