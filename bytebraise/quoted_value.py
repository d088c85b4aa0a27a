"""Quoted variable values and options for laying them out."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from bytebraise.syntax_kind import SyntaxKind
from bytebraise.tokens import AstToken
from bytebraise.tree import TextRange

_ESCAPED_NEWLINE = "\\\n"


class QuotedValue(AstToken):
    """A single- or double-quoted value token."""

    kinds = frozenset({SyntaxKind.DOUBLE_QUOTED_VALUE, SyntaxKind.SINGLE_QUOTED_VALUE})

    @property
    def is_double_quoted(self) -> bool:
        return self.kind is SyntaxKind.DOUBLE_QUOTED_VALUE

    def text_range_between_quotes(self) -> TextRange:
        """Absolute range of the text inside the quotes."""
        whole = self.syntax.text_range()
        return TextRange(whole.start + 1, whole.end - 1)

    def raw_value(self) -> str:
        """Text between the quotes, exactly as written."""
        return self.text()[1:-1]

    def value(self) -> str:
        """Text between the quotes with escaped newlines removed."""
        return self.raw_value().replace(_ESCAPED_NEWLINE, "")

    def line_ranges(self) -> list[TextRange]:
        """Absolute ranges of the content between escaped newlines."""
        start_offset = self.syntax.text_range().start
        lower, upper = 1, len(self.text()) - 1

        ranges = []
        position = lower
        for match in re.finditer(re.escape(_ESCAPED_NEWLINE), self.raw_value()):
            gap_end = match.start() + 1
            if gap_end > position:
                ranges.append(TextRange(position, gap_end))
            position = max(position, match.end() + 1)
        if position < upper:
            ranges.append(TextRange(position, upper))
        return [r.shift(start_offset) for r in ranges]

    def lines(self) -> Iterator[str]:
        """The text of each range from :meth:`line_ranges`."""
        start_offset = self.syntax.text_range().start
        text = self.text()
        for absolute in self.line_ranges():
            yield text[absolute.shift(-start_offset).as_slice()]


class Packing(Enum):
    OFF = "off"
    ONE_PER_LINE = "one_per_line"
    WRAPPED = "wrapped"


@dataclass(frozen=True)
class SubValuePacking:
    """How to lay out several space-separated values."""

    mode: Packing = Packing.ONE_PER_LINE
    line_width: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.mode is Packing.WRAPPED) != (self.line_width is not None):
            raise ValueError("line_width is given exactly when packing is wrapped")

    @classmethod
    def off(cls) -> SubValuePacking:
        return cls(Packing.OFF)

    @classmethod
    def one_per_line(cls) -> SubValuePacking:
        return cls(Packing.ONE_PER_LINE)

    @classmethod
    def wrapped(cls, line_width: int) -> SubValuePacking:
        return cls(Packing.WRAPPED, line_width)


class Alignment(Enum):
    WITH_OPERATOR = "with_operator"
    WITH_FIRST_SUB_VALUE = "with_first_sub_value"
    INDENTED = "indented"


@dataclass(frozen=True)
class SubValueAlignment:
    """Where continuation lines of a value start."""

    mode: Alignment = Alignment.INDENTED
    indent: Optional[int] = 4

    def __post_init__(self) -> None:
        if (self.mode is Alignment.INDENTED) != (self.indent is not None):
            raise ValueError("indent is given exactly when alignment is indented")

    @classmethod
    def with_operator(cls) -> SubValueAlignment:
        return cls(Alignment.WITH_OPERATOR, None)

    @classmethod
    def with_first_sub_value(cls) -> SubValueAlignment:
        return cls(Alignment.WITH_FIRST_SUB_VALUE, None)

    @classmethod
    def indented(cls, indent: int = 4) -> SubValueAlignment:
        return cls(Alignment.INDENTED, indent)


@dataclass(frozen=True)
class QuotedValueFormat:
    """Layout options for a quoted value."""

    packing: SubValuePacking = field(default_factory=SubValuePacking)
    closing_quote_on_own_line: bool = True
    alignment: SubValueAlignment = field(default_factory=SubValueAlignment)