from dataclasses import dataclass

from ..errors.span import SpanError


@dataclass(frozen=True, order=True)
class LineColumn:
    """A text position: 1-based line, 0-based column counted in Unicode scalar values."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise SpanError(f"line must be >= 1, got {self.line}")
        if self.column < 0:
            raise SpanError(f"column must be >= 0, got {self.column}")

    @classmethod
    def unchecked(cls, line: int, column: int) -> "LineColumn":
        """Skip the range checks, for positions counted up from a valid start."""
        lc = object.__new__(cls)
        object.__setattr__(lc, "line", line)
        object.__setattr__(lc, "column", column)
        return lc

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Span:
    """
    Inclusive range between two positions; always addresses at least one character.

    A point span (start == end) is read as an insertion point by `to_patch`,
    not as a one-character replacement.
    """

    start: LineColumn
    end: LineColumn

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise SpanError(f"span end {self.end} precedes start {self.start}")

    def is_point(self) -> bool:
        return self.start == self.end

    @classmethod
    def from_line_range(cls, line: int, start: int, stop: int) -> "Span":
        """
        Build a single-line span from the half-open column range start..stop.

        `Span.from_line_range(1, 1, 3)` covers columns 1 and 2 of line 1.
        """
        if stop <= start:
            raise SpanError(f"empty column range {start}..{stop} on line {line}")
        return cls(LineColumn(line, start), LineColumn(line, stop - 1))

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
