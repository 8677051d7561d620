# spellpatch/utils/text.py
from typing import Iterator, Optional, Tuple

from ..models.span import LineColumn


def utf8_len(ch: str) -> int:
    """Number of bytes the scalar `ch` occupies in UTF-8."""
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


def iter_with_line_column_from(
    text: str, start: Optional[LineColumn] = None
) -> Iterator[Tuple[str, int, int, LineColumn]]:
    """
    Yield (char, byte_offset, index, position) for every scalar in `text`.

    `byte_offset` is where the scalar begins in `text.encode("utf-8")`, so
    slicing the encoded buffer at these offsets never splits a scalar.
    `position` starts at `start` (default 1:0); a "\\n" keeps the column it
    sits at and the following scalar begins the next line at column 0.
    """
    if start is None:
        start = LineColumn(1, 0)
    line, column = start.line, start.column
    position = LineColumn.unchecked
    byte_offset = 0
    for index, ch in enumerate(text):
        yield ch, byte_offset, index, position(line, column)
        byte_offset += utf8_len(ch)
        if ch == "\n":
            line += 1
            column = 0
        else:
            column += 1
