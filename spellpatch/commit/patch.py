# spellpatch/commit/patch.py
from __future__ import annotations

import io
import logging
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple

from .._logging import resolve_logger
from ..errors.patch import InvalidPatchSetError
from ..models.edit import Edit, Patch, Replace, to_patch
from ..models.span import LineColumn
from ..utils.text import iter_with_line_column_from

__all__ = ["apply_patches", "patch_text", "validate_patches"]

_Char = Tuple[str, int, int, LineColumn]


# ---------- core helpers ----------


def _normalize(patches: Iterable[Patch | Edit]) -> list[Patch]:
    return [to_patch(p) if isinstance(p, Edit) else p for p in patches]


class _CharStream:
    """Forward-only view of the position-tagged characters with one item of lookahead."""

    def __init__(self, chars: Iterator[_Char], total: int):
        self._chars = chars
        self._total = total
        self.head: Optional[_Char] = next(chars, None)

    @property
    def offset(self) -> int:
        """Byte offset where the head character starts; `total` once exhausted."""
        return self.head[1] if self.head is not None else self._total

    def advance_before(self, boundary: LineColumn) -> None:
        """Carbon-copy range: move past every character positioned strictly before `boundary`."""
        while self.head is not None and self.head[3] < boundary:
            self.head = next(self._chars, None)

    def advance_through(self, end: LineColumn) -> None:
        """Skip range: move past every character up to and including `end`."""
        while self.head is not None and self.head[3] <= end:
            self.head = next(self._chars, None)


def validate_patches(patches: Iterable[Patch | Edit]) -> None:
    """
    Check the ordering contract of the merge engine.

    Patches must be sorted by start position, and nothing may begin at or
    before the end of a preceding replacement. Several insertions may share
    one position.

    Raises:
        InvalidPatchSetError: naming the index of the first offending patch.
    """
    prev_start: LineColumn | None = None
    replaced_through: LineColumn | None = None
    for i, p in enumerate(_normalize(patches)):
        if prev_start is not None and p.start < prev_start:
            raise InvalidPatchSetError(
                f"patch #{i} starts at {p.start}, before the previous patch at {prev_start}", index=i
            )
        if replaced_through is not None and p.start <= replaced_through:
            raise InvalidPatchSetError(
                f"patch #{i} starts at {p.start}, inside a replacement ending at {replaced_through}",
                index=i,
            )
        prev_start = p.start
        if isinstance(p, Replace):
            replaced_through = p.replace_span.end


def apply_patches(
    patches: Iterable[Patch | Edit],
    source_buffer: str,
    sink: BinaryIO,
    *,
    validate: bool = False,
    logger=None,
    log: bool = False,
) -> None:
    """
    Stream `source_buffer` into `sink` as UTF-8 with `patches` stitched in.

    The patches must be sorted by start and replacements must not overlap
    (see `validate_patches`); inserting several times at one position is
    fine and keeps the supplied order. Nothing here knows about comments,
    markdown or any other syntax: text is replaced blindly.

    Two cursors only ever move forward: the character stream is read once,
    left to right, with one character of lookahead, and `byte_cursor` marks
    how much of the encoded buffer has been written or skipped. Per patch,
    the untouched text up to the patch start is carbon-copied in one write,
    then the payload is written, then a replacement skips the characters it
    covers. The tail after the last patch is carbon-copied at the end.

    Raises:
        InvalidPatchSetError: only when `validate` is set.
        OSError: whatever `sink.write` raises, unchanged.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    patches = _normalize(patches)
    if validate:
        validate_patches(patches)

    encoded = source_buffer.encode("utf-8")
    total = len(encoded)
    chars = _CharStream(iter_with_line_column_from(source_buffer, LineColumn(1, 0)), total)

    def write(topic: str, data: bytes) -> None:
        log.debug(f"w<{topic}>: {data!r}")
        if data:
            sink.write(data)

    byte_cursor = 0
    for i, patch in enumerate(patches):
        chars.advance_before(patch.start)
        cc_end = chars.offset
        write("cc", encoded[byte_cursor:cc_end])
        byte_cursor = cc_end

        write("new", patch.payload.encode("utf-8"))

        if isinstance(patch, Replace):
            chars.advance_through(patch.replace_span.end)
            skipped_to = chars.offset
            log.debug(f"skip[{i}]: {encoded[byte_cursor:skipped_to]!r}")
            byte_cursor = skipped_to

    write("cc", encoded[byte_cursor:])


def patch_text(
    content: str,
    patches: Iterable[Patch | Edit],
    *,
    validate: bool = False,
    logger=None,
    log: bool = False,
) -> str:
    """Apply `patches` to `content` in memory and return the corrected text."""
    buf = io.BytesIO()
    apply_patches(patches, content, buf, validate=validate, logger=logger, log=log)
    return buf.getvalue().decode("utf-8")
