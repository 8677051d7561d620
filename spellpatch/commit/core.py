# spellpatch/commit/core.py
import contextlib
import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Tuple, Union

from .._logging import resolve_logger
from ..errors import (
    FileReadError,
    InvalidEncodingError,
    RenameError,
    WriteError,
)
from ..models.edit import Edit, to_patch
from ..models.origin import ContentOrigin
from ..utils.fs import canonicalize, make_tempfile
from ..utils.gitignore import is_ignored
from .patch import apply_patches, validate_patches


log = logging.getLogger(__name__)

BATCH_MODES = {"fail_fast", "all_or_nothing"}

Batch = Union[
    Mapping[ContentOrigin, Iterable[Edit]],
    Iterable[Tuple[ContentOrigin, Iterable[Edit]]],
]


@dataclass
class CommitSummary:
    """Outcome of a batch of corrections."""

    success: List[str] = field(default_factory=list)  # canonical paths rewritten
    skipped: List[str] = field(default_factory=list)  # paths left alone (git-ignored)
    edit_count: int = 0


@dataclass
class _Staged:
    """Corrected content written to `tmp`, waiting to replace `path`."""

    path: str
    tmp: str
    original: bytes
    edit_count: int


def _read_text(path: str) -> Tuple[bytes, str]:
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileReadError(f"Failed to open {path}: {e}", path=path) from e
    try:
        return raw, raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(f"{path} is not valid UTF-8: {e}", path=path) from e


def _discard(tmp: str) -> None:
    with contextlib.suppress(OSError):
        if os.path.exists(tmp):
            os.remove(tmp)


def _backup_path(dest: str, backup_ext: str) -> str:
    ext = backup_ext if backup_ext.startswith(".") else "." + backup_ext
    return dest + ext


def _stage(path: str, edits: Iterable[Edit], *, validate: bool, tmp_dir: str | None, lg) -> _Staged:
    """Read `path`, merge the edits into a fresh temp file and leave the original untouched."""
    path = canonicalize(path)
    lg.debug(f"Reading {path}")
    original, content = _read_text(path)

    patches = [to_patch(e) for e in edits]
    if validate:
        validate_patches(patches)

    try:
        fd, tmp = make_tempfile(path, tmp_dir)
    except OSError as e:
        raise WriteError(f"Failed to create a temporary file for {path}: {e}", path=path) from e

    lg.debug(f"Staging {len(patches)} patch(es) for {path} in {tmp}")
    try:
        with os.fdopen(fd, "wb") as f:
            apply_patches(patches, content, f, logger=lg)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(path, tmp)
    except OSError as e:
        _discard(tmp)
        raise WriteError(f"Failed to write corrections for {path}: {e}", path=path) from e
    except BaseException:
        _discard(tmp)
        raise
    return _Staged(path=path, tmp=tmp, original=original, edit_count=len(patches))


def _promote(staged: _Staged, *, backup_ext: str | None, lg) -> None:
    """Swap the staged content in; readers see either the old or the new file, never a mix."""
    if backup_ext:
        backup = _backup_path(staged.path, backup_ext)
        try:
            with open(backup, "wb") as b:
                b.write(staged.original)
        except OSError as e:
            _discard(staged.tmp)
            raise WriteError(f"Failed to write backup {backup}: {e}", path=staged.path) from e
    try:
        os.replace(staged.tmp, staged.path)  # atomic within a filesystem
    except OSError as e:
        _discard(staged.tmp)
        raise RenameError(f"Failed to replace {staged.path}: {e}", path=staged.path) from e
    lg.debug(f"Replaced {staged.path}")


def correct_file(
    path: str,
    edits: Iterable[Edit],
    *,
    validate: bool = True,
    tmp_dir: str | None = None,
    backup_ext: str | None = None,
    logger=None,
    log: bool = False,
) -> str:
    """
    Apply `edits` to the file at `path`, atomically.

    Edits must be sorted by span start and replacements must not overlap.
    The corrected text goes to a temporary file next to the target (or into
    `tmp_dir`, which must be on the same filesystem) and is then renamed
    over it. On any failure the temp file is removed and the original stays
    byte-for-byte unchanged.

    Args:
        path: File to correct. Must exist and hold UTF-8 text.
        edits: Edits for this file, in order.
        validate: Reject unsorted/overlapping edits with InvalidPatchSetError
                  instead of producing undefined output.
        tmp_dir: Optional directory for the temporary file.
        backup_ext: Optional extension (".bak" or "bak") for a copy of the
                    original content written before the swap.

    Returns:
        The canonical path that was rewritten.

    Raises:
        PathResolutionError, FileReadError, InvalidEncodingError,
        InvalidPatchSetError, WriteError, RenameError
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    staged = _stage(path, edits, validate=validate, tmp_dir=tmp_dir, lg=lg)
    _promote(staged, backup_ext=backup_ext, lg=lg)
    return staged.path


def write_changes_to_disk(origin: ContentOrigin, edits: Iterable[Edit], **kwargs) -> str:
    """Correct the file an origin points at; doc-test origins rewrite their enclosing file."""
    return correct_file(origin.path, edits, **kwargs)


def _restore(staged: _Staged) -> None:
    """Put the original content back, through a temp file and os.replace like a promotion."""
    tmp = None
    try:
        fd, tmp = make_tempfile(staged.path)
        with os.fdopen(fd, "wb") as f:
            f.write(staged.original)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(staged.path, tmp)
        os.replace(tmp, staged.path)
    except OSError as e:
        if tmp is not None:
            _discard(tmp)
        # Rollback is best-effort; the original error is what gets raised.
        log.warning(f"Could not restore {staged.path}: {e}")


def _group_by_file(todo: List[Tuple[ContentOrigin, List[Edit]]]) -> List[Tuple[str, List[Edit]]]:
    """
    One entry per file, in order of first appearance.

    Several origins may name the same file (a source file and the doc tests
    inside it). Their edits all address the original content, so they are
    merged and written in one pass; a second pass would see shifted text.
    Merged lists are stably sorted by span start.
    """
    groups: dict = {}
    for origin, edits in todo:
        key = os.path.realpath(origin.path)
        if key in groups:
            groups[key][1].extend(edits)
            groups[key][2] = True
        else:
            groups[key] = [origin.path, list(edits), False]
    out: List[Tuple[str, List[Edit]]] = []
    for path, edits, merged in groups.values():
        if merged:
            edits = sorted(edits, key=lambda e: e.span.start)
        out.append((path, edits))
    return out


def commit_corrections(
    batch: Batch,
    *,
    mode: str = "fail_fast",
    respect_gitignore: bool = False,
    validate: bool = True,
    tmp_dir: str | None = None,
    backup_ext: str | None = None,
    logger=None,
    log: bool = False,
) -> CommitSummary:
    """
    Correct a batch of files, one at a time, in the order given.

    Origins pointing at the same file are merged first, so every file is
    read, corrected and replaced exactly once.

    Args:
        batch: Mapping (or pairs) of origin -> edits for that origin.
        mode: "fail_fast" (default) corrects file after file and raises at the
              first failure; files already done keep their corrections, the
              rest are never touched.
              "all_or_nothing" stages every file first and only then swaps
              them in. A staging failure leaves the filesystem unchanged; a
              failed swap restores the files already swapped from memory.
        respect_gitignore: Skip origins matched by the nearest .gitignore.

    Returns:
        CommitSummary of the rewritten and skipped paths.
    """
    if mode not in BATCH_MODES:
        raise ValueError(f"mode must be one of {sorted(BATCH_MODES)}")

    lg = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    items = list(batch.items()) if isinstance(batch, Mapping) else list(batch)
    summary = CommitSummary()

    todo: List[Tuple[ContentOrigin, List[Edit]]] = []
    for origin, edits in items:
        if respect_gitignore and is_ignored(origin.path):
            lg.info(f"Skipping git-ignored {origin.path}")
            summary.skipped.append(origin.path)
            continue
        todo.append((origin, list(edits)))
    files = _group_by_file(todo)

    if mode == "fail_fast":
        for path, edits in files:
            written = correct_file(
                path,
                edits,
                validate=validate,
                tmp_dir=tmp_dir,
                backup_ext=backup_ext,
                logger=lg,
            )
            summary.success.append(written)
            summary.edit_count += len(edits)
        return summary

    # all_or_nothing, phase 1: stage everything, touch nothing.
    staged: List[_Staged] = []
    try:
        for path, edits in files:
            staged.append(_stage(path, edits, validate=validate, tmp_dir=tmp_dir, lg=lg))
    except BaseException:
        for st in staged:
            _discard(st.tmp)
        raise

    # Phase 2: swap in; undo earlier swaps if one fails.
    promoted: List[_Staged] = []
    for i, st in enumerate(staged):
        try:
            _promote(st, backup_ext=backup_ext, lg=lg)
        except BaseException:
            for pending in staged[i + 1:]:
                _discard(pending.tmp)
            for done in reversed(promoted):
                _restore(done)
            raise
        promoted.append(st)
        summary.success.append(st.path)
        summary.edit_count += st.edit_count
    return summary
