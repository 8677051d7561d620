import os
import tempfile
from typing import Tuple

from ..errors import PathResolutionError

TEMP_PREFIX = ".spellcheck-"
TEMP_SUFFIX = ".tmp"


def canonicalize(path: str) -> str:
    """
    Resolve `path` to an absolute path with symlinks followed.

    Unlike a bare realpath this insists the file exists, since a correction
    can only ever target content that was read from disk.
    """
    try:
        return os.path.realpath(os.fspath(path), strict=True)
    except (OSError, RuntimeError) as e:
        raise PathResolutionError(f"Failed to canonicalize {path}: {e}", path=str(path)) from e


def make_tempfile(target: str, tmp_dir: str | None = None) -> Tuple[int, str]:
    """
    Create a uniquely named staging file for `target`.

    Defaults to the target's own directory so the final os.replace() stays on
    one filesystem. Returns (fd, path) like tempfile.mkstemp.
    """
    dirpath = tmp_dir if tmp_dir is not None else os.path.dirname(target)
    return tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=dirpath)
