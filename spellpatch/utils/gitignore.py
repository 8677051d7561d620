# spellpatch/utils/gitignore.py
import os
from typing import List, Tuple

import pathspec


def get_gitignore(path: str) -> Tuple[pathspec.PathSpec, str]:
    """
    Return (spec, root) for the nearest .gitignore found by walking upward
    from `path` (file or directory). `root` is the directory holding that
    .gitignore, against which the spec's patterns are relative. Always
    ignores '.git/'. If no .gitignore exists, root is the starting directory.
    """
    defaults: List[str] = [".git/"]
    lines: List[str] = list(defaults)

    base = os.path.abspath(path or ".")
    if os.path.isfile(base):
        base = os.path.dirname(base)

    root = base
    cur = base
    while True:
        gi = os.path.join(cur, ".gitignore")
        try:
            if os.path.exists(gi):
                with open(gi, "r", encoding="utf-8", errors="ignore") as f:
                    lines.extend(f.read().splitlines())
                root = cur
                break
        except OSError:
            # Unreadable .gitignore: keep walking upward
            pass
        parent = os.path.dirname(cur)
        if parent == cur:
            break
        cur = parent

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines), root
    except Exception:
        return pathspec.PathSpec.from_lines("gitwildmatch", defaults), root


def is_ignored(path: str) -> bool:
    """True when the nearest .gitignore above `path` matches it."""
    spec, root = get_gitignore(path)
    rel = os.path.relpath(os.path.abspath(path), root).replace(os.sep, "/")
    if rel.startswith("../"):
        return False
    return spec.match_file(rel)
