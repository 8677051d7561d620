# spellpatch/utils/__init__.py
from .fs import canonicalize, make_tempfile
from .gitignore import get_gitignore, is_ignored
from .text import iter_with_line_column_from, utf8_len

__all__ = [
    "canonicalize",
    "make_tempfile",
    "get_gitignore",
    "is_ignored",
    "iter_with_line_column_from",
    "utf8_len",
]
