from dataclasses import dataclass
from typing import Union

from .span import LineColumn, Span


@dataclass
class Edit:
    """A proposed change: the text covered by `span` becomes `content`."""

    span: Span
    content: str

    @classmethod
    def from_replacement(cls, replacement: str, span: Span) -> "Edit":
        return cls(span=span, content=replacement)


@dataclass(frozen=True)
class Replace:
    """Delete the characters covered by `replace_span` and emit `replacement` instead."""

    replace_span: Span
    replacement: str

    @property
    def start(self) -> LineColumn:
        return self.replace_span.start

    @property
    def payload(self) -> str:
        return self.replacement


@dataclass(frozen=True)
class Insert:
    """Emit `content` right before the character at `insert_at`; consumes nothing."""

    insert_at: LineColumn
    content: str

    @property
    def start(self) -> LineColumn:
        return self.insert_at

    @property
    def payload(self) -> str:
        return self.content


Patch = Union[Replace, Insert]


def to_patch(edit: Edit) -> Patch:
    """Normalize an edit: a point span becomes an insertion, anything else a replacement."""
    if edit.span.is_point():
        return Insert(insert_at=edit.span.start, content=edit.content)
    return Replace(replace_span=edit.span, replacement=edit.content)
