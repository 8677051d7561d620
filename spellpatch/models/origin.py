from dataclasses import dataclass
from typing import Optional

from .span import Span

KINDS = ("markdown_file", "source_file", "doc_test")


@dataclass(frozen=True)
class ContentOrigin:
    """Which file (and for doc tests, which region of it) a set of edits belongs to."""

    kind: str  # "markdown_file", "source_file", "doc_test"
    path: str
    span: Optional[Span] = None

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"kind must be one of {KINDS}, got {self.kind!r}")
        if self.span is not None and self.kind != "doc_test":
            raise ValueError(f"only doc_test origins carry a span, not {self.kind!r}")

    @classmethod
    def markdown_file(cls, path: str) -> "ContentOrigin":
        return cls("markdown_file", path)

    @classmethod
    def source_file(cls, path: str) -> "ContentOrigin":
        return cls("source_file", path)

    @classmethod
    def doc_test(cls, path: str, span: Span) -> "ContentOrigin":
        return cls("doc_test", path, span)

    def __str__(self) -> str:
        if self.span is not None:
            return f"{self.path} ({self.span})"
        return self.path
