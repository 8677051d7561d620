from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .edit import Edit
from .origin import ContentOrigin
from .span import Span


@dataclass
class Suggestion:
    """A single analyzer finding with its candidate replacements."""

    detector: str  # name of the analyzer that produced it, e.g. "hunspell"
    origin: ContentOrigin
    span: Span
    replacements: List[str] = field(default_factory=list)
    description: Optional[str] = None

    def first_edit(self) -> Optional[Edit]:
        """The edit accepting the first candidate, or None when there is none."""
        if not self.replacements:
            return None
        return Edit.from_replacement(self.replacements[0], self.span)

    def __str__(self) -> str:
        where = f"{self.origin.path}:{self.span.start.line}:{self.span.start.column}"
        what = self.description or "possible mistake"
        out = f"{where}: [{self.detector}] {what}"
        if self.replacements:
            out += " -> " + "|".join(self.replacements)
        return out


class SuggestionSet:
    """Suggestions grouped per origin, in the order origins were first seen."""

    def __init__(self, suggestions: Iterable[Suggestion] = ()):
        self._per_origin: Dict[ContentOrigin, List[Suggestion]] = {}
        self.extend(suggestions)

    def add(self, suggestion: Suggestion) -> None:
        self._per_origin.setdefault(suggestion.origin, []).append(suggestion)

    def extend(self, suggestions: Iterable[Suggestion]) -> None:
        for s in suggestions:
            self.add(s)

    def get(self, origin: ContentOrigin) -> List[Suggestion]:
        return list(self._per_origin.get(origin, []))

    def origins(self) -> List[ContentOrigin]:
        return list(self._per_origin)

    def total_count(self) -> int:
        return sum(len(v) for v in self._per_origin.values())

    def __len__(self) -> int:
        return len(self._per_origin)

    def __iter__(self) -> Iterator[Tuple[ContentOrigin, List[Suggestion]]]:
        return iter(list(self._per_origin.items()))
