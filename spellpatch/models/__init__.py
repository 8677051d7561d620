from .edit import Edit, Insert, Patch, Replace, to_patch
from .origin import ContentOrigin
from .span import LineColumn, Span
from .suggestion import Suggestion, SuggestionSet

__all__ = [
    "LineColumn",
    "Span",
    "Edit",
    "Replace",
    "Insert",
    "Patch",
    "to_patch",
    "ContentOrigin",
    "Suggestion",
    "SuggestionSet",
]
