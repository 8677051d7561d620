from .base import CorrectionError
from .materialize import (
    FileReadError,
    InvalidEncodingError,
    MaterializeError,
    PathResolutionError,
    RenameError,
    WriteError,
)
from .patch import InvalidPatchSetError
from .span import SpanError

__all__ = [
    "CorrectionError",
    "SpanError",
    "InvalidPatchSetError",
    "MaterializeError",
    "PathResolutionError",
    "FileReadError",
    "InvalidEncodingError",
    "WriteError",
    "RenameError",
]
