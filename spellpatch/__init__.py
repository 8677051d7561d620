from .action import Finish, UserPicked, run, write_user_pick_changes_to_disk
from .commit import (
    CommitSummary,
    apply_patches,
    commit_corrections,
    correct_file,
    patch_text,
    validate_patches,
    write_changes_to_disk,
)
from .config import Config
from .errors import (
    CorrectionError,
    FileReadError,
    InvalidEncodingError,
    InvalidPatchSetError,
    MaterializeError,
    PathResolutionError,
    RenameError,
    SpanError,
    WriteError,
)
from .models import (
    ContentOrigin,
    Edit,
    Insert,
    LineColumn,
    Replace,
    Span,
    Suggestion,
    SuggestionSet,
    to_patch,
)
from .utils.text import iter_with_line_column_from

__all__ = [
    "run",
    "Finish",
    "UserPicked",
    "write_user_pick_changes_to_disk",
    "Config",
    "apply_patches",
    "patch_text",
    "validate_patches",
    "correct_file",
    "write_changes_to_disk",
    "commit_corrections",
    "CommitSummary",
    "iter_with_line_column_from",
    "LineColumn",
    "Span",
    "Edit",
    "Replace",
    "Insert",
    "to_patch",
    "ContentOrigin",
    "Suggestion",
    "SuggestionSet",
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
