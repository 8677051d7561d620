from .core import CommitSummary, commit_corrections, correct_file, write_changes_to_disk
from .patch import apply_patches, patch_text, validate_patches

__all__ = [
    "apply_patches",
    "patch_text",
    "validate_patches",
    "correct_file",
    "write_changes_to_disk",
    "commit_corrections",
    "CommitSummary",
]
