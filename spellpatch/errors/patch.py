from .base import CorrectionError


class InvalidPatchSetError(CorrectionError):
    """Raised when patches are unsorted or a replacement overlaps a later patch."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index
