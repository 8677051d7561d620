from .base import CorrectionError


class MaterializeError(CorrectionError):
    """A file could not be corrected on disk. `path` names the file involved."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class PathResolutionError(MaterializeError):
    pass


class FileReadError(MaterializeError):
    pass


class InvalidEncodingError(MaterializeError):
    pass


class WriteError(MaterializeError):
    pass


class RenameError(MaterializeError):
    pass
