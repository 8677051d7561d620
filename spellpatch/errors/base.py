class CorrectionError(Exception):
    """Base class for every error raised by spellpatch."""
