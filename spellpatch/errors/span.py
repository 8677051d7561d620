from .base import CorrectionError


class SpanError(CorrectionError, ValueError):
    """Raised when a LineColumn or Span would violate its invariants."""
