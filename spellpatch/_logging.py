"""
Opt-in logging for the correction engine.

Usage in library code:
    from spellpatch._logging import resolve_logger

    def correct_thing(..., logger=None, log: bool = False):
        log = resolve_logger(logger=logger, enabled=log, name=__name__)
        log.debug("correcting")  # no-op unless enabled or logger passed

The merge engine logs every write it performs, which is far too chatty for
a default; nothing is emitted unless the caller asks for it.
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def _ensure_default_handler(lg: logging.Logger) -> None:
    # Bubble to the root so pytest's caplog sees the records.
    lg.propagate = True


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return a usable logger according to opt-in policy.

    - If `logger` is provided, use it.
    - Else if `enabled` is True, create/get a named logger.
    - Else return a NoopLogger that ignores calls.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "spellpatch")
        lg.setLevel(level)
        _ensure_default_handler(lg)
        return lg
    return NoopLogger()
