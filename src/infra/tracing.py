"""
Error sink for best-effort operations.

Failures that must not interrupt the caller (e.g. removing an old run
directory) are handed to a Tracer instead of being raised.
"""

import logging
from typing import Protocol


class Tracer(Protocol):
    """Fire-and-forget error reporting."""

    def trace_error(self, error: BaseException) -> None:
        ...


class LoggingTracer:
    """Tracer that records errors on the application logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("triggered_jobs")

    def trace_error(self, error: BaseException) -> None:
        self._logger.error(
            f"[Trace] {type(error).__name__}: {error}",
            exc_info=(type(error), error, error.__traceback__),
        )


_default_tracer: Tracer | None = None


def get_tracer() -> Tracer:
    """Get the process-wide tracer, creating a LoggingTracer on first use."""
    global _default_tracer
    if _default_tracer is None:
        _default_tracer = LoggingTracer()
    return _default_tracer


def set_tracer(tracer: Tracer | None) -> None:
    """Replace the process-wide tracer (None restores the default)."""
    global _default_tracer
    _default_tracer = tracer
