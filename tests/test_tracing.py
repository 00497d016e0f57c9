"""
Tests for the error tracing sink.
"""

import logging
from unittest.mock import MagicMock

from src.infra.tracing import LoggingTracer, get_tracer, set_tracer


class TestLoggingTracer:
    """Tests for LoggingTracer class."""

    def test_logs_error_with_exception(self):
        """Should log at ERROR level with exception info attached."""
        mock_logger = MagicMock(spec=logging.Logger)
        tracer = LoggingTracer(mock_logger)
        error = OSError("locked")

        tracer.trace_error(error)

        mock_logger.error.assert_called_once()
        args, kwargs = mock_logger.error.call_args
        assert "OSError" in args[0]
        assert "locked" in args[0]
        assert kwargs["exc_info"][1] is error


class TestDefaultTracer:
    """Tests for get_tracer / set_tracer."""

    def test_default_is_logging_tracer(self):
        set_tracer(None)
        assert isinstance(get_tracer(), LoggingTracer)

    def test_replace_tracer(self, tracer):
        set_tracer(tracer)
        try:
            assert get_tracer() is tracer
        finally:
            set_tracer(None)
