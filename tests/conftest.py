"""
Pytest configuration and shared fixtures.
"""

import logging
import os
import tempfile
from pathlib import Path

import pytest

# Application log files from setup_logging() go to a throwaway directory
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="triggered_jobs_logs_"))


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers added by setup_logging() so no test writes to a stale stream."""
    yield
    app_logger = logging.getLogger("triggered_jobs")
    for handler in list(app_logger.handlers):
        handler.close()
    app_logger.handlers.clear()


class RecordingTracer:
    """Tracer that keeps every reported error."""

    def __init__(self):
        self.errors: list[BaseException] = []

    def trace_error(self, error: BaseException) -> None:
        self.errors.append(error)


@pytest.fixture
def tracer() -> RecordingTracer:
    return RecordingTracer()


@pytest.fixture
def history_root(tmp_path) -> Path:
    """Triggered jobs root inside a temporary directory."""
    root = tmp_path / "triggered"
    root.mkdir()
    return root


@pytest.fixture
def make_run_dirs(history_root):
    """Create pre-existing run directories for a job."""

    def _make(job_name: str, run_ids: list[str]) -> Path:
        job_dir = history_root / job_name
        for run_id in run_ids:
            (job_dir / run_id).mkdir(parents=True)
        return job_dir

    return _make


@pytest.fixture
def jobs_env(tmp_path, monkeypatch) -> Path:
    """
    Point JOBS_DATA_PATH at a temporary directory.

    Returns the triggered jobs root derived from it.
    """
    monkeypatch.setenv("JOBS_DATA_PATH", str(tmp_path / "jobs"))
    return (tmp_path / "jobs" / "triggered").resolve()
