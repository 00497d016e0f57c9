"""
Read-only access to triggered job history.

Used by the HTTP API and the CLI to browse runs written by
TriggeredJobRunLogger.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal, Optional

from src.infra.data_paths import get_job_history_dir

from .entities import TriggeredJobStatus, to_iso, utc_now
from .errors import RunNotFoundError
from .job_logger import JobLogger
from .run_id import is_run_id
from .triggered_run_logger import ERROR_LOG_FILE, OUTPUT_LOG_FILE, TRIGGERED_STATUS_FILE

LogStream = Literal["output", "error"]


@dataclass
class TriggeredJobRun:
    """Snapshot of one run's history slot."""

    job_name: str
    run_id: str
    status: Optional[str]
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    output_path: Path
    error_path: Path

    @property
    def duration(self) -> Optional[float]:
        """Seconds from start to end (or to now while still running)."""
        if self.start_time is None:
            return None
        end = self.end_time or utc_now()
        return (end - self.start_time).total_seconds()

    def to_dict(self) -> dict:
        return {
            "job_name": self.job_name,
            "run_id": self.run_id,
            "status": self.status,
            "start_time": to_iso(self.start_time),
            "end_time": to_iso(self.end_time),
            "duration": self.duration,
            "output_path": str(self.output_path),
            "error_path": str(self.error_path),
        }


def _load_run(job_name: str, run_dir: Path) -> TriggeredJobRun:
    status = JobLogger.read_status(run_dir / TRIGGERED_STATUS_FILE) or TriggeredJobStatus()
    return TriggeredJobRun(
        job_name=job_name,
        run_id=run_dir.name,
        status=status.status,
        start_time=status.start_time,
        end_time=status.end_time,
        output_path=run_dir / OUTPUT_LOG_FILE,
        error_path=run_dir / ERROR_LOG_FILE,
    )


def list_job_runs(job_name: str, history_root: Optional[Path] = None) -> list[TriggeredJobRun]:
    """
    List a job's runs, newest first.

    Directories whose names are not run ids are ignored.

    Returns:
        List of TriggeredJobRun (empty when the job has no history)
    """
    job_dir = get_job_history_dir(job_name, history_root)
    if not job_dir.is_dir():
        return []

    run_dirs = [p for p in job_dir.iterdir() if p.is_dir() and is_run_id(p.name)]
    run_dirs.sort(key=lambda p: p.name, reverse=True)
    return [_load_run(job_name, run_dir) for run_dir in run_dirs]


def get_job_run(job_name: str, run_id: str, history_root: Optional[Path] = None) -> TriggeredJobRun:
    """
    Get a single run.

    Raises:
        RunNotFoundError: no such run directory
    """
    if not is_run_id(run_id):
        raise RunNotFoundError(job_name, run_id)

    run_dir = get_job_history_dir(job_name, history_root) / run_id
    if not run_dir.is_dir():
        raise RunNotFoundError(job_name, run_id)
    return _load_run(job_name, run_dir)


def get_latest_run(job_name: str, history_root: Optional[Path] = None) -> Optional[TriggeredJobRun]:
    """Get the newest run of a job, or None without history."""
    runs = list_job_runs(job_name, history_root)
    return runs[0] if runs else None


def read_run_log(run: TriggeredJobRun, stream: LogStream = "output") -> str:
    """Read a run's output or error log; empty string if not written yet."""
    path = run.error_path if stream == "error" else run.output_path
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""
