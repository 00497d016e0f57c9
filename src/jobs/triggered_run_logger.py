"""
Triggered job run logger.

One instance per run. Starting a run:
    1. prunes the job's existing history (retention)
    2. allocates the run id and creates <root>/<job_name>/<run_id>/
    3. writes the initial status document ("Initializing")

After that, status updates and log appends can be interleaved freely.

Status changes are unlocked read-modify-write: concurrent updates of the
same document are last-writer-wins. Status can still be changed after
report_end_run().
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from src.infra.data_paths import get_job_history_dir
from src.infra.tracing import Tracer, get_tracer

from .entities import (
    STATUS_FAILED,
    STATUS_INITIALIZING,
    LogLevel,
    LogMessage,
    RawCapture,
    SystemEvent,
    TriggeredJobStatus,
    utc_now,
)
from .job_logger import JobLogger, format_timestamp
from .retention import prune_old_runs
from .run_id import create_run_dir, new_run_id

logger = logging.getLogger("triggered_jobs")

TRIGGERED_STATUS_FILE = "status"
OUTPUT_LOG_FILE = "output.log"
ERROR_LOG_FILE = "error.log"


class TriggeredJobRunLogger(JobLogger):
    """History slot writer for one run of a triggered job."""

    def __init__(
        self,
        job_name: str,
        run_id: str,
        history_root: Optional[Path] = None,
        instance_id: Optional[str] = None,
    ):
        super().__init__(TRIGGERED_STATUS_FILE, instance_id=instance_id)
        self.job_name = job_name
        self.run_id = run_id

        self._history_path = create_run_dir(get_job_history_dir(job_name, history_root), run_id)
        self.output_file_path = self._history_path / OUTPUT_LOG_FILE
        self.error_file_path = self._history_path / ERROR_LOG_FILE

    @classmethod
    def log_new_run(
        cls,
        job_name: str,
        history_root: Optional[Path] = None,
        max_runs: Optional[int] = None,
        tracer: Optional[Tracer] = None,
        instance_id: Optional[str] = None,
    ) -> "TriggeredJobRunLogger":
        """
        Start recording a new run of a job.

        Args:
            job_name: Triggered job name
            history_root: Triggered jobs root (default: from data_paths)
            max_runs: Retention limit (default: settings, read fresh)
            tracer: Error sink for cleanup failures
            instance_id: Instance id for system lines (default: from data_paths)

        Returns:
            Logger bound to the new run's history slot

        Raises:
            RunSlotError: run directory could not be created
            StatusWriteError: initial status could not be written
        """
        tracer = tracer or get_tracer()
        prune_old_runs(job_name, max_runs=max_runs, history_root=history_root, tracer=tracer)

        run_logger = cls(
            job_name,
            new_run_id(),
            history_root=history_root,
            instance_id=instance_id,
        )
        run_logger.report_status(
            TriggeredJobStatus(status=STATUS_INITIALIZING, start_time=utc_now())
        )
        logger.info(f"[TriggeredJob] {job_name}: started run {run_logger.run_id}")
        return run_logger

    @property
    def history_path(self) -> Path:
        return self._history_path

    # -------------------------------------------------------------------------
    # Status lifecycle
    # -------------------------------------------------------------------------

    def read_current_status(self) -> TriggeredJobStatus:
        """Current status document, or a fresh default if unreadable."""
        return self.read_status(self.get_status_file_path()) or TriggeredJobStatus()

    def _update_status(
        self,
        mutate: Callable[[TriggeredJobStatus], None],
        log_status: bool = True,
    ) -> TriggeredJobStatus:
        # Single read-modify-write seam for every status change.
        status = self.read_current_status()
        mutate(status)
        self.report_status(status, log_status=log_status)
        return status

    def set_status(self, label: str) -> TriggeredJobStatus:
        """Overwrite the status label (free-form) and persist."""
        def apply(status: TriggeredJobStatus) -> None:
            status.status = label

        return self._update_status(apply)

    def report_end_run(self) -> TriggeredJobStatus:
        """Set end_time to now (once), leaving the status label untouched."""
        def apply(status: TriggeredJobStatus) -> None:
            if status.end_time is None:
                status.end_time = utc_now()

        return self._update_status(apply, log_status=False)

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    def log_error(self, error: str) -> None:
        """Mark the run Failed and record the error as a system line."""
        def apply(status: TriggeredJobStatus) -> None:
            status.status = STATUS_FAILED

        self._update_status(apply)
        self._log(SystemEvent(LogLevel.ERR, error))

    def log_warning(self, warning: str) -> None:
        self._log(SystemEvent(LogLevel.WARN, warning))

    def log_information(self, message: str) -> None:
        self._log(SystemEvent(LogLevel.INFO, message))

    def log_standard_output(self, message: str) -> None:
        self._log(RawCapture(LogLevel.INFO, message))

    def log_standard_error(self, message: str) -> None:
        self._log(RawCapture(LogLevel.ERR, message))

    def format_message(self, message: LogMessage) -> str:
        if isinstance(message, SystemEvent):
            return self.get_system_formatted_message(message.level, message.message)
        return f"[{format_timestamp()}] {message.message}\n"

    def log_path_for(self, level: LogLevel) -> Path:
        return self.error_file_path if level == LogLevel.ERR else self.output_file_path

    def _log(self, message: LogMessage) -> None:
        self.safe_log_to_file(self.log_path_for(message.level), self.format_message(message))
