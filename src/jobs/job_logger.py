"""
Base job logger.

Owns what every job kind shares:
- where the status document lives and how it is (de)serialized
- safe appends to log files (serialized per file within the process)
- the system message format
"""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from src.infra.data_paths import get_instance_id

from .entities import LogLevel, TriggeredJobStatus, utc_now
from .errors import LogWriteError, StatusWriteError

logger = logging.getLogger("triggered_jobs")

LOG_TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M:%S"

# One lock per log file path, shared by every logger instance in the process
_file_locks: dict[str, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _get_file_lock(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _file_locks_guard:
        lock = _file_locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _file_locks[key] = lock
        return lock


def release_file_locks(directory: Path) -> int:
    """Forget the locks of every log file under a removed directory."""
    prefix = str(directory.resolve()) + os.sep
    with _file_locks_guard:
        stale = [key for key in _file_locks if key.startswith(prefix)]
        for key in stale:
            del _file_locks[key]
    return len(stale)


def format_timestamp(value: Optional[datetime] = None) -> str:
    """Format a log line timestamp (UTC)."""
    return (value or utc_now()).strftime(LOG_TIMESTAMP_FORMAT)


class JobLogger(ABC):
    """
    Abstract logger for a single job run.

    Subclasses decide the history directory; the status file is
    <history_path>/<status_file_name>.
    """

    def __init__(
        self,
        status_file_name: str,
        instance_id: Optional[str] = None,
    ):
        self.status_file_name = status_file_name
        self.instance_id = instance_id or get_instance_id()

    @property
    @abstractmethod
    def history_path(self) -> Path:
        """Directory holding this run's status and log files."""

    def get_status_file_path(self) -> Path:
        return self.history_path / self.status_file_name

    # -------------------------------------------------------------------------
    # Status document codec
    # -------------------------------------------------------------------------

    @staticmethod
    def read_status(path: Path) -> Optional[TriggeredJobStatus]:
        """
        Read a status document.

        Missing files and undecodable content are treated as absent.

        Returns:
            TriggeredJobStatus if readable, None otherwise
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return TriggeredJobStatus.from_dict(data)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, TypeError) as e:
            logger.debug(f"[JobLogger] Ignoring unreadable status file {path}: {e}")
            return None

    @staticmethod
    def write_status(path: Path, status: TriggeredJobStatus) -> None:
        """
        Write a status document, replacing any previous content.

        Raises:
            StatusWriteError: file could not be written
        """
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(status.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StatusWriteError(str(path), str(e)) from e

    def report_status(self, status: TriggeredJobStatus, log_status: bool = True) -> None:
        """Persist the status document, optionally logging the new label."""
        self.write_status(self.get_status_file_path(), status)
        if log_status:
            self.log_information(f"Status changed to {status.status}")

    # -------------------------------------------------------------------------
    # Log files
    # -------------------------------------------------------------------------

    def get_system_formatted_message(self, level: LogLevel, message: str) -> str:
        """Format an operator-facing line: [time > instance: LEVEL] message"""
        return f"[{format_timestamp()} > {self.instance_id}: {level.value}] {message}\n"

    @staticmethod
    def safe_log_to_file(path: Path, message: str) -> None:
        """
        Append text to a log file.

        Appends to the same file are serialized across threads, so
        concurrent stdout/stderr drains never interleave partial lines.

        Raises:
            LogWriteError: file could not be appended to
        """
        with _get_file_lock(path):
            try:
                with open(path, "a", encoding="utf-8", newline="") as f:
                    f.write(message)
            except OSError as e:
                raise LogWriteError(str(path), str(e)) from e

    # -------------------------------------------------------------------------
    # Public logging surface
    # -------------------------------------------------------------------------

    @abstractmethod
    def log_error(self, error: str) -> None:
        ...

    @abstractmethod
    def log_warning(self, warning: str) -> None:
        ...

    @abstractmethod
    def log_information(self, message: str) -> None:
        ...

    @abstractmethod
    def log_standard_output(self, message: str) -> None:
        ...

    @abstractmethod
    def log_standard_error(self, message: str) -> None:
        ...
