"""
Triggered job run history.

Provides:
- Run id allocation and history slot creation
- Retention pruning of old runs
- Status document lifecycle (Initializing -> ... -> end_time / Failed)
- Output and error run logs
- Read-only history browsing
"""

from .entities import (
    STATUS_FAILED,
    STATUS_INITIALIZING,
    LogLevel,
    LogMessage,
    RawCapture,
    SystemEvent,
    TriggeredJobStatus,
)
from .errors import (
    JobHistoryError,
    LogWriteError,
    RunNotFoundError,
    RunSlotError,
    StatusWriteError,
)
from .history import (
    TriggeredJobRun,
    get_job_run,
    get_latest_run,
    list_job_runs,
    read_run_log,
)
from .job_logger import JobLogger
from .retention import PruneOutcome, PruneResult, prune_old_runs
from .run_id import is_run_id, new_run_id, parse_run_id
from .triggered_run_logger import TriggeredJobRunLogger

__all__ = [
    # Entities
    "STATUS_FAILED",
    "STATUS_INITIALIZING",
    "LogLevel",
    "LogMessage",
    "RawCapture",
    "SystemEvent",
    "TriggeredJobStatus",
    # Errors
    "JobHistoryError",
    "LogWriteError",
    "RunNotFoundError",
    "RunSlotError",
    "StatusWriteError",
    # Loggers
    "JobLogger",
    "TriggeredJobRunLogger",
    # Retention
    "PruneOutcome",
    "PruneResult",
    "prune_old_runs",
    # Run ids
    "is_run_id",
    "new_run_id",
    "parse_run_id",
    # History
    "TriggeredJobRun",
    "get_job_run",
    "get_latest_run",
    "list_job_runs",
    "read_run_log",
]
