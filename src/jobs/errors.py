"""
Job history exceptions.

Cleanup failures are never raised (they go to the tracer); missing or
corrupt status documents are not errors at all.
"""


class JobHistoryError(Exception):
    """Base exception for all job history errors."""
    pass


class RunSlotError(JobHistoryError):
    """Raised when a run's history directory cannot be created."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot create run history directory {path}: {reason}")


class StatusWriteError(JobHistoryError):
    """Raised when the status document cannot be persisted."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot write status file {path}: {reason}")


class LogWriteError(JobHistoryError):
    """Raised when a line cannot be appended to a run log."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot append to log file {path}: {reason}")


class RunNotFoundError(JobHistoryError):
    """Raised when a requested run does not exist in a job's history."""

    def __init__(self, job_name: str, run_id: str):
        self.job_name = job_name
        self.run_id = run_id
        super().__init__(f"Run not found: {job_name}/{run_id}")
