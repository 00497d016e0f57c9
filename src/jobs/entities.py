"""
Job history domain entities.

- TriggeredJobStatus: persisted status document of one run
- LogLevel: severity of a run log line
- SystemEvent / RawCapture: the two kinds of run log lines
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union


STATUS_INITIALIZING = "Initializing"
STATUS_FAILED = "Failed"


def utc_now() -> datetime:
    """Get current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def from_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class LogLevel(str, Enum):
    """
    Run log severity.

    ERR lines go to error.log; everything else goes to output.log.
    """

    INFO = "INFO"
    WARN = "WARN"
    ERR = "ERR"


@dataclass
class TriggeredJobStatus:
    """
    Status document of a triggered job run.

    Stored as JSON in <run_dir>/status:
        {"status": "Running", "start_time": "...", "end_time": "..."}

    start_time is set once when the run is created; end_time is set once
    when the run concludes. Every change rewrites the whole document.
    """

    status: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert status to a JSON-ready dictionary."""
        data = {
            "status": self.status,
            "start_time": to_iso(self.start_time),
        }
        if self.end_time is not None:
            data["end_time"] = to_iso(self.end_time)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TriggeredJobStatus":
        """Create status from a dictionary, raising ValueError on bad shapes."""
        if not isinstance(data, dict):
            raise ValueError(f"Status document must be an object, got {type(data).__name__}")
        status = data.get("status")
        if status is not None and not isinstance(status, str):
            raise ValueError("Status label must be a string")
        return cls(
            status=status,
            start_time=from_iso(data.get("start_time")),
            end_time=from_iso(data.get("end_time")),
        )


@dataclass(frozen=True)
class SystemEvent:
    """Operator-facing message about the run (start, status change, failure)."""

    level: LogLevel
    message: str


@dataclass(frozen=True)
class RawCapture:
    """Verbatim line captured from the job process stdout/stderr."""

    level: LogLevel
    message: str


LogMessage = Union[SystemEvent, RawCapture]
