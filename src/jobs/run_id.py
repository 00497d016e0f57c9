"""
Run identity allocation.

A run id is the UTC creation instant formatted as yyyyMMddHHmmssffff:
18 digits, no separators, four fractional-second digits (100µs).
Fixed width means string order equals chronological order, which the
retention pruner relies on.

Known limitation: two runs of the same job started within the same
100µs tick get the same id. Nothing guards against this.
"""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .entities import utc_now
from .errors import RunSlotError

RUN_ID_LENGTH = 18
_RUN_ID_PATTERN = re.compile(r"^\d{18}$")


def new_run_id(now: Optional[datetime] = None) -> str:
    """
    Build a run id from a point in time.

    Args:
        now: Instant to encode (default: current UTC time). Aware values
            are converted to UTC; naive values are taken as UTC.

    Returns:
        18-digit sortable run id
    """
    instant = now if now is not None else utc_now()
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return instant.strftime("%Y%m%d%H%M%S") + f"{instant.microsecond // 100:04d}"


def is_run_id(name: str) -> bool:
    """Check whether a directory name has the run id shape."""
    return bool(_RUN_ID_PATTERN.match(name))


def parse_run_id(run_id: str) -> datetime:
    """Recover the (UTC, 100µs-truncated) creation time of a run id."""
    if not is_run_id(run_id):
        raise ValueError(f"Not a run id: {run_id!r}")
    base = datetime.strptime(run_id[:14], "%Y%m%d%H%M%S")
    return base.replace(microsecond=int(run_id[14:]) * 100, tzinfo=timezone.utc)


def create_run_dir(job_history_dir: Path, run_id: str) -> Path:
    """
    Create <job_history_dir>/<run_id>, parents included.

    Raises:
        RunSlotError: directory could not be created
    """
    run_dir = job_history_dir / run_id
    try:
        run_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RunSlotError(str(run_dir), str(e)) from e
    return run_dir
