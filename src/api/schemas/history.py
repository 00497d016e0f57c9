"""
Job history schemas.

Pydantic models for triggered job run history responses.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class TriggeredJobRunResponse(BaseModel):
    """A single run of a triggered job."""

    job_name: str
    run_id: str = Field(..., description="Sortable run id (yyyyMMddHHmmssffff, UTC)")
    status: Optional[str] = Field(default=None, description="Free-form status label, e.g. Running, Failed")
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: Optional[float] = Field(default=None, description="Seconds from start to end (or now)")
    output_url: str = Field(..., description="Path of the output log endpoint")
    error_url: str = Field(..., description="Path of the error log endpoint")


class TriggeredJobHistoryResponse(BaseModel):
    """Runs of a triggered job, newest first."""

    job_name: str
    runs: List[TriggeredJobRunResponse] = Field(default=[])
    total: int
