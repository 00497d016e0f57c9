"""
Triggered job history router.

Read-only endpoints over the run history written by TriggeredJobRunLogger:
- GET /jobs/triggered/{job_name}/history - List runs (newest first)
- GET /jobs/triggered/{job_name}/history/{run_id} - Get one run
- GET /jobs/triggered/{job_name}/history/{run_id}/output - Output log text
- GET /jobs/triggered/{job_name}/history/{run_id}/error - Error log text
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from ..schemas.history import TriggeredJobRunResponse, TriggeredJobHistoryResponse

from src.jobs.errors import RunNotFoundError
from src.jobs.history import (
    TriggeredJobRun,
    get_job_run,
    list_job_runs,
    read_run_log,
)

router = APIRouter()

# Overridden in tests; None means data_paths decides
HISTORY_ROOT: Optional[Path] = None


def _run_to_response(run: TriggeredJobRun) -> TriggeredJobRunResponse:
    data = run.to_dict()
    base_url = f"/jobs/triggered/{run.job_name}/history/{run.run_id}"
    return TriggeredJobRunResponse(
        job_name=data["job_name"],
        run_id=data["run_id"],
        status=data["status"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        duration=data["duration"],
        output_url=f"{base_url}/output",
        error_url=f"{base_url}/error",
    )


def _get_run_or_404(job_name: str, run_id: str) -> TriggeredJobRun:
    try:
        return get_job_run(job_name, run_id, history_root=HISTORY_ROOT)
    except RunNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{job_name}/history", response_model=TriggeredJobHistoryResponse)
async def get_job_history(job_name: str):
    """
    List the runs of a triggered job, newest first.

    A job without history returns an empty list rather than 404.
    """
    runs = list_job_runs(job_name, history_root=HISTORY_ROOT)
    return TriggeredJobHistoryResponse(
        job_name=job_name,
        runs=[_run_to_response(run) for run in runs],
        total=len(runs),
    )


@router.get("/{job_name}/history/{run_id}", response_model=TriggeredJobRunResponse)
async def get_job_history_run(job_name: str, run_id: str):
    """Get a single run's status and timing."""
    return _run_to_response(_get_run_or_404(job_name, run_id))


@router.get("/{job_name}/history/{run_id}/output", response_class=PlainTextResponse)
async def get_job_run_output(job_name: str, run_id: str):
    """Get a run's output log (system messages and standard output)."""
    run = _get_run_or_404(job_name, run_id)
    return PlainTextResponse(read_run_log(run, "output"))


@router.get("/{job_name}/history/{run_id}/error", response_class=PlainTextResponse)
async def get_job_run_error(job_name: str, run_id: str):
    """Get a run's error log (system errors and standard error)."""
    run = _get_run_or_404(job_name, run_id)
    return PlainTextResponse(read_run_log(run, "error"))
