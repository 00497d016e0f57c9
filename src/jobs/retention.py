"""
Run history retention.

Keeps a job's history bounded by deleting the oldest run directories
before a new run is created. Pruning is best-effort: a directory that
cannot be removed is reported to the tracer and skipped.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from src.infra.data_paths import get_job_history_dir, get_max_job_runs_history_count
from src.infra.tracing import Tracer, get_tracer

from .job_logger import release_file_locks

logger = logging.getLogger("triggered_jobs")


@dataclass
class PruneOutcome:
    """Result of removing one run directory."""

    path: Path
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PruneResult:
    """Summary of one pruning pass over a job's history."""

    job_name: str
    max_runs: int
    existing_count: int = 0
    outcomes: list[PruneOutcome] = field(default_factory=list)

    @property
    def deleted(self) -> list[Path]:
        return [o.path for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[PruneOutcome]:
        return [o for o in self.outcomes if not o.ok]


def select_runs_to_remove(run_dir_names: list[str], keep: int) -> list[str]:
    """
    Pick the run directories beyond the newest `keep`.

    Run ids sort chronologically as strings, so descending name order is
    newest first.
    """
    if len(run_dir_names) <= keep:
        return []
    ordered = sorted(run_dir_names, reverse=True)
    return ordered[max(keep, 0):]


def _remove_run_dir(path: Path) -> PruneOutcome:
    try:
        shutil.rmtree(path)
    except OSError as e:
        return PruneOutcome(path=path, error=e)
    release_file_locks(path)
    return PruneOutcome(path=path)


def prune_old_runs(
    job_name: str,
    max_runs: Optional[int] = None,
    history_root: Optional[Path] = None,
    tracer: Optional[Tracer] = None,
) -> PruneResult:
    """
    Remove old run directories of a job to make room for a new run.

    Args:
        job_name: Triggered job name
        max_runs: Maximum runs kept, new run included
            (default: get_max_job_runs_history_count(), read per call)
        history_root: Triggered jobs root (default: from data_paths)
        tracer: Error sink for deletion failures (default: process tracer)

    Returns:
        PruneResult with one outcome per attempted deletion
    """
    if max_runs is None:
        max_runs = get_max_job_runs_history_count()
    tracer = tracer or get_tracer()
    result = PruneResult(job_name=job_name, max_runs=max_runs)

    # If max is 5 and 5 runs exist, one still has to go to make room for
    # the run about to start, so only max - 1 existing runs are kept.
    keep = max_runs - 1

    job_dir = get_job_history_dir(job_name, history_root)
    try:
        if not job_dir.is_dir():
            return result
        run_dir_names = [p.name for p in job_dir.iterdir() if p.is_dir()]
    except OSError as e:
        tracer.trace_error(e)
        return result

    result.existing_count = len(run_dir_names)
    for name in select_runs_to_remove(run_dir_names, keep):
        result.outcomes.append(_remove_run_dir(job_dir / name))

    for outcome in result.failed:
        tracer.trace_error(outcome.error)

    if result.outcomes:
        logger.info(
            f"[Retention] {job_name}: removed {len(result.deleted)} old run(s), "
            f"{len(result.failed)} failed (max_runs={max_runs})"
        )

    return result
