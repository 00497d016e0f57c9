"""
Data path and settings helpers for triggered job history.

Centralized path management for job history storage.

Directory structure:
data/
 └── jobs/                         # Jobs data root (JOBS_DATA_PATH)
     └── triggered/                # Triggered job histories
         └── <job_name>/
             └── <run_id>/         # One history slot per run
                 ├── status        # JSON status document
                 ├── output.log    # Standard output + system messages
                 └── error.log     # Standard error + system errors

Environment Variables:
- JOBS_DATA_PATH: Override jobs data root (default: data/jobs)
- JOB_RUNS_HISTORY_SIZE: Maximum runs kept per job (default: 50)
- JOB_INSTANCE_ID: Instance id shown in system log lines (default: host name prefix)
- LOG_DIR: Application log directory (default: logs)
"""

import logging
import os
import socket
from pathlib import Path

logger = logging.getLogger("triggered_jobs")

TRIGGERED_PATH = "triggered"
DEFAULT_MAX_JOB_RUNS_HISTORY_COUNT = 50

# =============================================================================
# Environment Variable Configuration
# =============================================================================

def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    val = os.getenv(key)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            logger.warning(f"[DataPaths] Invalid integer for {key}: {val}, using default: {default}")
    return default


# =============================================================================
# Base Paths (relative to project root)
# =============================================================================

def get_project_root() -> Path:
    """
    Get the project root directory.

    File is at src/infra/data_paths.py, so project root is 2 levels up.

    Returns:
        Path: Project root directory
    """
    return Path(__file__).parent.parent.parent.resolve()


def get_data_root() -> Path:
    """Get the data/ directory under the project root."""
    return get_project_root() / "data"


def get_logs_dir() -> Path:
    """
    Get application log directory.

    Can be overridden via LOG_DIR environment variable.
    """
    env_path = os.getenv("LOG_DIR")
    if env_path:
        return Path(env_path).resolve()
    return get_project_root() / "logs"


# =============================================================================
# Job History Paths
# =============================================================================

def get_jobs_data_root() -> Path:
    """
    Get the base directory under which all job histories live.

    Can be overridden via JOBS_DATA_PATH environment variable.

    Default: data/jobs

    Returns:
        Path: Jobs data root
    """
    env_path = os.getenv("JOBS_DATA_PATH")
    if env_path:
        return Path(env_path).resolve()
    return get_data_root() / "jobs"


def get_triggered_jobs_root() -> Path:
    """Get the root holding one history directory per triggered job."""
    return get_jobs_data_root() / TRIGGERED_PATH


def get_job_history_dir(job_name: str, history_root: Path | None = None) -> Path:
    """
    Get the history directory of a single triggered job.

    Args:
        job_name: Name of the triggered job
        history_root: Triggered jobs root (default: get_triggered_jobs_root())

    Returns:
        Path: <history_root>/<job_name>
    """
    root = history_root if history_root is not None else get_triggered_jobs_root()
    return root / job_name


# =============================================================================
# Settings
# =============================================================================

def get_max_job_runs_history_count() -> int:
    """
    Get the maximum number of runs kept per job.

    Read fresh on every call so a changed environment applies to the next prune.
    """
    return _get_env_int("JOB_RUNS_HISTORY_SIZE", DEFAULT_MAX_JOB_RUNS_HISTORY_COUNT)


def get_instance_id() -> str:
    """Get the short instance id written into system log lines."""
    env_value = os.getenv("JOB_INSTANCE_ID")
    if env_value:
        return env_value
    return socket.gethostname()[:6]


def get_all_paths() -> dict:
    """
    Get all paths and settings as a dictionary.

    Useful for debugging and configuration display.
    """
    return {
        "project_root": get_project_root(),
        "data_root": get_data_root(),
        "jobs_data_root": get_jobs_data_root(),
        "triggered_jobs_root": get_triggered_jobs_root(),
        "logs": get_logs_dir(),
        "max_job_runs_history_count": get_max_job_runs_history_count(),
        "instance_id": get_instance_id(),
    }
