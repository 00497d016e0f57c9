"""
Infrastructure module - paths, settings, logging, and error tracing.
"""

from .data_paths import (
    get_project_root,
    get_data_root,
    get_logs_dir,
    get_jobs_data_root,
    get_triggered_jobs_root,
    get_job_history_dir,
    get_max_job_runs_history_count,
    get_instance_id,
    get_all_paths,
)

from .logging_config import setup_logging

from .tracing import Tracer, LoggingTracer, get_tracer, set_tracer

__all__ = [
    # data_paths
    "get_project_root",
    "get_data_root",
    "get_logs_dir",
    "get_jobs_data_root",
    "get_triggered_jobs_root",
    "get_job_history_dir",
    "get_max_job_runs_history_count",
    "get_instance_id",
    "get_all_paths",
    # logging
    "setup_logging",
    # tracing
    "Tracer",
    "LoggingTracer",
    "get_tracer",
    "set_tracer",
]
