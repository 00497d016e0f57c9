"""
Job history CLI - inspect and prune triggered job run history.

Usage:
    python -m src.cli history <job>
    python -m src.cli show <job> <run_id>
    python -m src.cli prune <job> [--max N]
"""

import argparse
import json
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from src.infra.logging_config import setup_logging
from src.jobs.errors import RunNotFoundError
from src.jobs.history import get_job_run, list_job_runs, read_run_log
from src.jobs.retention import prune_old_runs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Triggered Job History CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    history_parser = subparsers.add_parser("history", help="List runs of a job, newest first")
    history_parser.add_argument("job", type=str, help="Triggered job name")

    show_parser = subparsers.add_parser("show", help="Show status and logs of one run")
    show_parser.add_argument("job", type=str, help="Triggered job name")
    show_parser.add_argument("run_id", type=str, help="Run id (yyyyMMddHHmmssffff)")

    prune_parser = subparsers.add_parser(
        "prune",
        help="Remove old runs as if a new run were about to start",
    )
    prune_parser.add_argument("job", type=str, help="Triggered job name")
    prune_parser.add_argument(
        "--max",
        type=int,
        default=None,
        dest="max_runs",
        help="Maximum runs to keep including the next run (default: JOB_RUNS_HISTORY_SIZE)",
    )

    return parser


def show_history(args) -> int:
    runs = list_job_runs(args.job)
    if not runs:
        print(f"No history for job '{args.job}'")
        return 0

    print(f"{'RUN ID':<20} {'STATUS':<16} {'START':<34} {'DURATION':>10}")
    for run in runs:
        start = run.start_time.isoformat() if run.start_time else "-"
        duration = f"{run.duration:.1f}s" if run.duration is not None else "-"
        print(f"{run.run_id:<20} {(run.status or '-'):<16} {start:<34} {duration:>10}")
    print(f"\nTotal: {len(runs)}")
    return 0


def show_run(args) -> int:
    try:
        run = get_job_run(args.job, args.run_id)
    except RunNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 80)
    print(json.dumps(run.to_dict(), ensure_ascii=False, indent=2))
    print("--- output.log ---")
    print(read_run_log(run, "output"), end="")
    print("--- error.log ---")
    print(read_run_log(run, "error"), end="")
    print("=" * 80)
    return 0


def prune_history(args) -> int:
    result = prune_old_runs(args.job, max_runs=args.max_runs)
    print(f"Existing runs: {result.existing_count}")
    print(f"Deleted: {len(result.deleted)}")
    for outcome in result.failed:
        print(f"Failed: {outcome.path.name} ({outcome.error})")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "history":
        return show_history(args)
    elif args.command == "show":
        return show_run(args)
    elif args.command == "prune":
        return prune_history(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
