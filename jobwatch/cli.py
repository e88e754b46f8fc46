from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from jobwatch.ingest import SourceUnavailable, read_events
from jobwatch.io import (
    render_diagnostics,
    render_report,
    write_jobs_csv,
    write_summary_file,
    write_summary_json,
)
from jobwatch.reconcile import reconcile
from jobwatch.report import generate
from jobwatch.types import Diagnostic

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = Path("logs.log")
DEFAULT_SUMMARY_FILE = Path("monitoring_report.txt")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="jobwatch", description="Job log monitor")
    sub = p.add_subparsers(dest="cmd", required=True)

    rep = sub.add_parser("report", help="Pair START/END events and classify jobs")
    rep.add_argument("log_file", nargs="?", default=DEFAULT_LOG_FILE, type=Path)
    out = rep.add_mutually_exclusive_group()
    out.add_argument("--summary-file", type=Path, default=DEFAULT_SUMMARY_FILE)
    out.add_argument(
        "--no-summary-file",
        dest="summary_file",
        action="store_const",
        const=None,
        help="Skip writing the persisted summary",
    )
    rep.add_argument("--out-jobs", required=False, type=Path)
    rep.add_argument("--out-json", required=False, type=Path)
    rep.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return p


def setup_logging(level: str) -> logging.Logger:
    """Send `jobwatch.*` log records to stderr.

    Handlers are reset on every call so repeated in-process runs don't stack.
    """

    root = logging.getLogger("jobwatch")
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    )
    root.addHandler(handler)
    root.propagate = False
    return root


def _try_write(
    path: Path, write: Callable[[Path], None], diagnostics: list[Diagnostic]
) -> None:
    try:
        write(path)
    except OSError as e:
        diag = Diagnostic(
            kind="report_sink_failure",
            message=f"Could not write {path}: {e}",
        )
        diagnostics.append(diag)
        logger.warning(diag.message)
        return
    logger.info("Report saved to %s", path)


def _run_report(args: argparse.Namespace) -> int:
    print(f"Starting log monitoring for file: {args.log_file}")
    print()

    diagnostics: list[Diagnostic] = []
    try:
        events = read_events(args.log_file, diagnostics)
    except SourceUnavailable as e:
        logger.error("Error parsing log file: %s", e)
        return 1
    logger.info(
        "Successfully parsed %d log entries from %s", len(events), args.log_file
    )

    jobs = reconcile(events, diagnostics)
    logger.info("Processed %d unique jobs", len(jobs))

    for msg in render_diagnostics(diagnostics):
        logger.warning(msg)

    report = generate(jobs)
    print(render_report(report), end="")

    if args.summary_file is not None:
        generated_at = datetime.now()
        _try_write(
            args.summary_file,
            lambda p: write_summary_file(p, report, generated_at),
            diagnostics,
        )
    if args.out_jobs is not None:
        _try_write(args.out_jobs, lambda p: write_jobs_csv(p, report), diagnostics)
    # Written last so it includes sink failures from the other outputs.
    if args.out_json is not None:
        _try_write(
            args.out_json,
            lambda p: write_summary_json(p, report, diagnostics),
            diagnostics,
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "report":
        return _run_report(args)

    raise AssertionError(f"Unhandled command: {args.cmd}")
