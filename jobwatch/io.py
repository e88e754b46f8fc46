from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any

from jobwatch.report import ERROR_THRESHOLD, WARNING_THRESHOLD, format_duration
from jobwatch.types import ERROR, WARNING, Diagnostic, Report, ReportLine

REPORT_HEADER = "===== LOG MONITORING REPORT ====="

_THRESHOLD_NOTES = {
    WARNING: f" (>{int(WARNING_THRESHOLD.total_seconds()) // 60}min)",
    ERROR: f" (>{int(ERROR_THRESHOLD.total_seconds()) // 60}min)",
}


def render_line(line: ReportLine) -> str:
    tag = f"{line.status}:"
    head = (
        f"{tag:<8} {line.name:<25} (PID: {line.pid}) - "
        f"Started at {line.start_time:%H:%M:%S}"
    )
    if line.duration is None:
        return f"{head} - still running"
    note = _THRESHOLD_NOTES.get(line.status, "")
    return f"{head} - Duration: {format_duration(line.duration)}{note}"


def render_report(report: Report) -> str:
    out = [REPORT_HEADER, ""]
    out.extend(render_line(line) for line in report.lines)
    out.append("")
    out.append(report.summary_line())
    return "\n".join(out) + "\n"


def render_diagnostics(diagnostics: list[Diagnostic]) -> list[str]:
    return [
        f"line {d.line}: {d.message}" if d.line is not None else d.message
        for d in diagnostics
    ]


def write_summary_file(path: Path, report: Report, generated_at: datetime) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(
            f"Log Monitoring Report - Generated at {generated_at:%Y-%m-%d %H:%M:%S}\n"
        )
        f.write("=================================================\n")
        f.write(f"Jobs Completed: {report.completed}\n")
        f.write(f"Jobs Running: {report.running}\n")
        f.write(f"Warnings{_THRESHOLD_NOTES[WARNING]}: {report.warnings}\n")
        f.write(f"Errors{_THRESHOLD_NOTES[ERROR]}: {report.errors}\n")


def write_jobs_csv(path: Path, report: Report) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(
            [
                "status",
                "job_name",
                "pid",
                "start_time",
                "end_time",
                "duration_s",
                "duration",
            ]
        )
        for line in report.lines:
            if line.duration is None:
                end_time = ""
                duration_s = ""
                duration = ""
            else:
                end_time = f"{line.end_time:%H:%M:%S}"
                duration_s = int(line.duration.total_seconds())
                duration = format_duration(line.duration)
            w.writerow(
                [
                    line.status,
                    line.name,
                    line.pid,
                    f"{line.start_time:%H:%M:%S}",
                    end_time,
                    duration_s,
                    duration,
                ]
            )


def summary_dict(report: Report, diagnostics: list[Diagnostic]) -> dict[str, Any]:
    return {
        "completed": report.completed,
        "running": report.running,
        "warnings": report.warnings,
        "errors": report.errors,
        "thresholds_s": {
            "warning": int(WARNING_THRESHOLD.total_seconds()),
            "error": int(ERROR_THRESHOLD.total_seconds()),
        },
        "jobs": [
            {
                "status": line.status,
                "name": line.name,
                "pid": line.pid,
                "start_time": f"{line.start_time:%H:%M:%S}",
                "end_time": (
                    f"{line.end_time:%H:%M:%S}" if line.end_time is not None else None
                ),
                "duration_s": (
                    int(line.duration.total_seconds())
                    if line.duration is not None
                    else None
                ),
            }
            for line in report.lines
        ],
        "diagnostics": [
            {
                "kind": d.kind,
                "message": d.message,
                "line": d.line,
                "job_name": d.job_name,
                "pid": d.pid,
            }
            for d in diagnostics
        ],
    }


def write_summary_json(
    path: Path, report: Report, diagnostics: list[Diagnostic]
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(summary_dict(report, diagnostics), indent=2, sort_keys=True),
        encoding="utf-8",
    )
