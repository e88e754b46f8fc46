from __future__ import annotations

from datetime import time, timedelta

from jobwatch.types import (
    ERROR,
    OK,
    RUNNING,
    WARNING,
    Job,
    JobMapping,
    Report,
    ReportLine,
)

WARNING_THRESHOLD = timedelta(minutes=5)
ERROR_THRESHOLD = timedelta(minutes=10)


def classify(job: Job) -> str:
    duration = job.duration
    if duration is None:
        return RUNNING
    # Both thresholds are exclusive: exactly 5m is OK, exactly 10m is WARNING.
    if duration > ERROR_THRESHOLD:
        return ERROR
    if duration > WARNING_THRESHOLD:
        return WARNING
    return OK


def format_duration(d: timedelta) -> str:
    total = int(d.total_seconds())
    if total < 60:
        return f"{total}s"
    minutes, seconds = divmod(total, 60)
    return f"{minutes}m{seconds}s"


def _display_key(job: Job) -> tuple[time, str, int]:
    return (job.start_time, job.name, job.pid)


def generate(jobs: JobMapping) -> Report:
    """Classify every job and count outcomes.

    Lines are ordered by start time, then name, then pid, so the same mapping
    always yields the same report regardless of dict insertion order.
    """

    lines: list[ReportLine] = []
    counts = {RUNNING: 0, OK: 0, WARNING: 0, ERROR: 0}

    for job in sorted(jobs.values(), key=_display_key):
        status = classify(job)
        counts[status] += 1
        lines.append(
            ReportLine(
                status=status,
                name=job.name,
                pid=job.pid,
                start_time=job.start_time,
                end_time=job.end_time,
                duration=job.duration,
            )
        )

    return Report(
        lines=tuple(lines),
        completed=counts[OK] + counts[WARNING] + counts[ERROR],
        running=counts[RUNNING],
        warnings=counts[WARNING],
        errors=counts[ERROR],
    )
