from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

START = "START"
END = "END"

# Job lifecycle classification tags.
RUNNING = "RUNNING"
OK = "OK"
WARNING = "WARNING"
ERROR = "ERROR"

JobIdentity = tuple[str, int]


def elapsed(start: time, end: time) -> timedelta:
    """Difference between two same-day times (negative if end precedes start)."""

    return datetime.combine(date.min, end) - datetime.combine(date.min, start)


@dataclass(frozen=True)
class Event:
    timestamp: time
    job_name: str
    action: str
    pid: int
    line: int | None = None  # 1-based source line, diagnostics only

    @property
    def identity(self) -> JobIdentity:
        return (self.job_name, self.pid)


@dataclass
class Job:
    name: str
    pid: int
    start_time: time
    end_time: time | None = None

    @property
    def identity(self) -> JobIdentity:
        return (self.name, self.pid)

    @property
    def duration(self) -> timedelta | None:
        if self.end_time is None:
            return None
        return elapsed(self.start_time, self.end_time)


JobMapping = dict[JobIdentity, Job]


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    line: int | None = None
    job_name: str | None = None
    pid: int | None = None


@dataclass(frozen=True)
class ReportLine:
    status: str
    name: str
    pid: int
    start_time: time
    end_time: time | None
    duration: timedelta | None  # None while RUNNING


@dataclass(frozen=True)
class Report:
    lines: tuple[ReportLine, ...]
    completed: int
    running: int
    warnings: int
    errors: int

    def summary_line(self) -> str:
        return (
            f"SUMMARY: {self.completed} completed, {self.running} running, "
            f"{self.warnings} warnings, {self.errors} errors"
        )
