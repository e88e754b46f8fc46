from __future__ import annotations

import csv
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from jobwatch.types import Diagnostic, Event

TIME_FORMAT = "%H:%M:%S"


class SourceUnavailable(OSError):
    pass


class MalformedRecord(ValueError):
    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


def tokenize(raw: str, line: int | None = None) -> list[str]:
    """Split one physical line into fields.

    Each line is tokenized on its own, so a stray quote or an oversized field
    only costs that line.
    """

    try:
        return next(csv.reader([raw]), [])
    except csv.Error as e:
        raise MalformedRecord(f"failed to tokenize record: {e}", line=line) from None


def parse_line(fields: Sequence[str], line: int | None = None) -> Event:
    """Build an Event from `[timestamp, job_name, action, pid, ...]`."""

    if len(fields) < 4:
        raise MalformedRecord(f"insufficient fields: {list(fields)}", line=line)

    time_str = fields[0].strip()
    try:
        timestamp = datetime.strptime(time_str, TIME_FORMAT).time()
    except ValueError:
        msg = f"failed to parse timestamp: {time_str}"
        raise MalformedRecord(msg, line=line) from None

    pid_str = fields[3].strip()
    try:
        pid = int(pid_str)
    except ValueError:
        msg = f"failed to parse PID: {pid_str}"
        raise MalformedRecord(msg, line=line) from None

    return Event(
        timestamp=timestamp,
        job_name=fields[1].strip(),
        action=fields[2].strip(),
        pid=pid,
        line=line,
    )


def read_events(
    path: Path, diagnostics: list[Diagnostic] | None = None
) -> list[Event]:
    """Read a comma-separated job log.

    Bad records are skipped and reported as `malformed_record` diagnostics.
    Raises SourceUnavailable when the file cannot be read at all.
    """

    if diagnostics is None:
        diagnostics = []

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"failed to read {path}: {e}") from e

    events: list[Event] = []
    for line, raw in enumerate(text.split("\n"), start=1):
        if not raw.strip():
            continue
        try:
            events.append(parse_line(tokenize(raw, line=line), line=line))
        except MalformedRecord as e:
            diagnostics.append(
                Diagnostic(kind="malformed_record", message=str(e), line=e.line)
            )
    return events
