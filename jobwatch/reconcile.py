from __future__ import annotations

from collections.abc import Iterable

from jobwatch.types import END, START, Diagnostic, Event, Job, JobMapping


def reconcile(
    events: Iterable[Event], diagnostics: list[Diagnostic] | None = None
) -> JobMapping:
    """Pair START/END events into jobs keyed by `(job_name, pid)`.

    Events are consumed in order. A START always (re)arms its identity, so a
    job whose earlier START never saw an END is replaced without a warning.
    END anomalies are appended to `diagnostics` and otherwise ignored:

    - `orphan_end`: no job was ever started for the identity.
    - `duplicate_end`: the job already has an end time.
    - `negative_duration`: the END time precedes the START time; the job
      stays open.

    Actions other than START/END are no-ops.
    """

    if diagnostics is None:
        diagnostics = []

    jobs: JobMapping = {}
    for ev in events:
        key = ev.identity

        if ev.action == START:
            jobs[key] = Job(name=ev.job_name, pid=ev.pid, start_time=ev.timestamp)
            continue

        if ev.action != END:
            continue

        job = jobs.get(key)
        if job is None:
            diagnostics.append(
                Diagnostic(
                    kind="orphan_end",
                    message=(
                        f"Found END for job {ev.job_name} (PID: {ev.pid}) "
                        "without matching START"
                    ),
                    line=ev.line,
                    job_name=ev.job_name,
                    pid=ev.pid,
                )
            )
        elif job.end_time is not None:
            diagnostics.append(
                Diagnostic(
                    kind="duplicate_end",
                    message=(
                        f"Duplicate END for job {ev.job_name} (PID: {ev.pid}); "
                        f"already ended at {job.end_time:%H:%M:%S}"
                    ),
                    line=ev.line,
                    job_name=ev.job_name,
                    pid=ev.pid,
                )
            )
        elif ev.timestamp < job.start_time:
            diagnostics.append(
                Diagnostic(
                    kind="negative_duration",
                    message=(
                        f"END at {ev.timestamp:%H:%M:%S} for job {ev.job_name} "
                        f"(PID: {ev.pid}) precedes its START at "
                        f"{job.start_time:%H:%M:%S}"
                    ),
                    line=ev.line,
                    job_name=ev.job_name,
                    pid=ev.pid,
                )
            )
        else:
            job.end_time = ev.timestamp

    return jobs
