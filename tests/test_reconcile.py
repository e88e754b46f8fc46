from __future__ import annotations

from datetime import time, timedelta

from jobwatch.reconcile import reconcile
from jobwatch.types import Diagnostic, Event


def _t(s: str) -> time:
    h, m, sec = (int(x) for x in s.split(":"))
    return time(h, m, sec)


def _ev(ts: str, name: str, action: str, pid: int) -> Event:
    return Event(timestamp=_t(ts), job_name=name, action=action, pid=pid)


def test_start_end_pair_yields_completed_job() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile(
        [
            _ev("11:35:23", "test task", "START", 12345),
            _ev("11:35:56", "test task", "END", 12345),
            _ev("11:35:23", "long task", "START", 54321),
            _ev("11:51:44", "long task", "END", 54321),
            _ev("11:35:23", "incomplete task", "START", 99999),
        ],
        diags,
    )

    assert len(jobs) == 3
    assert diags == []

    done = jobs[("test task", 12345)]
    assert done.end_time == _t("11:35:56")
    assert done.duration == timedelta(seconds=33)

    assert jobs[("long task", 54321)].duration == timedelta(minutes=16, seconds=21)

    open_job = jobs[("incomplete task", 99999)]
    assert open_job.end_time is None
    assert open_job.duration is None


def test_orphan_end_creates_no_job_and_one_warning() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile([_ev("10:00:00", "ghost", "END", 1)], diags)

    assert jobs == {}
    assert [d.kind for d in diags] == ["orphan_end"]
    assert diags[0].job_name == "ghost"
    assert diags[0].pid == 1


def test_duplicate_end_keeps_first_end_time() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile(
        [
            _ev("10:00:00", "a", "START", 1),
            _ev("10:00:10", "a", "END", 1),
            _ev("10:05:00", "a", "END", 1),
        ],
        diags,
    )

    assert jobs[("a", 1)].end_time == _t("10:00:10")
    assert [d.kind for d in diags] == ["duplicate_end"]


def test_second_start_discards_open_job_silently() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile(
        [
            _ev("10:00:00", "a", "START", 1),
            _ev("10:20:00", "a", "START", 1),
            _ev("10:20:30", "a", "END", 1),
        ],
        diags,
    )

    assert diags == []
    assert len(jobs) == 1
    job = jobs[("a", 1)]
    assert job.start_time == _t("10:20:00")
    assert job.duration == timedelta(seconds=30)


def test_start_after_completion_rearms_identity() -> None:
    jobs = reconcile(
        [
            _ev("10:00:00", "a", "START", 1),
            _ev("10:00:05", "a", "END", 1),
            _ev("10:01:00", "a", "START", 1),
        ]
    )

    job = jobs[("a", 1)]
    assert job.start_time == _t("10:01:00")
    assert job.end_time is None


def test_same_name_different_pid_are_separate_jobs() -> None:
    jobs = reconcile(
        [
            _ev("10:00:00", "a", "START", 1),
            _ev("10:00:01", "a", "START", 2),
            _ev("10:00:09", "a", "END", 2),
        ]
    )

    assert jobs[("a", 1)].end_time is None
    assert jobs[("a", 2)].duration == timedelta(seconds=8)


def test_same_pid_different_name_are_unrelated() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile(
        [
            _ev("10:00:00", "a", "START", 7),
            _ev("10:00:05", "b", "END", 7),
        ],
        diags,
    )

    assert jobs[("a", 7)].end_time is None
    assert [d.kind for d in diags] == ["orphan_end"]


def test_end_before_start_is_rejected_and_job_stays_open() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile(
        [
            _ev("23:59:50", "nightly", "START", 5),
            _ev("00:00:10", "nightly", "END", 5),
        ],
        diags,
    )

    assert jobs[("nightly", 5)].end_time is None
    assert [d.kind for d in diags] == ["negative_duration"]


def test_unknown_action_is_a_noop() -> None:
    diags: list[Diagnostic] = []
    jobs = reconcile(
        [
            _ev("10:00:00", "a", "PAUSE", 1),
            _ev("10:00:01", "b", "START", 2),
            _ev("10:00:02", "b", "end", 2),
        ],
        diags,
    )

    assert list(jobs) == [("b", 2)]
    assert jobs[("b", 2)].end_time is None
    assert diags == []


def test_diagnostics_carry_source_line() -> None:
    diags: list[Diagnostic] = []
    ev = Event(timestamp=_t("10:00:00"), job_name="x", action="END", pid=3, line=42)
    reconcile([ev], diags)

    assert diags[0].line == 42


def test_events_are_not_mutated() -> None:
    events = [
        _ev("10:00:00", "a", "START", 1),
        _ev("10:00:05", "a", "END", 1),
    ]
    before = list(events)
    reconcile(events)
    assert events == before
