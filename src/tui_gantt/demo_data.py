"""Demo data for --demo mode and ``tui-gantt init``.

Provides:
- build_demo_records(today)   → task records laid out around today
- build_sample_records(today) → a small starter plan for new projects
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from tui_gantt.dates import to_epoch_millis


def _ms(today: date, offset: int) -> int:
    day = today + timedelta(days=offset)
    return to_epoch_millis(datetime(day.year, day.month, day.day))


def _record(
    today: date,
    task_id: str,
    name: str,
    start: int,
    end: int,
    parent: str | None = None,
    completed: int = 0,
    connect: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": task_id,
        "name": name,
        "start": _ms(today, start),
        "end": _ms(today, end),
    }
    if parent is not None:
        record["parent"] = parent
    if completed:
        record["completed"] = completed
    if connect:
        record["connect"] = connect
    return record


def build_demo_records(today: date | None = None) -> list[dict[str, Any]]:
    """Return a release plan whose current phase contains *today*."""
    t = today or date.today()
    return [
        _record(t, "1", "Discovery", -20, -6, completed=100),
        _record(t, "2", "Stakeholder interviews", -20, -15, "1", 100),
        _record(t, "3", "Requirements draft", -15, -10, "1", 100,
                [{"to": "2", "type": "FS"}]),
        _record(t, "4", "Requirements sign-off", -10, -6, "1", 100,
                [{"to": "3", "type": "FS"}]),
        _record(t, "5", "Build", -6, 18, completed=40),
        _record(t, "6", "Data model", -6, -1, "5", 100,
                [{"to": "4", "type": "FS"}]),
        _record(t, "7", "API endpoints", -2, 8, "5", 60,
                [{"to": "6", "type": "SS"}]),
        _record(t, "8", "Web client", 0, 12, "5", 25,
                [{"to": "7", "type": "SS"}]),
        _record(t, "9", "Integration tests", 4, 12, "5", 0,
                [{"to": "8", "type": "FF"}]),
        _record(t, "10", "Performance pass", 12, 18, "5", 0,
                [{"to": "9", "type": "FS"}]),
        _record(t, "11", "Launch", 18, 30),
        _record(t, "12", "Beta feedback window", 18, 25, "11", 0,
                [{"to": "10", "type": "FS"}]),
        _record(t, "13", "Release notes", 22, 25, "11", 0,
                [{"to": "12", "type": "SF"}]),
        _record(t, "14", "Go live", 25, 26, "11", 0,
                [{"to": "12", "type": "FS"}, {"to": "13", "type": "FF"}]),
        _record(t, "15", "Support rotation", 26, 30, "11", 0,
                [{"to": "14", "type": "FS"}]),
    ]


def build_sample_records(today: date | None = None) -> list[dict[str, Any]]:
    """Return a two-phase starter plan beginning today."""
    t = today or date.today()
    return [
        _record(t, "1", "Phase 1: Design", 0, 5),
        _record(t, "2", "Requirements analysis", 0, 2, "1"),
        _record(t, "3", "Technical review", 2, 5, "1", 0, [{"to": "2", "type": "FS"}]),
        _record(t, "4", "Phase 2: Implementation", 5, 25),
        _record(t, "5", "Core development", 5, 15, "4", 0, [{"to": "3", "type": "FS"}]),
        _record(t, "6", "Testing", 15, 25, "4", 0, [{"to": "5", "type": "FS"}]),
    ]
