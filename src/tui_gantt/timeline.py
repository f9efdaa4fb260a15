"""Timeline builder: chart range, day grid and per-task offsets."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable

from tui_gantt.dates import (
    add_interval,
    date_label,
    date_without_time,
    day_difference,
    is_today,
    month_name,
    to_epoch_millis,
    weekday_code,
    weekday_name,
)
from tui_gantt.models import ChartDay, ChartRange, Task, TaskTiming, Timeline

logger = logging.getLogger(__name__)


def _make_timing(task: Task) -> TaskTiming:
    start_date = date_without_time(task.start)
    end_date = date_without_time(task.end)
    return TaskTiming(
        task_id=task.id,
        start_date=start_date,
        end_date=end_date,
        start_label=date_label(start_date, leading_zero=True),
        end_label=date_label(end_date, leading_zero=True),
        start_label_short=date_label(start_date),
        end_label_short=date_label(end_date),
        duration_days=day_difference(start_date, end_date),
    )


def make_chart_day(value: datetime) -> ChartDay:
    return ChartDay(
        date=value,
        epoch_millis=to_epoch_millis(value),
        day_of_month=value.day,
        weekday_code=weekday_code(value),
        weekday_short=weekday_name(value, short=True),
        weekday_long=weekday_name(value),
        month_short=month_name(value, short=True),
        month_long=month_name(value),
        year=value.year,
        date_label=date_label(value),
    )


def build_timeline(tasks: Iterable[Task], today: date | None = None) -> Timeline:
    """Build the date grid and task offsets for *tasks*.

    Returns an empty Timeline when no task carries both a start and an end.
    Tasks without dates get no timing entry.
    """
    min_start: datetime | None = None
    max_end: datetime | None = None
    timings: dict[str, TaskTiming] = {}

    for task in tasks:
        if not task.has_dates:
            continue
        if min_start is None or task.start < min_start:
            min_start = task.start
        if max_end is None or task.end > max_end:
            max_end = task.end
        timings[task.id] = _make_timing(task)

    if min_start is None or max_end is None:
        return Timeline()

    min_date = add_interval(date_without_time(min_start), "days", -1)
    max_date = add_interval(date_without_time(max_end), "days", 1)

    for task_id, timing in timings.items():
        timings[task_id] = replace(timing, days_to_start=day_difference(min_date, timing.start_date))

    num_days = day_difference(min_date, max_date) + 1

    days: list[ChartDay] = []
    days_until_today: int | None = None
    for i in range(num_days):
        current = add_interval(min_date, "days", i)
        if is_today(current, today):
            days_until_today = i
        days.append(make_chart_day(current))

    logger.debug(
        "Timeline built: %d tasks, %s to %s (%d days)",
        len(timings), min_date.date(), max_date.date(), num_days,
    )
    return Timeline(
        range=ChartRange(min_date=min_date, max_date=max_date, num_days=num_days),
        days=tuple(days),
        days_until_today=days_until_today,
        timings=timings,
    )
