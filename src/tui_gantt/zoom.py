"""Zoom levels: day width and header label granularity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from tui_gantt.dates import add_interval
from tui_gantt.models import ChartDay, HeaderCell, Timeline

MIN_ZOOM = 0
MAX_ZOOM = 3
MIN_FIT_DAY_WIDTH = 10  # px, keeps single-day bars visible

LabelFn = Callable[[ChartDay, datetime], str]
BorderFn = Callable[[ChartDay, datetime], bool]


# ── Label functions (day, max_date) -> text ──

def _month_start_label(day: ChartDay, max_date: datetime) -> str:
    if day.day_of_month != 1:
        return ""
    # month name needs ~10 days of room
    if datetime(day.year, day.date.month, 10) >= max_date:
        return ""
    return f"{day.month_long} {day.year}"


def _week_start_label(day: ChartDay, max_date: datetime) -> str:
    if not day.is_sunday or add_interval(day.date, "days", 7) >= max_date:
        return ""
    return f"{day.day_of_month} {day.month_short}"


def _sunday_date_label(days_needed: int, long_month: bool) -> LabelFn:
    def label(day: ChartDay, max_date: datetime) -> str:
        if not day.is_sunday or add_interval(day.date, "days", days_needed) >= max_date:
            return ""
        month = day.month_long if long_month else day.month_short
        return f"{month} {day.day_of_month}, {day.year}"
    return label


def _weekday_code_label(day: ChartDay, max_date: datetime) -> str:
    return "S" if day.weekday_code == "U" else day.weekday_code


def _weekday_short_label(day: ChartDay, max_date: datetime) -> str:
    return day.weekday_short


def _weekday_long_label(day: ChartDay, max_date: datetime) -> str:
    return day.weekday_long


# ── Left-border rules (day, min_date) -> bool ──

def _border_at_month_start(day: ChartDay, min_date: datetime) -> bool:
    return day.date == min_date or day.day_of_month == 1


def _border_at_sunday(day: ChartDay, min_date: datetime) -> bool:
    return day.date == min_date or day.is_sunday


def _border_always(day: ChartDay, min_date: datetime) -> bool:
    return True


@dataclass(frozen=True)
class ZoomPolicy:
    """Day width and header rules for one zoom level.

    ``fixed_day_width`` is None for the fit level, whose width follows the
    available space.
    """

    fixed_day_width: int | None
    major_label: LabelFn
    minor_label: LabelFn
    major_border_left: BorderFn
    minor_border_left: BorderFn


ZOOM_POLICIES: dict[int, ZoomPolicy] = {
    0: ZoomPolicy(None, _month_start_label, _week_start_label, _border_at_month_start, _border_at_sunday),
    1: ZoomPolicy(30, _sunday_date_label(2, long_month=False), _weekday_code_label, _border_at_sunday, _border_always),
    2: ZoomPolicy(60, _sunday_date_label(1, long_month=True), _weekday_short_label, _border_at_sunday, _border_always),
    3: ZoomPolicy(90, _sunday_date_label(1, long_month=True), _weekday_long_label, _border_at_sunday, _border_always),
}

ZOOM_LABELS = {0: "Fit", 1: "30px", 2: "60px", 3: "90px"}


def clamp_zoom(level: int) -> int:
    return max(MIN_ZOOM, min(MAX_ZOOM, level))


def day_width_for(level: int, available_width: float, num_days: int) -> float:
    """Pixel width of one day at *level*."""
    policy = ZOOM_POLICIES[clamp_zoom(level)]
    if policy.fixed_day_width is not None:
        return float(policy.fixed_day_width)
    if num_days <= 0:
        return float(MIN_FIT_DAY_WIDTH)
    return max(available_width / num_days, float(MIN_FIT_DAY_WIDTH))


def header_rows(timeline: Timeline, level: int) -> tuple[tuple[HeaderCell, ...], tuple[HeaderCell, ...]]:
    """Build the (major, minor) header rows, one cell per chart day."""
    if timeline.range is None:
        return (), ()
    policy = ZOOM_POLICIES[clamp_zoom(level)]
    min_date = timeline.range.min_date
    max_date = timeline.range.max_date

    major: list[HeaderCell] = []
    minor: list[HeaderCell] = []
    for day in timeline.days:
        is_last = day.date == max_date
        major.append(HeaderCell(
            text=policy.major_label(day, max_date),
            border_left=policy.major_border_left(day, min_date),
            border_right=is_last,
        ))
        minor.append(HeaderCell(
            text=policy.minor_label(day, max_date),
            border_left=policy.minor_border_left(day, min_date),
            border_right=is_last,
        ))
    return tuple(major), tuple(minor)


class ZoomController:
    """Four-level zoom state machine. Level 0 fits the chart to the pane."""

    def __init__(self, level: int = MIN_ZOOM) -> None:
        self._level = clamp_zoom(level)

    @property
    def level(self) -> int:
        return self._level

    @property
    def can_zoom_in(self) -> bool:
        return self._level < MAX_ZOOM

    @property
    def can_zoom_out(self) -> bool:
        return self._level > MIN_ZOOM

    def zoom_in(self) -> bool:
        """Step one level in. Returns False when already at the top level."""
        return self.set_level(self._level + 1)

    def zoom_out(self) -> bool:
        """Step one level out. Returns False when already at the fit level."""
        return self.set_level(self._level - 1)

    def set_level(self, level: int) -> bool:
        """Jump to *level* (clamped). Returns False when nothing changed."""
        level = clamp_zoom(level)
        if level == self._level:
            return False
        self._level = level
        return True

    def day_width(self, available_width: float, num_days: int) -> float:
        return day_width_for(self._level, available_width, num_days)
