"""Tests for zoom levels, day widths and header rows."""

from datetime import datetime, timedelta

import pytest

from tui_gantt.models import Task
from tui_gantt.timeline import build_timeline
from tui_gantt.zoom import (
    MAX_ZOOM,
    MIN_FIT_DAY_WIDTH,
    MIN_ZOOM,
    ZoomController,
    clamp_zoom,
    day_width_for,
    header_rows,
)


def timeline_for(start: datetime, end: datetime):
    return build_timeline([Task("1", "x", start=start, end=end)])


class TestZoomController:
    def test_defaults_to_fit(self):
        assert ZoomController().level == MIN_ZOOM

    def test_clamps_initial_level(self):
        assert ZoomController(9).level == MAX_ZOOM
        assert ZoomController(-2).level == MIN_ZOOM

    def test_zoom_in_steps(self):
        zoom = ZoomController()
        assert zoom.zoom_in()
        assert zoom.level == 1

    def test_zoom_in_at_max_is_noop(self):
        zoom = ZoomController(MAX_ZOOM)
        assert not zoom.can_zoom_in
        assert zoom.zoom_in() is False
        assert zoom.level == MAX_ZOOM

    def test_zoom_out_at_min_is_noop(self):
        zoom = ZoomController()
        assert not zoom.can_zoom_out
        assert zoom.zoom_out() is False
        assert zoom.level == MIN_ZOOM

    def test_set_level(self):
        zoom = ZoomController()
        assert zoom.set_level(2)
        assert zoom.level == 2
        assert zoom.set_level(2) is False
        assert zoom.set_level(7)
        assert zoom.level == MAX_ZOOM

    @pytest.mark.parametrize("level", [0, 1, 2, 3])
    def test_level_always_in_range(self, level):
        zoom = ZoomController(level)
        for _ in range(5):
            zoom.zoom_in()
            assert MIN_ZOOM <= zoom.level <= MAX_ZOOM
        for _ in range(5):
            zoom.zoom_out()
            assert MIN_ZOOM <= zoom.level <= MAX_ZOOM


class TestDayWidth:
    def test_fixed_levels(self):
        assert day_width_for(1, 800, 50) == 30
        assert day_width_for(2, 800, 50) == 60
        assert day_width_for(3, 800, 50) == 90

    def test_fit_divides_available_width(self):
        assert day_width_for(0, 800, 40) == 20

    def test_fit_has_minimum(self):
        assert day_width_for(0, 800, 400) == MIN_FIT_DAY_WIDTH

    def test_fit_without_days(self):
        assert day_width_for(0, 800, 0) == MIN_FIT_DAY_WIDTH

    def test_clamp_zoom(self):
        assert clamp_zoom(-1) == 0
        assert clamp_zoom(4) == 3


class TestHeaderRows:
    def test_empty_timeline(self):
        assert header_rows(build_timeline([]), 1) == ((), ())

    def test_one_cell_per_day(self):
        timeline = timeline_for(datetime(2026, 3, 2), datetime(2026, 3, 20))
        for level in range(4):
            major, minor = header_rows(timeline, level)
            assert len(major) == len(minor) == timeline.range.num_days

    def test_right_border_only_on_last_day(self):
        timeline = timeline_for(datetime(2026, 3, 2), datetime(2026, 3, 20))
        major, minor = header_rows(timeline, 1)
        assert major[-1].border_right and minor[-1].border_right
        assert not any(cell.border_right for cell in major[:-1])

    def test_fit_level_month_label(self):
        # range starts 2026-02-27; March 1 needs its 10th inside the range
        timeline = timeline_for(datetime(2026, 2, 28), datetime(2026, 3, 25))
        major, minor = header_rows(timeline, 0)
        march_first = 2
        assert major[march_first].text == "March 2026"
        assert major[march_first].border_left
        assert major[0].border_left  # min_date
        assert not major[1].border_left

    def test_fit_level_month_label_needs_room(self):
        timeline = timeline_for(datetime(2026, 2, 25), datetime(2026, 3, 5))
        major, _ = header_rows(timeline, 0)
        assert all(cell.text == "" for cell in major)

    def test_fit_level_week_label(self):
        timeline = timeline_for(datetime(2026, 2, 28), datetime(2026, 3, 25))
        _, minor = header_rows(timeline, 0)
        assert minor[2].text == "1 Mar"  # Sunday
        assert minor[2].border_left
        assert minor[3].text == ""
        assert not minor[3].border_left

    def test_level1_labels(self):
        timeline = timeline_for(datetime(2026, 2, 28), datetime(2026, 3, 25))
        major, minor = header_rows(timeline, 1)
        assert major[2].text == "Mar 1, 2026"
        assert minor[2].text == "S"  # Sunday's U shows as S
        assert minor[3].text == "M"
        assert minor[6].text == "R"
        assert all(cell.border_left for cell in minor)

    def test_level2_and_3_labels(self):
        timeline = timeline_for(datetime(2026, 2, 28), datetime(2026, 3, 25))
        major2, minor2 = header_rows(timeline, 2)
        major3, minor3 = header_rows(timeline, 3)
        assert major2[2].text == major3[2].text == "March 1, 2026"
        assert minor2[3].text == "Mon"
        assert minor3[3].text == "Monday"

    def test_sunday_label_needs_room(self):
        # last Sunday (2026-03-22) is one day before max_date 2026-03-23
        timeline = timeline_for(datetime(2026, 3, 2), datetime(2026, 3, 22))
        major, _ = header_rows(timeline, 1)
        last_sunday = timeline.range.num_days - 2
        assert timeline.days[last_sunday].is_sunday
        assert major[last_sunday].text == ""
