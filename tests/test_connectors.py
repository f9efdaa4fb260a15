"""Tests for connector terminus selection and orthogonal routing."""

import pytest

from tui_gantt.connectors import JOG, STUB, connect, route, route_connectors, terminus
from tui_gantt.models import (
    BarGeometry,
    Connection,
    ConnectionType,
    PathMove,
    Point,
    Task,
)


def H(value):
    return PathMove("H", value)


def V(value):
    return PathMove("V", value)


BAR = BarGeometry(left=100, width=60, vertical_center=36)


class TestTerminus:
    def test_ss_uses_left_edge(self):
        assert terminus(BAR, ConnectionType.SS, True) == Point(100, 36)
        assert terminus(BAR, ConnectionType.SS, False) == Point(100, 36)

    def test_ff_uses_right_edge(self):
        assert terminus(BAR, ConnectionType.FF, True) == Point(160, 36)
        assert terminus(BAR, ConnectionType.FF, False) == Point(160, 36)

    def test_fs(self):
        assert terminus(BAR, ConnectionType.FS, True) == Point(100, 36)
        assert terminus(BAR, ConnectionType.FS, False) == Point(160, 36)

    def test_sf(self):
        assert terminus(BAR, ConnectionType.SF, True) == Point(160, 36)
        assert terminus(BAR, ConnectionType.SF, False) == Point(100, 36)


class TestRoute:
    def test_ss_passes_left_of_both(self):
        moves = route(ConnectionType.SS, Point(100, 12), Point(60, 36))
        assert moves == (H(60 - STUB), V(36), H(60))

    def test_ff_passes_right_of_both(self):
        moves = route(ConnectionType.FF, Point(100, 12), Point(160, 36))
        assert moves == (H(160 + STUB), V(36), H(160))

    def test_fs_midpoint_with_clearance(self):
        moves = route(ConnectionType.FS, Point(330, 36), Point(180, 12))
        assert moves == (H(255), V(12), H(180))

    def test_fs_curve_around_upward(self):
        a, b = Point(60, 36), Point(180, 12)
        moves = route(ConnectionType.FS, a, b)
        assert moves == (H(60 - STUB), V(36 - JOG), H(180 + STUB), V(12), H(180))

    def test_fs_curve_around_downward(self):
        moves = route(ConnectionType.FS, Point(60, 12), Point(180, 36))
        assert moves[1] == V(12 + JOG)
        assert len(moves) == 5

    def test_fs_exact_clearance_curves(self):
        # b.left + 15 == a.left - 15 is not enough room
        moves = route(ConnectionType.FS, Point(130, 12), Point(100, 36))
        assert len(moves) == 5

    def test_sf_midpoint_with_clearance(self):
        moves = route(ConnectionType.SF, Point(100, 12), Point(300, 36))
        assert moves == (H(200), V(36), H(300))

    def test_sf_curve_around(self):
        moves = route(ConnectionType.SF, Point(160, 12), Point(150, 36))
        assert moves == (H(160 + STUB), V(12 + JOG), H(150 - STUB), V(36), H(150))

    @pytest.mark.parametrize("kind", list(ConnectionType))
    def test_deterministic(self, kind):
        a, b = Point(47.5, 12), Point(210, 84)
        assert route(kind, a, b) == route(kind, a, b)

    @pytest.mark.parametrize("kind", list(ConnectionType))
    def test_ends_at_target(self, kind):
        result = connect("s", BarGeometry(40, 90, 12), "t", BarGeometry(200, 30, 60), kind)
        points = result.points()
        assert points[0] == result.start
        assert points[-1] == result.end
        assert points[-2].top == result.end.top  # final move is horizontal

    @pytest.mark.parametrize("kind", list(ConnectionType))
    def test_axis_aligned(self, kind):
        result = connect("s", BarGeometry(200, 30, 60), "t", BarGeometry(40, 90, 12), kind)
        points = result.points()
        for p, q in zip(points, points[1:]):
            assert p.left == q.left or p.top == q.top


class TestConnectorRoute:
    def test_svg_path(self):
        result = connect("b", BarGeometry(330, 150, 36), "a", BarGeometry(30, 150, 12), ConnectionType.FS)
        assert result.svg_path() == "M330,36 H255 V12 H180"

    def test_fractional_values(self):
        result = connect("b", BarGeometry(12.5, 10, 12), "a", BarGeometry(100, 10, 36), ConnectionType.SS)
        assert result.svg_path() == "M12.5,12 H-2.5 V36 H100"


class TestRouteConnectors:
    def test_direction_from_named_task_to_owner(self):
        tasks = [
            Task("a", "A", connections=(Connection("b", ConnectionType.FS),)),
            Task("b", "B"),
        ]
        bars = {
            "a": BarGeometry(30, 150, 12),
            "b": BarGeometry(330, 150, 36),
        }
        routes = route_connectors(tasks, bars)
        assert len(routes) == 1
        assert routes[0].source_id == "b"
        assert routes[0].target_id == "a"
        assert routes[0].moves == (H(255), V(12), H(180))

    def test_missing_bar_skipped(self):
        tasks = [
            Task("a", "A", connections=(Connection("hidden"), Connection("b", ConnectionType.SS))),
            Task("b", "B"),
        ]
        bars = {"a": BarGeometry(0, 10, 12), "b": BarGeometry(50, 10, 36)}
        routes = route_connectors(tasks, bars)
        assert [(r.source_id, r.target_id) for r in routes] == [("b", "a")]

    def test_owner_without_bar_skipped(self):
        tasks = [Task("a", "A", connections=(Connection("b"),)), Task("b", "B")]
        assert route_connectors(tasks, {"b": BarGeometry(0, 10, 12)}) == []

    def test_default_type_is_sf(self):
        assert Connection("x").type is ConnectionType.SF
