"""Dependency connector routing between task bars.

Connectors are orthogonal paths (horizontal and vertical moves only) from a
source terminus to a target terminus. When two bars sit too close for a
direct route, the path jogs to the row boundary and curves around instead of
cutting across a bar.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping

from tui_gantt.models import (
    BarGeometry,
    ConnectionType,
    ConnectorRoute,
    PathMove,
    Point,
    Task,
)

logger = logging.getLogger(__name__)

STUB = 15  # px, lead-in/lead-out before turning
JOG = 12  # px, vertical step to clear a row before turning


def terminus(bar: BarGeometry, connection_type: ConnectionType, is_source: bool = True) -> Point:
    """Point on *bar* where a connector of *connection_type* attaches."""
    if connection_type is ConnectionType.SS:
        left = bar.left
    elif connection_type is ConnectionType.FF:
        left = bar.right
    elif connection_type is ConnectionType.FS:
        left = bar.left if is_source else bar.right
    else:  # SF
        left = bar.right if is_source else bar.left
    return Point(left, bar.vertical_center)


def _h(value: float) -> PathMove:
    return PathMove("H", value)


def _v(value: float) -> PathMove:
    return PathMove("V", value)


def _jog(a: Point, b: Point) -> float:
    return a.top + (JOG if a.top < b.top else -JOG)


def _route_ss(a: Point, b: Point) -> list[PathMove]:
    # always passes left of both start edges
    return [_h(min(b.left, a.left) - STUB), _v(b.top), _h(b.left)]


def _route_ff(a: Point, b: Point) -> list[PathMove]:
    # always passes right of both end edges
    return [_h(max(b.left, a.left) + STUB), _v(b.top), _h(b.left)]


def _route_fs(a: Point, b: Point) -> list[PathMove]:
    if b.left + STUB < a.left - STUB:
        midpoint = a.left - (a.left - b.left) / 2
        return [_h(midpoint), _v(b.top), _h(b.left)]
    return [
        _h(a.left - STUB),
        _v(_jog(a, b)),
        _h(b.left + STUB),
        _v(b.top),
        _h(b.left),
    ]


def _route_sf(a: Point, b: Point) -> list[PathMove]:
    if a.left + STUB < b.left - STUB:
        midpoint = a.left + (b.left - a.left) / 2
        return [_h(midpoint), _v(b.top), _h(b.left)]
    return [
        _h(a.left + STUB),
        _v(_jog(a, b)),
        _h(b.left - STUB),
        _v(b.top),
        _h(b.left),
    ]


_ROUTERS: dict[ConnectionType, Callable[[Point, Point], list[PathMove]]] = {
    ConnectionType.SS: _route_ss,
    ConnectionType.FF: _route_ff,
    ConnectionType.FS: _route_fs,
    ConnectionType.SF: _route_sf,
}


def route(connection_type: ConnectionType, a: Point, b: Point) -> tuple[PathMove, ...]:
    """Moves leading from terminus *a* to terminus *b*."""
    return tuple(_ROUTERS[connection_type](a, b))


def connect(
    source_id: str,
    source_bar: BarGeometry,
    target_id: str,
    target_bar: BarGeometry,
    connection_type: ConnectionType,
) -> ConnectorRoute:
    """Route one connector between two bars."""
    a = terminus(source_bar, connection_type, is_source=True)
    b = terminus(target_bar, connection_type, is_source=False)
    return ConnectorRoute(
        source_id=source_id,
        target_id=target_id,
        type=connection_type,
        start=a,
        end=b,
        moves=route(connection_type, a, b),
    )


def route_connectors(tasks: Iterable[Task], bars: Mapping[str, BarGeometry]) -> list[ConnectorRoute]:
    """Route every connection whose two bars are present in *bars*.

    A connection starts at the bar of the task it names (``to``) and ends at
    the bar of the task that owns it. Connections with a missing bar (unknown
    id, collapsed group, undated task) are skipped.
    """
    routes: list[ConnectorRoute] = []
    for task in tasks:
        for connection in task.connections:
            source_bar = bars.get(connection.to)
            target_bar = bars.get(task.id)
            if source_bar is None or target_bar is None:
                logger.debug(
                    "Skipping %s connector %s -> %s: bar not shown",
                    connection.type.value, connection.to, task.id,
                )
                continue
            routes.append(connect(connection.to, source_bar, task.id, target_bar, connection.type))
    return routes
