"""Scroll synchronization between the task grid and the chart pane."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RelayoutTrigger(Enum):
    """Why a relayout was requested."""

    LOAD = "load"
    ZOOM = "zoom"
    RESIZE = "resize"
    VISIBILITY = "visibility"


@dataclass
class PaneScroll:
    """Vertical/horizontal scroll state of one pane. Offsets clamp like a real viewport."""

    scroll_top: float = 0
    max_scroll_top: float = 0
    scroll_left: float = 0
    max_scroll_left: float = 0

    def scroll_to(self, top: float) -> float:
        self.scroll_top = max(0, min(top, self.max_scroll_top))
        return self.scroll_top

    def scroll_x_to(self, left: float) -> float:
        self.scroll_left = max(0, min(left, self.max_scroll_left))
        return self.scroll_left


class ScrollSync:
    """Chart pane leads, task grid follows.

    When the grid cannot reach the chart's offset (only one pane scrolls that
    far), both panes settle on the smaller offset so rows stay aligned.
    """

    def from_chart(self, chart: PaneScroll, grid: PaneScroll) -> float:
        """Propagate the chart's vertical offset to the grid. Returns the settled offset."""
        grid.scroll_to(chart.scroll_top)
        if grid.scroll_top != chart.scroll_top:
            settled = min(grid.scroll_top, chart.scroll_top)
            grid.scroll_to(settled)
            chart.scroll_to(settled)
        return chart.scroll_top

    def from_grid_wheel(self, delta: float, chart: PaneScroll, grid: PaneScroll) -> float:
        """Apply a wheel delta received by the grid to the chart, then sync."""
        chart.scroll_to(chart.scroll_top + delta)
        return self.from_chart(chart, grid)

    def header_offset(self, pane: PaneScroll) -> float:
        """Horizontal offset the pane's header must use."""
        return pane.scroll_left
