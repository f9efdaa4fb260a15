"""Chart instance: owns tasks, zoom and visibility state, produces layouts."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Sequence

from tui_gantt.connectors import route_connectors
from tui_gantt.hierarchy import Hierarchy
from tui_gantt.loader import parse_tasks
from tui_gantt.models import (
    BarGeometry,
    ChartConfig,
    ChartLayout,
    Task,
    TaskLayout,
    Timeline,
    VisibilityState,
)
from tui_gantt.sync import RelayoutTrigger
from tui_gantt.timeline import build_timeline
from tui_gantt.zoom import ZoomController, header_rows

logger = logging.getLogger(__name__)

DEFAULT_AVAILABLE_WIDTH = 800  # px, used until the renderer reports a size


class GanttChartModel:
    """State of one chart.

    Every state change that affects geometry ends in ``relayout()``, which
    builds a complete ChartLayout before publishing it, so ``layout`` always
    reflects one consistent pass.
    """

    def __init__(
        self,
        container_id: str,
        tasks: Sequence[Task] = (),
        config: ChartConfig | None = None,
        today: date | None = None,
    ) -> None:
        self.container_id = container_id
        self.config = config or ChartConfig()
        self._today = today
        self._zoom = ZoomController(self.config.zoom_level)
        self._available_width: float = DEFAULT_AVAILABLE_WIDTH
        self._tasks: list[Task] = []
        self._timeline = Timeline()
        self._hierarchy = Hierarchy(())
        self._layout = ChartLayout(row_height=self.config.row_height)
        self.set_tasks(tasks, relayout=False)

    # ── State accessors ──

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def hierarchy(self) -> Hierarchy:
        return self._hierarchy

    @property
    def zoom(self) -> ZoomController:
        return self._zoom

    @property
    def zoom_level(self) -> int:
        return self._zoom.level

    @property
    def layout(self) -> ChartLayout:
        return self._layout

    @property
    def available_width(self) -> float:
        return self._available_width

    # ── Rebuild ──

    def set_tasks(self, tasks: Iterable[Task], relayout: bool = True) -> None:
        """Replace the task list and rebuild the timeline in full."""
        self._tasks = list(tasks)
        self._timeline = build_timeline(self._tasks, today=self._today)
        self._hierarchy = Hierarchy(self._tasks)
        if relayout:
            self.relayout(trigger=RelayoutTrigger.LOAD)

    def relayout(
        self,
        available_width: float | None = None,
        trigger: RelayoutTrigger = RelayoutTrigger.RESIZE,
    ) -> ChartLayout:
        """Recompute bars, headers and connectors and publish the new layout."""
        if available_width is not None:
            self._available_width = available_width
        layout = self._build_layout()
        self._layout = layout
        logger.debug(
            "Relayout (%s): zoom=%d day_width=%.1f rows=%d routes=%d",
            trigger.value, layout.zoom_level, layout.day_width, len(layout.rows), len(layout.routes),
        )
        return layout

    def _build_layout(self) -> ChartLayout:
        timeline = self._timeline
        row_height = self.config.row_height
        visibility = self._hierarchy.states
        visible = self._hierarchy.visible_tasks()

        if timeline.range is None:
            rows = tuple(TaskLayout(task=t, row=i) for i, t in enumerate(visible))
            return ChartLayout(
                zoom_level=self._zoom.level,
                row_height=row_height,
                rows=rows,
                visibility=visibility,
            )

        day_width = self._zoom.day_width(self._available_width, timeline.range.num_days)
        major, minor = header_rows(timeline, self._zoom.level)

        rows: list[TaskLayout] = []
        bars: dict[str, BarGeometry] = {}
        for index, task in enumerate(visible):
            timing = timeline.timings.get(task.id)
            bar = None
            if timing is not None:
                bar = BarGeometry(
                    left=day_width * timing.days_to_start,
                    width=day_width * timing.bar_days,
                    vertical_center=index * row_height + row_height / 2,
                )
                bars[task.id] = bar
            rows.append(TaskLayout(task=task, row=index, timing=timing, bar=bar))

        return ChartLayout(
            range=timeline.range,
            days=timeline.days,
            days_until_today=timeline.days_until_today,
            zoom_level=self._zoom.level,
            day_width=day_width,
            row_height=row_height,
            major_header=major,
            minor_header=minor,
            rows=tuple(rows),
            routes=tuple(route_connectors(visible, bars)),
            visibility=visibility,
        )

    # ── Public operations ──

    def toggle_group(self, group_id: str) -> VisibilityState:
        state = self._hierarchy.toggle(group_id)
        self.relayout(trigger=RelayoutTrigger.VISIBILITY)
        return state

    def expand_all(self) -> None:
        self._hierarchy.expand_all()
        self.relayout(trigger=RelayoutTrigger.VISIBILITY)

    def collapse_all(self) -> None:
        self._hierarchy.collapse_all()
        self.relayout(trigger=RelayoutTrigger.VISIBILITY)

    def zoom_in(self) -> bool:
        """Zoom in one level. Returns False (and skips relayout) at the top level."""
        if not self._zoom.zoom_in():
            return False
        self.relayout(trigger=RelayoutTrigger.ZOOM)
        return True

    def zoom_out(self) -> bool:
        """Zoom out one level. Returns False (and skips relayout) at the fit level."""
        if not self._zoom.zoom_out():
            return False
        self.relayout(trigger=RelayoutTrigger.ZOOM)
        return True

    def set_zoom(self, level: int) -> bool:
        if not self._zoom.set_level(level):
            return False
        self.relayout(trigger=RelayoutTrigger.ZOOM)
        return True


def initialize(
    container_id: str,
    data: Iterable[dict[str, Any]] | Iterable[Task],
    available_width: float = DEFAULT_AVAILABLE_WIDTH,
    config: ChartConfig | None = None,
    today: date | None = None,
) -> GanttChartModel:
    """Create a chart from raw task records (or Task objects) and lay it out.

    Raises TypeError when Task objects and records are mixed.
    """
    items = list(data)
    task_count = sum(isinstance(item, Task) for item in items)
    if task_count == len(items):
        tasks = items
    elif task_count:
        raise TypeError("initialize() takes either Task objects or task records, not both")
    else:
        tasks = parse_tasks(items).tasks
    chart = GanttChartModel(container_id, tasks, config=config, today=today)
    chart.relayout(available_width, trigger=RelayoutTrigger.LOAD)
    return chart
