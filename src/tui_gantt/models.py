"""Data models for TUI Gantt."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class ConnectionType(Enum):
    """Dependency relationship between two task bars."""

    SS = "SS"  # start-to-start
    FF = "FF"  # finish-to-finish
    FS = "FS"  # finish-to-start
    SF = "SF"  # start-to-finish


class VisibilityState(Enum):
    """Expand/collapse state of a group head."""

    EXPANDED = "expanded"
    COLLAPSED = "collapsed"

    @property
    def flipped(self) -> VisibilityState:
        if self is VisibilityState.EXPANDED:
            return VisibilityState.COLLAPSED
        return VisibilityState.EXPANDED


GROUP_ICONS = {
    VisibilityState.EXPANDED: "▼",
    VisibilityState.COLLAPSED: "▶",
}


@dataclass(frozen=True)
class Connection:
    """A dependency edge owned by a task.

    The task named by ``to`` is where the connector starts; the owning task
    receives the arrowhead.
    """

    to: str
    type: ConnectionType = ConnectionType.SF


@dataclass(frozen=True)
class Task:
    """A single row of the chart. Immutable."""

    id: str
    name: str
    start: datetime | None = None
    end: datetime | None = None
    parent: str | None = None
    completed: int = 0  # 0-100
    connections: tuple[Connection, ...] = ()

    @property
    def is_group_head(self) -> bool:
        return self.parent is None

    @property
    def has_dates(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class TaskTiming:
    """Per-task values derived by the timeline builder."""

    task_id: str
    start_date: datetime
    end_date: datetime
    start_label: str  # 03/07/2026
    end_label: str
    start_label_short: str  # 3/7/2026
    end_label_short: str
    duration_days: int
    days_to_start: int = 0

    @property
    def bar_days(self) -> int:
        """Days covered by the drawn bar; same-day tasks still get one day."""
        return max(1, self.duration_days)


@dataclass(frozen=True)
class ChartRange:
    """Date span covered by the chart, padded one day on each side."""

    min_date: datetime
    max_date: datetime
    num_days: int


@dataclass(frozen=True)
class ChartDay:
    """Calendar metadata for one column of the chart."""

    date: datetime
    epoch_millis: int
    day_of_month: int
    weekday_code: str
    weekday_short: str
    weekday_long: str
    month_short: str
    month_long: str
    year: int
    date_label: str

    @property
    def is_sunday(self) -> bool:
        return self.weekday_code == "U"

    @property
    def is_weekend(self) -> bool:
        return self.weekday_code in ("U", "S")

    @property
    def calendar_date(self) -> date:
        return self.date.date()


@dataclass(frozen=True)
class Timeline:
    """Output of the timeline builder. ``range`` is None for an empty chart."""

    range: ChartRange | None = None
    days: tuple[ChartDay, ...] = ()
    days_until_today: int | None = None
    timings: dict[str, TaskTiming] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.range is None


@dataclass(frozen=True)
class BarGeometry:
    """Rendered bar box in chart pixels, relative to the chart origin."""

    left: float
    width: float
    vertical_center: float

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class Point:
    left: float
    top: float


@dataclass(frozen=True)
class PathMove:
    """One axis-aligned move: ``H`` sets left, ``V`` sets top."""

    axis: str
    value: float


@dataclass(frozen=True)
class ConnectorRoute:
    """An orthogonal connector from ``start`` to ``end`` (arrowhead at end)."""

    source_id: str
    target_id: str
    type: ConnectionType
    start: Point
    end: Point
    moves: tuple[PathMove, ...]

    def points(self) -> list[Point]:
        """Return every corner of the path, both termini included."""
        current = self.start
        result = [current]
        for move in self.moves:
            if move.axis == "H":
                current = Point(move.value, current.top)
            else:
                current = Point(current.left, move.value)
            result.append(current)
        return result

    def svg_path(self) -> str:
        """Return the SVG path description, e.g. ``M10,12 H-5 V36 H40``."""
        parts = [f"M{_num(self.start.left)},{_num(self.start.top)}"]
        parts.extend(f"{m.axis}{_num(m.value)}" for m in self.moves)
        return " ".join(parts)


def _num(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class HeaderCell:
    """One day cell of a header row."""

    text: str = ""
    border_left: bool = False
    border_right: bool = False


@dataclass(frozen=True)
class TaskLayout:
    """A visible row: its task, derived timing, row index and bar box."""

    task: Task
    row: int
    timing: TaskTiming | None = None
    bar: BarGeometry | None = None


@dataclass(frozen=True)
class ChartLayout:
    """Complete, immutable result of one relayout."""

    range: ChartRange | None = None
    days: tuple[ChartDay, ...] = ()
    days_until_today: int | None = None
    zoom_level: int = 0
    day_width: float = 0.0
    row_height: int = 24
    major_header: tuple[HeaderCell, ...] = ()
    minor_header: tuple[HeaderCell, ...] = ()
    rows: tuple[TaskLayout, ...] = ()
    routes: tuple[ConnectorRoute, ...] = ()
    visibility: dict[str, VisibilityState] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.range is None

    @property
    def chart_width(self) -> float:
        return self.day_width * len(self.days)

    @property
    def chart_height(self) -> int:
        return self.row_height * len(self.rows)

    @property
    def today_offset(self) -> float | None:
        """Pixel offset of the today marker, None when today is off-chart."""
        if self.days_until_today is None:
            return None
        return self.day_width * self.days_until_today

    def row_for(self, task_id: str) -> TaskLayout | None:
        for row in self.rows:
            if row.task.id == task_id:
                return row
        return None


@dataclass
class LoadWarning:
    """A recoverable problem found while loading task data."""

    source: str
    index: int
    message: str

    def __str__(self) -> str:
        return f"{self.source}[{self.index}]: {self.message}"


@dataclass
class ColumnWidths:
    """Pixel widths of the task grid columns; ``date`` is used for start and end."""

    id: int = 35
    name: int = 230
    date: int = 90

    @property
    def row_width(self) -> int:
        return self.id + self.name + self.date * 2


@dataclass
class ChartConfig:
    """Project-level configuration stored in .tui-gantt/config.toml."""

    zoom_level: int = 0
    row_height: int = 24
    resize_delay: float = 0.5
    theme_name: str = "textual-dark"  # Textual theme; picks the dark or light colors
    columns: ColumnWidths = field(default_factory=ColumnWidths)
