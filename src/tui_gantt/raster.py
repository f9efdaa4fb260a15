"""Map a pixel ChartLayout onto a terminal character grid.

One column is 10px and one line is 12px, so a 24px task row takes two
lines: a spacer line, then the bar line through the row's vertical center.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tui_gantt.models import ChartLayout, ConnectorRoute, HeaderCell

PX_PER_COL = 10
PX_PER_LINE = 12
MARGIN_COLS = 2

# Cell kinds, used by the widgets to pick a style
EMPTY = ""
BAR = "bar"
BAR_GROUP = "bar_group"
PROGRESS = "progress"
CONNECTOR = "connector"
ARROW = "arrow"
TODAY = "today"
BORDER = "border"
LABEL = "label"

_LEFT, _RIGHT, _UP, _DOWN = 1, 2, 4, 8

_BOX = {
    _LEFT: "─",
    _RIGHT: "─",
    _LEFT | _RIGHT: "─",
    _UP: "│",
    _DOWN: "│",
    _UP | _DOWN: "│",
    _RIGHT | _DOWN: "┌",
    _LEFT | _DOWN: "┐",
    _RIGHT | _UP: "└",
    _LEFT | _UP: "┘",
    _LEFT | _RIGHT | _DOWN: "┬",
    _LEFT | _RIGHT | _UP: "┴",
    _UP | _DOWN | _RIGHT: "├",
    _UP | _DOWN | _LEFT: "┤",
    _LEFT | _RIGHT | _UP | _DOWN: "┼",
}


def to_col(px: float) -> int:
    return int(px // PX_PER_COL)


def to_line(px: float) -> int:
    return int(px // PX_PER_LINE)


def lines_per_row(layout: ChartLayout) -> int:
    return max(1, layout.row_height // PX_PER_LINE)


def bar_line(row_index: int, lines: int) -> int:
    """Line of a row that carries its bar and its grid text."""
    return row_index * lines + lines // 2


def day_at_col(col: int, day_width: float) -> int:
    """Index of the chart day under terminal column *col*."""
    if day_width <= 0:
        return -1
    return int(col * PX_PER_COL // day_width)


def _route_cells(route: ConnectorRoute) -> list[tuple[int, int]]:
    """Route corners as (col, line), ends pulled off the bar edges they touch."""
    points = route.points()
    cells = [(to_col(p.left), to_line(p.top)) for p in points]
    if len(cells) < 2:
        return cells

    # leaving leftwards from a left edge starts one column further left
    first, second = points[0], points[1]
    if second.top == first.top and second.left < first.left:
        cells[0] = (cells[0][0] - 1, cells[0][1])

    # arriving rightwards at a left edge stops one column short of the bar
    last, before = points[-1], points[-2]
    if before.top == last.top and before.left < last.left:
        cells[-1] = (cells[-1][0] - 1, cells[-1][1])
    return cells


def _arrow_for(route: ConnectorRoute) -> str:
    points = route.points()
    if len(points) >= 2 and points[-2].left > points[-1].left:
        return "◀"
    return "▶"


@dataclass
class ChartCanvas:
    """Character grid for the chart body. ``cells[line][col] = (char, kind)``."""

    width: int
    height: int
    cells: list[list[tuple[str, str]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[(" ", EMPTY)] * self.width for _ in range(self.height)]

    def get(self, col: int, line: int) -> tuple[str, str]:
        if 0 <= line < self.height and 0 <= col < self.width:
            return self.cells[line][col]
        return (" ", EMPTY)

    def put(self, col: int, line: int, char: str, kind: str) -> None:
        if 0 <= line < self.height and 0 <= col < self.width:
            self.cells[line][col] = (char, kind)

    def kind_at(self, col: int, line: int) -> str:
        return self.get(col, line)[1]


def canvas_width(layout: ChartLayout) -> int:
    """Columns needed for the chart, plus room for connector stubs past the last day."""
    if layout.is_empty:
        return 0
    return to_col(layout.chart_width) + MARGIN_COLS


def rasterize(layout: ChartLayout) -> ChartCanvas:
    """Draw bars, today marker and connectors of *layout* into a canvas."""
    width = canvas_width(layout)
    height = len(layout.rows) * lines_per_row(layout)
    canvas = ChartCanvas(width, height)
    if layout.is_empty:
        return canvas

    _draw_bars(canvas, layout)
    _draw_connectors(canvas, layout.routes)

    if layout.today_offset is not None:
        col = to_col(layout.today_offset)
        for line in range(height):
            if canvas.kind_at(col, line) == EMPTY:
                canvas.put(col, line, "│", TODAY)
    return canvas


def _draw_bars(canvas: ChartCanvas, layout: ChartLayout) -> None:
    lines = lines_per_row(layout)
    for row in layout.rows:
        if row.bar is None:
            continue
        line = bar_line(row.row, lines)
        start = to_col(row.bar.left)
        end = max(start + 1, to_col(row.bar.right))
        kind = BAR_GROUP if row.task.is_group_head else BAR
        filled = int((end - start) * row.task.completed / 100)
        for col in range(start, end):
            if col - start < filled:
                canvas.put(col, line, "█", PROGRESS)
            else:
                canvas.put(col, line, "▆" if kind == BAR_GROUP else "█", kind)


def _draw_connectors(canvas: ChartCanvas, routes: tuple[ConnectorRoute, ...]) -> None:
    masks: dict[tuple[int, int], int] = {}

    def mark(col: int, line: int, bits: int) -> None:
        masks[(col, line)] = masks.get((col, line), 0) | bits

    ends: list[tuple[int, int, str]] = []
    for route in routes:
        cells = _route_cells(route)
        for (c0, l0), (c1, l1) in zip(cells, cells[1:]):
            if l0 == l1:
                lo, hi = sorted((c0, c1))
                for col in range(lo, hi + 1):
                    bits = (_LEFT if col > lo else 0) | (_RIGHT if col < hi else 0)
                    mark(col, l0, bits or _LEFT | _RIGHT)
            else:
                lo, hi = sorted((l0, l1))
                for line in range(lo, hi + 1):
                    bits = (_UP if line > lo else 0) | (_DOWN if line < hi else 0)
                    mark(c0, line, bits or _UP | _DOWN)
        if cells:
            col, line = cells[-1]
            ends.append((col, line, _arrow_for(route)))

    for (col, line), bits in masks.items():
        if canvas.kind_at(col, line) in (EMPTY, CONNECTOR):
            canvas.put(col, line, _BOX.get(bits, "┼"), CONNECTOR)
    for col, line, arrow in ends:
        if canvas.kind_at(col, line) in (EMPTY, CONNECTOR):
            canvas.put(col, line, arrow, ARROW)


def header_line(cells: tuple[HeaderCell, ...], day_width: float, width: int) -> list[tuple[str, str]]:
    """Render one header row into *width* columns.

    Borders take the first column of their day; a label starts right after
    its border and runs on until the next border or label.
    """
    out: list[tuple[str, str]] = [(" ", EMPTY)] * width
    starts: list[tuple[int, str]] = []
    borders: set[int] = set()
    for i, cell in enumerate(cells):
        col = to_col(i * day_width)
        if cell.border_left:
            borders.add(col)
        if cell.border_right:
            borders.add(min(to_col((i + 1) * day_width), width - 1))
        if cell.text:
            starts.append((col + 1 if cell.border_left else col, cell.text))

    for col in borders:
        if 0 <= col < width:
            out[col] = ("│", BORDER)

    stops = sorted(borders | {s for s, _ in starts})
    for start, text in starts:
        limit = next((s for s in stops if s > start), width)
        for offset, char in enumerate(text[: max(0, limit - start)]):
            if start + offset < width:
                out[start + offset] = (char, LABEL)
    return out
