"""Gantt chart custom widget."""

from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import MouseMove, Resize
from textual.geometry import Size
from textual.message import Message
from textual.scroll_view import ScrollView
from textual.strip import Strip
from textual.widget import Widget

from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from tui_gantt import raster, theme
from tui_gantt.models import ChartLayout, TaskLayout
from tui_gantt.sync import PaneScroll, ScrollSync
from tui_gantt.zoom import MAX_ZOOM, MIN_ZOOM, ZOOM_LABELS, ZoomController


def is_dark(widget: Widget) -> bool:
    try:
        return widget.app.current_theme.dark
    except Exception:
        return True


def bar_tooltip(row: TaskLayout) -> str:
    """Hover text for a bar: name, then start and end dates."""
    if row.timing is None:
        return row.task.name
    return f"{row.task.name}\nStart: {row.timing.start_label}\nEnd: {row.timing.end_label}"


class GanttToolbar(Widget):
    """1-line toolbar showing today's date and clickable zoom buttons.

    The step buttons dim and stop responding at either end of the zoom range.
    """

    class ZoomSelected(Message):
        def __init__(self, level: int) -> None:
            super().__init__()
            self.level = level

    DEFAULT_CSS = """
    GanttToolbar {
        height: 1;
        background: $background;
    }
    """

    def __init__(self, show_zoom: bool = True, **kwargs) -> None:
        super().__init__(**kwargs)
        self._zoom_level: int = MIN_ZOOM
        self._today: date = date.today()
        self._show_zoom: bool = show_zoom
        self._button_regions: list[tuple[int, int, int]] = []

    def update_toolbar(self, zoom_level: int, today: date | None = None) -> None:
        self._zoom_level = zoom_level
        if today is not None:
            self._today = today
        self.refresh()

    def render(self) -> Text:
        dark = is_dark(self)
        text = Text()

        text.append(f"Today: {self._today.isoformat()}", Style(bold=True, color=theme.TODAY_MARKER.resolve(dark)))

        self._button_regions = []
        if self._show_zoom:
            zoom = ZoomController(self._zoom_level)
            text.append("  │ Zoom ", Style(dim=True))
            self._append_step(text, "−", zoom.level - 1, zoom.can_zoom_out)
            for level in range(MIN_ZOOM, MAX_ZOOM + 1):
                label = ZOOM_LABELS[level]
                start = len(text)
                if level == self._zoom_level:
                    text.append(f" {label} ", Style(bold=True, reverse=True))
                else:
                    text.append(f" {label} ", Style(dim=True))
                self._button_regions.append((start, len(text), level))
                if level < MAX_ZOOM:
                    text.append("│", Style(dim=True))
            self._append_step(text, "+", zoom.level + 1, zoom.can_zoom_in)
        return text

    def _append_step(self, text: Text, label: str, target: int, enabled: bool) -> None:
        start = len(text)
        if not enabled:
            text.append(f" {label} ", Style(dim=True))
            return
        text.append(f" {label} ", Style(bold=True))
        self._button_regions.append((start, len(text), target))

    @property
    def button_targets(self) -> list[int]:
        """Zoom levels reachable by clicking, in display order."""
        return [level for _, _, level in self._button_regions]

    def on_click(self, event) -> None:
        for start, end, level in self._button_regions:
            if start <= event.x < end:
                if level != self._zoom_level:
                    self.post_message(self.ZoomSelected(level))
                return


class GanttHeader(Widget):
    """Fixed header: major labels, minor labels and the today marker line."""

    DEFAULT_CSS = """
    GanttHeader {
        height: 3;
        background: $background;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._layout = ChartLayout()
        self._width: int = 0
        self.scroll_x_offset: int = 0

    def update_header(self, layout: ChartLayout) -> None:
        self._layout = layout
        self._width = raster.canvas_width(layout)
        self.refresh()

    def render_line(self, y: int) -> Strip:
        width = max(self.size.width, self._width)
        dark = is_dark(self)
        base = Style(bgcolor=theme.BASE_BG.resolve(dark))
        if self._layout.is_empty or y > 2:
            return Strip.blank(self.size.width, base)

        if y == 2:
            full = self._render_today_line(width, base, dark)
        else:
            cells = self._layout.major_header if y == 0 else self._layout.minor_header
            full = self._render_label_line(cells, width, base, dark, bold=(y == 0))
        return full.crop(self.scroll_x_offset, self.scroll_x_offset + self.size.width)

    def _render_label_line(self, cells, width: int, base: Style, dark: bool, bold: bool) -> Strip:
        label_style = Style(bold=bold, color=theme.HEADER.resolve(dark))
        border_style = Style(color=theme.BORDER.resolve(dark))
        weekend = Style(bgcolor=theme.WEEKEND_BG.resolve(dark))
        line = raster.header_line(cells, self._layout.day_width, width)
        segments: list[Segment] = []
        for col, (char, kind) in enumerate(line):
            bg = self._day_bg(col, base, weekend)
            if kind == raster.BORDER:
                segments.append(Segment(char, border_style + bg))
            elif kind == raster.LABEL:
                segments.append(Segment(char, label_style + bg))
            else:
                segments.append(Segment(char, bg))
        return Strip(segments)

    def _render_today_line(self, width: int, base: Style, dark: bool) -> Strip:
        offset = self._layout.today_offset
        today_col = raster.to_col(offset) if offset is not None else -1
        marker = Style(color=theme.TODAY_MARKER.resolve(dark))
        dim = Style(dim=True)
        segments = []
        for col in range(width):
            if col == today_col:
                segments.append(Segment("▼", marker + base))
            else:
                segments.append(Segment("┄", dim + base))
        return Strip(segments)

    def _day_bg(self, col: int, base: Style, weekend: Style) -> Style:
        index = raster.day_at_col(col, self._layout.day_width)
        if 0 <= index < len(self._layout.days) and self._layout.days[index].is_weekend:
            return weekend
        return base


class GanttView(ScrollView):
    """Renders bars, connectors and the today marker (data rows only, no header)."""

    class ScrollXChanged(Message):
        """Emitted when horizontal scroll position changes."""

        def __init__(self, scroll_x: float) -> None:
            super().__init__()
            self.scroll_x = scroll_x

    class ScrollYChanged(Message):
        """Emitted when vertical scroll position changes."""

        def __init__(self, scroll_y: float) -> None:
            super().__init__()
            self.scroll_y = scroll_y

    DEFAULT_CSS = """
    GanttView {
        height: 1fr;
        background: $background;
        overflow-y: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._layout = ChartLayout()
        self._canvas = raster.ChartCanvas(0, 0)
        self._highlighted_row: int = -1

    @property
    def lines_per_row(self) -> int:
        return raster.lines_per_row(self._layout)

    @property
    def highlighted_row(self) -> int:
        return self._highlighted_row

    @highlighted_row.setter
    def highlighted_row(self, row: int) -> None:
        if row != self._highlighted_row:
            self._highlighted_row = row
            self.refresh()

    def update_layout(self, layout: ChartLayout) -> None:
        self._layout = layout
        self._canvas = raster.rasterize(layout)
        self.virtual_size = Size(self._canvas.width, max(self._canvas.height, self.size.height))
        self.refresh()

    def watch_scroll_x(self, old: float, new: float) -> None:
        super().watch_scroll_x(old, new)
        self.post_message(self.ScrollXChanged(new))

    def watch_scroll_y(self, old: float, new: float) -> None:
        super().watch_scroll_y(old, new)
        self.post_message(self.ScrollYChanged(new))

    def row_at_line(self, line: int) -> TaskLayout | None:
        index = line // self.lines_per_row
        if 0 <= index < len(self._layout.rows):
            return self._layout.rows[index]
        return None

    def on_mouse_move(self, event: MouseMove) -> None:
        scroll_x, scroll_y = self.scroll_offset
        col = event.x + scroll_x
        line = event.y + scroll_y
        row = self.row_at_line(line)
        if row is not None and row.bar is not None:
            start = raster.to_col(row.bar.left)
            end = max(start + 1, raster.to_col(row.bar.right))
            if start <= col < end:
                self.tooltip = bar_tooltip(row)
                return
        self.tooltip = None

    def render_line(self, y: int) -> Strip:
        scroll_x, scroll_y = self.scroll_offset
        width = max(self.size.width, self._canvas.width)
        line = y + scroll_y

        if not self._layout.rows:
            if y == 0:
                text = Text("  No tasks to chart", style="dim")
                return Strip(text.render(self.app.console))
            return Strip.blank(self.size.width)
        if self._layout.is_empty:
            if y == 0:
                text = Text("  No dated tasks", style="dim")
                return Strip(text.render(self.app.console))
            return Strip.blank(self.size.width)

        full = self._render_chart_line(line, width)
        return full.crop(scroll_x, scroll_x + self.size.width)

    def _render_chart_line(self, line: int, width: int) -> Strip:
        dark = is_dark(self)
        base = Style(bgcolor=theme.BASE_BG.resolve(dark))
        weekend = Style(bgcolor=theme.WEEKEND_BG.resolve(dark))
        highlight = line // self.lines_per_row == self._highlighted_row
        if highlight:
            base = weekend = Style(bgcolor=theme.HIGHLIGHT_BG.resolve(dark))

        styles = {
            raster.BAR: Style(color=theme.BAR.resolve(dark)),
            raster.BAR_GROUP: Style(color=theme.BAR_GROUP.resolve(dark)),
            raster.PROGRESS: Style(color=theme.BAR_PROGRESS.resolve(dark)),
            raster.CONNECTOR: Style(color=theme.CONNECTOR.resolve(dark)),
            raster.ARROW: Style(color=theme.CONNECTOR.resolve(dark), bold=True),
            raster.TODAY: Style(color=theme.TODAY_MARKER.resolve(dark)),
        }
        days = self._layout.days
        day_width = self._layout.day_width
        segments: list[Segment] = []
        for col in range(width):
            char, kind = self._canvas.get(col, line)
            index = raster.day_at_col(col, day_width)
            bg = weekend if 0 <= index < len(days) and days[index].is_weekend else base
            style = styles.get(kind)
            segments.append(Segment(char, style + bg if style else bg))
        return Strip(segments)


class GanttChart(Container):
    """Chart pane: header over a scrolling body, fed with ChartLayouts."""

    DEFAULT_CSS = """
    GanttChart {
        width: 1fr;
        height: 1fr;
    }
    GanttChart #gantt-header {
        height: 3;
    }
    GanttChart #gantt-view {
        height: 1fr;
    }
    """

    class ViewportResized(Message):
        """Emitted when the pane width changes; carries the width in chart pixels."""

        def __init__(self, available_width: float) -> None:
            super().__init__()
            self.available_width = available_width

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._layout = ChartLayout()
        self._last_width: int = -1
        self._sync = ScrollSync()

    def compose(self) -> ComposeResult:
        yield GanttToolbar(id="gantt-toolbar")
        yield GanttHeader(id="gantt-header")
        yield GanttView(id="gantt-view")

    @property
    def layout(self) -> ChartLayout:
        return self._layout

    @property
    def available_width(self) -> float:
        """Width the fit zoom level should fill, in chart pixels."""
        cols = max(1, self.size.width - raster.MARGIN_COLS - 1)
        return float(cols * raster.PX_PER_COL)

    def on_mount(self) -> None:
        self._push_to_view()

    def on_resize(self, event: Resize) -> None:
        if event.size.width != self._last_width:
            self._last_width = event.size.width
            self.post_message(self.ViewportResized(self.available_width))

    def show_layout(self, layout: ChartLayout) -> None:
        self._layout = layout
        self._push_to_view()

    def on_gantt_view_scroll_x_changed(self, event: GanttView.ScrollXChanged) -> None:
        view = self.query_one("#gantt-view", GanttView)
        pane = PaneScroll(scroll_left=view.scroll_x, max_scroll_left=view.max_scroll_x)
        pane.scroll_x_to(event.scroll_x)
        header = self.query_one("#gantt-header", GanttHeader)
        header.scroll_x_offset = int(self._sync.header_offset(pane))
        header.refresh()

    def scroll_to_today(self) -> bool:
        """Center the today marker horizontally. Returns False when today is off-chart."""
        offset = self._layout.today_offset
        if offset is None:
            return False
        view = self.query_one("#gantt-view", GanttView)
        col = raster.to_col(offset)
        view.scroll_to(x=max(0, col - view.size.width // 2), animate=False)
        return True

    def _push_to_view(self) -> None:
        if not self.is_mounted:
            return
        self.query_one("#gantt-toolbar", GanttToolbar).update_toolbar(self._layout.zoom_level)
        self.query_one("#gantt-header", GanttHeader).update_header(self._layout)
        self.query_one("#gantt-view", GanttView).update_layout(self._layout)
