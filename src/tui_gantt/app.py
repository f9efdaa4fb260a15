"""Main Textual App for TUI Gantt."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static

from tui_gantt import theme
from tui_gantt.chart import GanttChartModel
from tui_gantt.commands import GanttCommandProvider
from tui_gantt.config import load_config
from tui_gantt.loader import TaskFileError, load_task_file, parse_tasks
from tui_gantt.models import ChartConfig, LoadWarning, Task
from tui_gantt.screens.help_screen import HelpScreen
from tui_gantt.screens.warning_screen import WarningScreen
from tui_gantt.sync import PaneScroll, RelayoutTrigger, ScrollSync
from tui_gantt.widgets.gantt_chart import GanttChart, GanttToolbar, GanttView
from tui_gantt.widgets.task_grid import SyncedDataTable, TaskGrid
from tui_gantt.zoom import ZOOM_LABELS

logger = logging.getLogger(__name__)

_SYNC_RESET_DELAY = 0.05  # seconds


def _pane_scroll(widget) -> PaneScroll:
    return PaneScroll(
        scroll_top=widget.scroll_y,
        max_scroll_top=widget.max_scroll_y,
        scroll_left=widget.scroll_x,
        max_scroll_left=widget.max_scroll_x,
    )


class GanttApp(App):
    """TUI Gantt Application."""

    TITLE = "TUI Gantt"
    CSS = """
    #main-content {
        height: 1fr;
        border: round $surface-lighten-2;
        border-title-align: left;
    }
    #main-content:focus-within {
        border: round $accent;
        border-title-color: $accent;
    }
    TaskGrid {
        border-right: vkey $surface-lighten-2;
    }
    #status-bar {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $primary-background;
        color: $text;
    }
    """

    COMMANDS = App.COMMANDS | {GanttCommandProvider}

    BINDINGS = [
        Binding("question_mark", "help", "Help"),
        Binding("exclamation_mark", "warnings", "Warnings"),
        Binding("q", "quit_app", "Quit"),
        Binding("space", "toggle_group", "Fold/Unfold"),
        Binding("E", "expand_all", "Expand all"),
        Binding("C", "collapse_all", "Collapse all"),
        Binding("plus", "zoom_in", "Zoom in"),
        Binding("minus", "zoom_out", "Zoom out"),
        Binding("t", "go_today", "Today"),
        Binding("r", "reload", "Reload", show=False),
    ]

    def __init__(
        self,
        task_file: Path | None = None,
        project_dir: Path | None = None,
        no_color: bool = False,
        demo_mode: bool = False,
        zoom_level: int | None = None,
        records: list[dict] | None = None,
    ) -> None:
        if no_color:
            os.environ["NO_COLOR"] = "1"
        super().__init__()
        self.task_file = task_file
        self.project_dir = project_dir or (task_file.parent if task_file else None)
        self.no_color = no_color
        self.demo_mode = demo_mode
        self._initial_zoom = zoom_level
        self._records = records
        self.config: ChartConfig = ChartConfig()
        self.model: GanttChartModel = GanttChartModel("gantt")
        self.warnings: list[LoadWarning] = []
        self._sync = ScrollSync()
        self._scroll_syncing: bool = False
        self._resize_timer: object | None = None
        self._pending_width: float | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-content"):
            yield TaskGrid(id="task-grid")
            yield GanttChart(id="gantt-chart")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.set_timer(0.01, self._load_project)

    # ── Loading ──

    def _load_project(self) -> None:
        if self.project_dir is not None:
            theme.load_theme(self.project_dir)
            self.config = load_config(self.project_dir)
        self._apply_theme(self.config.theme_name)
        if self._initial_zoom is not None:
            self.config.zoom_level = self._initial_zoom
        self.query_one(TaskGrid).set_columns(self.config.columns)
        self.model = GanttChartModel("gantt", self._read_tasks(), config=self.config)
        self.model.relayout(self.query_one(GanttChart).available_width, trigger=RelayoutTrigger.LOAD)
        logger.info("Chart loaded: %d tasks, zoom %d", len(self.model.tasks), self.model.zoom_level)
        if self.warnings:
            self.notify(f"{len(self.warnings)} task file warning(s), press ! to view", severity="warning")
        self._refresh_ui()

    def _apply_theme(self, name: str) -> None:
        if name not in self.available_themes:
            logger.warning("Unknown theme %r, keeping %s", name, self.theme)
            return
        self.theme = name

    def _read_tasks(self) -> list[Task]:
        self.warnings = []
        if self._records is not None:
            parsed = parse_tasks(self._records, source="demo" if self.demo_mode else "<data>")
            self.warnings = parsed.warnings
            return parsed.tasks
        if self.task_file is None:
            return []
        try:
            parsed = load_task_file(self.task_file)
        except TaskFileError as e:
            logger.warning("Task file failed to load: %s", e)
            self.notify(str(e), severity="error")
            return []
        self.warnings = parsed.warnings
        return parsed.tasks

    # ── UI Refresh ──

    def _refresh_ui(self) -> None:
        layout = self.model.layout
        self.query_one(TaskGrid).update_layout(layout)
        self.query_one(GanttChart).show_layout(layout)
        self._update_title()
        self._update_status_bar()

    def _update_title(self) -> None:
        name = self.task_file.name if self.task_file else "untitled"
        demo = " [DEMO]" if self.demo_mode else ""
        self.title = f"TUI Gantt - {name}{demo}"

    def _update_status_bar(self) -> None:
        self.query_one("#status-bar", Static).update(self.status_text())

    def status_text(self) -> str:
        """Status bar content as Rich markup."""
        layout = self.model.layout
        parts = [
            f"Zoom: {ZOOM_LABELS[layout.zoom_level]}",
            f"Tasks: {len(layout.rows)}/{len(self.model.tasks)}",
        ]
        if layout.range is not None:
            parts.append(f"Days: {layout.range.num_days}")
        dark = self.current_theme.dark
        if self.warnings:
            color = theme.STATUSBAR_WARNING.resolve(dark)
            parts.append(f"[{color}]⚠ {len(self.warnings)} warnings[/{color}]")
        if self.demo_mode:
            color = theme.STATUSBAR_DEMO.resolve(dark)
            parts.append(f"[{color}]DEMO[/{color}]")
        return " | ".join(parts)

    # ── Resize (debounced) ──

    def on_gantt_chart_viewport_resized(self, event: GanttChart.ViewportResized) -> None:
        self._pending_width = event.available_width
        if self._resize_timer is not None:
            self._resize_timer.stop()
        self._resize_timer = self.set_timer(self.config.resize_delay, self._apply_resize)

    def _apply_resize(self) -> None:
        self._resize_timer = None
        if self._pending_width is None:
            return
        width, self._pending_width = self._pending_width, None
        if width == self.model.available_width:
            return
        self.model.relayout(width, trigger=RelayoutTrigger.RESIZE)
        self._refresh_ui()

    # ── Scroll synchronization ──

    def _panes(self) -> tuple[GanttView, SyncedDataTable]:
        view = self.query_one(GanttChart).query_one("#gantt-view", GanttView)
        table = self.query_one(TaskGrid).table
        return view, table

    def _reset_scroll_syncing(self) -> None:
        self._scroll_syncing = False

    def _apply_sync(self, view: GanttView, table: SyncedDataTable, chart: PaneScroll, grid: PaneScroll) -> None:
        self._scroll_syncing = True
        if table.scroll_y != grid.scroll_top:
            table.scroll_to(y=grid.scroll_top, animate=False)
        if view.scroll_y != chart.scroll_top:
            view.scroll_to(y=chart.scroll_top, animate=False)
        # Delay flag reset so bounce-back messages are caught
        self.set_timer(_SYNC_RESET_DELAY, self._reset_scroll_syncing)

    def on_gantt_view_scroll_y_changed(self, event: GanttView.ScrollYChanged) -> None:
        """The chart pane leads: the grid follows its vertical offset."""
        if self._scroll_syncing:
            return
        view, table = self._panes()
        chart, grid = _pane_scroll(view), _pane_scroll(table)
        chart.scroll_top = event.scroll_y
        self._sync.from_chart(chart, grid)
        self._apply_sync(view, table, chart, grid)

    def on_synced_data_table_wheel_scrolled(self, event: SyncedDataTable.WheelScrolled) -> None:
        """Wheel over the grid scrolls the chart, which then drives the grid."""
        view, table = self._panes()
        chart, grid = _pane_scroll(view), _pane_scroll(table)
        self._sync.from_grid_wheel(event.delta, chart, grid)
        self._apply_sync(view, table, chart, grid)

    def on_synced_data_table_scroll_changed(self, event: SyncedDataTable.ScrollChanged) -> None:
        """Keyboard navigation scrolls the grid; keep the chart level with it."""
        if self._scroll_syncing:
            return
        view, table = self._panes()
        chart, grid = _pane_scroll(view), _pane_scroll(table)
        chart.scroll_to(event.scroll_y)
        self._sync.from_chart(chart, grid)
        self._apply_sync(view, table, chart, grid)

    def on_task_grid_cursor_row_changed(self, event: TaskGrid.CursorRowChanged) -> None:
        view, _ = self._panes()
        view.highlighted_row = event.row_index

    def on_task_grid_group_toggled(self, event: TaskGrid.GroupToggled) -> None:
        self._toggle(event.task_id)

    def on_gantt_toolbar_zoom_selected(self, event: GanttToolbar.ZoomSelected) -> None:
        self.action_zoom_level(event.level)

    # ── Actions ──

    def _toggle(self, group_id: str) -> None:
        state = self.model.toggle_group(group_id)
        logger.debug("Group %s is now %s", group_id, state.value)
        self._refresh_ui()

    def action_toggle_group(self) -> None:
        task_id = self.query_one(TaskGrid).highlighted_task_id
        if task_id is None:
            return
        row = self.model.layout.row_for(task_id)
        if row is None:
            return
        group_id = task_id if task_id in self.model.layout.visibility else row.task.parent
        if group_id is None or group_id not in self.model.layout.visibility:
            self.notify("Not in a group", severity="warning")
            return
        self._toggle(group_id)

    def action_expand_all(self) -> None:
        self.model.expand_all()
        self._refresh_ui()

    def action_collapse_all(self) -> None:
        self.model.collapse_all()
        self._refresh_ui()

    def action_zoom_in(self) -> None:
        if not self.model.zoom_in():
            self.notify("Already at the closest zoom", severity="information")
            return
        self._refresh_ui()

    def action_zoom_out(self) -> None:
        if not self.model.zoom_out():
            self.notify("Already fitted to the pane", severity="information")
            return
        self._refresh_ui()

    def action_zoom_level(self, level: int) -> None:
        if self.model.set_zoom(int(level)):
            self._refresh_ui()

    def action_go_today(self) -> None:
        if not self.query_one(GanttChart).scroll_to_today():
            self.notify("Today is outside the chart range", severity="information")

    def action_reload(self) -> None:
        if self.demo_mode:
            self.notify("Demo data cannot be reloaded", severity="warning")
            return
        self.model.set_tasks(self._read_tasks())
        self._refresh_ui()
        self.notify("Tasks reloaded")

    def action_warnings(self) -> None:
        self.push_screen(WarningScreen(self.warnings))

    def action_help(self) -> None:
        self.push_screen(HelpScreen(), callback=self._on_help_action)

    def _on_help_action(self, action: str | None) -> None:
        if action:
            self.call_later(self.run_action, action)

    def action_init_theme(self) -> None:
        if self.project_dir is None:
            self.notify("No project directory", severity="warning")
            return
        try:
            dest = theme.init_theme(self.project_dir)
        except FileExistsError:
            self.notify("Theme file already exists", severity="warning")
            return
        self.notify(f"Created {dest}")

    def action_quit_app(self) -> None:
        self.exit()
