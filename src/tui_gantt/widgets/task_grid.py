"""Task grid (left pane) based on DataTable."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import MouseScrollDown, MouseScrollUp
from textual.message import Message
from textual.widgets import DataTable

from rich.text import Text

from tui_gantt import raster, theme
from tui_gantt.models import GROUP_ICONS, ChartLayout, ColumnWidths, TaskLayout
from tui_gantt.widgets.gantt_chart import GanttToolbar, is_dark

COLUMN_LABELS = {
    "id": "#",
    "name": "Task",
    "start": "Start",
    "end": "End",
}

WHEEL_STEP = 3  # lines per wheel notch, as DataTable scrolls


def column_cells(widths: ColumnWidths) -> dict[str, int]:
    """Convert pixel column widths to terminal cells."""
    return {
        "id": widths.id // raster.PX_PER_COL + 1,
        "name": widths.name // raster.PX_PER_COL + 1,
        "start": widths.date // raster.PX_PER_COL + 1,
        "end": widths.date // raster.PX_PER_COL + 1,
    }


class SyncedDataTable(DataTable):
    """DataTable subclass that emits scroll changes for synchronization.

    Wheel scrolling is not applied here: it is reported with ``WheelScrolled``
    so the chart pane can lead.
    """

    class ScrollChanged(Message):
        """Emitted when vertical scroll position changes."""

        def __init__(self, scroll_y: float) -> None:
            super().__init__()
            self.scroll_y = scroll_y

    class WheelScrolled(Message):
        """Emitted for a mouse wheel notch over the grid."""

        def __init__(self, delta: float) -> None:
            super().__init__()
            self.delta = delta

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        super().watch_scroll_y(old_value, new_value)
        self.post_message(self.ScrollChanged(new_value))

    def on_mouse_scroll_down(self, event: MouseScrollDown) -> None:
        event.prevent_default()
        event.stop()
        self.post_message(self.WheelScrolled(WHEEL_STEP))

    def on_mouse_scroll_up(self, event: MouseScrollUp) -> None:
        event.prevent_default()
        event.stop()
        self.post_message(self.WheelScrolled(-WHEEL_STEP))


class TaskGrid(Container):
    """Grid of visible tasks: #, Task, Start, End. Group heads carry a fold caret."""

    DEFAULT_CSS = """
    TaskGrid {
        width: auto;
        height: 1fr;
    }
    TaskGrid #grid-toolbar {
        height: 1;
    }
    TaskGrid SyncedDataTable {
        width: auto;
        height: 1fr;
        margin-top: 2;
    }
    """

    class GroupToggled(Message):
        """Emitted when Enter is pressed on a group head."""

        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id

    class CursorRowChanged(Message):
        """Emitted when the cursor row changes (for chart highlight sync)."""

        def __init__(self, row_index: int, task_id: str) -> None:
            super().__init__()
            self.row_index = row_index
            self.task_id = task_id

    def __init__(self, columns: ColumnWidths | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._columns = columns or ColumnWidths()
        self._layout = ChartLayout()

    def compose(self) -> ComposeResult:
        yield GanttToolbar(show_zoom=False, id="grid-toolbar")
        yield SyncedDataTable(id="grid-table", cursor_type="row")

    def on_mount(self) -> None:
        self._rebuild_table()

    @property
    def table(self) -> SyncedDataTable:
        return self.query_one("#grid-table", SyncedDataTable)

    @property
    def rows(self) -> tuple[TaskLayout, ...]:
        return self._layout.rows

    def set_columns(self, columns: ColumnWidths) -> None:
        self._columns = columns
        self._rebuild_table()

    def update_layout(self, layout: ChartLayout) -> None:
        saved_task_id = self.highlighted_task_id
        self._layout = layout
        self._rebuild_table(saved_task_id)

    def _rebuild_table(self, saved_task_id: str | None = None) -> None:
        if not self.is_mounted:
            return
        table = self.table

        table.clear(columns=True)
        widths = column_cells(self._columns)
        for col_id, label in COLUMN_LABELS.items():
            table.add_column(label, key=col_id, width=widths[col_id])

        lines = raster.lines_per_row(self._layout)
        for row in self._layout.rows:
            table.add_row(*self._make_row(row, lines), key=row.task.id, height=lines)

        if saved_task_id:
            for index, row in enumerate(self._layout.rows):
                if row.task.id == saved_task_id:
                    table.move_cursor(row=index, animate=False)
                    break

    def _make_row(self, row: TaskLayout, lines: int) -> list[Text]:
        # Text sits on the bar line of the row
        pad = "\n" * raster.bar_line(0, lines)
        task = row.task
        name = Text(pad)
        if task.is_group_head:
            state = self._layout.visibility.get(task.id)
            caret = GROUP_ICONS[state] if state is not None else " "
            dark = is_dark(self)
            name.append(f"{caret} {task.name}", style=f"bold {theme.GROUP_ROW.resolve(dark)}")
        else:
            name.append(f"    {task.name}")
        start = row.timing.start_label if row.timing else ""
        end = row.timing.end_label if row.timing else ""
        return [Text(pad + task.id), name, Text(pad + start), Text(pad + end)]

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        row_key = event.row_key
        if row_key and row_key.value:
            self.post_message(self.CursorRowChanged(event.cursor_row, str(row_key.value)))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        row_key = event.row_key
        if row_key and row_key.value:
            task_id = str(row_key.value)
            if self._layout.visibility.get(task_id) is not None:
                self.post_message(self.GroupToggled(task_id))

    @property
    def highlighted_task_id(self) -> str | None:
        if not self.is_mounted:
            return None
        table = self.table
        rows = self._layout.rows
        if table.row_count and table.cursor_row is not None and 0 <= table.cursor_row < len(rows):
            return rows[table.cursor_row].task.id
        return None
