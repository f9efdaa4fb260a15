"""Task file warnings modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from rich.markup import escape

from tui_gantt import theme
from tui_gantt.models import LoadWarning


class WarningScreen(ModalScreen[None]):
    """Modal screen listing records that loaded with problems."""

    BINDINGS = [("escape", "dismiss", "Close")]

    DEFAULT_CSS = """
    WarningScreen {
        align: center middle;
    }
    #warning-container {
        width: 70;
        max-height: 80%;
        background: $surface;
        border: thick $warning;
        padding: 1 2;
    }
    #warning-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, warnings: list[LoadWarning]) -> None:
        super().__init__()
        self.warnings = warnings

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="warning-container"):
            yield Static(
                f"[bold]Task File Warnings ({len(self.warnings)})[/bold]",
                id="warning-title",
            )
            if not self.warnings:
                yield Static("No warnings.")
            else:
                color = theme.STATUSBAR_WARNING.dark
                for w in self.warnings:
                    yield Static(f"[{color}]⚠[/{color}] {escape(str(w))}", classes="warning-item")
