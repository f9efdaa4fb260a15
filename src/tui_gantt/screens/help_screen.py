"""Help modal screen showing keybindings."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option


HELP_ITEMS: list[tuple[str, str, str]] = [
    # (key_display, description, action_name_or_empty)
    # -- Navigation --
    ("↑ / ↓", "Previous / next task", ""),
    ("Enter", "Fold/unfold the group under the cursor", ""),
    ("Esc", "Close modal", ""),
    # -- Groups --
    ("Space", "Fold/unfold toggle", "toggle_group"),
    ("E", "Expand all groups", "expand_all"),
    ("C", "Collapse all groups", "collapse_all"),
    # -- Zoom --
    ("+", "Zoom in", "zoom_in"),
    ("-", "Zoom out", "zoom_out"),
    ("t", "Go to today", "go_today"),
    # -- File --
    ("r", "Reload task file", "reload"),
    ("!", "Task file warnings", "warnings"),
    ("?", "This help", ""),
    ("q", "Quit", "quit_app"),
    # -- CLI --
    ("--demo", "Launch demo mode (tui-gantt --demo)", ""),
    ("--zoom N", "Start at zoom level N (0-3)", ""),
    # -- Cmd Palette --
    ("Cmd Palette", "Init theme (copy default to project)", "init_theme"),
]


class HelpScreen(ModalScreen[str]):
    """Modal screen showing keybindings as a selectable list."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("question_mark", "close", "Close"),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    #help-container {
        width: 72;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }
    #help-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #help-list {
        height: auto;
        max-height: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-container"):
            yield Static(
                "[bold]Keybindings[/bold]  (Enter to execute)", id="help-title"
            )
            ol = OptionList(id="help-list")
            for key_display, desc, action in HELP_ITEMS:
                label = f"  {key_display:<14} {desc}"
                ol.add_option(Option(label, id=action if action else None))
            yield ol

    def on_mount(self) -> None:
        self.set_timer(0.01, self._focus_list)

    def _focus_list(self) -> None:
        self.query_one("#help-list", OptionList).focus()

    def on_option_list_option_selected(
        self, event: OptionList.OptionSelected
    ) -> None:
        self.dismiss(event.option.id or "")

    def action_close(self) -> None:
        self.dismiss("")
