"""Command Palette provider for TUI Gantt."""

from __future__ import annotations

from dataclasses import dataclass

from textual.command import Hit, Hits, Provider


@dataclass(frozen=True)
class CommandDef:
    """A single command entry for the palette."""

    display: str
    action: str
    help: str = ""
    category: str = ""


COMMANDS: list[CommandDef] = [
    # -- Chart --
    CommandDef("Fold/Unfold Group", "toggle_group", "Toggle the group at the cursor (Space)", "Chart"),
    CommandDef("Expand All Groups", "expand_all", "Show every task (E)", "Chart"),
    CommandDef("Collapse All Groups", "collapse_all", "Show group heads only (C)", "Chart"),
    CommandDef("Zoom In", "zoom_in", "Wider days, finer labels (+)", "Zoom"),
    CommandDef("Zoom Out", "zoom_out", "Narrower days, down to fit (-)", "Zoom"),
    CommandDef("Zoom: Fit", "zoom_level(0)", "Fit the whole range to the pane", "Zoom"),
    CommandDef("Go to Today", "go_today", "Scroll the chart to today (t)", "Chart"),
    # -- File --
    CommandDef("Reload Tasks", "reload", "Re-read the task file (r)", "File"),
    CommandDef("Init Theme", "init_theme", "Copy default theme to project (.tui-gantt/theme.yaml)", "File"),
    CommandDef("Quit", "quit_app", "Quit application (q)", "File"),
    # -- View --
    CommandDef("Help", "help", "Show keybindings (?)", "View"),
    CommandDef("Warnings", "warnings", "Show task file warnings (!)", "View"),
]


class GanttCommandProvider(Provider):
    """Textual Command Palette provider for TUI Gantt actions."""

    async def discover(self) -> Hits:
        """Yield all commands."""
        for cmd in COMMANDS:
            yield Hit(
                1.0,
                cmd.display,
                self._make_callback(cmd.action),
                help=cmd.help,
            )

    async def search(self, query: str) -> Hits:
        """Search commands with fuzzy matching."""
        lowered = query.lower()
        for cmd in COMMANDS:
            searchable = f"{cmd.display} {cmd.help} {cmd.category}".lower()
            if self._fuzzy_match(lowered, searchable):
                yield Hit(
                    self._score(lowered, cmd.display.lower()),
                    cmd.display,
                    self._make_callback(cmd.action),
                    help=cmd.help,
                )

    def _make_callback(self, action: str):
        """Create a callback that runs the given action on the app."""
        async def callback() -> None:
            await self.app.run_action(action)
        return callback

    @staticmethod
    def _fuzzy_match(query: str, text: str) -> bool:
        """Check if all characters of query appear in order in text."""
        it = iter(text)
        return all(ch in it for ch in query)

    @staticmethod
    def _score(query: str, text: str) -> float:
        """Score a match: higher is better (closer to 1.0)."""
        if not query:
            return 0.5
        if text == query:
            return 1.0
        if text.startswith(query):
            return 0.9
        if query in text:
            return 0.8
        return 0.7
