"""Tests for the YAML color theme."""

import pytest

from tui_gantt import theme
from tui_gantt.theme import ColorPair, init_theme, load_theme


@pytest.fixture(autouse=True)
def reset_theme():
    yield
    load_theme()


class TestColorPair:
    def test_resolve(self):
        pair = ColorPair("white", "black")
        assert pair.resolve(True) == "white"
        assert pair.resolve(False) == "black"


class TestLoadTheme:
    def test_defaults(self):
        load_theme()
        assert theme.BAR == ColorPair("#5f87af", "#4a78a8")
        assert isinstance(theme.STATUSBAR_DEMO, ColorPair)

    def test_project_override_merges(self, tmp_path):
        override = tmp_path / ".tui-gantt" / "theme.yaml"
        override.parent.mkdir()
        override.write_text('gantt:\n  bar:\n    dark: "red"\n', encoding="utf-8")
        load_theme(tmp_path)
        assert theme.BAR == ColorPair("red", "#4a78a8")
        assert theme.CONNECTOR.dark == "#a8a8a8"

    def test_broken_override_ignored(self, tmp_path):
        override = tmp_path / ".tui-gantt" / "theme.yaml"
        override.parent.mkdir()
        override.write_text("gantt: [unclosed", encoding="utf-8")
        load_theme(tmp_path)
        assert theme.BAR.dark == "#5f87af"


class TestInitTheme:
    def test_copies_default(self, tmp_path):
        dest = init_theme(tmp_path)
        assert dest == tmp_path / ".tui-gantt" / "theme.yaml"
        assert "bar_progress" in dest.read_text(encoding="utf-8")

    def test_refuses_to_overwrite(self, tmp_path):
        init_theme(tmp_path)
        with pytest.raises(FileExistsError):
            init_theme(tmp_path)
