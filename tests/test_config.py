"""Tests for project configuration."""

from tui_gantt.config import load_config, save_config
from tui_gantt.models import ChartConfig, ColumnWidths


def write_config(tmp_path, text):
    config_dir = tmp_path / ".tui-gantt"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(text, encoding="utf-8")


class TestLoadConfig:
    def test_load_nonexistent(self, tmp_path):
        config = load_config(tmp_path)
        assert config == ChartConfig()
        assert config.columns.row_width == 35 + 230 + 90 * 2

    def test_load_existing(self, tmp_path):
        write_config(tmp_path, """
[chart]
zoom_level = 2
row_height = 48
resize_delay = 0.2
theme_name = "textual-light"

[columns]
id = 40
name = 200
date = 100
""")
        config = load_config(tmp_path)
        assert config.zoom_level == 2
        assert config.row_height == 48
        assert config.resize_delay == 0.2
        assert config.theme_name == "textual-light"
        assert config.columns == ColumnWidths(id=40, name=200, date=100)

    def test_partial_file_keeps_defaults(self, tmp_path):
        write_config(tmp_path, "[chart]\nzoom_level = 1\n")
        config = load_config(tmp_path)
        assert config.zoom_level == 1
        assert config.row_height == 24
        assert config.columns == ColumnWidths()

    def test_zoom_clamped(self, tmp_path):
        write_config(tmp_path, "[chart]\nzoom_level = 9\n")
        assert load_config(tmp_path).zoom_level == 3

    def test_bad_values_fall_back(self, tmp_path):
        write_config(tmp_path, """
[chart]
row_height = "tall"
resize_delay = "soon"

[columns]
name = 2
""")
        config = load_config(tmp_path)
        assert config.row_height == 24
        assert config.resize_delay == 0.5
        assert config.columns.name == 10

    def test_unparsable_file(self, tmp_path):
        write_config(tmp_path, "[chart\nzoom_level = ")
        assert load_config(tmp_path) == ChartConfig()


class TestSaveConfig:
    def test_save_creates_directory(self, tmp_path):
        save_config(tmp_path, ChartConfig())
        assert (tmp_path / ".tui-gantt" / "config.toml").exists()

    def test_roundtrip(self, tmp_path):
        config = ChartConfig(zoom_level=3, row_height=48, resize_delay=1.0,
                             columns=ColumnWidths(id=50, name=300, date=80))
        save_config(tmp_path, config)
        assert load_config(tmp_path) == config


class TestRowHeight:
    def test_snaps_to_whole_rows(self, tmp_path):
        write_config(tmp_path, "[chart]\nrow_height = 30\n")
        assert load_config(tmp_path).row_height == 24

    def test_rounds_up_past_half(self, tmp_path):
        write_config(tmp_path, "[chart]\nrow_height = 40\n")
        assert load_config(tmp_path).row_height == 48

    def test_minimum_one_row(self, tmp_path):
        write_config(tmp_path, "[chart]\nrow_height = 5\n")
        assert load_config(tmp_path).row_height == 24

    def test_default_theme(self, tmp_path):
        assert load_config(tmp_path).theme_name == "textual-dark"
