"""Project configuration management using tomlkit."""

from __future__ import annotations

import logging
from pathlib import Path

import tomlkit

from tui_gantt.models import ChartConfig, ColumnWidths
from tui_gantt.zoom import clamp_zoom

logger = logging.getLogger(__name__)

CONFIG_DIR = ".tui-gantt"
CONFIG_FILE = "config.toml"

ROW_HEIGHT_STEP = 24  # px, two terminal lines
DEFAULT_THEME = "textual-dark"
MIN_COLUMN_WIDTH = 10


def _get_config_path(project_dir: Path) -> Path:
    return project_dir / CONFIG_DIR / CONFIG_FILE


def _int(value: object, default: int, minimum: int) -> int:
    try:
        return max(minimum, int(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _row_height(value: object) -> int:
    """Snap to a whole number of two-line rows."""
    height = _int(value, ROW_HEIGHT_STEP, ROW_HEIGHT_STEP)
    return max(ROW_HEIGHT_STEP, round(height / ROW_HEIGHT_STEP) * ROW_HEIGHT_STEP)


def load_config(project_dir: Path) -> ChartConfig:
    """Load chart configuration from .tui-gantt/config.toml.

    Missing or unparsable files give the defaults; bad values fall back
    per key.
    """
    config_path = _get_config_path(project_dir)
    config = ChartConfig()

    if not config_path.exists():
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        doc = tomlkit.parse(content)
    except Exception as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return config

    # [chart]
    chart_section = doc.get("chart", {})
    config.zoom_level = clamp_zoom(_int(chart_section.get("zoom_level", 0), 0, 0))
    config.row_height = _row_height(chart_section.get("row_height", ROW_HEIGHT_STEP))
    try:
        config.resize_delay = max(0.0, float(chart_section.get("resize_delay", 0.5)))
    except (TypeError, ValueError):
        config.resize_delay = 0.5
    config.theme_name = str(chart_section.get("theme_name", DEFAULT_THEME))

    # [columns]
    columns_section = doc.get("columns", {})
    defaults = ColumnWidths()
    config.columns = ColumnWidths(
        id=_int(columns_section.get("id", defaults.id), defaults.id, MIN_COLUMN_WIDTH),
        name=_int(columns_section.get("name", defaults.name), defaults.name, MIN_COLUMN_WIDTH),
        date=_int(columns_section.get("date", defaults.date), defaults.date, MIN_COLUMN_WIDTH),
    )
    return config


def save_config(project_dir: Path, config: ChartConfig) -> None:
    """Save chart configuration to .tui-gantt/config.toml."""
    config_path = _get_config_path(project_dir)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()

    chart_table = tomlkit.table()
    chart_table.add("zoom_level", config.zoom_level)
    chart_table.add("row_height", config.row_height)
    chart_table.add("resize_delay", config.resize_delay)
    chart_table.add("theme_name", config.theme_name)
    doc.add("chart", chart_table)

    columns_table = tomlkit.table()
    columns_table.add("id", config.columns.id)
    columns_table.add("name", config.columns.name)
    columns_table.add("date", config.columns.date)
    doc.add("columns", columns_table)

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
