"""YAML-based centralized color system for TUI Gantt.

Loads colors from default_theme.yaml and optionally merges
project-level overrides from {project_dir}/.tui-gantt/theme.yaml.
"""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path
from typing import NamedTuple

import yaml

from tui_gantt.config import CONFIG_DIR

logger = logging.getLogger(__name__)

THEME_FILE = "theme.yaml"
_DEFAULT_THEME_PATH = Path(__file__).parent / "default_theme.yaml"


class ColorPair(NamedTuple):
    """A pair of colors for dark and light themes."""

    dark: str
    light: str

    def resolve(self, is_dark: bool) -> str:
        return self.dark if is_dark else self.light


# ── Module-level variables (populated by _apply) ──────────────────

BAR: ColorPair
BAR_GROUP: ColorPair
BAR_PROGRESS: ColorPair
CONNECTOR: ColorPair
TODAY_MARKER: ColorPair
WEEKEND_BG: ColorPair
BASE_BG: ColorPair
HIGHLIGHT_BG: ColorPair
BORDER: ColorPair
HEADER: ColorPair

GROUP_ROW: ColorPair
STATUSBAR_WARNING: ColorPair
STATUSBAR_DEMO: ColorPair


# ── Internal helpers ──────────────────────────────────────────────

def _load_yaml(path: Path) -> dict:
    """Load a YAML file and return a dict (empty dict on error)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Cannot load theme %s: %s", path, e)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict)."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _pair(d: object) -> ColorPair:
    """Convert a {dark: ..., light: ...} dict to a ColorPair."""
    if not isinstance(d, dict):
        return ColorPair("white", "black")
    return ColorPair(str(d.get("dark", "white")), str(d.get("light", "black")))


def _apply(data: dict) -> None:
    """Map parsed YAML data onto module-level constants."""
    mod = sys.modules[__name__]

    # ── Gantt ──
    gantt = data.get("gantt", {})
    mod.BAR = _pair(gantt.get("bar", {}))
    mod.BAR_GROUP = _pair(gantt.get("bar_group", {}))
    mod.BAR_PROGRESS = _pair(gantt.get("bar_progress", {}))
    mod.CONNECTOR = _pair(gantt.get("connector", {}))
    mod.TODAY_MARKER = _pair(gantt.get("today_marker", {}))
    mod.WEEKEND_BG = _pair(gantt.get("weekend_bg", {}))
    mod.BASE_BG = _pair(gantt.get("base_bg", {}))
    mod.HIGHLIGHT_BG = _pair(gantt.get("highlight_bg", {}))
    mod.BORDER = _pair(gantt.get("border", {}))
    mod.HEADER = _pair(gantt.get("header", {}))

    # ── UI ──
    ui = data.get("ui", {})
    mod.GROUP_ROW = _pair(ui.get("group_row", {}))
    mod.STATUSBAR_WARNING = _pair(ui.get("statusbar_warning", {}))
    mod.STATUSBAR_DEMO = _pair(ui.get("statusbar_demo", {}))


# ── Public API ────────────────────────────────────────────────────

def init_theme(project_dir: Path) -> Path:
    """Copy default_theme.yaml → {project_dir}/.tui-gantt/theme.yaml.

    Raises FileExistsError if the destination already exists.
    """
    dest = project_dir / CONFIG_DIR / THEME_FILE
    if dest.exists():
        raise FileExistsError(str(dest))
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(_DEFAULT_THEME_PATH, dest)
    return dest


def load_theme(project_dir: Path | None = None) -> None:
    """Load the default theme and optionally merge project overrides."""
    data = _load_yaml(_DEFAULT_THEME_PATH)

    if project_dir is not None:
        override_path = project_dir / CONFIG_DIR / THEME_FILE
        if override_path.is_file():
            override = _load_yaml(override_path)
            if override:
                data = _deep_merge(data, override)

    _apply(data)


# Apply default theme on module import
load_theme()
