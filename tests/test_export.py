"""Tests for export functionality (JSON and SVG)."""

import json
from datetime import date, datetime
from xml.etree import ElementTree

import pytest

from tui_gantt.chart import GanttChartModel
from tui_gantt.export import export_layout_json, export_svg, layout_to_dict, render_svg
from tui_gantt.models import ChartConfig, ChartLayout, Connection, ConnectionType, Task

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def layout():
    tasks = [
        Task("g", "Design & build", start=datetime(2026, 3, 2), end=datetime(2026, 3, 12)),
        Task("a", "Draft <v1>", start=datetime(2026, 3, 2), end=datetime(2026, 3, 6),
             parent="g", completed=50),
        Task("b", "Review", start=datetime(2026, 3, 9), end=datetime(2026, 3, 12), parent="g",
             connections=(Connection("a", ConnectionType.FS),)),
        Task("n", "Someday"),
    ]
    chart = GanttChartModel("export", tasks, config=ChartConfig(zoom_level=1), today=date(2026, 3, 4))
    return chart.relayout(800)


class TestLayoutToDict:
    def test_top_level(self, layout):
        data = layout_to_dict(layout)
        assert data["zoom_level"] == 1
        assert data["day_width"] == 30
        assert data["range"] == {"min_date": "2026-03-01", "max_date": "2026-03-13", "num_days": 13}
        assert len(data["days"]) == 13
        assert data["days_until_today"] == 3
        assert data["visibility"] == {"g": "expanded", "n": "expanded"}

    def test_rows(self, layout):
        rows = layout_to_dict(layout)["rows"]
        assert [r["id"] for r in rows] == ["g", "a", "b", "n"]
        assert rows[1]["start"] == "03/02/2026"
        assert rows[1]["bar"] == {"left": 30, "width": 120, "vertical_center": 36}
        assert "bar" not in rows[3]

    def test_connectors(self, layout):
        (connector,) = layout_to_dict(layout)["connectors"]
        assert connector["source"] == "a"
        assert connector["target"] == "b"
        assert connector["type"] == "FS"
        assert connector["path"].startswith("M30,36 ")

    def test_headers_one_cell_per_day(self, layout):
        header = layout_to_dict(layout)["header"]
        assert len(header["major"]) == len(header["minor"]) == 13

    def test_empty_layout(self):
        data = layout_to_dict(ChartLayout())
        assert data["range"] is None
        assert data["rows"] == []

    def test_json_file(self, layout, tmp_path):
        path = tmp_path / "chart.json"
        export_layout_json(layout, path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data["rows"]) == 4


class TestSvg:
    def test_is_valid_xml(self, layout):
        root = ElementTree.fromstring(render_svg(layout))
        assert root.tag == f"{SVG_NS}svg"

    def test_names_escaped(self, layout):
        svg = render_svg(layout)
        assert "Draft &lt;v1&gt;" in svg
        assert "Design &amp; build" in svg

    def test_connector_has_arrowhead(self, layout):
        root = ElementTree.fromstring(render_svg(layout))
        assert root.find(f".//{SVG_NS}marker[@id='arrowhead']") is not None
        paths = [p for p in root.iter(f"{SVG_NS}path") if p.get("class") == "connector"]
        assert len(paths) == 1
        assert paths[0].get("marker-end") == "url(#arrowhead)"
        assert paths[0].get("d") == layout.routes[0].svg_path()

    def test_one_bar_per_dated_task(self, layout):
        root = ElementTree.fromstring(render_svg(layout))
        bars = [r for r in root.iter(f"{SVG_NS}rect") if r.get("class", "").startswith("bar")]
        assert len(bars) == 3
        progress = [r for r in root.iter(f"{SVG_NS}rect") if r.get("class") == "progress"]
        assert len(progress) == 1
        assert progress[0].get("width") == "60"

    def test_today_line(self, layout):
        root = ElementTree.fromstring(render_svg(layout))
        today = [line for line in root.iter(f"{SVG_NS}line") if line.get("class") == "today"]
        assert today[0].get("x1") == "90"

    def test_svg_file(self, layout, tmp_path):
        path = tmp_path / "chart.svg"
        export_svg(layout, path)
        assert path.read_text(encoding="utf-8").startswith("<svg")
