"""Export a chart layout to JSON and SVG."""

from __future__ import annotations

import json
from html import escape
from pathlib import Path
from typing import Any

from tui_gantt.models import ChartLayout, ColumnWidths, ConnectorRoute, HeaderCell, TaskLayout

HEADER_ROW_HEIGHT = 20
SPLITTER_WIDTH = 7
BAR_HEIGHT_RATIO = 0.5

_SVG_STYLE = """
    .grid-text { font: 12px sans-serif; fill: rgb(40, 40, 40); }
    .group-text { font: bold 12px sans-serif; fill: rgb(40, 40, 40); }
    .header-text { font: 11px sans-serif; fill: rgb(60, 60, 60); }
    .weekend { fill: rgb(248, 248, 248); }
    .border { stroke: rgb(176, 176, 176); stroke-width: 1; }
    .bar { fill: rgb(95, 135, 175); }
    .bar.group { fill: rgb(108, 108, 108); }
    .progress { fill: rgb(46, 139, 87); }
    .today { stroke: rgb(215, 0, 0); stroke-width: 1; }
    .connector { fill: none; stroke: rgb(100, 100, 100); stroke-width: 1; }
"""

_ARROWHEAD_DEF = (
    '<defs><marker id="arrowhead" markerWidth="10" markerHeight="10" refX="10" refY="5" orient="auto">'
    '<path d="M0,0 L10,5 L0,10 L2,5 Z" fill="rgb(100, 100, 100)" /></marker></defs>'
)


def _route_to_dict(route: ConnectorRoute) -> dict[str, Any]:
    return {
        "source": route.source_id,
        "target": route.target_id,
        "type": route.type.value,
        "start": {"left": route.start.left, "top": route.start.top},
        "end": {"left": route.end.left, "top": route.end.top},
        "moves": [{"axis": m.axis, "value": m.value} for m in route.moves],
        "path": route.svg_path(),
    }


def _row_to_dict(row: TaskLayout) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": row.task.id,
        "name": row.task.name,
        "row": row.row,
        "parent": row.task.parent,
        "completed": row.task.completed,
    }
    if row.timing is not None:
        d.update({
            "start": row.timing.start_label,
            "end": row.timing.end_label,
            "days_to_start": row.timing.days_to_start,
            "duration_days": row.timing.duration_days,
        })
    if row.bar is not None:
        d["bar"] = {
            "left": row.bar.left,
            "width": row.bar.width,
            "vertical_center": row.bar.vertical_center,
        }
    return d


def _header_to_list(cells: tuple[HeaderCell, ...]) -> list[dict[str, Any]]:
    return [
        {"text": c.text, "border_left": c.border_left, "border_right": c.border_right}
        for c in cells
    ]


def layout_to_dict(layout: ChartLayout) -> dict[str, Any]:
    """Declarative description of a layout, ready for any renderer."""
    data: dict[str, Any] = {
        "zoom_level": layout.zoom_level,
        "day_width": layout.day_width,
        "row_height": layout.row_height,
        "chart_width": layout.chart_width,
        "range": None,
        "days": [],
        "days_until_today": layout.days_until_today,
        "header": {
            "major": _header_to_list(layout.major_header),
            "minor": _header_to_list(layout.minor_header),
        },
        "visibility": {k: v.value for k, v in layout.visibility.items()},
        "rows": [_row_to_dict(r) for r in layout.rows],
        "connectors": [_route_to_dict(r) for r in layout.routes],
    }
    if layout.range is not None:
        data["range"] = {
            "min_date": layout.range.min_date.date().isoformat(),
            "max_date": layout.range.max_date.date().isoformat(),
            "num_days": layout.range.num_days,
        }
        data["days"] = [
            {
                "date": d.calendar_date.isoformat(),
                "epoch": d.epoch_millis,
                "day": d.day_of_month,
                "weekday_code": d.weekday_code,
                "weekday_short": d.weekday_short,
                "weekday_long": d.weekday_long,
                "month_short": d.month_short,
                "month_long": d.month_long,
                "year": d.year,
            }
            for d in layout.days
        ]
    return data


def export_layout_json(layout: ChartLayout, output_path: Path) -> None:
    """Export the layout to a JSON file."""
    output_path.write_text(
        json.dumps(layout_to_dict(layout), indent=2, ensure_ascii=False), encoding="utf-8"
    )


def _grid_svg(layout: ChartLayout, columns: ColumnWidths, top: int) -> list[str]:
    parts: list[str] = []
    header_y = HEADER_ROW_HEIGHT * 2 - 6
    x_name = columns.id
    x_start = columns.id + columns.name
    x_end = x_start + columns.date
    for x, label in ((4, "#"), (x_name + 4, "Task"), (x_start + 4, "Start"), (x_end + 4, "End")):
        parts.append(f'<text class="header-text" x="{x}" y="{header_y}">{label}</text>')
    for row in layout.rows:
        y = top + row.row * layout.row_height + layout.row_height / 2 + 4
        cls = "group-text" if row.task.is_group_head else "grid-text"
        indent = 0 if row.task.is_group_head else 12
        start = row.timing.start_label if row.timing else ""
        end = row.timing.end_label if row.timing else ""
        parts.append(f'<text class="grid-text" x="4" y="{y:g}">{escape(row.task.id)}</text>')
        parts.append(f'<text class="{cls}" x="{x_name + 4 + indent}" y="{y:g}">{escape(row.task.name)}</text>')
        parts.append(f'<text class="grid-text" x="{x_start + 4}" y="{y:g}">{start}</text>')
        parts.append(f'<text class="grid-text" x="{x_end + 4}" y="{y:g}">{end}</text>')
    return parts


def _header_svg(cells: tuple[HeaderCell, ...], day_width: float, y: int) -> list[str]:
    parts: list[str] = []
    for i, cell in enumerate(cells):
        x = i * day_width
        if cell.border_left:
            parts.append(f'<line class="border" x1="{x:g}" y1="{y}" x2="{x:g}" y2="{y + HEADER_ROW_HEIGHT}" />')
        if cell.border_right:
            xr = x + day_width
            parts.append(f'<line class="border" x1="{xr:g}" y1="{y}" x2="{xr:g}" y2="{y + HEADER_ROW_HEIGHT}" />')
        if cell.text:
            parts.append(
                f'<text class="header-text" x="{x + 3:g}" y="{y + HEADER_ROW_HEIGHT - 6}">{escape(cell.text)}</text>'
            )
    return parts


def _chart_svg(layout: ChartLayout, top: int) -> list[str]:
    parts: list[str] = []
    height = layout.chart_height
    for i, day in enumerate(layout.days):
        if day.is_weekend:
            parts.append(
                f'<rect class="weekend" x="{i * layout.day_width:g}" y="{top}" '
                f'width="{layout.day_width:g}" height="{height}" />'
            )
    parts.append(f'<line class="border" x1="0" y1="{top}" x2="0" y2="{top + height}" />')
    right = layout.chart_width
    parts.append(f'<line class="border" x1="{right:g}" y1="{top}" x2="{right:g}" y2="{top + height}" />')

    bar_height = layout.row_height * BAR_HEIGHT_RATIO
    for row in layout.rows:
        if row.bar is None:
            continue
        y = top + row.bar.vertical_center - bar_height / 2
        cls = "bar group" if row.task.is_group_head else "bar"
        title = escape(row.task.name)
        parts.append(
            f'<rect class="{cls}" x="{row.bar.left:g}" y="{y:g}" width="{row.bar.width:g}" '
            f'height="{bar_height:g}"><title>{title}</title></rect>'
        )
        if row.task.completed:
            done = row.bar.width * row.task.completed / 100
            parts.append(
                f'<rect class="progress" x="{row.bar.left:g}" y="{y + bar_height - 3:g}" '
                f'width="{done:g}" height="3" />'
            )

    if layout.today_offset is not None:
        x = layout.today_offset
        parts.append(f'<line class="today" x1="{x:g}" y1="{top}" x2="{x:g}" y2="{top + height}" />')

    parts.append(f'<g transform="translate(0,{top})">')
    for route in layout.routes:
        parts.append(f'<path class="connector" d="{route.svg_path()}" marker-end="url(#arrowhead)" />')
    parts.append("</g>")
    return parts


def render_svg(layout: ChartLayout, columns: ColumnWidths | None = None) -> str:
    """Draw both panes (task grid and chart) as one SVG document."""
    columns = columns or ColumnWidths()
    grid_width = columns.row_width
    chart_left = grid_width + SPLITTER_WIDTH
    top = HEADER_ROW_HEIGHT * 2
    width = chart_left + layout.chart_width
    height = top + layout.chart_height

    lines: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height}" '
        f'viewBox="0 0 {width:g} {height}">',
        f"<style>{_SVG_STYLE}</style>",
        _ARROWHEAD_DEF,
        '<g class="grid">',
    ]
    lines.extend(_grid_svg(layout, columns, top))
    lines.append("</g>")
    lines.append(f'<g class="chart" transform="translate({chart_left},0)">')
    lines.extend(_header_svg(layout.major_header, layout.day_width, 0))
    lines.extend(_header_svg(layout.minor_header, layout.day_width, HEADER_ROW_HEIGHT))
    lines.extend(_chart_svg(layout, top))
    lines.append("</g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def export_svg(layout: ChartLayout, output_path: Path, columns: ColumnWidths | None = None) -> None:
    """Export the layout to an SVG file."""
    output_path.write_text(render_svg(layout, columns), encoding="utf-8")
