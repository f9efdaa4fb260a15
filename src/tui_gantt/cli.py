"""CLI entry point using Click."""

from __future__ import annotations

import logging
from pathlib import Path

import click

DEFAULT_TASK_FILE = "tasks.json"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _DefaultGroup(click.Group):
    """Insert 'run' when the first arg is not a registered subcommand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.no_args_is_help = False  # bare `tui-gantt` runs ./tasks.json

    def invoke(self, ctx):
        # no subcommand left after group options: default to 'run'
        if not ctx._protected_args and not ctx.args:
            ctx._protected_args = ["run"]
        return super().invoke(ctx)

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name and cmd_name in self.commands:
            return super().resolve_command(ctx, args)
        return super().resolve_command(ctx, ["run"] + list(args))


def _configure_logging(log_file: str | None, verbose: bool) -> None:
    """Send log records to a file; the TUI owns the terminal."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


@click.group(cls=_DefaultGroup)
@click.option("--no-color", is_flag=True, help="Disable color output")
@click.option("--demo", is_flag=True, help="Launch with generated demo tasks (read-only)")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write log records to this file")
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level (with --log-file)")
@click.version_option(package_name="tui-gantt")
@click.pass_context
def main(ctx, no_color: bool, demo: bool, log_file: str | None, verbose: bool) -> None:
    """TUI Gantt - Terminal Gantt chart for JSON task lists."""
    _configure_logging(log_file, verbose)
    ctx.ensure_object(dict)
    ctx.obj["no_color"] = no_color
    ctx.obj["demo"] = demo


@main.command()
@click.argument("tasks", default=DEFAULT_TASK_FILE, type=click.Path())
@click.option("--zoom", type=click.IntRange(0, 3), default=None, help="Initial zoom level (0 = fit)")
@click.pass_context
def run(ctx, tasks: str, zoom: int | None) -> None:
    """Open TASKS (a JSON array of task records) in the chart viewer."""
    from tui_gantt.app import GanttApp

    no_color = ctx.obj["no_color"]

    if ctx.obj["demo"]:
        from tui_gantt.demo_data import build_demo_records

        app = GanttApp(no_color=no_color, demo_mode=True, zoom_level=zoom, records=build_demo_records())
    else:
        task_file = Path(tasks).resolve()
        if not task_file.is_file():
            click.echo(f"Error: task file '{task_file}' not found.", err=True)
            click.echo("Run 'tui-gantt init' to create a sample, or 'tui-gantt --demo'.", err=True)
            raise SystemExit(1)
        app = GanttApp(task_file=task_file, no_color=no_color, zoom_level=zoom)
    app.run()


@main.command("export")
@click.argument("tasks", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "svg"]),
    default=None,
    help="Output format (default: from OUTPUT's extension)",
)
@click.option("--width", type=click.FloatRange(min=1), default=None, help="Chart width in pixels for the fit zoom level")
@click.option("--zoom", type=click.IntRange(0, 3), default=None, help="Zoom level (0 = fit)")
def export_cmd(tasks: str, output: str, fmt: str | None, width: float | None, zoom: int | None) -> None:
    """Lay out TASKS and write the result to OUTPUT as JSON or SVG."""
    from tui_gantt.chart import DEFAULT_AVAILABLE_WIDTH, GanttChartModel
    from tui_gantt.config import load_config
    from tui_gantt.export import export_layout_json, export_svg
    from tui_gantt.loader import TaskFileError, load_task_file
    from tui_gantt.sync import RelayoutTrigger

    task_path = Path(tasks).resolve()
    out_path = Path(output)
    if fmt is None:
        fmt = "svg" if out_path.suffix.lower() == ".svg" else "json"

    try:
        task_file = load_task_file(task_path)
    except TaskFileError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    for warning in task_file.warnings:
        click.echo(f"Warning: {warning}", err=True)

    config = load_config(task_path.parent)
    if zoom is not None:
        config.zoom_level = zoom
    model = GanttChartModel("export", task_file.tasks, config=config)
    layout = model.relayout(width or DEFAULT_AVAILABLE_WIDTH, trigger=RelayoutTrigger.LOAD)

    if fmt == "svg":
        export_svg(layout, out_path, config.columns)
    else:
        export_layout_json(layout, out_path)
    click.echo(f"Exported {len(layout.rows)} tasks to {out_path} ({fmt})")


@main.command("init")
@click.argument("path", default=".", type=click.Path(file_okay=False))
def init_cmd(path: str) -> None:
    """Initialize a new chart project (config.toml + sample tasks.json)."""
    from tui_gantt.config import CONFIG_DIR, CONFIG_FILE, save_config
    from tui_gantt.demo_data import build_sample_records
    from tui_gantt.loader import parse_tasks, save_task_file
    from tui_gantt.models import ChartConfig

    project_dir = Path(path).resolve()
    task_path = project_dir / DEFAULT_TASK_FILE
    if task_path.exists():
        click.echo(f"Task file already exists: {task_path}", err=True)
        raise SystemExit(1)

    project_dir.mkdir(parents=True, exist_ok=True)

    save_config(project_dir, ChartConfig())
    click.echo(f"Created {project_dir / CONFIG_DIR / CONFIG_FILE}")

    save_task_file(parse_tasks(build_sample_records()).tasks, task_path)
    click.echo(f"Created {task_path}")

    click.echo(f"\nProject initialized at {project_dir}")
    click.echo(f"Run 'tui-gantt {task_path}' to open the chart.")


@main.command("init-theme")
@click.argument("path", default=".", type=click.Path(file_okay=False))
def init_theme_cmd(path: str) -> None:
    """Copy default theme to .tui-gantt/theme.yaml for customization."""
    from tui_gantt.theme import init_theme

    project_dir = Path(path).resolve()
    if not project_dir.is_dir():
        click.echo(f"Error: '{project_dir}' is not a directory.", err=True)
        raise SystemExit(1)
    try:
        dest = init_theme(project_dir)
    except FileExistsError as e:
        click.echo(f"Already exists: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Created {dest}")
