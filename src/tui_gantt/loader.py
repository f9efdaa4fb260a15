"""Load task records from JSON into Task objects."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from tui_gantt.dates import from_epoch_millis, to_epoch_millis
from tui_gantt.models import Connection, ConnectionType, LoadWarning, Task

logger = logging.getLogger(__name__)


class TaskFileError(Exception):
    """The task file cannot be used at all (unreadable, not JSON, not a list)."""


@dataclass
class TaskFile:
    """Parsed tasks plus the recoverable problems found along the way."""

    tasks: list[Task] = field(default_factory=list)
    warnings: list[LoadWarning] = field(default_factory=list)
    path: Path | None = None


def _parse_instant(value: Any, name: str, source: str, index: int, warnings: list[LoadWarning]) -> datetime | None:
    """Parse a millisecond epoch instant (or an ISO-8601 string)."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        warnings.append(LoadWarning(source, index, f"Invalid {name}: {value!r}"))
        return None
    if isinstance(value, (int, float)):
        try:
            return from_epoch_millis(value)
        except (OverflowError, OSError, ValueError):
            warnings.append(LoadWarning(source, index, f"Out of range {name}: {value!r}"))
            return None
    text = str(value).strip()
    try:
        return from_epoch_millis(float(text))
    except (OverflowError, OSError, ValueError):
        pass
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        warnings.append(LoadWarning(source, index, f"Invalid {name}: {value!r}"))
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_completed(value: Any, source: str, index: int, warnings: list[LoadWarning]) -> int:
    if value is None or value == "":
        return 0
    try:
        completed = int(float(value))
    except (TypeError, ValueError):
        warnings.append(LoadWarning(source, index, f"Invalid completed value: {value!r}, defaulting to 0"))
        return 0
    return max(0, min(100, completed))


def _parse_connections(value: Any, source: str, index: int, warnings: list[LoadWarning]) -> tuple[Connection, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        warnings.append(LoadWarning(source, index, "'connect' is not a list, ignoring"))
        return ()
    connections: list[Connection] = []
    for item in value:
        if not isinstance(item, dict) or item.get("to") in (None, ""):
            warnings.append(LoadWarning(source, index, f"Connection without target: {item!r}"))
            continue
        raw_type = str(item.get("type") or ConnectionType.SF.value).strip().upper()
        try:
            connection_type = ConnectionType(raw_type)
        except ValueError:
            warnings.append(LoadWarning(source, index, f"Unknown connection type: {raw_type!r}"))
            continue
        connections.append(Connection(to=str(item["to"]), type=connection_type))
    return tuple(connections)


def parse_tasks(records: Iterable[Any], source: str = "<data>") -> TaskFile:
    """Convert raw task records into Tasks.

    Problems with single fields become warnings; records without an id and
    duplicate ids are skipped.
    """
    result = TaskFile()
    warnings = result.warnings
    seen: set[str] = set()

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            warnings.append(LoadWarning(source, index, "Record is not an object, skipping"))
            continue
        raw_id = record.get("id")
        if raw_id is None or str(raw_id).strip() == "":
            warnings.append(LoadWarning(source, index, "Record without id, skipping"))
            continue
        task_id = str(raw_id).strip()
        if task_id in seen:
            warnings.append(LoadWarning(source, index, f"Duplicate id {task_id!r}, skipping"))
            continue
        seen.add(task_id)

        parent = record.get("parent")
        result.tasks.append(Task(
            id=task_id,
            name=str(record.get("name", "")),
            start=_parse_instant(record.get("start"), "start", source, index, warnings),
            end=_parse_instant(record.get("end"), "end", source, index, warnings),
            parent=None if parent is None or str(parent).strip() == "" else str(parent).strip(),
            completed=_parse_completed(record.get("completed"), source, index, warnings),
            connections=_parse_connections(record.get("connect"), source, index, warnings),
        ))

    group_ids = {t.id for t in result.tasks if t.is_group_head}
    for index, task in enumerate(result.tasks):
        if task.parent is not None and task.parent not in group_ids:
            warnings.append(LoadWarning(source, index, f"Parent {task.parent!r} is not a group head"))

    for warning in warnings:
        logger.warning("%s", warning)
    return result


def load_task_file(path: Path) -> TaskFile:
    """Read a JSON array of task records from *path*."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TaskFileError(f"Cannot read {path}: {e}") from e
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise TaskFileError(f"{path} is not valid JSON: {e}") from e
    if isinstance(data, dict) and isinstance(data.get("tasks"), list):
        data = data["tasks"]
    if not isinstance(data, list):
        raise TaskFileError(f"{path} must contain a list of tasks")

    result = parse_tasks(data, source=path.name)
    result.path = path
    logger.info("Loaded %d tasks from %s (%d warnings)", len(result.tasks), path, len(result.warnings))
    return result


def task_to_record(task: Task) -> dict[str, Any]:
    """Inverse of parse_tasks for one task (millisecond instants)."""
    record: dict[str, Any] = {
        "id": task.id,
        "name": task.name,
        "start": to_epoch_millis(task.start) if task.start else None,
        "end": to_epoch_millis(task.end) if task.end else None,
        "parent": task.parent,
        "completed": task.completed,
        "connect": [{"to": c.to, "type": c.type.value} for c in task.connections],
    }
    return record


def save_task_file(tasks: Iterable[Task], path: Path) -> None:
    path.write_text(
        json.dumps([task_to_record(t) for t in tasks], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
