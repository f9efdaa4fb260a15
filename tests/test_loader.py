"""Tests for loading task records."""

import json
from datetime import datetime

import pytest

from tui_gantt.dates import to_epoch_millis
from tui_gantt.loader import (
    TaskFileError,
    load_task_file,
    parse_tasks,
    save_task_file,
    task_to_record,
)
from tui_gantt.models import Connection, ConnectionType, Task

START = datetime(2026, 3, 10, 9, 30)
END = datetime(2026, 3, 14)


def record(**kwargs):
    base = {"id": "1", "name": "Task"}
    base.update(kwargs)
    return base


class TestParseTasks:
    def test_millisecond_instants(self):
        result = parse_tasks([record(start=to_epoch_millis(START), end=to_epoch_millis(END))])
        task = result.tasks[0]
        assert task.start == START
        assert task.end == END
        assert result.warnings == []

    def test_iso_strings(self):
        result = parse_tasks([record(start="2026-03-10T09:30:00", end="2026-03-14")])
        assert result.tasks[0].start == START
        assert result.tasks[0].end == END

    def test_numeric_string(self):
        result = parse_tasks([record(start=str(to_epoch_millis(START)))])
        assert result.tasks[0].start == START

    def test_ids_become_strings(self):
        result = parse_tasks([{"id": 7, "name": "x", "parent": 3}, {"id": 3, "name": "g"}])
        assert result.tasks[0].id == "7"
        assert result.tasks[0].parent == "3"

    def test_missing_dates_allowed(self):
        result = parse_tasks([record()])
        assert not result.tasks[0].has_dates
        assert result.warnings == []

    def test_invalid_date_warns(self):
        result = parse_tasks([record(start="not a date")])
        assert result.tasks[0].start is None
        assert "Invalid start" in result.warnings[0].message

    def test_completed_clamped(self):
        result = parse_tasks([record(completed=150), record(id="2", completed="abc")])
        assert result.tasks[0].completed == 100
        assert result.tasks[1].completed == 0
        assert len(result.warnings) == 1

    def test_connections(self):
        result = parse_tasks([record(connect=[{"to": 2, "type": "fs"}, {"to": "3"}]),
                              record(id="2"), record(id="3")])
        assert result.tasks[0].connections == (
            Connection("2", ConnectionType.FS),
            Connection("3", ConnectionType.SF),
        )

    def test_unknown_connection_type_dropped(self):
        result = parse_tasks([record(connect=[{"to": "2", "type": "XX"}]), record(id="2")])
        assert result.tasks[0].connections == ()
        assert "Unknown connection type" in result.warnings[0].message

    def test_connection_without_target(self):
        result = parse_tasks([record(connect=[{"type": "SS"}])])
        assert result.tasks[0].connections == ()
        assert len(result.warnings) == 1

    def test_duplicate_id_skipped(self):
        result = parse_tasks([record(name="first"), record(name="second")])
        assert [t.name for t in result.tasks] == ["first"]
        assert "Duplicate id" in result.warnings[0].message

    def test_missing_id_skipped(self):
        result = parse_tasks([{"name": "anonymous"}, "junk"])
        assert result.tasks == []
        assert len(result.warnings) == 2

    def test_parent_must_be_group_head(self):
        result = parse_tasks([record(), record(id="2", parent="1"), record(id="3", parent="2")])
        assert len(result.tasks) == 3
        assert len(result.warnings) == 1
        assert "'2'" in result.warnings[0].message

    def test_warning_str_names_source(self):
        result = parse_tasks([record(start="bad")], source="tasks.json")
        assert str(result.warnings[0]).startswith("tasks.json[0]:")


class TestLoadTaskFile:
    def test_list(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([record()]), encoding="utf-8")
        result = load_task_file(path)
        assert len(result.tasks) == 1
        assert result.path == path

    def test_wrapped_in_object(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"tasks": [record(), record(id="2")]}), encoding="utf-8")
        assert len(load_task_file(path).tasks) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(TaskFileError):
            load_task_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(TaskFileError):
            load_task_file(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text('{"name": "x"}', encoding="utf-8")
        with pytest.raises(TaskFileError):
            load_task_file(path)


class TestSave:
    def test_task_to_record(self):
        task = Task("1", "A", start=START, end=END, connections=(Connection("2", ConnectionType.FF),))
        rec = task_to_record(task)
        assert rec["start"] == to_epoch_millis(START)
        assert rec["connect"] == [{"to": "2", "type": "FF"}]

    def test_save_and_load(self, tmp_path):
        tasks = [
            Task("g", "Group", start=START, end=END),
            Task("a", "A", start=START, end=END, parent="g", completed=40,
                 connections=(Connection("g", ConnectionType.SS),)),
            Task("n", "Undated"),
        ]
        path = tmp_path / "tasks.json"
        save_task_file(tasks, path)
        assert load_task_file(path).tasks == tasks
