"""Two-level group hierarchy and row visibility."""

from __future__ import annotations

from typing import Iterable

from tui_gantt.models import Task, VisibilityState


class Hierarchy:
    """Tracks expand/collapse state per group head.

    Group heads are tasks without a parent; members reference a group head
    through ``parent``. There is no deeper nesting.
    """

    def __init__(self, tasks: Iterable[Task]) -> None:
        self._tasks: list[Task] = list(tasks)
        self._states: dict[str, VisibilityState] = {}
        self._members: dict[str, list[str]] = {}
        self._hidden: set[str] = set()  # member ids of collapsed groups
        for task in self._tasks:
            if task.is_group_head:
                self._states[task.id] = VisibilityState.EXPANDED
                self._members.setdefault(task.id, [])
        for task in self._tasks:
            if not task.is_group_head and task.parent in self._members:
                self._members[task.parent].append(task.id)

    @property
    def states(self) -> dict[str, VisibilityState]:
        return dict(self._states)

    def toggle(self, group_id: str) -> VisibilityState:
        """Flip a group's state and return the new one. KeyError for non-groups."""
        new_state = self._states[group_id].flipped
        self._apply(group_id, new_state)
        return new_state

    def expand_all(self) -> None:
        for group_id in self._states:
            self._apply(group_id, VisibilityState.EXPANDED)

    def collapse_all(self) -> None:
        for group_id in self._states:
            self._apply(group_id, VisibilityState.COLLAPSED)

    def _apply(self, group_id: str, state: VisibilityState) -> None:
        self._states[group_id] = state
        members = self._members[group_id]
        if state is VisibilityState.COLLAPSED:
            self._hidden.update(members)
        else:
            self._hidden.difference_update(members)

    def is_visible(self, task: Task | str) -> bool:
        task_id = task if isinstance(task, str) else task.id
        return task_id not in self._hidden

    def visible_tasks(self) -> list[Task]:
        """Visible tasks in input order."""
        return [t for t in self._tasks if t.id not in self._hidden]
