"""Tests for group visibility."""

import pytest

from tui_gantt.hierarchy import Hierarchy
from tui_gantt.models import Task, VisibilityState


@pytest.fixture
def tasks():
    return [
        Task("g1", "Group 1"),
        Task("a", "A", parent="g1"),
        Task("b", "B", parent="g1"),
        Task("g2", "Group 2"),
        Task("c", "C", parent="g2"),
        Task("g3", "Empty group"),
    ]


class TestInitialState:
    def test_groups_start_expanded(self, tasks):
        h = Hierarchy(tasks)
        assert list(h.states) == ["g1", "g2", "g3"]
        assert all(s is VisibilityState.EXPANDED for s in h.states.values())

    def test_collapse_hides_only_own_members(self, tasks):
        h = Hierarchy(tasks)
        h.toggle("g1")
        assert [t.id for t in tasks if not h.is_visible(t)] == ["a", "b"]

    def test_everything_visible(self, tasks):
        assert Hierarchy(tasks).visible_tasks() == tasks


class TestToggle:
    def test_collapse_hides_members(self, tasks):
        h = Hierarchy(tasks)
        assert h.toggle("g1") is VisibilityState.COLLAPSED
        assert [t.id for t in h.visible_tasks()] == ["g1", "g2", "c", "g3"]
        assert h.is_visible("g1")
        assert not h.is_visible("a")

    def test_toggle_twice_restores(self, tasks):
        h = Hierarchy(tasks)
        h.toggle("g1")
        assert h.toggle("g1") is VisibilityState.EXPANDED
        assert h.visible_tasks() == tasks

    def test_other_groups_untouched(self, tasks):
        h = Hierarchy(tasks)
        h.toggle("g2")
        assert h.states["g1"] is VisibilityState.EXPANDED
        assert h.is_visible("a")
        assert not h.is_visible("c")

    def test_empty_group_toggles(self, tasks):
        h = Hierarchy(tasks)
        assert h.toggle("g3") is VisibilityState.COLLAPSED
        assert h.is_visible("g3")

    def test_member_is_not_a_group(self, tasks):
        with pytest.raises(KeyError):
            Hierarchy(tasks).toggle("a")

    def test_unknown_id(self, tasks):
        with pytest.raises(KeyError):
            Hierarchy(tasks).toggle("nope")


class TestBulk:
    def test_collapse_all(self, tasks):
        h = Hierarchy(tasks)
        h.collapse_all()
        assert [t.id for t in h.visible_tasks()] == ["g1", "g2", "g3"]
        assert all(s is VisibilityState.COLLAPSED for s in h.states.values())

    def test_expand_all(self, tasks):
        h = Hierarchy(tasks)
        h.collapse_all()
        h.expand_all()
        assert h.visible_tasks() == tasks

    def test_states_is_a_copy(self, tasks):
        h = Hierarchy(tasks)
        states = h.states
        h.toggle("g1")
        assert states["g1"] is VisibilityState.EXPANDED


class TestOrphans:
    def test_member_of_unknown_group_stays_visible(self):
        tasks = [Task("g1", "Group"), Task("x", "Orphan", parent="missing")]
        h = Hierarchy(tasks)
        h.collapse_all()
        assert h.is_visible("x")

    def test_is_visible_accepts_task(self, tasks):
        h = Hierarchy(tasks)
        h.toggle("g1")
        assert not h.is_visible(tasks[1])
