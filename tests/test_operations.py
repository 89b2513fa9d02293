# tests/test_operations.py

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from taskforge.calendar_utils import date_to_timestamp
from taskforge.errors import TaskNotFoundError, ValidationError
from taskforge.models import SortMode, Task, ViewTab
from taskforge.operations import (
    add_task,
    completion_summary,
    delete_task,
    filter_by_tab,
    find_task,
    mark_completed,
    parse_deadline,
    parse_priority,
    set_deadline,
    sort_tasks,
    task_at,
    tasks_due_on,
    toggle_completion,
)


@pytest.mark.parametrize("priority", [0, 6, -1, 100])
def test_add_rejects_priority_out_of_range(priority: int) -> None:
    tasks = [Task("existing", 2)]
    with pytest.raises(ValidationError):
        add_task(tasks, "new", priority)
    assert tasks == [Task("existing", 2)]


@pytest.mark.parametrize("description", ["", "   ", "\t\n"])
def test_add_rejects_blank_description(description: str) -> None:
    tasks: list[Task] = []
    with pytest.raises(ValidationError):
        add_task(tasks, description, 3)
    assert tasks == []


def test_add_rejects_non_int_priority() -> None:
    tasks: list[Task] = []
    with pytest.raises(ValidationError):
        add_task(tasks, "x", "3")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        add_task(tasks, "x", True)  # type: ignore[arg-type]
    assert tasks == []


def test_add_appends_incomplete_task() -> None:
    tasks: list[Task] = []
    task = add_task(tasks, "Buy milk", 3)
    assert tasks == [task]
    assert task.completed is False
    assert task.priority == 3
    assert task.deadline is None


def test_ids_are_unique_and_survive_delete() -> None:
    tasks: list[Task] = []
    a = add_task(tasks, "a", 1)
    b = add_task(tasks, "b", 2)
    c = add_task(tasks, "c", 3)
    assert len({a.id, b.id, c.id}) == 3

    assert delete_task(tasks, a.id) is True
    assert [t.description for t in tasks] == ["b", "c"]
    assert toggle_completion(tasks, c.id) is True
    assert c.completed is True


def test_toggle_is_its_own_inverse() -> None:
    tasks = [Task("a", 1), Task("b", 2, completed=True)]
    for task in list(tasks):
        before = task.completed
        toggle_completion(tasks, task.id)
        assert task.completed is not before
        toggle_completion(tasks, task.id)
        assert task.completed is before


def test_unknown_id_is_a_noop() -> None:
    tasks = [Task("a", 1)]
    snapshot = [Task("a", 1)]
    assert toggle_completion(tasks, "missing") is False
    assert mark_completed(tasks, "missing") is False
    assert delete_task(tasks, "missing") is False
    assert set_deadline(tasks, "missing", 123) is False
    assert tasks == snapshot


def test_set_and_clear_deadline() -> None:
    tasks = [Task("a", 1)]
    task_id = tasks[0].id
    assert set_deadline(tasks, task_id, 1000)
    assert tasks[0].deadline == 1000
    assert set_deadline(tasks, task_id, None)
    assert tasks[0].deadline is None


def test_task_at_bounds() -> None:
    tasks = [Task("a", 1), Task("b", 2)]
    assert task_at(tasks, 1).description == "b"
    with pytest.raises(TaskNotFoundError):
        task_at(tasks, 2)
    with pytest.raises(TaskNotFoundError):
        task_at(tasks, -1)


def test_find_task() -> None:
    tasks = [Task("a", 1)]
    assert find_task(tasks, tasks[0].id) is tasks[0]
    assert find_task(tasks, "nope") is None


def test_sort_by_priority_is_stable() -> None:
    tasks = [Task("c", 3), Task("a1", 1), Task("b", 2), Task("a2", 1)]
    sort_tasks(tasks, SortMode.PRIORITY)
    assert [t.description for t in tasks] == ["a1", "a2", "b", "c"]


def test_sort_by_deadline_total_order() -> None:
    tasks = [
        Task("none-p4", 4),
        Task("late", 5, deadline=300),
        Task("none-p1", 1),
        Task("early", 3, deadline=100),
        Task("none-p2", 2),
        Task("mid", 1, deadline=200),
    ]
    sort_tasks(tasks, SortMode.DEADLINE)
    assert [t.description for t in tasks] == ["early", "mid", "late", "none-p1", "none-p2", "none-p4"]

    with_deadline = [t for t in tasks if t.deadline is not None]
    assert tasks[: len(with_deadline)] == with_deadline


def test_sort_added_keeps_order() -> None:
    tasks = [Task("b", 5, deadline=9), Task("a", 1)]
    sort_tasks(tasks, SortMode.ADDED)
    assert [t.description for t in tasks] == ["b", "a"]


def test_filter_tabs(now: int) -> None:
    today = datetime.fromtimestamp(now).date()
    tomorrow = today + timedelta(days=1)
    due_today = Task("today", 1, deadline=date_to_timestamp(today))
    due_tomorrow = Task("tomorrow", 2, deadline=date_to_timestamp(tomorrow))
    done = Task("done", 3, completed=True, deadline=date_to_timestamp(today))
    undated = Task("undated", 4)
    tasks = [due_today, due_tomorrow, done, undated]

    assert filter_by_tab(tasks, ViewTab.ALL, now) == tasks
    assert filter_by_tab(tasks, ViewTab.TODAY, now) == [due_today, done]
    assert filter_by_tab(tasks, ViewTab.UPCOMING, now) == [due_today, due_tomorrow]
    assert filter_by_tab(tasks, ViewTab.COMPLETED, now) == [done]


def test_tasks_due_on() -> None:
    day = date(2025, 1, 31)
    hit = Task("rent", 1, deadline=date_to_timestamp(day))
    miss = Task("other", 1, deadline=date_to_timestamp(date(2025, 2, 1)))
    assert tasks_due_on([hit, miss, Task("x", 2)], day) == [hit]


def test_completion_summary() -> None:
    assert completion_summary([]) == (0, 0)
    assert completion_summary([Task("a", 1, completed=True), Task("b", 2)]) == (1, 2)


def test_parse_priority() -> None:
    assert parse_priority(" 2 ") == 2
    with pytest.raises(ValidationError, match="Invalid priority value"):
        parse_priority("high")
    with pytest.raises(ValidationError, match="between 1 and 5"):
        parse_priority("9")


def test_parse_deadline_is_end_of_local_day() -> None:
    ts = parse_deadline("2025-01-31")
    assert datetime.fromtimestamp(ts) == datetime(2025, 1, 31, 23, 59, 59)
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        parse_deadline("31/01/2025")
