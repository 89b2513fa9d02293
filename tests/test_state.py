# tests/test_state.py

from __future__ import annotations

from datetime import date

import pytest

from taskforge.calendar_utils import date_to_timestamp
from taskforge.errors import ValidationError
from taskforge.models import ActionKind, SortMode, Task, TaskAction, ViewTab
from taskforge.state import AppState


def test_add_from_form_resets_form_and_sorts() -> None:
    state = AppState(tasks=[Task("later", 4)])
    state.view.sort_mode = SortMode.PRIORITY
    state.view.new_description = "urgent"
    state.view.new_priority = 1
    state.select_date(date(2025, 1, 31))

    task = state.add_from_form()

    assert task.deadline == date_to_timestamp(date(2025, 1, 31))
    assert [t.description for t in state.tasks] == ["urgent", "later"]
    assert state.view.new_description == ""
    assert state.view.new_deadline is None
    assert state.view.selected_date is None


def test_add_from_form_validation_keeps_form() -> None:
    state = AppState()
    state.view.new_description = "   "
    with pytest.raises(ValidationError):
        state.add_from_form()
    assert state.tasks == []
    assert state.view.new_description == "   "


def test_apply_dispatches_actions() -> None:
    state = AppState(tasks=[Task("a", 1), Task("b", 2)])
    a, b = state.tasks

    assert state.apply(TaskAction(ActionKind.TOGGLE_COMPLETION, a.id))
    assert a.completed
    assert state.apply(TaskAction(ActionKind.SET_DEADLINE, b.id, 500))
    assert b.deadline == 500
    assert state.apply(TaskAction(ActionKind.DELETE, a.id))
    assert state.tasks == [b]
    assert not state.apply(TaskAction(ActionKind.DELETE, a.id))


def test_deadline_action_uses_selected_day() -> None:
    state = AppState(tasks=[Task("a", 1), Task("b", 2, deadline=99)])
    a, b = state.tasks

    assert state.deadline_action(a) is None
    state.select_date(date(2025, 3, 3))
    action = state.deadline_action(a)
    assert action == TaskAction(ActionKind.SET_DEADLINE, a.id, date_to_timestamp(date(2025, 3, 3)))
    assert state.deadline_action(b) == TaskAction(ActionKind.SET_DEADLINE, b.id, None)


def test_select_same_date_twice_clears() -> None:
    state = AppState()
    day = date(2025, 5, 5)
    state.select_date(day)
    assert state.view.selected_date == day
    state.select_date(day)
    assert state.view.selected_date is None
    assert state.view.new_deadline is None


def test_clear_form_deadline() -> None:
    state = AppState()
    state.select_date(date(2025, 5, 5))
    state.clear_form_deadline()
    assert state.view.new_deadline is None
    assert state.view.selected_date is None


def test_set_sort_mode_reorders() -> None:
    state = AppState(tasks=[Task("none", 1), Task("dated", 5, deadline=10)])
    state.set_sort_mode(SortMode.DEADLINE)
    assert [t.description for t in state.tasks] == ["dated", "none"]
    assert state.view.sort_mode is SortMode.DEADLINE


def test_visible_tasks_follows_tab(now: int) -> None:
    state = AppState(tasks=[Task("open", 1), Task("done", 2, completed=True)])
    state.view.current_tab = ViewTab.COMPLETED
    assert [t.description for t in state.visible_tasks(now)] == ["done"]


def test_refresh_notifications_respects_toggle(now: int) -> None:
    state = AppState(tasks=[Task("Late", 1, deadline=now - 10)])
    state.view.show_notifications = False
    assert state.refresh_notifications(now) == []
    state.view.show_notifications = True
    assert state.refresh_notifications(now) == ["Task 'Late' is overdue!"]


def test_mutation_waits_for_next_window(now: int) -> None:
    state = AppState(tasks=[Task("Late", 1, deadline=now - 10)])
    assert state.refresh_notifications(now) == ["Task 'Late' is overdue!"]
    state.apply(TaskAction(ActionKind.TOGGLE_COMPLETION, state.tasks[0].id))
    assert state.refresh_notifications(now + 1) == ["Task 'Late' is overdue!"]
    state.view.new_description = "Also late"
    state.view.new_deadline = now - 5
    state.add_from_form()
    assert state.refresh_notifications(now + 2) == ["Task 'Late' is overdue!"]
    assert state.notifier.last_checked == now
    assert state.refresh_notifications(now + 30) == ["Task 'Also late' is overdue!"]


def test_tasks_keep_file_order_until_sorted() -> None:
    tasks = [Task("none", 3), Task("dated", 1, deadline=10)]
    state = AppState(tasks=list(tasks))
    state.view.sort_mode = SortMode.PRIORITY
    assert state.tasks == tasks
    state.apply(TaskAction(ActionKind.TOGGLE_COMPLETION, tasks[0].id))
    assert [t.description for t in state.tasks] == ["none", "dated"]
    state.set_sort_mode(SortMode.DEADLINE)
    assert [t.description for t in state.tasks] == ["dated", "none"]
