"""State container for the GUI.

ViewState holds what the window shows (tab, sort, form fields, calendar
selection); AppState pairs it with the task list and the notification
monitor. The window reads and writes through AppState so every mutation
stays testable without a display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .calendar_utils import date_to_timestamp
from .models import DEFAULT_PRIORITY, ActionKind, SortMode, Task, TaskAction, ViewTab
from .notifications import NotificationMonitor
from .operations import add_task, delete_task, filter_by_tab, set_deadline, sort_tasks, toggle_completion

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    current_tab: ViewTab = ViewTab.ALL
    sort_mode: SortMode = SortMode.DEADLINE
    show_notifications: bool = True
    show_calendar: bool = True
    selected_date: Optional[date] = None
    new_description: str = ""
    new_priority: int = DEFAULT_PRIORITY
    new_deadline: Optional[int] = None


@dataclass
class AppState:
    tasks: List[Task] = field(default_factory=list)
    view: ViewState = field(default_factory=ViewState)
    notifier: NotificationMonitor = field(default_factory=NotificationMonitor)
    notifications: List[str] = field(default_factory=list)

    def add_from_form(self) -> Task:
        view = self.view
        task = add_task(self.tasks, view.new_description, view.new_priority, view.new_deadline)
        view.new_description = ""
        view.new_deadline = None
        view.selected_date = None
        sort_tasks(self.tasks, view.sort_mode)
        return task

    def apply(self, action: TaskAction) -> bool:
        if action.kind is ActionKind.TOGGLE_COMPLETION:
            changed = toggle_completion(self.tasks, action.task_id)
        elif action.kind is ActionKind.DELETE:
            changed = delete_task(self.tasks, action.task_id)
        elif action.kind is ActionKind.SET_DEADLINE:
            changed = set_deadline(self.tasks, action.task_id, action.deadline)
        else:
            raise ValueError(f"unknown action {action.kind!r}")
        return changed

    def deadline_action(self, task: Task) -> Optional[TaskAction]:
        """Set/Clear Deadline button: clear an existing deadline, or use the selected day."""
        if task.deadline is not None:
            return TaskAction(ActionKind.SET_DEADLINE, task.id, None)
        if self.view.selected_date is None:
            return None
        return TaskAction(ActionKind.SET_DEADLINE, task.id, date_to_timestamp(self.view.selected_date))

    def set_sort_mode(self, mode: SortMode) -> None:
        self.view.sort_mode = mode
        sort_tasks(self.tasks, mode)

    def select_date(self, day: date) -> None:
        view = self.view
        if view.selected_date == day:
            view.selected_date = None
            view.new_deadline = None
        else:
            view.selected_date = day
            view.new_deadline = date_to_timestamp(day)

    def clear_form_deadline(self) -> None:
        self.view.new_deadline = None
        self.view.selected_date = None

    def visible_tasks(self, now: Optional[float] = None) -> List[Task]:
        return filter_by_tab(self.tasks, self.view.current_tab, now)

    def refresh_notifications(self, now: float) -> List[str]:
        if self.view.show_notifications:
            self.notifications = self.notifier.check(self.tasks, now)
        return self.notifications
