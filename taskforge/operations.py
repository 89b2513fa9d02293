"""Domain operations over an in-memory task list.

Every mutator works in place and leaves persistence to the caller. Lookups
are by task id; an unknown id is a guarded no-op, never an exception.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from .calendar_utils import date_to_timestamp, day_bounds, parse_iso_date, timestamp_matches_day
from .errors import TaskNotFoundError, ValidationError
from .models import MAX_PRIORITY, MIN_PRIORITY, SortMode, Task, ViewTab

logger = logging.getLogger(__name__)


def validate_priority(priority) -> int:
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ValidationError("Invalid priority value.")
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ValidationError(f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}.")
    return priority


def parse_priority(raw: str) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValidationError("Invalid priority value.") from None
    return validate_priority(value)


def parse_deadline(raw: str) -> int:
    """YYYY-MM-DD -> timestamp of 23:59:59 local time on that day."""
    try:
        day = parse_iso_date(raw)
    except ValueError:
        raise ValidationError(
            f"Could not parse deadline '{raw}'. Format should be YYYY-MM-DD."
        ) from None
    return date_to_timestamp(day)


def add_task(tasks: List[Task], description: str, priority: int, deadline: Optional[int] = None) -> Task:
    if not description or not description.strip():
        raise ValidationError("Task description is required.")
    validate_priority(priority)
    task = Task(description=description, priority=priority, deadline=deadline)
    tasks.append(task)
    logger.debug("Added task %s (P%d)", task.id, priority)
    return task


def find_task(tasks: Iterable[Task], task_id: str) -> Optional[Task]:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def task_at(tasks: List[Task], index: int) -> Task:
    if index < 0 or index >= len(tasks):
        raise TaskNotFoundError("Invalid task index.")
    return tasks[index]


def _lookup(tasks, task_id, action):
    task = find_task(tasks, task_id)
    if task is None:
        logger.debug("Ignoring %s for unknown task id %s", action, task_id)
    return task


def toggle_completion(tasks: List[Task], task_id: str) -> bool:
    task = _lookup(tasks, task_id, "toggle")
    if task is None:
        return False
    task.completed = not task.completed
    return True


def mark_completed(tasks: List[Task], task_id: str) -> bool:
    task = _lookup(tasks, task_id, "complete")
    if task is None:
        return False
    task.completed = True
    return True


def delete_task(tasks: List[Task], task_id: str) -> bool:
    task = _lookup(tasks, task_id, "delete")
    if task is None:
        return False
    tasks.remove(task)
    logger.debug("Deleted task %s", task_id)
    return True


def set_deadline(tasks: List[Task], task_id: str, deadline: Optional[int]) -> bool:
    task = _lookup(tasks, task_id, "set_deadline")
    if task is None:
        return False
    task.deadline = deadline
    return True


def _deadline_key(task):
    # Tasks with a deadline come first, by deadline; the rest by priority.
    if task.deadline is not None:
        return (0, task.deadline)
    return (1, task.priority)


def sort_tasks(tasks: List[Task], mode: SortMode) -> List[Task]:
    if mode is SortMode.PRIORITY:
        tasks.sort(key=lambda t: t.priority)
    elif mode is SortMode.DEADLINE:
        tasks.sort(key=_deadline_key)
    return tasks


def tasks_due_on(tasks: Iterable[Task], day: date) -> List[Task]:
    return [
        t
        for t in tasks
        if t.deadline is not None and timestamp_matches_day(t.deadline, day.year, day.month, day.day)
    ]


def filter_by_tab(tasks: Iterable[Task], tab: ViewTab, now: Optional[float] = None) -> List[Task]:
    if tab is ViewTab.COMPLETED:
        return [t for t in tasks if t.completed]
    if tab is ViewTab.UPCOMING:
        return [t for t in tasks if not t.completed and t.deadline is not None]
    if tab is ViewTab.TODAY:
        today = datetime.fromtimestamp(now).date() if now is not None else date.today()
        start, end = day_bounds(today)
        return [t for t in tasks if t.deadline is not None and start <= t.deadline <= end]
    return list(tasks)


def completion_summary(tasks: List[Task]) -> tuple[int, int]:
    return sum(1 for t in tasks if t.completed), len(tasks)
