"""Deadline notifications and time-remaining labels."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .calendar_utils import SECONDS_PER_DAY, SECONDS_PER_HOUR
from .models import Task

NOTIFY_INTERVAL = 30


def is_approaching_deadline(deadline, now):
    return 0 < deadline - now < SECONDS_PER_DAY


def compute_notifications(tasks: Iterable[Task], now: int) -> List[str]:
    messages = []
    for task in tasks:
        if task.completed or task.deadline is None:
            continue
        time_left = task.deadline - now
        if 0 < time_left < SECONDS_PER_DAY:
            hours_left = time_left // SECONDS_PER_HOUR
            messages.append(f"Task '{task.description}' is due in {hours_left} hours!")
        elif time_left < 0:
            messages.append(f"Task '{task.description}' is overdue!")
    return messages


def time_remaining(deadline: int, now: int) -> tuple[str, bool]:
    diff = deadline - now
    is_overdue = diff < 0
    hours = abs(diff) // SECONDS_PER_HOUR
    if hours < 24:
        amount = f"{hours} hours"
    else:
        amount = f"{hours // 24} days"
    if is_overdue:
        return f"Overdue by {amount}", True
    return f"{amount} remaining", False


class NotificationMonitor:
    """Recomputes notifications at most once per `interval` seconds.

    The last-check time is the only state; the first call always runs.
    """

    def __init__(self, interval: float = NOTIFY_INTERVAL):
        self.interval = interval
        self.last_checked: Optional[float] = None
        self.messages: List[str] = []

    def due(self, now: float) -> bool:
        return self.last_checked is None or now - self.last_checked >= self.interval

    def check(self, tasks: Iterable[Task], now: float) -> List[str]:
        if self.due(now):
            self.last_checked = now
            self.messages = compute_notifications(tasks, int(now))
        return self.messages
