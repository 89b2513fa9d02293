"""Task entity plus the small enums shared by both front ends."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = 3


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Task:
    """A single task.

    `deadline` is whole seconds since the epoch and always marks 23:59:59
    local time of the chosen day. `id` lives only in memory: it is assigned
    on creation or load and is not written to the task file.
    """

    description: str
    priority: int = DEFAULT_PRIORITY
    completed: bool = False
    deadline: Optional[int] = None
    id: str = field(default_factory=new_task_id, compare=False, repr=False)


class SortMode(Enum):
    ADDED = "added"
    PRIORITY = "priority"
    DEADLINE = "deadline"


class ViewTab(Enum):
    ALL = "all"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class ActionKind(Enum):
    TOGGLE_COMPLETION = "toggle"
    DELETE = "delete"
    SET_DEADLINE = "set_deadline"


@dataclass(frozen=True)
class TaskAction:
    kind: ActionKind
    task_id: str
    deadline: Optional[int] = None
