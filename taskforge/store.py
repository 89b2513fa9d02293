"""JSON persistence for the task list.

The file is a flat array of {description, completed, priority, deadline}
objects. Loading never fails: anything unreadable comes back as an empty
list. Saving overwrites the file in place and raises PersistenceError on
failure.
"""

from __future__ import annotations

import json
import logging
import queue
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import PersistenceError, ValidationError
from .models import Task

logger = logging.getLogger(__name__)

DATA_FILE = Path("tasks.json")

TaskRecord = Dict[str, Any]


def task_to_record(task: Task) -> TaskRecord:
    return {
        "description": task.description,
        "completed": task.completed,
        "priority": task.priority,
        "deadline": task.deadline,
    }


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def task_from_record(raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise ValidationError("task record must be an object")
    for key in ("description", "completed", "priority", "deadline"):
        if key not in raw:
            raise ValidationError(f"task record is missing '{key}'")
    description = raw["description"]
    completed = raw["completed"]
    priority = raw["priority"]
    deadline = raw["deadline"]
    if not isinstance(description, str):
        raise ValidationError("'description' must be a string")
    if not isinstance(completed, bool):
        raise ValidationError("'completed' must be a boolean")
    if not _is_int(priority) or priority < 0:
        raise ValidationError("'priority' must be a non-negative integer")
    if deadline is not None and not _is_int(deadline):
        raise ValidationError("'deadline' must be an integer or null")
    return Task(description=description, completed=completed, priority=priority, deadline=deadline)


class TaskStore:
    def __init__(self, path=DATA_FILE):
        self.path = Path(path)

    def load(self) -> List[Task]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s (%s); starting with an empty list.", self.path, exc)
            return []
        if not isinstance(raw, list):
            logger.warning("%s does not hold a task array; starting with an empty list.", self.path)
            return []
        try:
            return [task_from_record(item) for item in raw]
        except ValidationError as exc:
            logger.warning("Malformed task record in %s (%s); starting with an empty list.", self.path, exc)
            return []

    def save(self, tasks: List[Task]) -> None:
        payload = [task_to_record(task) for task in tasks]
        try:
            if self.path.parent != Path("."):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Failed to save tasks to {self.path}: {exc}") from exc
        logger.debug("Saved %d tasks to %s", len(payload), self.path)


_STOP = object()


class SaveQueue:
    """Serialises background saves through one worker thread.

    Snapshots are written in submission order; when several are waiting
    only the newest is written. Failures are logged and kept for the UI
    thread to pick up with drain_errors().
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self._pending: "queue.Queue[object]" = queue.Queue()
        self._errors: "queue.Queue[PersistenceError]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self.saves_written = 0

    def start(self) -> None:
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name="taskforge-save", daemon=True)
            self._thread.start()

    def submit(self, tasks: List[Task]) -> None:
        self.start()
        snapshot = [Task(t.description, t.priority, t.completed, t.deadline, t.id) for t in tasks]
        self._pending.put(snapshot)

    def flush(self) -> None:
        if self._thread is None:
            return
        self._pending.join()

    def close(self) -> None:
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is None:
            return
        self._pending.put(_STOP)
        thread.join()

    def drain_errors(self) -> List[PersistenceError]:
        errors = []
        while True:
            try:
                errors.append(self._errors.get_nowait())
            except queue.Empty:
                return errors

    def _next_batch(self):
        items = [self._pending.get()]
        while True:
            try:
                items.append(self._pending.get_nowait())
            except queue.Empty:
                return items

    def _run(self) -> None:
        while True:
            batch = self._next_batch()
            stop = any(item is _STOP for item in batch)
            snapshots = [item for item in batch if item is not _STOP]
            try:
                if snapshots:
                    self._write(snapshots[-1])
            finally:
                for _ in batch:
                    self._pending.task_done()
            if stop:
                return

    def _write(self, snapshot):
        try:
            self.store.save(snapshot)
        except PersistenceError as exc:
            logger.exception("Background save failed")
            self._errors.put(exc)
        else:
            self.saves_written += 1
