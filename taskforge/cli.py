"""Command-line front end: one subcommand per invocation, then exit."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from . import __version__
from .calendar_utils import DAYS_OF_WEEK, MONTHS, format_short, month_grid, parse_iso_date
from .config import get_settings
from .errors import PersistenceError, TaskNotFoundError, ValidationError
from .logging_setup import setup_logging
from .models import ViewTab
from .operations import (
    add_task,
    completion_summary,
    filter_by_tab,
    mark_completed,
    parse_deadline,
    parse_priority,
    task_at,
    tasks_due_on,
)
from .store import TaskStore

logger = logging.getLogger(__name__)


def _status(task):
    return "✅" if task.completed else "❌"


def cmd_add(store, args, out):
    tasks = store.load()
    try:
        priority = parse_priority(args.priority)
        deadline = parse_deadline(args.deadline) if args.deadline else None
        add_task(tasks, args.description, priority, deadline)
    except ValidationError as exc:
        print(exc, file=out)
        return
    store.save(tasks)
    deadline_msg = f" with deadline {args.deadline}" if deadline is not None else ""
    print(f"Task added: '{args.description}', Priority: {priority}{deadline_msg}", file=out)


def cmd_list(store, args, out):
    tasks = store.load()
    if not tasks:
        print("No tasks.", file=out)
        return
    # Show each task's position in the file so `complete` can use it directly.
    ordered = sorted(enumerate(tasks), key=lambda pair: pair[1].priority)
    for index, task in ordered:
        due = f" [Due: {format_short(task.deadline)}]" if task.deadline is not None else ""
        print(f"{index}: [{_status(task)}] [P{task.priority}] {task.description}{due}", file=out)


def cmd_today(store, args, out):
    today_tasks = filter_by_tab(store.load(), ViewTab.TODAY)
    if not today_tasks:
        print("No tasks due today.", file=out)
        return
    print("Tasks due today:", file=out)
    for i, task in enumerate(today_tasks, start=1):
        print(f"{i}: [{_status(task)}] [P{task.priority}] {task.description}", file=out)


def cmd_complete(store, args, out):
    tasks = store.load()
    try:
        index = int(args.index)
        task = task_at(tasks, index)
    except (ValueError, TaskNotFoundError):
        print("Invalid task index.", file=out)
        return
    mark_completed(tasks, task.id)
    store.save(tasks)
    print(f"Task marked as completed: {task.description}", file=out)


def cmd_completed(store, args, out):
    done, total = completion_summary(store.load())
    print(f"Completed tasks: {done}/{total}", file=out)


def cmd_calendar(store, args, out):
    if args.month:
        try:
            first = parse_iso_date(f"{args.month}-01")
        except ValueError:
            print(f"Could not parse month '{args.month}'. Format should be YYYY-MM.", file=out)
            return
    else:
        first = date.today().replace(day=1)
    tasks = store.load()
    print(f"{MONTHS[first.month - 1]} {first.year}", file=out)
    print(" ".join(f"{d:>4}" for d in DAYS_OF_WEEK), file=out)
    for week in month_grid(first.year, first.month):
        cells = []
        for day in week:
            if day is None:
                cells.append("    ")
                continue
            mark = "*" if tasks_due_on(tasks, first.replace(day=day)) else " "
            cells.append(f"{day:>3}{mark}")
        print(" ".join(cells), file=out)


def cmd_gui(store, args, out):
    from .gui import run_gui

    run_gui(store)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskforge",
        description="Manage your tasks efficiently from terminal or GUI",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--file", help="Task file to use (default: $TASKFORGE_DATA_FILE or tasks.json)")
    sub = parser.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Add a new task")
    add.add_argument("description", help="The task description")
    add.add_argument("priority", help="Priority of the task (1-5)")
    add.add_argument("deadline", nargs="?", help="Optional deadline in YYYY-MM-DD format")
    add.set_defaults(handler=cmd_add)

    sub.add_parser("list", help="List all tasks").set_defaults(handler=cmd_list)
    sub.add_parser("today", help="List tasks due today").set_defaults(handler=cmd_today)

    complete = sub.add_parser("complete", help="Mark a task as completed")
    complete.add_argument("index", help="The task index to mark as completed")
    complete.set_defaults(handler=cmd_complete)

    sub.add_parser("completed", help="Display the number of completed tasks").set_defaults(
        handler=cmd_completed
    )

    cal = sub.add_parser("calendar", help="Show a month with deadline days marked")
    cal.add_argument("month", nargs="?", help="Month in YYYY-MM format (default: current month)")
    cal.set_defaults(handler=cmd_calendar)

    sub.add_parser("gui", help="Launch the GUI version of the app").set_defaults(handler=cmd_gui)
    return parser


def run(argv=None, out=None) -> int:
    out = out or sys.stdout
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(out)
        return 0
    store = TaskStore(args.file or get_settings().data_file)
    try:
        handler(store, args, out)
    except PersistenceError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=out)
        return 1
    return 0


def main(argv=None) -> None:
    settings = get_settings()
    setup_logging(
        log_dir=settings.log_dir,
        console_level=getattr(logging, settings.log_level, logging.WARNING),
        file_logging=settings.file_logging,
    )
    sys.exit(run(argv))
