"""Command-line entry point of the task manager."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from taskmgr.cli import parse_add_command, parse_args, parse_list_command
from taskmgr.colors import DEFAULT_COLOR_SCHEME, is_color_supported
from taskmgr.formatter import DisplayOptions, TaskFormatter
from taskmgr.progress import ProgressFormatter
from taskmgr.store import FileStore
from taskmgr.tasks import Priority, Task, TaskError, TaskManager, parse_due_date, parse_priority

logger = logging.getLogger(__name__)

STORE_FILE = "tasks.json"

_FAILURES = (TaskError, IndexError, OSError, ValueError)

_ADD_USAGE = """\
Usage: taskmgr add <title> [--priority=<low|medium|high|critical>] [--due=<date>] [--tags=<tag1,tag2,...>]
Examples:
  taskmgr add "Fix bug" --priority=high --due=2024-01-15 --tags=work,urgent
  taskmgr add "Review PR" --priority=medium --due=tomorrow --tags=work,code-review
  taskmgr add "Buy groceries" --tags=personal,shopping"""

_USAGE = """\
Usage: taskmgr [command] ...
Available commands:
  add <title> [--priority=<low|medium|high|critical>] [--due=<date>] [--tags=<tag1,tag2,...>]
                         - Add a new task with optional priority, due date, and tags
  list [filters] [options] - List tasks with optional filters and formatting
    Filters:
      --priority=<priority>  - Filter by priority level
      --tag=<tag>            - Filter by tag
      --overdue              - Show only overdue tasks
      --due-today            - Show tasks due today
      --due-within=<days>    - Show tasks due within N days
    Display Options:
      --table                - Display in table format
      --no-color             - Disable colored output
      --no-icons             - Disable emoji icons
      --minimal              - Minimal output (no colors, icons, or extra info)
  stats [--no-color]      - Show progress statistics and task breakdown
  tags                     - List all available tags
  tag <index> <tag>        - Add a tag to an existing task
  untag <index> <tag>      - Remove a tag from a task
  done <index>             - Mark a task as done
  remove <index>           - Remove a task
  undodone <index>         - Mark a completed task as not done
  find <title>             - Find task by title
  bulkadd <t1,t2,...>      - Add multiple tasks at once
  countdone                - Count completed tasks
  markall                  - Mark all tasks as done
  findbydesc <desc>        - Find tasks by description

Examples:
  taskmgr add "Fix bug" --priority=high --due=2024-01-15 --tags=work,urgent
  taskmgr add "Review PR" --priority=medium --due=tomorrow --tags=work,code-review
  taskmgr add "Buy groceries" --tags=personal,shopping
  taskmgr list --priority=high --table
  taskmgr list --tag=work
  taskmgr list --overdue --no-color
  taskmgr list --due-today
  taskmgr list --due-within=7days --minimal
  taskmgr tags
  taskmgr tag 0 urgent
  taskmgr untag 0 urgent
  taskmgr stats"""


def _mark(task: Task) -> str:
    return "x" if task.done else " "


def _add(manager: TaskManager, args: list[str]) -> int:
    opts = parse_add_command(args)
    if opts.title == "":
        print(_ADD_USAGE)
        return 1
    task = Task(title=opts.title, priority=Priority.MEDIUM, tags=opts.tags)
    if opts.priority:
        try:
            task.priority = parse_priority(opts.priority)
        except TaskError as exc:
            print("Error parsing priority:", exc)
            return 1
    if opts.due:
        try:
            task.due_date = parse_due_date(opts.due)
        except TaskError as exc:
            print("Error parsing due date:", exc)
            return 1
    try:
        manager.add(task)
    except _FAILURES as exc:
        print("Error adding task:", exc)
        logger.error("adding task failed: %s", exc)
        return 1
    print("Task added.")
    return 0


def _list(manager: TaskManager, args: list[str]) -> int:
    opts = parse_list_command(args)
    if opts.priority:
        try:
            priority = parse_priority(opts.priority)
        except TaskError as exc:
            print("Error parsing priority:", exc)
            return 1
        shown = manager.list_by_priority(priority)
    elif opts.tag:
        shown = manager.list_by_tag(opts.tag)
    elif opts.overdue:
        shown = manager.list_overdue()
    elif opts.due_today:
        shown = manager.list_due_today()
    elif opts.due_within > 0:
        shown = manager.list_due_within(opts.due_within)
    else:
        shown = manager.list()

    options = DisplayOptions(
        show_colors=is_color_supported(),
        show_icons=True,
        table_format=False,
        show_tags=True,
        show_due_date=True,
        show_priority=True,
        color_scheme=DEFAULT_COLOR_SCHEME,
    )
    for arg in args:
        if arg == "--table":
            options.table_format = True
        if arg == "--no-color":
            options.show_colors = False
        if arg == "--no-icons":
            options.show_icons = False
        if arg == "--minimal":
            options.show_tags = False
            options.show_due_date = False
            options.show_priority = False
            options.show_icons = False

    formatter = TaskFormatter(options)
    if options.table_format:
        print(formatter.format_table_header())
        print(formatter.format_table_separator())
    for position, task in enumerate(shown):
        print(formatter.format_task(position, task))
    return 0


def _index_command(action, args: list[str], usage: str, failure: str, success: str) -> int:
    if not args:
        print(usage)
        return 1
    try:
        action(args[0])
    except _FAILURES as exc:
        print(failure, exc)
        return 1
    print(success)
    return 0


def _stats(manager: TaskManager, args: list[str]) -> int:
    options = DisplayOptions(
        show_colors=is_color_supported() and "--no-color" not in args,
        show_icons=True,
        color_scheme=DEFAULT_COLOR_SCHEME,
    )
    formatter = ProgressFormatter(options)
    print(formatter.format_detailed_stats(formatter.calculate_stats(manager.list())))
    return 0


def _tag_command(action, args: list[str], usage: str, failure: str, verb: str) -> int:
    if len(args) < 2:
        print(usage)
        return 1
    try:
        action(args[0], args[1])
    except _FAILURES as exc:
        print(failure, exc)
        return 1
    print(f"Tag '{args[1]}' {verb} task.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run one task-manager command and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    cmd, args = parse_args(list(argv))
    manager = TaskManager(FileStore(STORE_FILE))

    if cmd == "add":
        return _add(manager, args)
    if cmd == "list":
        return _list(manager, args)
    if cmd == "done":
        return _index_command(
            manager.mark_done, args, "Usage: taskmgr done <index>",
            "Error marking done:", "Task marked as done.",
        )
    if cmd == "remove":
        return _index_command(
            manager.remove, args, "Usage: taskmgr remove <index>",
            "Error removing task:", "Task removed.",
        )
    if cmd == "undodone":
        return _index_command(
            manager.undo_done, args, "Usage: taskmgr undodone <index>",
            "Error undoing done:", "Task marked as not done.",
        )
    if cmd == "find":
        if not args:
            print("Usage: taskmgr find <title>")
            return 1
        task = manager.find_by_title(args[0])
        if task is None:
            print("No task found with that title.")
            return 0
        print(f"[{_mark(task)}] {task.title}")
        return 0
    if cmd == "bulkadd":
        if not args:
            print("Usage: taskmgr bulkadd <title1,title2,...>")
            return 1
        try:
            manager.bulk_add(Task(title=title.strip()) for title in args[0].split(","))
        except _FAILURES as exc:
            print("Error bulk adding tasks:", exc)
            return 1
        print("Tasks added.")
        return 0
    if cmd == "countdone":
        print(f"Completed tasks: {manager.count_done()}")
        return 0
    if cmd == "markall":
        try:
            manager.mark_all_done()
        except _FAILURES as exc:
            print("Error marking all tasks done:", exc)
            return 1
        print("All tasks marked as done.")
        return 0
    if cmd == "findbydesc":
        if not args:
            print("Usage: taskmgr findbydesc <description>")
            return 1
        results = manager.find_by_description(args[0])
        if not results:
            print("No tasks found with that description.")
            return 0
        for position, task in enumerate(results):
            print(f"{position}: [{_mark(task)}] {task.title}")
        return 0
    if cmd == "stats":
        return _stats(manager, args)
    if cmd == "tags":
        all_tags = manager.get_all_tags()
        if not all_tags:
            print("No tags found.")
            return 0
        print("Available tags:")
        for tag in all_tags:
            print(f"  - {tag}")
        return 0
    if cmd == "tag":
        return _tag_command(
            manager.add_tag_to_task, args, "Usage: taskmgr tag <index> <tag>",
            "Error adding tag:", "added to",
        )
    if cmd == "untag":
        return _tag_command(
            manager.remove_tag_from_task, args, "Usage: taskmgr untag <index> <tag>",
            "Error removing tag:", "removed from",
        )
    if cmd == "error":
        logger.error("test error. create gh issue?")
        return 0

    print(_USAGE)
    return 1


if __name__ == "__main__":
    sys.exit(main())