"""Task model, priorities and the task manager."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Protocol

_RESET = "\033[0m"


class TaskError(ValueError):
    """Raised for invalid indices, priorities, due dates and unsupported operations."""


class Priority(IntEnum):
    """Urgency of a task, ordered from lowest to highest."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3

    def __str__(self) -> str:
        return self.name.lower()

    def color(self) -> str:
        """Terminal escape sequence used to highlight this priority."""
        return _PRIORITY_COLORS[self]

    def color_reset(self) -> str:
        """Terminal escape sequence that resets colouring."""
        return _RESET


_PRIORITY_COLORS = {
    Priority.LOW: "\033[32m",
    Priority.MEDIUM: "\033[33m",
    Priority.HIGH: "\033[31m",
    Priority.CRITICAL: "\033[35m",
}


def _now() -> datetime:
    return datetime.now().astimezone()


def _aware(moment: datetime | None) -> datetime | None:
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.astimezone()


def _add_days(moment: datetime, days: int) -> datetime:
    """Add calendar days in local time, keeping the wall-clock time."""
    return (moment.replace(tzinfo=None) + timedelta(days=days)).astimezone()


@dataclass
class Task:
    """A single to-do item."""

    title: str = ""
    description: str = ""
    done: bool = False
    priority: Priority = Priority.LOW
    due_date: datetime | None = None
    created_at: datetime | None = None
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.priority = Priority(self.priority)
        self.due_date = _aware(self.due_date)
        self.created_at = _aware(self.created_at)
        self.tags = list(self.tags or [])

    def has_tag(self, tag: str) -> bool:
        """Whether the task carries the tag, compared case-insensitively."""
        wanted = tag.casefold()
        return any(existing.casefold() == wanted for existing in self.tags)

    def add_tag(self, tag: str) -> None:
        """Add the tag in normalised form unless it is already present."""
        if not self.has_tag(tag):
            self.tags.append(tag.strip().lower())

    def remove_tag(self, tag: str) -> None:
        """Remove the first tag matching case-insensitively, if any."""
        wanted = tag.casefold()
        for position, existing in enumerate(self.tags):
            if existing.casefold() == wanted:
                del self.tags[position]
                return


class _Store(Protocol):
    def add(self, task: Task) -> None: ...

    def list(self) -> list[Task]: ...

    def update(self, index: int, task: Task) -> None: ...


_INDEX_RE = re.compile(r"\s*([+-]?\d+)")


def parse_index(text: str) -> int:
    """Read a leading integer from text, ignoring what follows it."""
    match = _INDEX_RE.match(str(text))
    if match is None:
        raise TaskError(f"expected integer, got {text!r}")
    return int(match.group(1))


_PRIORITY_NAMES = {
    "low": Priority.LOW,
    "l": Priority.LOW,
    "medium": Priority.MEDIUM,
    "med": Priority.MEDIUM,
    "m": Priority.MEDIUM,
    "high": Priority.HIGH,
    "h": Priority.HIGH,
    "critical": Priority.CRITICAL,
    "crit": Priority.CRITICAL,
    "c": Priority.CRITICAL,
}


def parse_priority(text: str) -> Priority:
    """Parse a priority name or abbreviation, case-insensitively."""
    try:
        return _PRIORITY_NAMES[text.lower()]
    except KeyError:
        raise TaskError(f"invalid priority: {text}") from None


_DATE_FORMATS = (
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%m/%d/%Y"),
)

_RELATIVE_DAYS = {"today": 0, "tomorrow": 1, "next week": 7}


def parse_due_date(text: str) -> datetime | None:
    """Parse a due date; empty text means no due date."""
    if text == "":
        return None
    offset = _RELATIVE_DAYS.get(text.lower())
    if offset is not None:
        now = _now()
        return now if offset == 0 else _add_days(now, offset)
    for pattern, layout in _DATE_FORMATS:
        if pattern.fullmatch(text):
            try:
                parsed = datetime.strptime(text, layout)
            except ValueError:
                continue
            return parsed.replace(tzinfo=timezone.utc)
    raise TaskError(
        f"invalid date format: {text} "
        "(use YYYY-MM-DD, MM/DD/YYYY, 'today', 'tomorrow', or 'next week')"
    )


class TaskManager:
    """Operations on the tasks kept in a store."""

    def __init__(self, store: _Store) -> None:
        self._store = store

    def _fetch(self, index: str) -> tuple[int, list[Task]]:
        position = parse_index(index)
        tasks = self._store.list()
        if not 0 <= position < len(tasks):
            raise TaskError("invalid index")
        return position, tasks

    def add(self, task: Task) -> None:
        if task.created_at is None:
            task = replace(task, created_at=_now())
        self._store.add(task)

    def list(self) -> list[Task]:
        return self._store.list()

    def mark_done(self, index: str) -> None:
        position, tasks = self._fetch(index)
        task = tasks[position]
        task.done = True
        self._store.update(position, task)

    def remove(self, index: str) -> None:
        position, _ = self._fetch(index)
        remover = getattr(self._store, "remove", None)
        if remover is None:
            raise TaskError("store does not support removal")
        remover(position)

    def find_by_title(self, title: str) -> Task | None:
        return next((task for task in self._store.list() if task.title == title), None)

    def bulk_add(self, tasks) -> None:
        for task in tasks:
            self.add(task)

    def count_done(self) -> int:
        return sum(1 for task in self._store.list() if task.done)

    def find_by_description(self, description: str) -> list[Task]:
        return [task for task in self._store.list() if task.description == description]

    def mark_all_done(self) -> None:
        for position, task in enumerate(self._store.list()):
            if not task.done:
                task.done = True
                self._store.update(position, task)

    def undo_done(self, index: str) -> None:
        position, tasks = self._fetch(index)
        task = tasks[position]
        if not task.done:
            return
        task.done = False
        self._store.update(position, task)

    def list_by_priority(self, priority: Priority) -> list[Task]:
        return [task for task in self._store.list() if task.priority == priority]

    def list_overdue(self) -> list[Task]:
        now = _now()
        return [
            task
            for task in self._store.list()
            if task.due_date is not None and task.due_date < now and not task.done
        ]

    def list_due_today(self) -> list[Task]:
        now = _now()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        today = today.replace(tzinfo=None).astimezone()
        tomorrow = _add_days(today, 1)
        return [
            task
            for task in self._store.list()
            if task.due_date is not None and today <= task.due_date < tomorrow
        ]

    def list_due_within(self, days: int) -> list[Task]:
        now = _now()
        cutoff = _add_days(now, days)
        return [
            task
            for task in self._store.list()
            if task.due_date is not None and now <= task.due_date < cutoff
        ]

    def list_by_tag(self, tag: str) -> list[Task]:
        return [task for task in self._store.list() if task.has_tag(tag)]

    def get_all_tags(self) -> list[str]:
        return sorted({tag for task in self._store.list() for tag in task.tags})

    def add_tag_to_task(self, index: str, tag: str) -> None:
        position, tasks = self._fetch(index)
        task = tasks[position]
        task.add_tag(tag)
        self._store.update(position, task)

    def remove_tag_from_task(self, index: str, tag: str) -> None:
        position, tasks = self._fetch(index)
        task = tasks[position]
        task.remove_tag(tag)
        self._store.update(position, task)