"""Formatting of tasks as list items or table rows."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from taskmgr.colors import DEFAULT_COLOR_SCHEME, Color, ColorScheme, colorize
from taskmgr.tasks import Priority, Task

_PRIORITY_ICONS = {
    Priority.CRITICAL: "🔴",
    Priority.HIGH: "🟠",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}

_TABLE_HEADER = "ID  | Status | Priority | Title                     | Tags            | Due Date"
_TABLE_SEPARATOR = "----+--------+----------+---------------------------+-----------------+----------"


@dataclass
class DisplayOptions:
    """Switches controlling how tasks are rendered."""

    show_colors: bool = False
    show_icons: bool = False
    table_format: bool = False
    show_tags: bool = False
    show_due_date: bool = False
    show_priority: bool = False
    color_scheme: ColorScheme | None = None


def _now() -> datetime:
    return datetime.now().astimezone()


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


def _is_overdue(task: Task) -> bool:
    return task.due_date is not None and _aware(task.due_date) < _now()


def truncate_string(text: str, max_len: int) -> str:
    """Shorten text to max_len characters, ending with '...' where there is room."""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


class TaskFormatter:
    """Renders tasks according to a set of display options."""

    def __init__(self, options: DisplayOptions) -> None:
        if options.color_scheme is None:
            options = replace(options, color_scheme=DEFAULT_COLOR_SCHEME)
        self.options = options

    @property
    def _scheme(self) -> ColorScheme:
        return self.options.color_scheme

    def _paint(self, color: Color, text: str) -> str:
        return colorize(color, text) if self.options.show_colors else text

    def format_task(self, index: int, task: Task) -> str:
        if self.options.table_format:
            return self.format_table_row(index, task)
        return self.format_list_item(index, task)

    def format_list_item(self, index: int, task: Task) -> str:
        parts = [f"{self.status_icon(task)} {index}:", self.format_title(task)]
        if self.options.show_priority:
            parts.append(self.format_priority(task.priority))
        if self.options.show_tags and task.tags:
            parts.append(self.format_tags(task.tags))
        if self.options.show_due_date and task.due_date is not None:
            parts.append(self.format_due_date(task.due_date, task.done))
        return " ".join(parts)

    def format_table_row(self, index: int, task: Task) -> str:
        status = self.status_icon(task)
        priority = self.format_priority(task.priority)
        title = self.format_title(task)
        tags = self.format_tags(task.tags) if task.tags else ""
        due = "N/A" if task.due_date is None else self.format_due_date(task.due_date, task.done)
        return (
            f"{index:<3d} | {status:<6} | {priority:<8} | "
            f"{truncate_string(title, 25):<25} | {truncate_string(tags, 15):<15} | {due}"
        )

    def format_table_header(self) -> str:
        if self.options.show_colors:
            return colorize(Color.BOLD, _TABLE_HEADER)
        return _TABLE_HEADER

    def format_table_separator(self) -> str:
        return _TABLE_SEPARATOR

    def status_icon(self, task: Task) -> str:
        if not self.options.show_icons:
            return "[x]" if task.done else "[ ]"
        if task.done:
            return self._paint(self._scheme.completed, "✅")
        if _is_overdue(task):
            return self._paint(self._scheme.overdue, "❌")
        return self._paint(self._scheme.pending, "⭕")

    def format_title(self, task: Task) -> str:
        if not self.options.show_colors:
            return task.title
        if task.done:
            return colorize(self._scheme.completed, task.title)
        if _is_overdue(task):
            return colorize(self._scheme.overdue, task.title)
        return task.title

    def format_priority(self, priority: Priority) -> str:
        short = str(priority)[:3].upper()
        if not self.options.show_colors:
            return f"[{short}]"
        color = getattr(self._scheme, str(priority))
        return colorize(color, f"[{_PRIORITY_ICONS[priority]} {short}]")

    def format_tags(self, tags: list[str]) -> str:
        if not tags:
            return ""
        return f"[{self._paint(self._scheme.tags, ', '.join(tags))}]"

    def format_description(self, description: str) -> str:
        if not description:
            return ""
        return f"[{self._paint(self._scheme.tags, description)}]"

    def format_due_date(self, due_date: datetime, is_done: bool) -> str:
        due_date = _aware(due_date)
        diff = due_date - _now()
        day = timedelta(days=1)

        if diff < timedelta(0) and not is_done:
            days = int(-diff / day)
            text = "(OVERDUE: today)" if days == 0 else f"(OVERDUE: {days} days)"
            color = self._scheme.overdue
        elif timedelta(0) <= diff < day:
            text = "(Due: today)"
            color = self._scheme.medium
        elif diff < 2 * day:
            text = "(Due: tomorrow)"
            color = self._scheme.medium
        elif diff >= timedelta(0):
            text = f"(Due: {int(diff / day)} days)"
            color = self._scheme.low
        else:
            text = f"(Was due: {due_date.strftime('%Y-%m-%d')})"
            color = self._scheme.completed

        return self._paint(color, text)