"""Completion statistics and progress display."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

from taskmgr.colors import DEFAULT_COLOR_SCHEME, Color, colorize
from taskmgr.formatter import DisplayOptions
from taskmgr.tasks import Priority, Task

_BAR_WIDTH = 20

_PRIORITY_ICONS = {
    Priority.CRITICAL: "🔴",
    Priority.HIGH: "🟠",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}

_PRIORITY_ORDER = (Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW)


@dataclass
class ProgressStats:
    """Counts of tasks by status and by priority."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    by_priority: dict[Priority, int] = field(default_factory=dict)


class ProgressFormatter:
    """Computes and renders progress statistics."""

    def __init__(self, options: DisplayOptions) -> None:
        if options.color_scheme is None:
            options = replace(options, color_scheme=DEFAULT_COLOR_SCHEME)
        self.options = options

    def _paint(self, color: Color, text: str) -> str:
        return colorize(color, text) if self.options.show_colors else text

    def calculate_stats(self, tasks: Iterable[Task]) -> ProgressStats:
        tasks = list(tasks)
        now = datetime.now().astimezone()
        stats = ProgressStats(total=len(tasks), by_priority=Counter())
        for task in tasks:
            stats.by_priority[task.priority] += 1
            if task.done:
                stats.completed += 1
            else:
                stats.pending += 1
                if task.due_date is not None and task.due_date < now:
                    stats.overdue += 1
        return stats

    def format_progress(self, stats: ProgressStats) -> str:
        if stats.total == 0:
            return "No tasks found."
        percentage = stats.completed / stats.total * 100
        filled = int(percentage / 100 * _BAR_WIDTH)
        filled_bar = "█" * filled
        empty_bar = "░" * (_BAR_WIDTH - filled)
        if self.options.show_colors:
            bar = colorize(self.options.color_scheme.completed, filled_bar) + colorize(
                Color.GRAY, empty_bar
            )
        else:
            bar = filled_bar + empty_bar
        return f"Progress: [{bar}] {stats.completed}/{stats.total} ({percentage:.1f}%)"

    def format_detailed_stats(self, stats: ProgressStats) -> str:
        scheme = self.options.color_scheme
        lines = [self.format_progress(stats), "", "By Priority:"]
        for priority in _PRIORITY_ORDER:
            count = stats.by_priority.get(priority, 0)
            if count > 0:
                name = str(priority).title()
                lines.append(f"  {self.priority_icon(priority)} {name}: {count} tasks")

        lines.extend(["", "By Status:"])
        if stats.completed > 0:
            icon = self._paint(scheme.completed, "✅")
            lines.append(f"  {icon} Completed: {stats.completed} tasks")
        if stats.pending > 0:
            icon = self._paint(scheme.pending, "⭕")
            lines.append(f"  {icon} Pending: {stats.pending} tasks")
        if stats.overdue > 0:
            icon = self._paint(scheme.overdue, "❌")
            lines.append(f"  {icon} Overdue: {stats.overdue} tasks")
        return "\n".join(lines)

    def priority_icon(self, priority: Priority) -> str:
        color = getattr(self.options.color_scheme, str(priority))
        return self._paint(color, _PRIORITY_ICONS[priority])