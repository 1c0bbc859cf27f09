"""Terminal colours and the colour scheme used for task output."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """ANSI escape sequences for text styling."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    GRAY = "\033[90m"

    BG_RED = "\033[41m"
    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"

    def __str__(self) -> str:
        return self.value


def is_color_supported() -> bool:
    """Whether the environment suggests the terminal can show colours."""
    if os.environ.get("NO_COLOR", ""):
        return False
    term = os.environ.get("TERM", "")
    if term in ("", "dumb"):
        return False
    if os.environ.get("CI", "") and not os.environ.get("COLORTERM", ""):
        return False
    return True


def colorize(color: Color | str, text: str) -> str:
    """Wrap text in the colour's escape codes when colours are supported."""
    if not is_color_supported():
        return text
    return f"{str(color)}{text}{str(Color.RESET)}"


@dataclass(frozen=True)
class ColorScheme:
    """Colours used for the different parts of a task listing."""

    completed: Color = Color.GREEN
    pending: Color = Color.WHITE
    overdue: Color = Color.RED
    high: Color = Color.RED
    medium: Color = Color.YELLOW
    low: Color = Color.GREEN
    critical: Color = Color.MAGENTA
    tags: Color = Color.CYAN
    due_date: Color = Color.BLUE


DEFAULT_COLOR_SCHEME = ColorScheme()