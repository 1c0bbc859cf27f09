"""Parsing of command-line arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass
class AddOptions:
    """Options given to the add command."""

    title: str = ""
    priority: str = ""
    due: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class ListOptions:
    """Filters given to the list command."""

    priority: str = ""
    overdue: bool = False
    due_today: bool = False
    due_within: int = 0
    tag: str = ""


def parse_args(args: Sequence[str]) -> tuple[str, list[str]]:
    """Split arguments into the command name and the rest."""
    if not args:
        return "", []
    return args[0], list(args[1:])


def _split_tags(text: str) -> list[str]:
    return [tag.strip().lower() for tag in text.split(",")]


def parse_add_command(args: Sequence[str]) -> AddOptions:
    """Read the title, priority, due date and tags of the add command."""
    opts = AddOptions()
    for position, arg in enumerate(args):
        has_next = position + 1 < len(args)
        if arg.startswith("--priority="):
            opts.priority = arg.removeprefix("--priority=")
        elif arg.startswith("--due="):
            opts.due = arg.removeprefix("--due=")
        elif arg.startswith("--tags="):
            opts.tags = _split_tags(arg.removeprefix("--tags="))
        elif arg == "--priority" and has_next:
            opts.priority = args[position + 1]
        elif arg == "--due" and has_next:
            opts.due = args[position + 1]
        elif arg == "--tags" and has_next:
            opts.tags = _split_tags(args[position + 1])
        elif not arg.startswith("--") and opts.title == "":
            opts.title = arg
    return opts


def parse_list_command(args: Sequence[str]) -> ListOptions:
    """Read the filters of the list command."""
    opts = ListOptions()
    for position, arg in enumerate(args):
        has_next = position + 1 < len(args)
        if arg.startswith("--priority="):
            opts.priority = arg.removeprefix("--priority=")
        elif arg.startswith("--tag="):
            opts.tag = arg.removeprefix("--tag=")
        elif arg == "--priority" and has_next:
            opts.priority = args[position + 1]
        elif arg == "--tag" and has_next:
            opts.tag = args[position + 1]
        elif arg == "--overdue":
            opts.overdue = True
        elif arg == "--due-today":
            opts.due_today = True
        elif arg.startswith("--due-within="):
            value = arg.removeprefix("--due-within=").removesuffix("days").removesuffix("day")
            days = parse_int(value)
            if days > 0:
                opts.due_within = days
    return opts


def parse_int(text: str) -> int:
    """Parse a string of ASCII digits; anything else gives 0."""
    result = 0
    for char in text:
        if not "0" <= char <= "9":
            return 0
        result = result * 10 + (ord(char) - ord("0"))
    return result