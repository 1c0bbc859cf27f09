"""Command-line task manager with priorities, due dates and tags, stored in a JSON file."""

__version__ = "0.1.0"
__all__ = ["cli", "colors", "formatter", "main", "progress", "store", "tasks"]