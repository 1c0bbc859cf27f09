"""JSON file storage for tasks."""

from __future__ import annotations

import json
import os
import re
import threading
from datetime import datetime, timedelta
from pathlib import Path

from taskmgr.tasks import Priority, Task

_ZERO_TIME = "0001-01-01T00:00:00Z"
_FRACTION_RE = re.compile(r"\.(\d+)")


def _format_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    text = moment.isoformat()
    if moment.utcoffset() == timedelta(0) and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_time(text: str | None) -> datetime | None:
    if not text or text.startswith("0001-01-01T00:00:00"):
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _task_to_json(task: Task) -> dict:
    return {
        "Title": task.title,
        "Description": task.description,
        "Done": task.done,
        "Priority": int(task.priority),
        "DueDate": None if task.due_date is None else _format_time(task.due_date),
        "CreatedAt": _format_time(task.created_at),
        "Tags": list(task.tags),
    }


def _task_from_json(data: dict) -> Task:
    return Task(
        title=data.get("Title", ""),
        description=data.get("Description", ""),
        done=bool(data.get("Done", False)),
        priority=Priority(data.get("Priority", 0)),
        due_date=_parse_time(data.get("DueDate")),
        created_at=_parse_time(data.get("CreatedAt")),
        tags=data.get("Tags") or [],
    )


class FileStore:
    """Keeps tasks in a JSON file, reading and writing it on every operation."""

    def __init__(self, filename) -> None:
        self._path = Path(filename)
        self._lock = threading.Lock()

    def add(self, task: Task) -> None:
        with self._lock:
            tasks = self._load()
            tasks.append(task)
            self._save(tasks)

    def list(self) -> list[Task]:
        """All stored tasks; an unreadable file counts as empty."""
        with self._lock:
            try:
                return self._load()
            except (OSError, ValueError, TypeError, KeyError, AttributeError):
                return []

    def update(self, index: int, task: Task) -> None:
        with self._lock:
            tasks = self._load()
            if not 0 <= index < len(tasks):
                raise IndexError("index out of range")
            tasks[index] = task
            self._save(tasks)

    def remove(self, index: int) -> None:
        with self._lock:
            tasks = self._load()
            if not 0 <= index < len(tasks):
                raise IndexError("index out of range")
            del tasks[index]
            self._save(tasks)

    def _load(self) -> list[Task]:
        if not self._path.exists():
            return []
        data = self._path.read_bytes()
        if not data:
            return []
        raw = json.loads(data)
        tasks = [_task_from_json(item) for item in raw or []]

        missing = [task for task in tasks if task.created_at is None]
        if missing:
            try:
                stamp = datetime.fromtimestamp(os.stat(self._path).st_mtime).astimezone()
            except OSError:
                stamp = datetime.now().astimezone()
            for task in missing:
                task.created_at = stamp
            try:
                self._save(tasks)
            except OSError as exc:
                print(f"Warning: failed to save migrated tasks: {exc}")
        return tasks

    def _save(self, tasks: list[Task]) -> None:
        payload = json.dumps([_task_to_json(task) for task in tasks], indent=2, ensure_ascii=False)
        self._path.write_text(payload, encoding="utf-8")