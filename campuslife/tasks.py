"""To-do tasks with deadlines, priorities and completion state."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

STATUS_DONE = "[已完成] "
STATUS_OPEN = "[未完成] "
DUE_SOON_HOURS = 24


class Priority(str, Enum):
    """Task priority as stored in the task file."""

    LOW = "低"
    MEDIUM = "中"
    HIGH = "高"


def priority_color(priority: Priority | str) -> str:
    """Return the colour name used for a priority."""
    value = priority.value if isinstance(priority, Priority) else priority
    if value == Priority.HIGH.value:
        return "red"
    if value == Priority.MEDIUM.value:
        return "orange"
    return "green"


def _parse_time(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _format_time(value: datetime | None) -> str:
    return value.isoformat(timespec="seconds") if value is not None else ""


def _display_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else ""


@dataclass
class Task:
    """One task; ``deadline`` is ``None`` when it could not be read."""

    name: str
    deadline: datetime | None
    priority: str
    completed: bool = False
    created: datetime | None = None

    def label(self) -> str:
        """Return the line shown for the task in the list."""
        status = STATUS_DONE if self.completed else STATUS_OPEN
        return (
            f"{status}{self.name} - 截止: {_display_time(self.deadline)}"
            f" - 优先级: {self.priority}"
        )

    def hours_until(self, now: datetime) -> int:
        """Whole hours from ``now`` to the deadline, truncated toward zero."""
        if self.deadline is None:
            return 0
        seconds = int((self.deadline - now).total_seconds())
        hours = abs(seconds) // 3600
        return hours if seconds >= 0 else -hours

    def _to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "deadline": _format_time(self.deadline),
            "priority": self.priority,
            "completed": self.completed,
            "createTime": _format_time(self.created),
        }

    @classmethod
    def _from_dict(cls, data: Any) -> Task:
        record = data if isinstance(data, dict) else {}
        name = record.get("name")
        priority = record.get("priority")
        return cls(
            name=name if isinstance(name, str) else "",
            deadline=_parse_time(record.get("deadline")),
            priority=priority if isinstance(priority, str) else "",
            completed=record.get("completed") is True,
            created=_parse_time(record.get("createTime")),
        )


def _deadline_key(task: Task) -> tuple[bool, datetime]:
    # Tasks whose deadline cannot be read sort before all others.
    return (task.deadline is not None, task.deadline or datetime.min)


class TaskList:
    """Tasks of one user, kept in a JSON array file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.tasks: list[Task] = []
        self.load()

    def load(self) -> None:
        """Read the tasks from the file; an unreadable file gives none."""
        try:
            raw = self.path.read_bytes()
        except OSError:
            return
        try:
            document = json.loads(raw)
        except ValueError:
            document = []
        if not isinstance(document, list):
            document = []
        self.tasks = [Task._from_dict(item) for item in document]

    def save(self) -> None:
        """Write all tasks to the file."""
        payload = [task._to_dict() for task in self.tasks]
        self.path.write_text(
            json.dumps(payload, indent=4, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    def add(
        self,
        name: str,
        deadline: datetime,
        priority: Priority | str,
        now: datetime,
    ) -> Task:
        """Append a new open task and save; raise ``ValueError`` on bad input."""
        if not name:
            raise ValueError("task name must not be empty")
        level = Priority(priority)
        task = Task(
            name=name,
            deadline=deadline,
            priority=level.value,
            completed=False,
            created=now,
        )
        self.tasks.append(task)
        self.save()
        return task

    def delete_matching(self, text: str) -> bool:
        """Remove the last task whose name occurs in ``text``; save either way."""
        index = next(
            (
                i
                for i in reversed(range(len(self.tasks)))
                if self.tasks[i].name in text
            ),
            None,
        )
        if index is not None:
            del self.tasks[index]
        self.save()
        return index is not None

    def toggle_matching(self, text: str) -> bool:
        """Flip the first task whose name occurs in ``text``; save either way."""
        task = next((t for t in self.tasks if t.name in text), None)
        if task is not None:
            task.completed = not task.completed
        self.save()
        return task is not None

    def visible(self, show_completed: bool) -> list[Task]:
        """Return tasks ordered by deadline, optionally without completed ones."""
        ordered = sorted(self.tasks, key=_deadline_key)
        return [t for t in ordered if show_completed or not t.completed]

    def due_soon(self, now: datetime) -> list[tuple[Task, int]]:
        """Return open tasks due within a day, each with its hours remaining."""
        result = []
        for task in self.tasks:
            if task.completed:
                continue
            hours = task.hours_until(now)
            if 0 < hours < DUE_SOON_HOURS:
                result.append((task, hours))
        return result