"""Weekly course timetable of twelve periods over seven days."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

PERIODS = 12
DAYS = 7
MAX_DURATION = 4

DAY_NAMES: tuple[str, ...] = ("周一", "周二", "周三", "周四", "周五", "周六", "周日")
HEADERS: tuple[str, ...] = ("节次",) + DAY_NAMES
PERIOD_LABELS: tuple[str, ...] = tuple(f"第{i}节" for i in range(1, PERIODS + 1))


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class Course:
    """One course: ``day`` is 1 (Monday) to 7, ``start`` a period from 1."""

    name: str
    teacher: str
    location: str
    day: int
    start: int
    duration: int

    def to_dict(self) -> dict[str, Any]:
        """Return the record as stored in the timetable file."""
        return {
            "name": self.name,
            "teacher": self.teacher,
            "location": self.location,
            "day": self.day,
            "startTime": self.start,
            "duration": self.duration,
        }

    def cell_text(self) -> str:
        """Return the text shown in each timetable cell the course covers."""
        return f"{self.name}\n{self.teacher}\n{self.location}"


def parse_course(data: Any) -> Course:
    """Build a course from a stored record; missing fields become empty or 0."""
    record = data if isinstance(data, dict) else {}
    return Course(
        name=_as_str(record.get("name")),
        teacher=_as_str(record.get("teacher")),
        location=_as_str(record.get("location")),
        day=_as_int(record.get("day")),
        start=_as_int(record.get("startTime")),
        duration=_as_int(record.get("duration")),
    )


class Timetable:
    """Courses of one user, kept in a JSON array file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.courses: list[Course] = []
        self.load()

    def load(self) -> None:
        """Read the courses from the file; an unreadable file gives none."""
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
        self.courses = [parse_course(item) for item in document]

    def save(self) -> None:
        """Write all courses to the file."""
        payload = [course.to_dict() for course in self.courses]
        self.path.write_text(
            json.dumps(payload, indent=4, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    def add(self, course: Course) -> None:
        """Validate and append a course, then save."""
        if not course.name:
            raise ValueError("course name must not be empty")
        if not 1 <= course.day <= DAYS:
            raise ValueError(f"day must be between 1 and {DAYS}")
        if not 1 <= course.start <= PERIODS:
            raise ValueError(f"start period must be between 1 and {PERIODS}")
        if not 1 <= course.duration <= MAX_DURATION:
            raise ValueError(f"duration must be between 1 and {MAX_DURATION}")
        self.courses.append(course)
        self.save()

    def remove_at(self, day: int, period: int) -> int:
        """Remove courses starting at ``period`` on ``day``; return how many."""
        if not 1 <= day <= DAYS:
            raise ValueError(f"day must be between 1 and {DAYS}")
        if not 1 <= period <= PERIODS:
            raise ValueError(f"period must be between 1 and {PERIODS}")
        kept = [c for c in self.courses if not (c.day == day and c.start == period)]
        removed = len(self.courses) - len(kept)
        if removed:
            self.courses = kept
            self.save()
        return removed

    def grid(self) -> list[list[str]]:
        """Return 12 rows of 7 cell texts, empty where no course is held."""
        cells = [["" for _ in range(DAYS)] for _ in range(PERIODS)]
        for course in self.courses:
            if not 1 <= course.day <= DAYS:
                continue
            text = course.cell_text()
            first = course.start - 1
            for row in range(max(first, 0), min(first + course.duration, PERIODS)):
                cells[row][course.day - 1] = text
        return cells