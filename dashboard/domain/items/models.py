from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

TASKS_TABLE = "tasks"
NOTES_TABLE = "notes"

AppointmentCategory = Literal["meeting", "personal", "health", "other"]


@dataclass(frozen=True)
class Task:
    id: str
    user_id: str
    text: str
    completed: bool
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Task":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            text=row["text"],
            completed=bool(row["completed"]),
            created_at=row["created_at"],
        )


@dataclass(frozen=True)
class Note:
    id: str
    user_id: str
    title: str
    content: str
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Note":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=row["title"],
            content=row["content"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


# Display-only, never persisted.
@dataclass(frozen=True)
class Appointment:
    id: str
    title: str
    date: str
    time: str
    category: AppointmentCategory
    location: Optional[str] = None


@dataclass(frozen=True)
class Birthday:
    id: str
    name: str
    date: str
    days_until: int
    age: Optional[int] = None
