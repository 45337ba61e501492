# taskapi/models.py
"""Task, user and request-body models for the task manager API."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_utc(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision and a Z suffix.

    Naive values (as returned by SQLite) are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskBase(SQLModel):
    """Fields shared by the in-memory record and the SQL table."""
    title: str = Field(max_length=200)
    description: str = Field(default="", max_length=1000)
    priority: TaskPriority = Field(default=TaskPriority.medium)
    completed: bool = Field(default=False)
    owner_id: int = Field(index=True)


class Task(TaskBase):
    """A stored task as handed out by every task store."""
    id: int
    created_at: datetime
    updated_at: datetime

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": TaskPriority(self.priority).value,
            "completed": self.completed,
            "ownerId": self.owner_id,
            "createdAt": isoformat_utc(self.created_at),
            "updatedAt": isoformat_utc(self.updated_at),
        }


class TaskRecord(TaskBase, table=True):
    """Task database table used by the SQL store."""
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class User(BaseModel):
    """An account known to the user directory. Never serialized whole."""
    id: int
    username: str
    password_hash: str
    email: str

    def public(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "email": self.email}


class CurrentUser(BaseModel):
    """Identity claims carried by a verified bearer token."""
    id: int
    username: str
    email: str


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class TaskInput(BaseModel):
    """Body for task create and update. Presence of a field matters on update."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    completed: Optional[bool] = None
