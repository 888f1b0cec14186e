from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .models import TaskEntity
from .utils import format_rfc3339, parse_rfc3339


def _parse_due_date(value: Any) -> datetime:
    """
    Internal helper to decode due_date input.
    - Strings are parsed as RFC 3339 and must carry an offset or 'Z'.
    - Aware datetimes (already decoded) are returned as-is.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise ValueError("due_date must include a timezone offset")
        return value

    if isinstance(value, str):
        return parse_rfc3339(value)

    raise ValueError("due_date must be an RFC 3339 date-time string")


# PUBLIC_INTERFACE
class Task(BaseModel):
    """
    Wire schema for a task, used both as the create payload and as the
    response item of the list endpoint.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "due_date": "2025-02-01T18:00:00Z",
            }
        }
    )

    title: str = Field(..., description="Title of the task")
    due_date: datetime = Field(
        ..., description="Due date/time as an RFC 3339 string with offset or 'Z'"
    )

    @field_validator("title", mode="before")
    @classmethod
    def require_string_title(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("title must be a string")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Any) -> datetime:
        """
        Decode due_date from an RFC 3339 string.
        """
        return _parse_due_date(v)

    @field_serializer("due_date")
    def serialize_due_date(self, v: datetime) -> str:
        return format_rfc3339(v)

    @classmethod
    def from_entity(cls, entity: TaskEntity) -> "Task":
        return cls(title=entity["title"], due_date=entity["due_date"])

    def to_entity(self) -> TaskEntity:
        return {"title": self.title, "due_date": self.due_date}
