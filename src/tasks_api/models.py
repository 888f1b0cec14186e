from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A task as read from or written to the storage backend.

    Fields:
    - title: Free-form title text
    - due_date: Aware due datetime (stored as RFC 3339 text)

    The internal row id is never part of the entity.
    """

    title: str
    due_date: datetime
