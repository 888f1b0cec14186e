from __future__ import annotations

import logging
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from threading import RLock
from typing import List

from .models import TaskEntity
from .repositories import Repository, StorageError
from .utils import ZERO_TIME, format_rfc3339, parse_rfc3339

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "tasks"
    id: str = "id"
    title: str = "title"
    due_date: str = "due_date"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite repository holding a single connection for the process lifetime.

    The connection is shared by the server's worker threads; every statement
    runs under the repository lock.
    """

    def __init__(self, db_path: str, strict_due_dates: bool = False) -> None:
        if db_path != ":memory:":
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._strict_due_dates = strict_due_dates
        self._lock = RLock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        try:
            self._init_db()
        except sqlite3.Error:
            self._conn.close()
            raise
        logger.info("Opened task storage at %s", db_path)

    def _init_db(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT,
                    {_COLS.due_date} TEXT
                )
                """
            )
        logger.debug("Ensured table %r exists", _COLS.table)

    def _row_to_entity(self, title: object, due: object) -> TaskEntity:
        if title is None or due is None:
            column = _COLS.title if title is None else _COLS.due_date
            raise StorageError(f"converting NULL to string is unsupported: column {column!r}")
        return {"title": str(title), "due_date": self._parse_due_date(due)}

    def _parse_due_date(self, raw: object) -> datetime:
        if isinstance(raw, str):
            try:
                return parse_rfc3339(raw)
            except ValueError:
                logger.debug("Failed to parse stored due_date %r", raw, exc_info=True)
        if self._strict_due_dates:
            raise StorageError(f"stored due_date {raw!r} is not an RFC 3339 timestamp")
        logger.warning("Stored due_date %r is not an RFC 3339 timestamp; reporting zero time", raw)
        return ZERO_TIME

    def create(self, task: TaskEntity) -> TaskEntity:
        due = format_rfc3339(task["due_date"])
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    f"INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.due_date}) VALUES (?, ?)",
                    (task["title"], due),
                )
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        logger.debug("Inserted task %r due %s", task["title"], due)
        return {"title": task["title"], "due_date": task["due_date"]}

    def list(self) -> List[TaskEntity]:
        try:
            with self._lock:
                rows = self._conn.execute(
                    f"SELECT {_COLS.title}, {_COLS.due_date} FROM {_COLS.table} ORDER BY {_COLS.id}"
                ).fetchall()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

        return [self._row_to_entity(title, due) for title, due in rows]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
