import sqlite3
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from src.tasks_api.db import SQLiteRepository
from src.tasks_api.repositories import StorageError
from src.tasks_api.utils import ZERO_TIME


def make_task(title="Task", due_date=None):
    return {
        "title": title,
        "due_date": due_date or datetime(2025, 2, 1, 18, 0, tzinfo=timezone.utc),
    }


class TestInitialization:
    def test_creates_file_and_parent_dirs(self, db_path):
        repo = SQLiteRepository(db_path)
        try:
            with sqlite3.connect(db_path) as conn:
                cols = [r[1] for r in conn.execute("PRAGMA table_info(tasks)")]
            assert cols == ["id", "title", "due_date"]
        finally:
            repo.close()

    def test_init_is_idempotent(self, db_path):
        first = SQLiteRepository(db_path)
        first.create(make_task("kept"))
        first.close()

        second = SQLiteRepository(db_path)
        try:
            assert [t["title"] for t in second.list()] == ["kept"]
            with sqlite3.connect(db_path) as conn:
                tables = conn.execute(
                    "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = 'tasks'"
                ).fetchone()[0]
            assert tables == 1
        finally:
            second.close()

    def test_unopenable_path_is_fatal(self, tmp_path):
        # A directory cannot be opened as a database file
        with pytest.raises(sqlite3.Error):
            SQLiteRepository(str(tmp_path))

    def test_in_memory_database(self):
        repo = SQLiteRepository(":memory:")
        try:
            assert repo.list() == []
        finally:
            repo.close()


class TestCreateAndList:
    @pytest.fixture
    def repo(self, db_path):
        r = SQLiteRepository(db_path)
        yield r
        r.close()

    def test_stores_rfc3339_text(self, repo, db_path):
        due = datetime(2025, 3, 10, 9, 30, tzinfo=timezone(timedelta(hours=2)))
        repo.create(make_task("offset", due))
        repo.create(make_task("utc"))
        with sqlite3.connect(db_path) as conn:
            rows = conn.execute("SELECT title, due_date FROM tasks ORDER BY id").fetchall()
        assert rows == [("offset", "2025-03-10T09:30:00+02:00"), ("utc", "2025-02-01T18:00:00Z")]

    def test_list_round_trips_due_dates(self, repo):
        due = datetime(2030, 6, 1, 14, 15, 16, 123456, tzinfo=timezone(timedelta(hours=-5)))
        repo.create(make_task("precise", due))
        [task] = repo.list()
        assert task == {"title": "precise", "due_date": due}

    def test_list_returns_insertion_order(self, repo):
        for title in ("a", "b", "c"):
            repo.create(make_task(title))
        assert [t["title"] for t in repo.list()] == ["a", "b", "c"]

    def test_invalid_due_dates_are_masked(self, repo, db_path):
        with sqlite3.connect(db_path) as conn:
            conn.executemany(
                "INSERT INTO tasks (title, due_date) VALUES (?, ?)",
                [("bad", "2025-13-45T00:00:00Z"), ("naive", "2025-01-01T00:00:00"), ("padded", " 2025-01-01T00:00:00Z")],
            )
        assert [t["due_date"] for t in repo.list()] == [ZERO_TIME, ZERO_TIME, ZERO_TIME]

    @pytest.mark.parametrize("row", [("no date", None), (None, "2025-01-01T00:00:00Z")])
    def test_null_columns_fail_the_whole_list(self, repo, db_path, row):
        repo.create(make_task("valid"))
        with sqlite3.connect(db_path) as conn:
            conn.execute("INSERT INTO tasks (title, due_date) VALUES (?, ?)", row)
        with pytest.raises(StorageError, match="NULL"):
            repo.list()

    def test_strict_mode_raises_on_invalid_due_date(self, db_path):
        repo = SQLiteRepository(db_path, strict_due_dates=True)
        try:
            with sqlite3.connect(db_path) as conn:
                conn.execute("INSERT INTO tasks (title, due_date) VALUES ('bad', 'soon')")
            with pytest.raises(StorageError):
                repo.list()
        finally:
            repo.close()

    def test_driver_errors_become_storage_errors(self, repo, db_path):
        with sqlite3.connect(db_path) as conn:
            conn.execute("DROP TABLE tasks")
        with pytest.raises(StorageError, match="no such table"):
            repo.create(make_task())
        with pytest.raises(StorageError, match="no such table"):
            repo.list()


class TestConcurrency:
    def test_concurrent_creates_lose_no_writes(self, db_path):
        repo = SQLiteRepository(db_path)
        try:
            titles = [f"task-{i}" for i in range(50)]
            with ThreadPoolExecutor(max_workers=16) as pool:
                created = list(pool.map(lambda t: repo.create(make_task(t)), titles))
            assert [c["title"] for c in created] == titles

            listed = repo.list()
            assert len(listed) == 50
            assert {t["title"] for t in listed} == set(titles)
        finally:
            repo.close()
