from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.tasks_api.main import create_app
from src.tasks_api.settings import Settings


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "data" / "tasks.db")


@pytest.fixture
def client(db_path):
    # Entering the client runs the lifespan, which opens storage.
    app = create_app(Settings(db_path=db_path))
    with TestClient(app) as c:
        yield c
