from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .db import SQLiteRepository
from .errors import storage_error_handler, validation_error_handler
from .repositories import StorageError
from .routers import tasks as tasks_router
from .settings import Settings, get_settings

openapi_tags = [
    {"name": "tasks", "description": "Create and list tasks."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Storage is opened once when the app starts. Any failure to open the
    database file or create the schema propagates out of the lifespan, so the
    server never starts serving requests.
    """
    cfg = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        repo = SQLiteRepository(cfg.db_path, strict_due_dates=cfg.strict_due_dates)
        app.state.repository = repo
        try:
            yield
        finally:
            repo.close()

    app = FastAPI(
        title="Tasks API",
        description="Minimal service for creating and listing tasks stored in SQLite.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    # PUBLIC_INTERFACE
    def hello_world(request: Request) -> JSONResponse:
        """
        Greeting endpoint. Accepts any method, including non-standard ones, and
        ignores the request body.

        Returns:
            {"message": "hello world"}
        """
        return JSONResponse({"message": "hello world"})

    # methods=None registers a plain route that matches every HTTP method
    app.add_route("/", hello_world, methods=None, name="hello_world")

    app.include_router(tasks_router.router)
    return app


app = create_app()
