"""
Run the Tasks API under uvicorn.

Usage:
    python -m src.tasks_api.serve
    tasks-api

Host, port, database path and log level come from the TASKS_* environment
variables (see settings.py). The server listens on 0.0.0.0:8080 by default.
"""
from __future__ import annotations

import logging

import uvicorn

from .logging_setup import setup_logging
from .main import create_app
from .settings import get_settings

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting Tasks API on %s:%d (db=%s)", settings.host, settings.port, settings.db_path)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        # keep the handlers installed by setup_logging
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
