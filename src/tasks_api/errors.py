from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from .repositories import StorageError

logger = logging.getLogger(__name__)


def _describe_errors(errors: List[Dict[str, Any]]) -> str:
    """
    Flatten pydantic error details into one line, e.g.
    "title: Field required; due_date: Value error, invalid RFC 3339 timestamp ...".
    """
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = str(err.get("msg", "invalid value"))
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "invalid request body"


async def validation_error_handler(_req: Request, exc: RequestValidationError) -> PlainTextResponse:
    """Render request decode errors as 400 with the error text as the body."""
    return PlainTextResponse(_describe_errors(list(exc.errors())), status_code=400)


async def storage_error_handler(req: Request, exc: StorageError) -> PlainTextResponse:
    """Render storage failures as 500 with the driver's message as the body."""
    logger.error("Storage error on %s %s: %s", req.method, req.url.path, exc, exc_info=exc)
    return PlainTextResponse(str(exc), status_code=500)
