from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ..repositories import Repository, get_repository
from ..schemas import Task

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


async def decode_task(request: Request) -> Task:
    """
    Decode the request body as a JSON task whatever Content-Type it was sent with.
    """
    body = await request.body()
    try:
        return Task.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Store a new task and echo it back.",
    responses={
        201: {"description": "Task created"},
        400: {"description": "Request body could not be decoded", "content": {"text/plain": {}}},
        500: {"description": "Storage error", "content": {"text/plain": {}}},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": Task.model_json_schema()}},
        }
    },
)
def create_task(payload: Task = Depends(decode_task), repo: Repository = Depends(get_repository)) -> Task:
    """
    Insert one task row. No deduplication is performed.
    """
    created = repo.create(payload.to_entity())
    return Task.from_entity(created)


# PUBLIC_INTERFACE
@router.get(
    "/list",
    response_model=List[Task],
    summary="List Tasks",
    description=(
        "Return every stored task in insertion order. A stored due_date that cannot be "
        "parsed is reported as 0001-01-01T00:00:00Z unless strict due dates are enabled."
    ),
    responses={
        200: {"description": "Tasks retrieved (possibly empty)"},
        500: {"description": "Storage error", "content": {"text/plain": {}}},
    },
)
def list_tasks(repo: Repository = Depends(get_repository)) -> List[Task]:
    """
    List all tasks.
    """
    return [Task.from_entity(it) for it in repo.list()]
