from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from fastapi import Request

from .models import TaskEntity


class StorageError(Exception):
    """Raised when a storage backend fails to execute a statement."""


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def create(self, task: TaskEntity) -> TaskEntity:
        """Persist a new task and return it. Raises StorageError on failure."""

    @abstractmethod
    def list(self) -> List[TaskEntity]:
        """
        Return every stored task in insertion order.
        Raises StorageError on failure; no partial results are returned.
        """

    def close(self) -> None:
        """Release backend resources. Default is a no-op."""


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    FastAPI dependency returning the repository opened at application startup.

    The repository is created once in the app lifespan and lives on
    `app.state.repository` until shutdown.
    """
    return request.app.state.repository
