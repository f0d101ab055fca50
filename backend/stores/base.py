from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from backend.models.task_model import Task


class TaskStore(ABC):
    """Storage contract shared by every task backend.

    Implementations raise ``ValidationError`` for bad input, ``NotFound`` for
    unknown ids and ``StoreUnavailable`` when the backend cannot be reached.
    """

    name = "base"

    @abstractmethod
    def list(self) -> List[Task]:
        """Return every task, newest ``created_at`` first."""

    @abstractmethod
    def create(self, title: Any, description: Optional[Any] = None, completed: Any = False) -> Task:
        """Validate and persist a new task, assigning its id and timestamp."""

    @abstractmethod
    def get(self, task_id: str) -> Task:
        """Return one task."""

    @abstractmethod
    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Merge the supplied fields into an existing task and return it."""

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Remove a task permanently."""

    @abstractmethod
    def insert(self, task: Task) -> Task:
        """Persist an already built task (used for seeding)."""

    @abstractmethod
    def clear(self) -> None:
        """Remove all tasks."""

    @abstractmethod
    def new_id(self) -> str:
        """Return a fresh opaque task id."""

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        return None
