import itertools
import logging
import threading
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from backend.errors import NotFound
from backend.models.task_model import (
    Task,
    normalize_changes,
    utcnow,
    validate_completed,
    validate_description,
    validate_title,
)
from backend.stores.base import TaskStore

logger = logging.getLogger(__name__)


class MemoryTaskStore(TaskStore):
    """Process-local task store.

    Records are immutable ``Task`` values swapped under a lock, so a reader
    sees either the old or the new version of a task, never a mix.
    """

    name = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self._tasks: Dict[str, Tuple[int, Task]] = {}
        self._sequence = itertools.count()

    def new_id(self) -> str:
        return str(uuid.uuid4())

    def list(self) -> List[Task]:
        with self._lock:
            entries = list(self._tasks.values())
        # Insertion order breaks ties between tasks created in the same millisecond.
        entries.sort(key=lambda entry: (entry[1].created_at, entry[0]), reverse=True)
        return [task for _, task in entries]

    def create(self, title: Any, description: Optional[Any] = None, completed: Any = False) -> Task:
        task = Task(
            id=self.new_id(),
            title=validate_title(title),
            description=validate_description(description),
            completed=validate_completed(completed),
            created_at=utcnow(),
        )
        return self.insert(task)

    def insert(self, task: Task) -> Task:
        with self._lock:
            self._tasks[task.id] = (next(self._sequence), task)
        logger.debug("Stored task id=%s", task.id)
        return task

    def get(self, task_id: str) -> Task:
        with self._lock:
            entry = self._tasks.get(task_id)
        if entry is None:
            raise NotFound()
        return entry[1]

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        updates = normalize_changes(changes)
        with self._lock:
            entry = self._tasks.get(task_id)
            if entry is None:
                raise NotFound()
            sequence, task = entry
            task = replace(task, **updates)
            self._tasks[task_id] = (sequence, task)
        return task

    def delete(self, task_id: str) -> None:
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                raise NotFound()
        logger.debug("Deleted task id=%s", task_id)

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()
