from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping

from backend.errors import ValidationError


def utcnow() -> datetime:
    # MongoDB keeps milliseconds only; truncate so both stores agree.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def isoformat(value: datetime) -> str:
    """Render a datetime the way JavaScript's ``toISOString`` does."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def validate_title(title: Any) -> str:
    if title is None:
        raise ValidationError("Task title is required")
    if not isinstance(title, str):
        raise ValidationError("Field 'title' must be a string")
    title = title.strip()
    if not title:
        raise ValidationError("Task title is required")
    return title


def validate_description(description: Any) -> str:
    if description is None:
        return ""
    if not isinstance(description, str):
        raise ValidationError("Field 'description' must be a string or null")
    return description


def validate_completed(completed: Any) -> bool:
    if not isinstance(completed, bool):
        raise ValidationError("Field 'completed' must be a boolean")
    return completed


def normalize_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a partial update, keeping only the fields a task allows to change."""
    updates: Dict[str, Any] = {}
    if "title" in changes:
        updates["title"] = validate_title(changes["title"])
    if "description" in changes:
        updates["description"] = validate_description(changes["description"])
    if "completed" in changes:
        updates["completed"] = validate_completed(changes["completed"])
    return updates


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str = ""
    completed: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "createdAt": isoformat(self.created_at),
        }


SAMPLE_TASKS = (
    (
        "Task 1: Kubernetes Cluster Setup",
        "Set up a Kubernetes cluster using minikube or Docker Desktop for local development.",
        True,
        5,
    ),
    (
        "Task 2: MongoDB Integration",
        "Configure MongoDB deployment in Kubernetes with persistent storage and proper authentication.",
        True,
        3,
    ),
    (
        "Task 3: Application Deployment",
        "Deploy the application to Kubernetes and ensure it connects to MongoDB properly.",
        False,
        1,
    ),
    (
        "Task 4: Implement Backup Strategy",
        "Create a backup and recovery plan for the MongoDB database in Kubernetes.",
        False,
        0,
    ),
)


def sample_tasks(id_factory, now: datetime = None):
    """Build the demo tasks, backdated by whole days from ``now``."""
    now = now or utcnow()
    return [
        Task(
            id=id_factory(),
            title=title,
            description=description,
            completed=completed,
            created_at=now - timedelta(days=days_ago),
        )
        for title, description, completed, days_ago in SAMPLE_TASKS
    ]
