"""Task repository interface."""

from dataclasses import dataclass
from typing import Protocol

from taskdeck.core.tasks import Task, TaskStatus


@dataclass
class NewTask:
    """Fields supplied when creating a task; id and timestamps come from storage."""

    title: str
    user_id: str
    notes: str | None = None
    status: TaskStatus = TaskStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "notes": self.notes,
            "user_id": self.user_id,
            "status": TaskStatus(self.status).value,
        }


class TaskRepository(Protocol):
    """Interface for persisting tasks in any backend. Failures raise StorageError."""

    def insert(self, task: NewTask) -> str:
        """Create a task. Returns its id."""
        ...

    def update(self, task_id: str, fields: dict) -> None:
        """Update title, notes and/or status of a task."""
        ...

    def delete(self, task_id: str) -> None:
        """Delete a task."""
        ...

    def list(self, user_id: str) -> list[Task]:
        """Fetch all tasks owned by a user, newest first."""
        ...
