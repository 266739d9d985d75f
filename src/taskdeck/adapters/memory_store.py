"""In-memory task storage adapter."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from taskdeck.core.tasks import Task, TaskStatus, sort_by_created
from taskdeck.core.validation import ValidationError
from taskdeck.errors import StorageError
from taskdeck.ports.task_repo import NewTask

UPDATABLE_FIELDS = {"title", "notes", "status"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTaskRepository:
    """
    Dict-backed task storage.

    Implements TaskRepository protocol. Used for tests and offline runs.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._tasks: dict[str, Task] = {}
        self._clock = clock

    def _get(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise StorageError(f"Task not found: {task_id}")

    def insert(self, task: NewTask) -> str:
        task_id = str(uuid.uuid4())
        self._tasks[task_id] = Task(
            id=task_id,
            title=task.title,
            notes=task.notes,
            status=TaskStatus(task.status),
            user_id=task.user_id,
            created_at=self._clock(),
        )
        return task_id

    def update(self, task_id: str, fields: dict) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        task = self._get(task_id)
        changes = dict(fields)
        if "status" in changes:
            changes["status"] = TaskStatus(changes["status"])
        self._tasks[task_id] = replace(task, updated_at=self._clock(), **changes)

    def delete(self, task_id: str) -> None:
        self._get(task_id)
        del self._tasks[task_id]

    def list(self, user_id: str) -> list[Task]:
        owned = [t for t in self._tasks.values() if t.user_id == user_id]
        return sort_by_created(owned)
