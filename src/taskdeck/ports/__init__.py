"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import NewTask, TaskRepository
from .auth_service import AuthService

__all__ = [
    "NewTask",
    "TaskRepository",
    "AuthService",
]
