"""Functional core - pure business logic with no I/O."""

from .tasks import (
    Task,
    TaskStatus,
    StatusFilter,
    SortOrder,
    ViewState,
    TaskStats,
    TaskView,
    project_tasks,
    compute_stats,
)
from .suggestions import SuggestedTask, generate_suggestions
from .validation import ValidationError, validate_goal, validate_title

__all__ = [
    # Tasks
    "Task",
    "TaskStatus",
    "StatusFilter",
    "SortOrder",
    "ViewState",
    "TaskStats",
    "TaskView",
    "project_tasks",
    "compute_stats",
    # Suggestions
    "SuggestedTask",
    "generate_suggestions",
    # Validation
    "ValidationError",
    "validate_goal",
    "validate_title",
]
