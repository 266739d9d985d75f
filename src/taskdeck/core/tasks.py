"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .validation import ValidationError


class TaskStatus(str, Enum):
    """Completion status of a task."""

    PENDING = "pending"
    COMPLETED = "completed"


class StatusFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


class SortOrder(str, Enum):
    LATEST = "latest"  # Most recent first
    OLDEST = "oldest"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as returned by the backend."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class Task:
    """A user-owned unit of work."""

    id: str
    title: str
    created_at: datetime
    notes: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    user_id: str = ""
    updated_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def toggled_status(self) -> TaskStatus:
        """Status the task moves to when its checkbox is flipped."""
        return TaskStatus.PENDING if self.is_completed else TaskStatus.COMPLETED

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a backend table row."""
        updated = None
        if data.get("updated_at"):
            updated = parse_timestamp(data["updated_at"])
        return cls(
            id=str(data["id"]),
            title=data["title"],
            created_at=parse_timestamp(data["created_at"]),
            notes=data.get("notes"),
            status=TaskStatus(data.get("status") or "pending"),
            user_id=data.get("user_id", "") or "",
            updated_at=updated,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "notes": self.notes,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class ViewState:
    """Search, status filter and sort order selected for the task list."""

    search: str = ""
    status: StatusFilter = StatusFilter.ALL
    sort: SortOrder = SortOrder.LATEST

    @classmethod
    def parse(cls, search: str = "", status: str = "all", sort: str = "latest") -> "ViewState":
        """Build a ViewState from raw option strings."""
        try:
            status_filter = StatusFilter(status.lower())
        except ValueError:
            raise ValidationError(f"Unknown status filter: {status}")
        try:
            sort_order = SortOrder(sort.lower())
        except ValueError:
            raise ValidationError(f"Unknown sort order: {sort}")
        return cls(search=search or "", status=status_filter, sort=sort_order)


@dataclass
class TaskStats:
    """Summary counts over the full task collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "completion_rate": self.completion_rate,
        }


@dataclass
class TaskView:
    """Projected task list plus stats."""

    tasks: list[Task] = field(default_factory=list)
    stats: TaskStats = field(default_factory=TaskStats)


def filter_by_status(tasks: list[Task], status: StatusFilter) -> list[Task]:
    """Restrict to tasks with the given status; ALL keeps everything."""
    if status == StatusFilter.ALL:
        return list(tasks)
    return [t for t in tasks if t.status.value == status.value]


def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive literal substring match on title or notes."""
    if query in task.title.lower():
        return True
    # Tasks without notes only match on title
    return task.notes is not None and query in task.notes.lower()


def filter_by_search(tasks: list[Task], search: str) -> list[Task]:
    """
    Filter tasks by free-text search.

    Blank search is a no-op. The query is lower-cased but not stripped.
    Pure function - no I/O.
    """
    if not search.strip():
        return list(tasks)
    query = search.lower()
    return [t for t in tasks if matches_search(t, query)]


def sort_by_created(tasks: list[Task], order: SortOrder = SortOrder.LATEST) -> list[Task]:
    """
    Stable sort by creation time.

    Equal timestamps keep their input order in both directions.
    """
    return sorted(tasks, key=lambda t: t.created_at, reverse=order == SortOrder.LATEST)


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for no tasks."""
    if total == 0:
        return 0
    # floor(completed / total * 100 + 0.5) in integer arithmetic
    return (completed * 200 + total) // (2 * total)


def compute_stats(tasks: list[Task]) -> TaskStats:
    """Counts over the unfiltered collection."""
    total = len(tasks)
    completed = sum(1 for t in tasks if t.is_completed)
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=completion_rate(completed, total),
    )


def project_tasks(tasks: list[Task], view: ViewState | None = None) -> TaskView:
    """
    Derive the displayed task list and stats from the raw collection.

    Recomputed from scratch on every call; the input list is never mutated.
    Pure function - no I/O.
    """
    view = view or ViewState()
    visible = filter_by_status(tasks, view.status)
    visible = filter_by_search(visible, view.search)
    visible = sort_by_created(visible, view.sort)
    return TaskView(tasks=visible, stats=compute_stats(tasks))


def find_task(tasks: list[Task], task_id: str) -> Task | None:
    """Find a task by id, accepting a unique id prefix. Blank ids match nothing."""
    task_id = task_id.strip()
    if not task_id:
        return None
    exact = next((t for t in tasks if t.id == task_id), None)
    if exact:
        return exact
    matches = [t for t in tasks if t.id.startswith(task_id)]
    if len(matches) == 1:
        return matches[0]
    return None
