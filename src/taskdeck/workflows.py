"""Shared action layer between the CLI and storage.

Each action validates input, calls the repository and returns plain values.
StorageError from the repository is never caught or retried here.
"""

import logging
from pathlib import Path

from .adapters.supabase_api import SupabaseAuthService, SupabaseTaskRepository
from .config import Config, Session
from .core.suggestions import SuggestedTask, generate_suggestions
from .core.tasks import Task, TaskStatus, TaskView, ViewState, find_task, project_tasks
from .core.validation import validate_email, validate_goal, validate_new_password, validate_title
from .errors import AuthenticationError, StorageError
from .ports.auth_service import AuthService
from .ports.task_repo import NewTask, TaskRepository

logger = logging.getLogger(__name__)


def get_auth(config: Config) -> SupabaseAuthService:
    return SupabaseAuthService(config)


def require_session(session_path: Path | None = None) -> Session:
    """Load the saved session, failing when nobody is signed in."""
    session = Session.load(session_path)
    if not session.is_authenticated:
        raise AuthenticationError("Not signed in. Run 'taskdeck login' first.")
    return session


def get_repository(config: Config, session: Session, session_path: Path | None = None) -> SupabaseTaskRepository:
    """Build the task repository for a signed-in session."""
    return SupabaseTaskRepository(session, config=config, session_path=session_path)


# ============== Auth ==============


def sign_up(auth: AuthService, email: str, password: str, confirm: str, session_path: Path | None = None) -> Session | None:
    """Validate and register a new account, saving the session if one is issued."""
    email = validate_email(email)
    validate_new_password(password, confirm)
    session = auth.sign_up(email, password)
    if session:
        session.save(session_path)
    return session


def sign_in(auth: AuthService, email: str, password: str, session_path: Path | None = None) -> Session:
    email = validate_email(email)
    session = auth.sign_in(email, password)
    session.save(session_path)
    logger.info(f"Signed in as {session.email or email}")
    return session


def sign_out(auth: AuthService, session_path: Path | None = None) -> None:
    """Revoke the saved session. The local session is removed even if revocation fails."""
    session = Session.load(session_path)
    try:
        if session.access_token:
            auth.sign_out(session)
    finally:
        Session.clear(session_path)


def request_password_reset(auth: AuthService, email: str, redirect_to: str = "") -> None:
    auth.reset_password(validate_email(email), redirect_to)


# ============== Tasks ==============


def create_task(repo: TaskRepository, session: Session, title: str, notes: str | None = None) -> str:
    """Create a pending task. Returns its id."""
    validate_title(title)
    task_id = repo.insert(NewTask(title=title, notes=notes, user_id=session.user_id))
    logger.debug(f"Created task {task_id}")
    return task_id


def edit_task(repo: TaskRepository, task_id: str, title: str, notes: str | None = None) -> None:
    """Replace a task's title and notes."""
    validate_title(title)
    repo.update(task_id, {"title": title, "notes": notes})


def set_status(repo: TaskRepository, task_id: str, status: TaskStatus) -> None:
    repo.update(task_id, {"status": TaskStatus(status).value})


def toggle_task(repo: TaskRepository, task: Task) -> TaskStatus:
    """Flip a task between pending and completed. Returns the new status."""
    new_status = task.toggled_status()
    set_status(repo, task.id, new_status)
    return new_status


def remove_task(repo: TaskRepository, task_id: str) -> None:
    repo.delete(task_id)


def load_tasks(repo: TaskRepository, session: Session) -> list[Task]:
    return repo.list(session.user_id)


def load_view(repo: TaskRepository, session: Session, view: ViewState | None = None) -> TaskView:
    """Fetch the user's tasks and project them for display."""
    return project_tasks(load_tasks(repo, session), view)


def resolve_task(repo: TaskRepository, session: Session, task_id: str) -> Task:
    """Look up one of the user's tasks by id or unique id prefix."""
    task = find_task(load_tasks(repo, session), task_id)
    if task is None:
        raise StorageError(f"Task not found: {task_id}")
    return task


# ============== Suggestions ==============


def suggest_tasks(goal: str) -> list[SuggestedTask]:
    """Validate the goal and generate suggestions for it."""
    return generate_suggestions(validate_goal(goal))


def save_suggestion(repo: TaskRepository, session: Session, suggestion: SuggestedTask) -> str:
    """Persist one suggestion as a pending task. Saving twice creates two tasks."""
    return create_task(repo, session, suggestion.title, suggestion.notes)
