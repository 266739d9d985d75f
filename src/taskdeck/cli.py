"""Taskdeck CLI - personal task manager."""

import json
import logging
import sys

import click

from . import messages
from .config import load_config
from .core.tasks import SortOrder, StatusFilter, Task, TaskStats, TaskStatus, ViewState
from .core.validation import ValidationError
from .errors import AuthenticationError, StorageError
from .workflows import (
    create_task,
    edit_task,
    get_auth,
    get_repository,
    load_view,
    remove_task,
    request_password_reset,
    require_session,
    resolve_task,
    save_suggestion,
    set_status,
    sign_in,
    sign_out,
    sign_up,
    suggest_tasks,
    toggle_task,
)

HANDLED_ERRORS = (ValidationError, StorageError, AuthenticationError)

STATUS_CHOICES = click.Choice([s.value for s in StatusFilter], case_sensitive=False)
SORT_CHOICES = click.Choice([s.value for s in SortOrder], case_sensitive=False)


def _fail(error: Exception | str) -> None:
    click.echo(f"Error: {messages.friendly_error(error)}", err=True)
    sys.exit(1)


def _format_stats(stats: TaskStats) -> str:
    return (
        f"Total: {stats.total}  Completed: {stats.completed}  "
        f"Pending: {stats.pending}  Completion: {stats.completion_rate}%"
    )


def _format_task(task: Task) -> str:
    check = "x" if task.is_completed else " "
    line = f"[{check}] {task.id[:8]}  {task.title}  ({task.created_at.strftime('%Y-%m-%d %H:%M')})"
    if task.notes:
        first, *rest = task.notes.splitlines() or [""]
        more = " ..." if rest else ""
        line += f"\n             {first}{more}"
    return line


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Taskdeck - personal task manager."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


# ============== Auth ==============


@main.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.option("--confirm", prompt="Confirm password", hide_input=True)
def signup(email: str, password: str, confirm: str):
    """Create an account."""
    try:
        session = sign_up(get_auth(load_config()), email, password, confirm)
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(messages.SIGNUP_SUCCESS if session else messages.SIGNUP_CONFIRM)


@main.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Sign in."""
    try:
        sign_in(get_auth(load_config()), email, password)
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(messages.LOGIN_SUCCESS)


@main.command()
def logout():
    """Sign out and forget the saved session."""
    try:
        sign_out(get_auth(load_config()))
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(messages.LOGOUT_SUCCESS)


@main.command("reset-password")
@click.option("--email", prompt=True)
def reset_password(email: str):
    """Send a password reset link."""
    config = load_config()
    try:
        request_password_reset(get_auth(config), email, config.reset_redirect_url)
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(messages.RESET_LINK_SENT)


# ============== Tasks ==============


@main.command("list")
@click.option("--search", "-s", default="", help="Match title or notes")
@click.option("--status", type=STATUS_CHOICES, default=None, help="Filter by status")
@click.option("--sort", type=SORT_CHOICES, default=None, help="Order by creation time")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(search: str, status: str | None, sort: str | None, as_json: bool):
    """List your tasks."""
    config = load_config()
    try:
        view = ViewState.parse(search, status or config.default_status, sort or config.default_sort)
        session = require_session()
        repo = get_repository(config, session)
        result = load_view(repo, session, view)
    except HANDLED_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "stats": result.stats.to_dict(),
                    "tasks": [t.to_dict() for t in result.tasks],
                },
                indent=2,
            )
        )
        return

    click.echo(_format_stats(result.stats))
    click.echo()
    if not result.tasks:
        click.echo("No tasks found.")
        return

    for task in result.tasks:
        click.echo(_format_task(task))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool):
    """Show task counts and completion rate."""
    try:
        session = require_session()
        repo = get_repository(load_config(), session)
        result = load_view(repo, session)
    except HANDLED_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(result.stats.to_dict(), indent=2))
    else:
        click.echo(_format_stats(result.stats))


@main.command()
@click.argument("title")
@click.option("--notes", "-n", default=None, help="Task notes")
def add(title: str, notes: str | None):
    """Create a task."""
    try:
        session = require_session()
        repo = get_repository(load_config(), session)
        task_id = create_task(repo, session, title, notes)
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(f"{messages.TASK_CREATED} ({task_id[:8]})")


@main.command()
@click.argument("task_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--notes", "-n", default=None, help="New notes")
def edit(task_id: str, title: str | None, notes: str | None):
    """Edit a task's title and notes."""
    try:
        session = require_session()
        repo = get_repository(load_config(), session)
        task = resolve_task(repo, session, task_id)
        edit_task(
            repo,
            task.id,
            title if title is not None else task.title,
            notes if notes is not None else task.notes,
        )
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(messages.TASK_UPDATED)


def _change_status(task_id: str, status: TaskStatus | None) -> None:
    try:
        session = require_session()
        repo = get_repository(load_config(), session)
        task = resolve_task(repo, session, task_id)
        if status is None:
            new_status = toggle_task(repo, task)
        else:
            set_status(repo, task.id, status)
            new_status = status
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(f"{task.title}: {new_status.value}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Mark a task completed."""
    _change_status(task_id, TaskStatus.COMPLETED)


@main.command()
@click.argument("task_id")
def undo(task_id: str):
    """Mark a task pending again."""
    _change_status(task_id, TaskStatus.PENDING)


@main.command()
@click.argument("task_id")
def toggle(task_id: str):
    """Flip a task between pending and completed."""
    _change_status(task_id, None)


@main.command()
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def delete(task_id: str, yes: bool):
    """Delete a task."""
    try:
        session = require_session()
        repo = get_repository(load_config(), session)
        task = resolve_task(repo, session, task_id)
    except HANDLED_ERRORS as e:
        _fail(e)

    if not yes and not click.confirm(f"Delete '{task.title}'?"):
        click.echo("Cancelled.")
        return

    try:
        remove_task(repo, task.id)
    except HANDLED_ERRORS as e:
        _fail(e)

    click.echo(messages.TASK_DELETED)


# ============== Suggestions ==============


@main.command()
@click.argument("goal")
@click.option("--save", "save_numbers", type=int, multiple=True, help="Save suggestion N (1-based)")
@click.option("--save-all", is_flag=True, help="Save every suggestion")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def suggest(goal: str, save_numbers: tuple[int, ...], save_all: bool, as_json: bool):
    """Suggest tasks for a goal."""
    try:
        suggestions = suggest_tasks(goal)
    except ValidationError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in suggestions], indent=2))
    else:
        click.echo(messages.tasks_generated(len(suggestions)))
        for i, suggestion in enumerate(suggestions, 1):
            click.echo(f"{i}. {suggestion.title}")
            click.echo(f"   {suggestion.notes}")

    if save_all:
        save_numbers = tuple(range(1, len(suggestions) + 1))
    if not save_numbers:
        return

    for n in save_numbers:
        if not 1 <= n <= len(suggestions):
            _fail(ValidationError(f"No suggestion number {n}"))

    try:
        session = require_session()
        repo = get_repository(load_config(), session)
    except HANDLED_ERRORS as e:
        _fail(e)

    for n in save_numbers:
        suggestion = suggestions[n - 1]
        try:
            save_suggestion(repo, session, suggestion)
        except HANDLED_ERRORS as e:
            _fail(messages.friendly_error(e, fallback="Failed to save task"))
        click.echo(f"{messages.TASK_SAVED} ({suggestion.title})", err=as_json)


if __name__ == "__main__":
    main()
