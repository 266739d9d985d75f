"""Tests for the shared workflow layer."""

from unittest.mock import MagicMock

import pytest

from taskdeck.adapters.memory_store import InMemoryTaskRepository
from taskdeck.config import Session
from taskdeck.core.suggestions import SuggestedTask
from taskdeck.core.tasks import SortOrder, StatusFilter, TaskStatus, ViewState
from taskdeck.core.validation import ValidationError
from taskdeck.errors import AuthenticationError, StorageError
from taskdeck.workflows import (
    create_task,
    edit_task,
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


@pytest.fixture
def repo():
    return InMemoryTaskRepository()


@pytest.fixture
def session():
    return Session(access_token="tok", refresh_token="ref", expires_at=0, user_id="user-1")


@pytest.fixture
def session_path(tmp_path):
    return tmp_path / ".session.json"


class TestTaskActions:
    def test_create_task(self, repo, session):
        task_id = create_task(repo, session, "Buy milk", "2 litres")
        task = resolve_task(repo, session, task_id)
        assert task.title == "Buy milk"
        assert task.notes == "2 litres"
        assert task.status == TaskStatus.PENDING
        assert task.user_id == "user-1"

    def test_blank_title_changes_nothing(self, repo, session):
        with pytest.raises(ValidationError):
            create_task(repo, session, "   ")
        assert repo.list("user-1") == []

    def test_edit_task(self, repo, session):
        task_id = create_task(repo, session, "Old")
        edit_task(repo, task_id, "New", None)
        task = resolve_task(repo, session, task_id)
        assert (task.title, task.notes) == ("New", None)

    def test_edit_rejects_blank_title(self, repo, session):
        task_id = create_task(repo, session, "Old")
        with pytest.raises(ValidationError):
            edit_task(repo, task_id, "")
        assert resolve_task(repo, session, task_id).title == "Old"

    def test_toggle_task(self, repo, session):
        task_id = create_task(repo, session, "T")
        assert toggle_task(repo, resolve_task(repo, session, task_id)) == TaskStatus.COMPLETED
        assert toggle_task(repo, resolve_task(repo, session, task_id)) == TaskStatus.PENDING

    def test_set_status_accepts_string(self, repo, session):
        task_id = create_task(repo, session, "T")
        set_status(repo, task_id, "completed")
        assert resolve_task(repo, session, task_id).is_completed

    def test_remove_task(self, repo, session):
        task_id = create_task(repo, session, "T")
        remove_task(repo, task_id)
        with pytest.raises(StorageError):
            resolve_task(repo, session, task_id)

    def test_load_view(self, repo, session):
        first = create_task(repo, session, "Pay rent")
        create_task(repo, session, "Walk dog")
        set_status(repo, first, TaskStatus.COMPLETED)

        view = load_view(repo, session, ViewState(status=StatusFilter.PENDING, sort=SortOrder.OLDEST))

        assert [t.title for t in view.tasks] == ["Walk dog"]
        assert view.stats.total == 2
        assert view.stats.completion_rate == 50

    def test_storage_errors_propagate(self, session):
        repo = MagicMock()
        repo.insert.side_effect = StorageError("boom")
        with pytest.raises(StorageError):
            create_task(repo, session, "T")
        assert repo.insert.call_count == 1


class TestSuggestions:
    def test_blank_goal_rejected(self):
        with pytest.raises(ValidationError):
            suggest_tasks("  ")

    def test_suggest_tasks(self):
        assert len(suggest_tasks("Plan a wedding")) == 5

    def test_save_suggestion_twice_creates_two_tasks(self, repo, session):
        suggestion = SuggestedTask("Create guest list", "Draft initial list of guests to invite")
        save_suggestion(repo, session, suggestion)
        save_suggestion(repo, session, suggestion)

        tasks = repo.list("user-1")
        assert len(tasks) == 2
        assert all(t.notes == suggestion.notes for t in tasks)
        assert all(t.status == TaskStatus.PENDING for t in tasks)


class TestAuthFlows:
    def test_sign_in_saves_session(self, session, session_path):
        auth = MagicMock()
        auth.sign_in.return_value = session

        sign_in(auth, " you@example.com ", "secret", session_path=session_path)

        auth.sign_in.assert_called_once_with("you@example.com", "secret")
        assert require_session(session_path) == session

    def test_sign_up_validates_before_calling_backend(self, session_path):
        auth = MagicMock()
        with pytest.raises(ValidationError):
            sign_up(auth, "you@example.com", "weak", "weak", session_path=session_path)
        auth.sign_up.assert_not_called()

    def test_sign_up_pending_confirmation(self, session_path):
        auth = MagicMock()
        auth.sign_up.return_value = None
        assert sign_up(auth, "you@example.com", "Str0ng!pass", "Str0ng!pass", session_path=session_path) is None
        assert not session_path.exists()

    def test_sign_out_clears_session_even_on_failure(self, session, session_path):
        session.save(session_path)
        auth = MagicMock()
        auth.sign_out.side_effect = AuthenticationError("Session expired")

        with pytest.raises(AuthenticationError):
            sign_out(auth, session_path=session_path)
        assert not session_path.exists()

    def test_require_session_when_signed_out(self, session_path):
        with pytest.raises(AuthenticationError):
            require_session(session_path)

    def test_password_reset(self):
        auth = MagicMock()
        request_password_reset(auth, "you@example.com", "https://app/reset")
        auth.reset_password.assert_called_once_with("you@example.com", "https://app/reset")
