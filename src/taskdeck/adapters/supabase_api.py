"""Supabase adapter - HTTP client for auth and task storage."""

import logging
from enum import Enum
from pathlib import Path

import requests

from taskdeck.config import Config, Session, load_config
from taskdeck.core.tasks import Task
from taskdeck.core.validation import ValidationError
from taskdeck.errors import AuthenticationError, StorageError
from taskdeck.ports.task_repo import NewTask

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"
UPDATABLE_FIELDS = {"title", "notes", "status"}


def error_message(resp: requests.Response) -> str:
    """Best-effort error message from a Supabase error response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(data, dict):
        for key in ("msg", "error_description", "message", "error"):
            if data.get(key):
                return str(data[key])
    return resp.text or f"HTTP {resp.status_code}"


class SupabaseClient:
    """Shared HTTP plumbing for the Supabase REST and auth APIs."""

    def __init__(self, config: Config | None = None, http: requests.Session | None = None):
        self.config = config or load_config()
        self._session = http or requests.Session()
        if not self.config.supabase_url or not self.config.supabase_anon_key:
            raise AuthenticationError(
                "Missing Supabase settings. Add SUPABASE_URL and SUPABASE_ANON_KEY to config/taskdeck.conf"
            )

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.config.supabase_anon_key,
            "Authorization": f"Bearer {access_token or self.config.supabase_anon_key}",
            "Content-Type": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self.config.supabase_url}{path}"


class SupabaseAuthService(SupabaseClient):
    """
    Supabase auth (GoTrue) adapter.

    Implements AuthService protocol. No business logic - just I/O.
    """

    def _post(self, path: str, payload: dict, params: dict | None = None, access_token: str | None = None):
        try:
            resp = self._session.post(
                self._url(path),
                json=payload,
                params=params,
                headers=self._headers(access_token),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Auth request to {path} failed: {e}")
            raise AuthenticationError(str(e))

        if not resp.ok:
            message = error_message(resp)
            logger.warning(f"Auth request to {path} rejected ({resp.status_code}): {message}")
            raise AuthenticationError(message)

        if resp.status_code == 204 or not resp.content:
            return {}
        return resp.json()

    def sign_up(self, email: str, password: str) -> Session | None:
        """Register a user. Returns None when the email must be confirmed first."""
        data = self._post("/auth/v1/signup", {"email": email, "password": password})
        if data.get("access_token"):
            return Session.from_api(data)
        logger.info(f"Sign-up for {email} awaiting email confirmation")
        return None

    def sign_in(self, email: str, password: str) -> Session:
        data = self._post(
            "/auth/v1/token",
            {"email": email, "password": password},
            params={"grant_type": "password"},
        )
        return Session.from_api(data)

    def refresh(self, session: Session) -> Session:
        """Exchange the refresh token for a new session."""
        if not session.refresh_token:
            raise AuthenticationError("No refresh token. Run 'taskdeck login' first.")
        data = self._post(
            "/auth/v1/token",
            {"refresh_token": session.refresh_token},
            params={"grant_type": "refresh_token"},
        )
        return Session.from_api(data)

    def sign_out(self, session: Session) -> None:
        self._post("/auth/v1/logout", {}, access_token=session.access_token)

    def reset_password(self, email: str, redirect_to: str = "") -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        self._post("/auth/v1/recover", {"email": email}, params=params)


class SupabaseTaskRepository(SupabaseClient):
    """
    Supabase PostgREST adapter for the tasks table.

    Implements TaskRepository protocol. Refreshes the session when it is
    about to expire. Every backend failure surfaces as StorageError.
    """

    def __init__(
        self,
        session: Session,
        config: Config | None = None,
        http: requests.Session | None = None,
        auth: SupabaseAuthService | None = None,
        session_path: Path | None = None,
    ):
        super().__init__(config, http)
        self.session = session
        self._auth = auth
        self._session_path = session_path

    def _ensure_valid_token(self) -> None:
        """Refresh session if expired or expiring soon."""
        if not self.session.is_authenticated:
            raise AuthenticationError("Not signed in. Run 'taskdeck login' first.")

        # Refresh if expiring within 5 minutes
        if self.session.expires_soon():
            logger.debug("Access token expiring, refreshing session")
            auth = self._auth or SupabaseAuthService(self.config, self._session)
            self.session = auth.refresh(self.session)
            self.session.save(self._session_path)

    def _request(self, method: str, params: dict | None = None, payload=None, prefer: str | None = None):
        """Make an authenticated request against the tasks table."""
        self._ensure_valid_token()
        headers = self._headers(self.session.access_token)
        if prefer:
            headers["Prefer"] = prefer
        try:
            resp = self._session.request(
                method,
                self._url(f"/rest/v1/{TASKS_TABLE}"),
                params=params,
                json=payload,
                headers=headers,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {TASKS_TABLE} failed: {e}")
            raise StorageError(str(e))

        if not resp.ok:
            message = error_message(resp)
            logger.error(f"{method} {TASKS_TABLE} rejected ({resp.status_code}): {message}")
            raise StorageError(message)

        if resp.status_code == 204 or not resp.content:
            return []
        try:
            return resp.json()
        except ValueError:
            logger.error(f"{method} {TASKS_TABLE} returned a non-JSON body")
            raise StorageError(f"Unreadable response from backend: {resp.text[:200]}")

    def insert(self, task: NewTask) -> str:
        rows = self._request("POST", payload=task.to_dict(), prefer="return=representation")
        if not rows:
            raise StorageError("Insert returned no row")
        task_id = str(rows[0]["id"])
        logger.debug(f"Inserted task {task_id}")
        return task_id

    def update(self, task_id: str, fields: dict) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        payload = {k: v.value if isinstance(v, Enum) else v for k, v in fields.items()}
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            payload=payload,
            prefer="return=representation",
        )
        if not rows:
            raise StorageError(f"Task not found: {task_id}")

    def delete(self, task_id: str) -> None:
        rows = self._request("DELETE", params={"id": f"eq.{task_id}"}, prefer="return=representation")
        if not rows:
            raise StorageError(f"Task not found: {task_id}")

    def list(self, user_id: str) -> list[Task]:
        rows = self._request(
            "GET",
            params={
                "select": "*",
                "user_id": f"eq.{user_id}",
                "order": "created_at.desc",
            },
        )
        try:
            return [Task.from_api(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed task row from backend: {e!r}")
            raise StorageError(f"Malformed task row: {e}")
