"""Configuration management for Taskdeck."""

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TASKDECK_HOME = Path(os.environ.get("TASKDECK_HOME", Path.home() / ".taskdeck"))
CONFIG_FILE = TASKDECK_HOME / "config" / "taskdeck.conf"
SESSION_FILE = TASKDECK_HOME / "config" / ".session.json"


@dataclass
class Config:
    """Taskdeck configuration."""

    supabase_url: str = ""
    supabase_anon_key: str = ""
    reset_redirect_url: str = ""
    request_timeout: float = 10.0
    default_status: str = "all"
    default_sort: str = "latest"


@dataclass
class Session:
    """Signed-in user session returned by the auth backend."""

    access_token: str = ""
    refresh_token: str = ""
    expires_at: int = 0
    user_id: str = ""
    email: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.user_id)

    def expires_soon(self, margin: int = 300) -> bool:
        """True when the access token expires within `margin` seconds."""
        return bool(self.expires_at) and time.time() >= self.expires_at - margin

    @classmethod
    def from_api(cls, data: dict) -> "Session":
        """Create Session from an auth token response."""
        user = data.get("user") or {}
        expires_at = data.get("expires_at")
        if not expires_at:
            expires_at = int(time.time()) + data.get("expires_in", 3600)
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token", ""),
            expires_at=int(expires_at),
            user_id=user.get("id", ""),
            email=user.get("email", ""),
        )

    def save(self, path: Path | None = None) -> None:
        """Save session to file."""
        path = path or SESSION_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(
                {
                    "access_token": self.access_token,
                    "refresh_token": self.refresh_token,
                    "expires_at": self.expires_at,
                    "user_id": self.user_id,
                    "email": self.email,
                }
            )
        )
        path.chmod(0o600)

    @classmethod
    def load(cls, path: Path | None = None) -> "Session":
        """Load session from file."""
        path = path or SESSION_FILE
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
            if not isinstance(data, dict):
                raise ValueError("session file is not a JSON object")
            return cls(
                access_token=data.get("access_token", ""),
                refresh_token=data.get("refresh_token", ""),
                expires_at=data.get("expires_at", 0),
                user_id=data.get("user_id", ""),
                email=data.get("email", ""),
            )
        except (ValueError, KeyError):
            logger.warning(f"Ignoring unreadable session file: {path}")
            return cls()

    @staticmethod
    def clear(path: Path | None = None) -> None:
        """Remove the saved session."""
        path = path or SESSION_FILE
        path.unlink(missing_ok=True)


def _parse_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskdeck.conf, then apply environment overrides."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _parse_value(value.strip())

            match key:
                case "supabase_url":
                    config.supabase_url = value.rstrip("/")
                case "supabase_anon_key":
                    config.supabase_anon_key = value
                case "reset_redirect_url":
                    config.reset_redirect_url = value
                case "request_timeout":
                    try:
                        config.request_timeout = float(value)
                    except ValueError:
                        logger.warning(f"Invalid REQUEST_TIMEOUT: {value}")
                case "default_status":
                    config.default_status = value.lower()
                case "default_sort":
                    config.default_sort = value.lower()
                case _:
                    logger.debug(f"Unknown config key: {key}")

    if os.environ.get("TASKDECK_SUPABASE_URL"):
        config.supabase_url = os.environ["TASKDECK_SUPABASE_URL"].rstrip("/")
    if os.environ.get("TASKDECK_SUPABASE_KEY"):
        config.supabase_anon_key = os.environ["TASKDECK_SUPABASE_KEY"]

    return config
