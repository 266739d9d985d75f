"""Authentication service interface."""

from typing import Protocol

from taskdeck.config import Session


class AuthService(Protocol):
    """Interface for sign-in flows. Failures raise AuthenticationError."""

    def sign_up(self, email: str, password: str) -> Session | None:
        """Register a user. Returns a session unless email confirmation is pending."""
        ...

    def sign_in(self, email: str, password: str) -> Session:
        """Sign in with email and password."""
        ...

    def refresh(self, session: Session) -> Session:
        """Exchange the refresh token for a new session."""
        ...

    def sign_out(self, session: Session) -> None:
        """Revoke the session."""
        ...

    def reset_password(self, email: str, redirect_to: str = "") -> None:
        """Send a password reset link."""
        ...
