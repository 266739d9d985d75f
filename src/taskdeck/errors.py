"""Errors raised by the imperative shell."""


class StorageError(Exception):
    """Raised when the backend rejects or fails a task operation."""

    pass


class AuthenticationError(Exception):
    """Raised when authentication fails or no session is available."""

    pass
