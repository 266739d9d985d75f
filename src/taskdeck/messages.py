"""User-facing text for backend errors and completed actions."""

GENERIC_ERROR = "An error occurred. Please try again."

# Backend error messages mapped to friendlier text
BACKEND_ERRORS: dict[str, str] = {
    "Invalid login credentials": "Invalid email or password",
    "User already registered": "This email is already registered",
    "Email not confirmed": "Please confirm your email address",
    "Password should be at least 6 characters": "Password must be at least 6 characters",
    "Unable to validate email address: invalid format": "Invalid email format",
    "User not found": "User not found",
    "Network request failed": "Network error. Please check your connection",
    "Failed to fetch": "Network error. Please try again",
    "Signup requires a valid password": "Please enter a valid password",
    "Invalid email or password": "Invalid email or password",
}

TASK_CREATED = "Task created successfully!"
TASK_UPDATED = "Task updated successfully!"
TASK_DELETED = "Task deleted successfully!"
TASK_SAVED = "Task saved successfully!"
LOGIN_SUCCESS = "Welcome back!"
SIGNUP_SUCCESS = "Account created successfully!"
SIGNUP_CONFIRM = "Account created. Check your email to confirm it, then log in."
LOGOUT_SUCCESS = "Logged out successfully!"
RESET_LINK_SENT = "Password reset link sent to your email!"


def friendly_error(error: Exception | str | None, fallback: str = GENERIC_ERROR) -> str:
    """Translate a backend error to user-facing text.

    Known messages are rewritten, unknown ones pass through unchanged and an
    empty message becomes `fallback`.
    """
    message = str(error or "").strip()
    if not message:
        return fallback
    return BACKEND_ERRORS.get(message, message)


def tasks_generated(count: int) -> str:
    return f"Generated {count} tasks!"
