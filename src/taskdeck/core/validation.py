"""Input validation for user-entered text - no I/O dependencies."""

import re

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
MIN_PASSWORD_LENGTH = 8

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """Raised when user input is rejected before reaching the backend."""

    pass


def validate_goal(goal: str) -> str:
    """Reject blank goals. Returns the goal unchanged."""
    if not goal or not goal.strip():
        raise ValidationError("Please enter a goal")
    return goal


def validate_title(title: str) -> str:
    """Reject blank task titles. Returns the title unchanged."""
    if not title or not title.strip():
        raise ValidationError("Title is required")
    return title


def validate_email(email: str) -> str:
    email = (email or "").strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address")
    return email


def password_checks(password: str) -> dict[str, bool]:
    """Individual sign-up password rules and whether each one passes."""
    return {
        "length": len(password) >= MIN_PASSWORD_LENGTH,
        "uppercase": re.search(r"[A-Z]", password) is not None,
        "lowercase": re.search(r"[a-z]", password) is not None,
        "number": re.search(r"[0-9]", password) is not None,
        "special": any(c in SPECIAL_CHARACTERS for c in password),
    }


PASSWORD_RULE_MESSAGES = {
    "length": f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
    "uppercase": "Password must contain at least one uppercase letter",
    "lowercase": "Password must contain at least one lowercase letter",
    "number": "Password must contain at least one number",
    "special": "Password must contain at least one special character",
}


def validate_new_password(password: str, confirm: str) -> str:
    """Check sign-up password strength and confirmation.

    Reports the first failing rule, in the order of PASSWORD_RULE_MESSAGES.
    """
    for name, ok in password_checks(password).items():
        if not ok:
            raise ValidationError(PASSWORD_RULE_MESSAGES[name])
    if password != confirm:
        raise ValidationError("Passwords must match")
    return password
