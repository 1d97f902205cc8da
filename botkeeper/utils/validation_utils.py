"""
botkeeper/utils/validation_utils.py

Purpose: Input validation

- Mailbox-style email check
- Username and password length rules
"""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 5


def validate_email(email: str) -> bool:
    """
    Validates a simple ``local@domain.tld`` shape.

    Args:
        email: Email address to check

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email) is not None


def validate_username(username: str) -> bool:
    """Usernames need at least MIN_USERNAME_LENGTH characters."""
    return isinstance(username, str) and len(username) >= MIN_USERNAME_LENGTH


def validate_password(password: str) -> bool:
    """Passwords need at least MIN_PASSWORD_LENGTH characters."""
    return isinstance(password, str) and len(password) >= MIN_PASSWORD_LENGTH
