"""
Password complexity rules applied at registration.
"""

import re
from typing import List

PASSWORD_MIN_LENGTH = 12
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# (pattern, error message) checked in order
_CHARACTER_RULES = (
    (r"[A-Z]", "Password must contain at least one uppercase letter"),
    (r"[a-z]", "Password must contain at least one lowercase letter"),
    (r"\d", "Password must contain at least one digit"),
    (
        f"[{re.escape(SPECIAL_CHARACTERS)}]",
        "Password must contain at least one special character",
    ),
)


def validate_password_complexity(password: str) -> tuple[bool, List[str]]:
    """
    Validate a password against the complexity rules.

    Args:
        password: Candidate password

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors: List[str] = []

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )

    for pattern, message in _CHARACTER_RULES:
        if not re.search(pattern, password):
            errors.append(message)

    return not errors, errors
