"""Credential Validation — transport-level shape checks for login and registration.

Invariants:
    - Checks run in a fixed order: presence/type, email syntax, password length
    - Email syntax is checked on the raw input, then trimmed and lower-cased
    - Raises InputValidationError before any delegate call is made
    - Never inspects password content beyond its length
    - Password length is counted in UTF-16 code units (astral characters count twice)

Design Decisions:
    - EMAIL_PATTERN is searched, not fully matched: surrounding whitespace is tolerated
      and removed by normalization afterwards (ADR: frontend sends untrimmed input)
    - re.ASCII: word characters limited to [A-Za-z0-9_]
"""

import re
from typing import Any

from app.core.errors import InputValidationError

LOGIN_MIN_PASSWORD_LENGTH: int = 6
REGISTER_MIN_PASSWORD_LENGTH: int = 8

_ATOM = r"[\w!#$%&'*+/=?^_`{|}~-]+"
_LABEL = r"[\w](?:[\w-]*[\w])?"

EMAIL_PATTERN = re.compile(
    rf"{_ATOM}(?:\.{_ATOM})*@(?:{_LABEL}\.)+{_LABEL}",
    re.ASCII,
)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.search(email) is not None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def password_length(password: str) -> int:
    """Length in UTF-16 code units, the unit browser clients count in."""
    return len(password.encode("utf-16-le")) // 2


def validate_credentials(
    email: Any, password: Any, min_password_length: int,
) -> tuple[str, str]:
    """Validate raw credentials and return (normalized_email, password)."""
    if (
        not email or not isinstance(email, str)
        or not password or not isinstance(password, str)
    ):
        raise InputValidationError("Email and password are required")

    if not is_valid_email(email):
        raise InputValidationError("Please enter a valid email", field="email")

    email = normalize_email(email)

    if password_length(password) < min_password_length:
        raise InputValidationError(
            f"Password must be at least {min_password_length} characters",
            field="password",
        )
    return email, password
