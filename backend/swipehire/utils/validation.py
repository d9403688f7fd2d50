"""
Request field checks shared by the auth, job and candidate endpoints.

Every failure is a 400 with a message naming the offending field.
"""
import re
from typing import Any

from fastapi import HTTPException

VALID_ROLES = ("candidate", "hr")
VALID_JOB_STATUSES = ("active", "closed", "draft")

_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes.
MAX_PASSWORD_LENGTH = 72


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=400, detail=detail)


def _one_of(value: Any, allowed: tuple[str, ...], label: str) -> str:
    choice = str(value).strip().lower()
    if choice not in allowed:
        raise _bad_request(f"Invalid {label}. Allowed values: {', '.join(allowed)}")
    return choice


def validate_email(email: str) -> str:
    """Normalized (trimmed, lower-cased) address."""
    if not isinstance(email, str) or not email.strip():
        raise _bad_request("Email is required")
    email = email.strip().lower()
    if len(email) > 255:
        raise _bad_request("Email is too long (255 characters max)")
    if not _EMAIL_RE.match(email):
        raise _bad_request("Email address is not valid")
    return email


def validate_password(password: str) -> None:
    if not isinstance(password, str) or not password:
        raise _bad_request("Password is required")
    if not MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH:
        raise _bad_request(
            f"Password must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters"
        )


def validate_string_field(
    value: Any,
    field_name: str,
    min_length: int = 1,
    max_length: int = 1000,
    required: bool = True,
    pattern: str | None = None,
) -> str | None:
    """
    Trimmed text, or None for a blank optional field.

    `pattern` is matched against the trimmed value.
    """
    if value is not None and not isinstance(value, str):
        raise _bad_request(f"{field_name} must be text")

    text = (value or "").strip()
    if not text:
        if required:
            raise _bad_request(f"{field_name} is required")
        return None

    if len(text) < min_length:
        raise _bad_request(f"{field_name} needs at least {min_length} characters")
    if len(text) > max_length:
        raise _bad_request(f"{field_name} is too long ({max_length} characters max)")
    if pattern and not re.match(pattern, text):
        raise _bad_request(f"{field_name} is not in a valid format")
    return text


def validate_integer_field(
    value: Any,
    field_name: str,
    min_value: int | None = None,
    max_value: int | None = None,
    required: bool = True,
) -> int | None:
    if value is None:
        if required:
            raise _bad_request(f"{field_name} is required")
        return None

    # bool is an int subclass; True is not a year count.
    if isinstance(value, bool):
        raise _bad_request(f"{field_name} must be a whole number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise _bad_request(f"{field_name} must be a whole number")

    if min_value is not None and number < min_value:
        raise _bad_request(f"{field_name} cannot be less than {min_value}")
    if max_value is not None and number > max_value:
        raise _bad_request(f"{field_name} cannot be more than {max_value}")
    return number


def validate_role(role: str) -> str:
    if not isinstance(role, str) or not role.strip():
        raise _bad_request("Role is required")
    return _one_of(role, VALID_ROLES, "role")


def validate_job_status(status: str | None) -> str:
    """Missing status means a job goes live immediately."""
    if not status:
        return "active"
    return _one_of(status, VALID_JOB_STATUSES, "job status")


def validate_string_list(value: Any, field_name: str, max_items: int = 50) -> list[str]:
    """Trimmed, non-blank, de-duplicated entries in their original order."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise _bad_request(f"{field_name} must be a list")

    cleaned: list[str] = []
    for item in value:
        entry = str(item).strip()
        if entry and entry not in cleaned:
            cleaned.append(entry)
    if len(cleaned) > max_items:
        raise _bad_request(f"{field_name} can hold at most {max_items} entries")
    return cleaned
