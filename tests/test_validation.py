import pytest
from fastapi import HTTPException

from backend.swipehire.utils.validation import (
    validate_email,
    validate_integer_field,
    validate_job_status,
    validate_password,
    validate_role,
    validate_string_field,
    validate_string_list,
)


def test_valid_email():
    assert validate_email("test@example.com") == "test@example.com"
    assert validate_email("  TEST@EXAMPLE.COM  ") == "test@example.com"


@pytest.mark.parametrize("email", ["", "invalid", "a@b", "x" * 250 + "@example.com"])
def test_invalid_email(email):
    with pytest.raises(HTTPException) as exc:
        validate_email(email)
    assert exc.value.status_code == 400


def test_password_length_bounds():
    validate_password("123456")
    validate_password("x" * 72)
    for bad in ("", "12345", "x" * 73):
        with pytest.raises(HTTPException):
            validate_password(bad)


def test_string_field():
    assert validate_string_field("  Hello  ", "Name") == "Hello"
    assert validate_string_field("   ", "Bio", required=False) is None
    assert validate_string_field(None, "Bio", required=False) is None
    with pytest.raises(HTTPException):
        validate_string_field("   ", "Name")
    with pytest.raises(HTTPException):
        validate_string_field("a" * 11, "Name", max_length=10)
    with pytest.raises(HTTPException):
        validate_string_field("ftp://x", "Link", pattern=r"^https?://\S+$")


def test_integer_field():
    assert validate_integer_field("5", "Years", min_value=0) == 5
    assert validate_integer_field(None, "Salary", required=False) is None
    for bad in (True, "five", -1, 61):
        with pytest.raises(HTTPException):
            validate_integer_field(bad, "Years", min_value=0, max_value=60)


def test_role():
    assert validate_role(" HR ") == "hr"
    assert validate_role("candidate") == "candidate"
    with pytest.raises(HTTPException):
        validate_role("recruiter")


def test_job_status():
    assert validate_job_status(None) == "active"
    assert validate_job_status("Closed") == "closed"
    with pytest.raises(HTTPException):
        validate_job_status("archived")


def test_string_list():
    assert validate_string_list([" SQL", "Python", "SQL", ""], "Skills") == ["SQL", "Python"]
    assert validate_string_list(None, "Skills") == []
    with pytest.raises(HTTPException):
        validate_string_list("SQL", "Skills")
    with pytest.raises(HTTPException):
        validate_string_list([str(i) for i in range(3)], "Skills", max_items=2)
