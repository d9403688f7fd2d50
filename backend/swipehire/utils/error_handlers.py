"""
Application errors and the JSON error body every endpoint returns.

Services raise the `AppError` subclasses below; `main.py` turns them (and
plain `HTTPException`s) into `{"success": false, "error": ..., "status_code": ...}`.
"""
import logging
from typing import Any

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, details: dict | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class ConflictError(AppError):
    status_code = 409


ERROR_MESSAGES = {
    # Accounts
    "invalid_credentials": "Email or password is incorrect.",
    "email_exists": "That email is already registered. Try signing in instead.",
    "role_mismatch": "This account is not registered for the selected role.",
    "session_expired": "Your sign-in has expired. Please sign in again.",
    "unauthorized": "Sign in to continue.",
    "profile_not_found": "Profile not found.",

    # Jobs and applications
    "job_not_found": "Job not found.",
    "job_closed": "This job is no longer taking applications.",
    "already_applied": "You have already applied for this job.",
    "application_not_found": "Application not found.",
    "invalid_status_transition": "A screened application cannot go back to applied.",

    # Screening
    "screening_session_not_found": "Screening session not found or already closed.",
    "job_not_screenable": "Job not found or not available for screening.",

    # Chat
    "conversation_not_found": "Conversation not found.",
    "empty_message": "Type a message before sending.",

    # Generic
    "forbidden": "You are not allowed to do that.",
    "not_found": "Not found.",
    "validation_error": "Some fields are missing or invalid.",
    "database_error": "The data store is unavailable right now.",
    "server_error": "Unexpected server error.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    return ERROR_MESSAGES.get(error_key) or default or ERROR_MESSAGES["server_error"]


def handle_database_error(error: Exception, operation: str = "") -> HTTPException:
    """Map a failed write or query to the HTTP error the client should see."""
    logger.error("Database error while %s: %s", operation or "talking to the database", error)

    if isinstance(error, IntegrityError):
        reason = str(error.orig).lower() if error.orig is not None else ""
        if "unique" in reason:
            return HTTPException(status_code=409, detail="A matching record already exists.")
        if "foreign key" in reason:
            return HTTPException(status_code=400, detail="A referenced record does not exist.")
    if isinstance(error, OperationalError):
        return HTTPException(status_code=503, detail=get_error_message("database_error"))
    return HTTPException(status_code=500, detail=get_error_message("server_error"))


def create_error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": message, "status_code": status_code}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)
