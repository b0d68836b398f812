"""
Name: Typed Portal Exceptions

Responsibilities:
  - Give internal errors a stable error_code and a correlatable error_id
  - Carry the human-readable message the caller surfaces to clients

Collaborators:
  - crosscutting/error_responses.py: maps these errors to RFC 7807 responses
  - application/registration.py, application/post_submission.py: raise them

Notes:
  - Role resolution, permissions and moderation never raise; only
    registration validation and post submission escalate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Minimal error payload for non-HTTP callers."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class PortalError(Exception):
    """Base class for errors raised by the portal core."""

    error_code: str = "PORTAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class RegistrationValidationError(PortalError):
    """Registration input rejected (email format, year window, password)."""

    error_code: str = "REGISTRATION_INVALID"

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        error_id: str | None = None,
    ):
        super().__init__(message, error_id=error_id)
        self.errors = errors or []


class ContentRejectedError(PortalError):
    """A post field failed content moderation."""

    error_code: str = "CONTENT_REJECTED"

    def __init__(
        self,
        field: str,
        reason: str,
        category: str | None = None,
        error_id: str | None = None,
    ):
        self.field = field
        self.reason = reason
        self.category = category
        super().__init__(f"Inappropriate {field}: {reason}", error_id=error_id)


class PostAuthoringError(PortalError):
    """The user may not author a post of the requested type."""

    error_code: str = "POST_NOT_ALLOWED"


class InvalidPostError(PortalError):
    """A post payload is malformed (e.g. unknown post type)."""

    error_code: str = "POST_INVALID"

    def __init__(self, message: str, field: str, error_id: str | None = None):
        super().__init__(message, error_id=error_id)
        self.field = field
