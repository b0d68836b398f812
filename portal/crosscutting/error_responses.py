"""
Name: Standard Error Responses (RFC 7807 / Problem Details)

Responsibilities:
  - Define the catalog of stable error codes (ErrorCode)
  - Build problem+json payloads (ErrorDetail)
  - Provide factories for frequent errors (401, 403, 400)
  - Map typed portal exceptions to HTTP responses

Collaborators:
  - crosscutting/exceptions.py: PortalError and subclasses
  - identity/guards.py: raises unauthorized()/forbidden()
  - crosscutting/logger.py

Notes:
  - register_exception_handlers(app) is the only FastAPI wiring this package
    ships; routing is left to the host application.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .exceptions import (
    ContentRejectedError,
    InvalidPostError,
    PortalError,
    PostAuthoringError,
    RegistrationValidationError,
)
from .logger import logger


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONTENT_REJECTED = "CONTENT_REJECTED"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """
    RFC 7807 model (Problem Details).

    Extra fields:
    - code: stable error code for clients
    - errors: optional detail list (e.g. [{"field": "email", "msg": "..."}])
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class AppHTTPException(HTTPException):
    """R: HTTPException carrying a stable ErrorCode and optional errors[]."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Error factories
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def content_rejected(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.CONTENT_REJECTED, detail, errors)


def unauthorized(detail: str = "Not authorized") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Access denied") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = "An unexpected error occurred") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler for AppHTTPException (problem+json body)."""
    error = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=exc.errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def registration_error_handler(
    request: Request, exc: RegistrationValidationError
) -> JSONResponse:
    app_exc = validation_error(
        exc.message, errors=[*exc.errors, {"error_id": exc.error_id}]
    )
    return await app_exception_handler(request, app_exc)


async def content_rejected_handler(
    request: Request, exc: ContentRejectedError
) -> JSONResponse:
    app_exc = content_rejected(
        exc.message,
        errors=[{"field": exc.field, "msg": exc.reason, "error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def post_authoring_error_handler(
    request: Request, exc: PostAuthoringError
) -> JSONResponse:
    return await app_exception_handler(request, forbidden(exc.message))


async def invalid_post_handler(request: Request, exc: InvalidPostError) -> JSONResponse:
    app_exc = validation_error(
        exc.message,
        errors=[{"field": exc.field, "msg": exc.message, "error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    # R: Untyped portal errors are treated as INTERNAL_ERROR.
    logger.error(
        "Portal error",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "error_message": exc.message,
        },
    )
    app_exc = internal_error(exc.message)
    app_exc.errors = [{"error_id": exc.error_id}]
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Register handlers on a FastAPI app.

    Handlers are looked up along the exception MRO, so each PortalError
    subclass gets its own status code and PortalError is the fallback.
    """
    app.add_exception_handler(RegistrationValidationError, registration_error_handler)
    app.add_exception_handler(ContentRejectedError, content_rejected_handler)
    app.add_exception_handler(PostAuthoringError, post_authoring_error_handler)
    app.add_exception_handler(InvalidPostError, invalid_post_handler)
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)


__all__ = [
    "AppHTTPException",
    "ErrorCode",
    "ErrorDetail",
    "PROBLEM_JSON_MEDIA_TYPE",
    "content_rejected",
    "forbidden",
    "internal_error",
    "register_exception_handlers",
    "unauthorized",
    "validation_error",
]
