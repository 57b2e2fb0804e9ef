"""
Application errors and the handlers that turn them into JSON responses.

Each error class carries its HTTP status and machine-readable code as class
attributes; raising sites only supply the human-readable detail.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


class InvoiceDeskException(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INVOICEDESK_ERROR"
    default_detail: str = "Request could not be completed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundException(InvoiceDeskException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            super().__init__(f"{resource} with id '{resource_id}' not found")
        else:
            super().__init__(f"{resource} not found")


class UnauthorizedException(InvoiceDeskException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"
    default_detail = "Authentication required"


class InvalidTokenException(UnauthorizedException):
    error_code = "INVALID_TOKEN"
    default_detail = "Invalid or expired token"


class ForbiddenException(InvoiceDeskException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_detail = "You do not have permission to perform this action"


class BadRequestException(InvoiceDeskException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BAD_REQUEST"


class ConflictException(InvoiceDeskException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class DuplicateEmailException(ConflictException):
    error_code = "DUPLICATE_EMAIL"
    default_detail = "Email already registered"


class DuplicateUsernameException(ConflictException):
    error_code = "DUPLICATE_USERNAME"
    default_detail = "Username already taken"


# ── Handlers ──────────────────────────────────────────────────────────────────

def _error_body(error_code: str, detail: str, **extra: object) -> dict[str, object]:
    return {"error": error_code, "detail": detail, **extra}


async def invoicedesk_exception_handler(
    request: Request, exc: InvoiceDeskException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.detail),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", errors=errors),
    )


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    logger.warning("Rate limit hit on %s from %s", request.url.path, request.client)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=_error_body("RATE_LIMITED", f"Rate limit exceeded: {exc.detail}"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "INTERNAL_SERVER_ERROR", "An unexpected internal server error occurred"
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvoiceDeskException, invoicedesk_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
