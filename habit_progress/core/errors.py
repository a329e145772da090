"""
Custom exception hierarchy for the habit progress service.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class HabitProgressException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class HabitValidationError(HabitProgressException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(
            message=f"Validation error for {field}: {message}",
            details={"field": field},
        )


class DuplicateCheckInError(HabitProgressException):
    http_status = status.HTTP_409_CONFLICT
    code = "ALREADY_CHECKED_IN"

    def __init__(self, habit_id: str, day: date):
        self.habit_id = habit_id
        self.day = day
        super().__init__(
            message="Already checked in for today.",
            details={"habit_id": habit_id, "day": str(day)},
        )


class HabitNotFoundError(HabitProgressException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: str):
        self.habit_id = habit_id
        super().__init__(
            message=f"Habit {habit_id} not found.",
            details={"habit_id": habit_id},
        )


class StoreUnavailableError(HabitProgressException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str, reason: str | None = None):
        self.operation = operation
        super().__init__(
            message=f"Data store unavailable during {operation}.",
            details={"operation": operation, "reason": reason} if reason else {"operation": operation},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def habit_progress_exception_handler(
    request: Request, exc: HabitProgressException
) -> JSONResponse:
    if isinstance(exc, StoreUnavailableError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
