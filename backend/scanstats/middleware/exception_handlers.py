"""Global exception handlers for standardized error responses.

Catches HTTPException, RequestValidationError, statistics errors, database
errors and unhandled exceptions to return a consistent JSON error format.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from scanstats.middleware.error_codes import ErrorCode, get_error_code
from scanstats.services.exceptions import (
    InvalidTimeRangeError,
    StatisticsError,
    UnknownStatisticError,
)

logger = logging.getLogger("app.exception")


def build_error_response(
    request: Request,
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """Build standardized error response."""
    request_id = getattr(request.state, "request_id", None)

    body: dict[str, Any] = {
        "success": False,
        "error": {
            "code": code.value,
            "message": message,
            "request_id": request_id,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if details:
        body["error"]["details"] = details

    return JSONResponse(status_code=status_code, content=body)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standardized format."""
    error_code = get_error_code(exc.status_code)

    if exc.status_code >= 500:
        logger.error(
            "HTTPException status=%s detail=%s path=%s",
            exc.status_code,
            exc.detail,
            request.url.path,
        )

    return build_error_response(
        request=request,
        status_code=exc.status_code,
        code=error_code,
        message=str(exc.detail),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    details = []
    for error in exc.errors():
        loc = " -> ".join(str(x) for x in error.get("loc", []))
        details.append(
            {
                "field": loc,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            }
        )

    return build_error_response(
        request=request,
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR,
        message="Validation error: Please check your request data",
        details=details,
    )


async def statistics_exception_handler(
    request: Request, exc: StatisticsError
) -> JSONResponse:
    """Handle catalog lookup and time range errors."""
    if isinstance(exc, UnknownStatisticError):
        status_code, code = 404, ErrorCode.UNKNOWN_STATISTIC
    elif isinstance(exc, InvalidTimeRangeError):
        status_code, code = 400, ErrorCode.INVALID_TIME_RANGE
    else:
        status_code, code = 400, ErrorCode.BAD_REQUEST

    return build_error_response(
        request=request,
        status_code=status_code,
        code=code,
        message=str(exc),
    )


async def database_exception_handler(
    request: Request, exc: PyMongoError
) -> JSONResponse:
    """Handle errors raised by MongoDB while running a pipeline."""
    logger.error("Database error path=%s error=%s", request.url.path, exc)

    return build_error_response(
        request=request,
        status_code=503,
        code=ErrorCode.DATABASE_ERROR,
        message="Statistics are temporarily unavailable. Please try again later.",
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions - returns 500 with minimal info."""
    logger.exception("Unhandled exception path=%s", request.url.path)

    return build_error_response(
        request=request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        message="An unexpected error occurred. Please try again later.",
    )
