"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, storage and
framework exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hrms.core.config import get_settings
from hrms.domain.enums import ReasonCode
from hrms.domain.exceptions import (
    AccessDeniedException,
    AuthenticationException,
    DependencyNotFoundException,
    HrmsException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)

# Reason codes that signal a conflict with existing state rather than bad input.
_CONFLICT_CODES = frozenset({
    ReasonCode.DUPLICATE_EMPLOYEE_ID.value,
    ReasonCode.DUPLICATE_EMAIL.value,
    ReasonCode.DUPLICATE_TASK.value,
    ReasonCode.OVERLAPPING_PAY_PERIOD.value,
    ReasonCode.DUPLICATE_APPLICATION.value,
    ReasonCode.DUPLICATE_DEPARTMENT_NAME.value,
})

_EXCEPTION_STATUS: tuple[tuple[type[HrmsException], int], ...] = (
    (AuthenticationException, 401),
    (AccessDeniedException, 403),
    (ResourceNotFoundException, 404),
    (DependencyNotFoundException, 400),
)


def _status_for(exc: HrmsException) -> int:
    for exc_type, status in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            return status
    if exc.error_code in _CONFLICT_CODES:
        return 409
    if exc.error_code == "SQL_NOT_CONFIGURED":
        return 503
    if exc.error_code.startswith("STORAGE_"):
        return 404 if exc.error_code == "STORAGE_NOT_FOUND" else 500
    return 400


def _hrms_exception_handler(request: Request, exc: HrmsException) -> JSONResponse:
    """Return JSON from HrmsException.to_dict() with the mapped status code."""
    return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failures are logged in full and surfaced as a generic 500."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "DATABASE_ERROR", "message": "A database error occurred"},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content={"error": "INTERNAL_ERROR", "message": detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app (call once after creating it)."""
    app.add_exception_handler(HrmsException, _hrms_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
