"""Domain exceptions for the HR core.

Business-rule violations carry a stable reason code (error_code) plus
details such as the valid next states or the conflicting record ids.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from collections.abc import Iterable
from typing import Any

from hrms.domain.enums import ReasonCode


class HrmsException(Exception):
    """Base exception for all HR core errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for an API error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(HrmsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(HrmsException):
    """Raised when the bearer token is missing, expired or malformed."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AccessDeniedException(HrmsException):
    """Raised when the actor's role or visibility scope does not cover the target."""

    def __init__(
        self,
        message: str = "Access denied",
        *,
        resource: str | None = None,
        action: str | None = None,
        reason: ReasonCode = ReasonCode.ACCESS_DENIED,
        **extra: Any,
    ) -> None:
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        details.update(extra)
        super().__init__(message, reason.value, details)


class ResourceNotFoundException(HrmsException):
    """Raised when the entity addressed by the request does not exist (or is hidden)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} with id '{resource_id}' not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DependencyNotFoundException(HrmsException):
    """Raised when a record referenced by the request is absent or not usable.

    error_code is the specific reason (EMPLOYEE_NOT_FOUND, MANAGER_NOT_FOUND, ...).
    """

    def __init__(
        self,
        reason: ReasonCode,
        message: str,
        reference_id: str | None = None,
        **extra: Any,
    ) -> None:
        details: dict[str, Any] = {}
        if reference_id is not None:
            details["reference_id"] = reference_id
        details.update(extra)
        super().__init__(message, reason.value, details)


class BusinessRuleException(HrmsException):
    """Raised when a request is well-formed but violates a business rule."""

    def __init__(self, reason: ReasonCode, message: str, **details: Any) -> None:
        self.reason = reason
        super().__init__(message, reason.value, details)


class TransitionRejectedException(BusinessRuleException):
    """Raised when the workflow state machine rejects a status change."""

    def __init__(
        self,
        reason: ReasonCode,
        message: str,
        *,
        entity_type: str,
        current_status: str | None = None,
        requested_status: str | None = None,
        valid_next_states: Iterable[str] = (),
    ) -> None:
        super().__init__(
            reason,
            message,
            entity_type=entity_type,
            current_status=current_status,
            requested_status=requested_status,
            valid_next_states=sorted(valid_next_states),
        )


class SqlNotConfiguredException(HrmsException):
    """Raised when a database session is requested but DATABASE_URL is not usable."""

    def __init__(self) -> None:
        super().__init__(
            "SQL database is not configured. Set DATABASE_URL and run: alembic upgrade head",
            "SQL_NOT_CONFIGURED",
        )
