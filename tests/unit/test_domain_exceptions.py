"""Tests for domain exceptions (error_code, message, details) and their HTTP status mapping."""

import pytest

from hrms.core.exception_handlers import _status_for
from hrms.domain.enums import ReasonCode
from hrms.domain.exceptions import (
    AccessDeniedException,
    AuthenticationException,
    BusinessRuleException,
    DependencyNotFoundException,
    HrmsException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TransitionRejectedException,
    ValidationException,
)
from hrms.infrastructure.exceptions import StorageNotFoundError


def test_hrms_exception_default_error_code() -> None:
    """Base HrmsException uses class name as error_code when not provided."""
    exc = HrmsException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "HrmsException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = HrmsException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Bad").details == {}


def test_access_denied_carries_reason_and_extra() -> None:
    exc = AccessDeniedException(
        "no",
        resource="payroll_record",
        action="UPDATE",
        reason=ReasonCode.INSUFFICIENT_PERMISSIONS,
        fields=["salary"],
    )
    assert exc.error_code == "INSUFFICIENT_PERMISSIONS"
    assert exc.details == {"resource": "payroll_record", "action": "UPDATE", "fields": ["salary"]}


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("employee", "e-1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "employee", "resource_id": "e-1"}
    assert "e-1" in exc.message


def test_dependency_not_found_uses_reason_as_code() -> None:
    exc = DependencyNotFoundException(ReasonCode.MANAGER_NOT_FOUND, "Manager not found", "m-1")
    assert exc.error_code == "MANAGER_NOT_FOUND"
    assert exc.details == {"reference_id": "m-1"}


def test_transition_rejected_sorts_valid_next_states() -> None:
    exc = TransitionRejectedException(
        ReasonCode.INVALID_STATUS_TRANSITION,
        "nope",
        entity_type="interview",
        current_status="SCHEDULED",
        requested_status="COMPLETED",
        valid_next_states=["RESCHEDULED", "CANCELLED", "IN_PROGRESS", "NO_SHOW"],
    )
    assert isinstance(exc, BusinessRuleException)
    assert exc.reason is ReasonCode.INVALID_STATUS_TRANSITION
    assert exc.details["valid_next_states"] == ["CANCELLED", "IN_PROGRESS", "NO_SHOW", "RESCHEDULED"]


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (AuthenticationException(), 401),
        (AccessDeniedException(), 403),
        (ResourceNotFoundException("document", "d-1"), 404),
        (DependencyNotFoundException(ReasonCode.EMPLOYEE_NOT_FOUND, "missing"), 400),
        (BusinessRuleException(ReasonCode.INVALID_DUE_DATE, "past"), 400),
        (BusinessRuleException(ReasonCode.DUPLICATE_EMAIL, "taken"), 409),
        (BusinessRuleException(ReasonCode.OVERLAPPING_PAY_PERIOD, "overlap"), 409),
        (SqlNotConfiguredException(), 503),
        (StorageNotFoundError("ref"), 404),
    ],
)
def test_status_mapping(exc: HrmsException, status: int) -> None:
    assert _status_for(exc) == status
