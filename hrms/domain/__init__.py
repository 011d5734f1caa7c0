"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from hrms.domain.enums import AuditAction, GovernedEntity, ReasonCode, Role
from hrms.domain.exceptions import (
    AccessDeniedException,
    AuthenticationException,
    BusinessRuleException,
    DependencyNotFoundException,
    HrmsException,
    ResourceNotFoundException,
    TransitionRejectedException,
    ValidationException,
)
from hrms.domain.value_objects import PayFigures, PayPeriod, Scope, ScopeKind, check_scope

__all__ = [
    "AccessDeniedException",
    "AuditAction",
    "AuthenticationException",
    "BusinessRuleException",
    "DependencyNotFoundException",
    "GovernedEntity",
    "HrmsException",
    "PayFigures",
    "PayPeriod",
    "ReasonCode",
    "ResourceNotFoundException",
    "Role",
    "Scope",
    "ScopeKind",
    "TransitionRejectedException",
    "ValidationException",
    "check_scope",
]
