"""Domain value objects: immutable types with no identity, only value."""

from hrms.domain.value_objects.pay import PAY_TOLERANCE, PayFigures, PayPeriod
from hrms.domain.value_objects.scope import Scope, ScopeKind, check_scope

__all__ = [
    "PAY_TOLERANCE",
    "PayFigures",
    "PayPeriod",
    "Scope",
    "ScopeKind",
    "check_scope",
]
