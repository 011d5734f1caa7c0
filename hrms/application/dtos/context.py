"""Per-request identity and metadata passed into every governed operation."""

from dataclasses import dataclass, field

from hrms.domain.enums import Role


@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing an operation.

    employee_id links the user account to the employee record it represents
    (None for accounts without an employee profile). Rebuilt from the access
    token on every request.
    """

    id: str
    role: Role
    employee_id: str | None = None

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles


@dataclass(frozen=True)
class RequestMeta:
    """Request context copied onto audit records."""

    request_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class OperationContext:
    """Actor plus request metadata for one pipeline call."""

    actor: Actor
    request: RequestMeta = field(default_factory=RequestMeta)
