"""Org hierarchy resolver: role + direct-report edges → visibility scope."""

import logging

from hrms.application.dtos.context import Actor
from hrms.application.interfaces.repositories import IOrgHierarchyRepository
from hrms.domain.enums import Role
from hrms.domain.exceptions import AccessDeniedException
from hrms.domain.value_objects import Scope
from hrms.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class OrgHierarchyResolver:
    """Compute which entity owners an actor may observe.

    ADMIN and HR see everything. EMPLOYEE sees only the employee record it
    is linked to. MANAGER sees its own record plus direct reports, resolved
    with one non-recursive lookup (no transitive subtree). Lookup failures
    fail closed.
    """

    def __init__(self, hierarchy: IOrgHierarchyRepository) -> None:
        self.hierarchy = hierarchy

    @traced("org_hierarchy.resolve_scope")
    async def resolve_scope(self, actor: Actor) -> Scope:
        add_span_attributes(role=actor.role.value)
        match actor.role:
            case Role.ADMIN | Role.HR:
                return Scope.all()
            case Role.EMPLOYEE:
                return Scope.owned_only(self._require_employee_id(actor))
            case Role.MANAGER:
                manager_id = self._require_employee_id(actor)
                try:
                    reports = await self.hierarchy.get_direct_report_ids(manager_id)
                except Exception as e:
                    logger.error(
                        "Hierarchy lookup failed for manager %s; denying access: %s",
                        manager_id,
                        e,
                        exc_info=True,
                    )
                    raise AccessDeniedException(
                        "Unable to resolve reporting lines", action="resolve_scope"
                    ) from e
                add_span_attributes(direct_reports=len(reports))
                return Scope.owner_set(set(reports) | {manager_id})
            case _:
                raise AccessDeniedException(f"Role '{actor.role}' has no visibility scope")

    @staticmethod
    def _require_employee_id(actor: Actor) -> str:
        if not actor.employee_id:
            raise AccessDeniedException(
                "Account is not linked to an employee profile", action="resolve_scope"
            )
        return actor.employee_id
