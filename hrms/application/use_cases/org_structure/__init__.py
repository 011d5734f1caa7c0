"""Department and position use cases."""

from hrms.application.use_cases.org_structure.org_structure_operations import OrgStructureService

__all__ = ["OrgStructureService"]
