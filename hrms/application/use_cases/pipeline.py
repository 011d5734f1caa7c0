"""Access-scoped operation pipeline.

Every governed operation runs the same fixed sequence:

1. role gate and scope resolution (failure: AccessDenied, nothing written);
2. fetch and post-fetch scope check for single-entity operations;
3. business-rule / transition validation and the mutation itself, supplied
   by the calling use case as a callback;
4. best-effort audit record (never raises);
5. cascade events (never raise).

A failure in steps 1-3 aborts before any audit record exists. Step 4 is
attempted before the result is returned to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from hrms.application.dtos.context import OperationContext
from hrms.application.interfaces.services import ICascadeEventPublisher
from hrms.application.services.audit_trail_recorder import AuditTrailRecorder
from hrms.application.services.org_hierarchy_resolver import OrgHierarchyResolver
from hrms.domain.enums import AuditAction, ReasonCode, Role
from hrms.domain.exceptions import (
    AccessDeniedException,
    ResourceNotFoundException,
    ValidationException,
)
from hrms.domain.value_objects import Scope

logger = logging.getLogger(__name__)

HR_ROLES = frozenset({Role.ADMIN, Role.HR})
MANAGING_ROLES = frozenset({Role.ADMIN, Role.HR, Role.MANAGER})

Loader = Callable[[str], Awaitable[Any]]
OwnerIds = Callable[[Any], Iterable[str | None]]


def _name(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


def owner_of(entity: Any) -> tuple[str | None]:
    """Default owner extractor: the entity's owner_id property."""
    return (entity.owner_id,)


def entity_id(entity: Any) -> str:
    return entity.id


def reject_nulls(changes: Mapping[str, Any], not_nullable: Iterable[str]) -> None:
    """Refuse partial updates that would null a required column."""
    nulls = sorted(name for name in not_nullable if name in changes and changes[name] is None)
    if nulls:
        raise ValidationException(f"{', '.join(nulls)} cannot be null", field=nulls[0])


class AccessScopedPipeline:
    """Orchestrates scope resolution, validation, mutation, audit and events.

    Use cases own the validation and persistence callbacks; the pipeline
    owns ordering and the access and audit rules around them.
    """

    def __init__(
        self,
        hierarchy: OrgHierarchyResolver,
        audit: AuditTrailRecorder,
        events: ICascadeEventPublisher | None = None,
    ) -> None:
        self.hierarchy = hierarchy
        self.audit = audit
        self.events = events

    # ---- Step 1/2: access ----

    async def authorize(
        self,
        ctx: OperationContext,
        resource_type: Enum | str,
        action: Enum | str,
        allowed_roles: Iterable[Role] | None = None,
    ) -> Scope:
        """Apply the role gate, then resolve the actor's visibility scope."""
        if allowed_roles is not None and not ctx.actor.has_role(*allowed_roles):
            raise AccessDeniedException(
                f"Role {ctx.actor.role.value} may not {_name(action).lower()} {_name(resource_type)}",
                resource=_name(resource_type),
                action=_name(action),
                reason=ReasonCode.INSUFFICIENT_PERMISSIONS,
            )
        return await self.hierarchy.resolve_scope(ctx.actor)

    @staticmethod
    def ensure_in_scope(
        scope: Scope,
        owner_ids: Iterable[str | None],
        *,
        resource_type: Enum | str,
        resource_id: str,
    ) -> None:
        if not any(scope.allows(owner) for owner in owner_ids):
            raise AccessDeniedException(
                f"Access to {_name(resource_type)} '{resource_id}' is outside your scope",
                resource=_name(resource_type),
                resource_id=resource_id,
            )

    async def fetch_in_scope(
        self,
        scope: Scope,
        *,
        resource_type: Enum | str,
        resource_id: str,
        load: Loader,
        owners: OwnerIds = owner_of,
    ) -> Any:
        entity = await load(resource_id)
        if entity is None:
            raise ResourceNotFoundException(_name(resource_type), resource_id)
        self.ensure_in_scope(
            scope, owners(entity), resource_type=resource_type, resource_id=resource_id
        )
        return entity

    # ---- Operations ----

    async def read_one(
        self,
        ctx: OperationContext,
        *,
        resource_type: Enum | str,
        resource_id: str,
        load: Loader,
        owners: OwnerIds = owner_of,
        allowed_roles: Iterable[Role] | None = None,
        audit_action: AuditAction = AuditAction.READ,
    ) -> Any:
        scope = await self.authorize(ctx, resource_type, audit_action, allowed_roles)
        entity = await self.fetch_in_scope(
            scope, resource_type=resource_type, resource_id=resource_id, load=load, owners=owners
        )
        await self.record(ctx, audit_action, resource_type, resource_id)
        return entity

    async def read_many(
        self,
        ctx: OperationContext,
        *,
        resource_type: Enum | str,
        load: Callable[[Scope], Awaitable[Any]],
        allowed_roles: Iterable[Role] | None = None,
    ) -> Any:
        """Run a list query; load receives the scope to turn into a storage predicate."""
        scope = await self.authorize(ctx, resource_type, AuditAction.READ, allowed_roles)
        result = await load(scope)
        await self.record(ctx, AuditAction.READ, resource_type, None)
        return result

    async def create(
        self,
        ctx: OperationContext,
        *,
        resource_type: Enum | str,
        insert: Callable[[Scope], Awaitable[Any]],
        allowed_roles: Iterable[Role] | None = None,
        identify: Callable[[Any], str] = entity_id,
    ) -> Any:
        """insert validates references and business rules, then persists."""
        scope = await self.authorize(ctx, resource_type, AuditAction.CREATE, allowed_roles)
        created = await insert(scope)
        await self.record(ctx, AuditAction.CREATE, resource_type, identify(created), None, created)
        return created

    async def mutate(
        self,
        ctx: OperationContext,
        *,
        resource_type: Enum | str,
        resource_id: str,
        load: Loader,
        apply: Callable[[Any, Scope], Awaitable[Any]],
        owners: OwnerIds = owner_of,
        allowed_roles: Iterable[Role] | None = None,
        audit_action: AuditAction = AuditAction.UPDATE,
    ) -> Any:
        """Fetch, re-check scope, then apply (validate + persist) and audit.

        apply returns the new state, or None after a physical delete.
        """
        scope = await self.authorize(ctx, resource_type, audit_action, allowed_roles)
        before = await self.fetch_in_scope(
            scope, resource_type=resource_type, resource_id=resource_id, load=load, owners=owners
        )
        after = await apply(before, scope)
        await self.record(ctx, audit_action, resource_type, resource_id, before, after)
        return after

    # ---- Side channels ----

    async def record(
        self,
        ctx: OperationContext,
        action: AuditAction,
        resource_type: Enum | str,
        resource_id: str | None,
        before: Any = None,
        after: Any = None,
    ) -> None:
        await self.audit.record(
            actor_id=ctx.actor.id,
            action=action,
            resource_type=_name(resource_type),
            resource_id=resource_id,
            before=before,
            after=after,
            request=ctx.request,
        )

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        """Hand a cascade event to the publisher; failures are logged, never raised."""
        if self.events is None:
            return
        try:
            await self.events.publish(event, payload)
        except Exception as e:
            logger.warning("Failed to publish cascade event %s: %s", event, e, exc_info=True)
