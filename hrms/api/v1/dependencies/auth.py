"""Actor and request-context dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hrms.application.dtos.context import Actor, OperationContext, RequestMeta
from hrms.domain.enums import Role
from hrms.domain.exceptions import AccessDeniedException, AuthenticationException
from hrms.infrastructure.security.jwt import verify_token
from hrms.shared.request_audit import get_audit_request_context

security = HTTPBearer(auto_error=False)


async def get_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Actor:
    """Rebuild the Actor from the bearer token on every request (401 when missing or invalid)."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    payload = verify_token(credentials.credentials)
    try:
        role = Role(payload["role"])
    except ValueError as e:
        raise AccessDeniedException(
            f"Unknown role: {payload['role']}", action="authenticate"
        ) from e
    employee_id = payload.get("employee_id") or None
    return Actor(id=str(payload["sub"]), role=role, employee_id=employee_id)


def get_request_meta(request: Request) -> RequestMeta:
    request_id, ip_address, user_agent = get_audit_request_context(request)
    return RequestMeta(request_id=request_id, ip_address=ip_address, user_agent=user_agent)


async def get_operation_context(
    actor: Annotated[Actor, Depends(get_actor)],
    meta: Annotated[RequestMeta, Depends(get_request_meta)],
) -> OperationContext:
    return OperationContext(actor=actor, request=meta)


OperationCtx = Annotated[OperationContext, Depends(get_operation_context)]
