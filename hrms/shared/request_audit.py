"""Derive audit request metadata from a Starlette Request."""

from __future__ import annotations

from starlette.requests import Request


def get_audit_request_context(request: Request) -> tuple[str | None, str | None, str | None]:
    """Return (request_id, ip_address, user_agent) for audit log entries.

    request_id comes from request state (RequestIDMiddleware), the IP from the
    first X-Forwarded-For hop or the peer address, user_agent from the header.
    """
    request_id = getattr(request.state, "request_id", None)
    forwarded = request.headers.get("X-Forwarded-For")
    peer = request.client.host if request.client else None
    ip_address = (forwarded.split(",")[0].strip() if forwarded else None) or peer
    return (request_id, ip_address, request.headers.get("User-Agent"))
