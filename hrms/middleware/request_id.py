"""Request ID middleware.

Forwards a well-formed client X-Request-ID or mints one, exposes it on
request.state for audit records, and echoes it on the response.
Raw ASGI, so streamed document downloads pass through untouched.
"""

import re
from typing import Callable

from hrms.shared.utils.generators import generate_cuid

REQUEST_ID_MAX_LENGTH = 64
# Alphanumeric, hyphen, underscore only; anything else could inject into logs.
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1").strip()
    return None


def resolve_request_id(raw: str | None) -> str:
    """Keep a client-supplied id only if it matches the safe pattern."""
    if raw and _REQUEST_ID_PATTERN.match(raw):
        return raw
    return generate_cuid()


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    header_key = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_key))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_name.encode(), request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_id)

    return asgi_app
