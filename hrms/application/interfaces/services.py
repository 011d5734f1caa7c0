"""Service interfaces (ports) consumed by the core."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

# Queues an async action to run once the surrounding transaction has committed.
AfterCommit = Callable[[Callable[[], Awaitable[None]]], None]


class ICascadeEventPublisher(Protocol):
    """Receives workflow cascade events (e.g. payroll.processed).

    Delivery is outside the core; a failing publisher never changes the
    result of the operation that emitted the event.
    """

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        """Hand one event to the notification side."""
