"""Cascade event publisher that records events in the log and delivers nothing."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class LogOnlyCascadeEventPublisher:
    """Implements ICascadeEventPublisher. Swap for a broker-backed publisher to fan out."""

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        logger.info("Cascade event %s: %s", event, payload)
