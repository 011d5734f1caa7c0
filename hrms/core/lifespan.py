"""Application lifespan: startup and shutdown wiring only."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from hrms.core.config import get_settings
from hrms.infrastructure.services.cascade_event_publisher import LogOnlyCascadeEventPublisher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Install the cascade event publisher, yield, then dispose the SQL engine."""
    settings = get_settings()
    app.state.event_publisher = LogOnlyCascadeEventPublisher()
    logger.info("%s %s starting", settings.app_name, settings.app_version)

    yield

    from hrms.infrastructure.persistence import database

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
