"""Logging configuration for the service."""

import logging
import sys

from hrms.core.config import get_settings


def setup_logging() -> None:
    """Configure process-wide logging to stdout (DEBUG when settings.debug, else INFO)."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # SQL echo goes through its own logger; keep it quiet unless asked for.
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

