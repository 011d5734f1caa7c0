"""Shared columns for HR entity tables."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from hrms.shared.utils.generators import generate_cuid


class EntityModel:
    """cuid primary key plus database-maintained created_at / updated_at (timestamptz)."""

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
