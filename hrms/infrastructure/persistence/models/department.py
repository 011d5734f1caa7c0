"""Department and Position ORM models: reference data for employees and postings."""

from sqlalchemy import Boolean, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel


class Department(EntityModel, Base):
    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    code: Mapped[str | None] = mapped_column(String, nullable=True, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))


class Position(EntityModel, Base):
    __tablename__ = "position"

    title: Mapped[str] = mapped_column(String, nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
