"""User account ORM model: the login identity behind a JWT subject."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel


class UserAccount(EntityModel, Base):
    """role is one of ADMIN/HR/MANAGER/EMPLOYEE; employee_id links to the HR record."""

    __tablename__ = "user_account"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String, nullable=False)
    employee_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
