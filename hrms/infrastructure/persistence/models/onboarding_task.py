"""Onboarding task ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel

OPEN_DUPLICATE_INDEX = "ux_onboarding_task_open_title"
OPEN_STATUSES = ("PENDING", "IN_PROGRESS")


class OnboardingTask(EntityModel, Base):
    """Onboarding task for one employee, optionally assigned to another."""

    __tablename__ = "onboarding_task"

    employee_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assignee_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


# At most one open task per (employee, title), case-insensitive.
Index(
    OPEN_DUPLICATE_INDEX,
    OnboardingTask.employee_id,
    func.lower(OnboardingTask.title),
    unique=True,
    postgresql_where=OnboardingTask.status.in_(OPEN_STATUSES),
)
