"""Job posting and job application ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel


class JobPosting(EntityModel, Base):
    __tablename__ = "job_posting"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    department_id: Mapped[str] = mapped_column(
        String, ForeignKey("department.id"), nullable=False, index=True
    )
    position_id: Mapped[str] = mapped_column(String, ForeignKey("position.id"), nullable=False)
    employment_type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    salary_min: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    salary_max: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True
    )


class JobApplication(EntityModel, Base):
    """Candidate application. Status is driven by interview outcomes."""

    __tablename__ = "job_application"

    job_posting_id: Mapped[str] = mapped_column(
        String, ForeignKey("job_posting.id", ondelete="CASCADE"), nullable=False, index=True
    )
    candidate_name: Mapped[str] = mapped_column(String, nullable=False)
    candidate_email: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
