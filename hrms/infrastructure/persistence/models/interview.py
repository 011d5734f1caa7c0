"""Interview ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel


class Interview(EntityModel, Base):
    """Interview of one job application. interviewer_ids are employee ids."""

    __tablename__ = "interview"

    application_id: Mapped[str] = mapped_column(
        String, ForeignKey("job_application.id", ondelete="CASCADE"), nullable=False, index=True
    )
    interview_type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    interviewer_ids: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    meeting_link: Mapped[str | None] = mapped_column(String, nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index("ix_interview_scheduled_at", "scheduled_at"),
        Index("ix_interview_interviewer_ids", "interviewer_ids", postgresql_using="gin"),
    )
