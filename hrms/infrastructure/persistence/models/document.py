"""Document ORM model. File content lives in storage; storage_ref points at it."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel


class Document(EntityModel, Base):
    """Employee document. Table: document."""

    __tablename__ = "document"

    employee_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    document_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'ACTIVE'"))
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    checksum: Mapped[str] = mapped_column(String, nullable=False, index=True)
    storage_ref: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_confidential: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    uploaded_by_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True
    )
