"""Document API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hrms.domain.enums import DocumentStatus, DocumentType
from hrms.schemas.common import PartialUpdate, UtcDatetime


class DocumentUpdate(PartialUpdate):
    """Request body for PATCH document metadata (partial)."""

    not_nullable = frozenset({"title", "document_type", "status", "is_confidential"})

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    document_type: DocumentType | None = None
    status: DocumentStatus | None = None
    is_confidential: bool | None = None
    expires_at: UtcDatetime | None = None


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    title: str
    document_type: DocumentType
    status: DocumentStatus
    file_name: str
    mime_type: str
    file_size: int
    checksum: str
    description: str | None = None
    is_confidential: bool = False
    expires_at: datetime | None = None
    uploaded_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
