"""DTOs for employee documents (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from hrms.domain.enums import DocumentStatus, DocumentType


@dataclass(frozen=True)
class DocumentCreate:
    """Write-model built by the upload use case after the file is stored."""

    employee_id: str
    title: str
    document_type: DocumentType
    file_name: str
    mime_type: str
    file_size: int
    checksum: str
    storage_ref: str
    description: str | None = None
    is_confidential: bool = False
    expires_at: datetime | None = None
    uploaded_by_id: str | None = None


@dataclass(frozen=True)
class DocumentResult:
    id: str
    employee_id: str
    title: str
    document_type: DocumentType
    status: DocumentStatus
    file_name: str
    mime_type: str
    file_size: int
    checksum: str
    storage_ref: str
    description: str | None = None
    is_confidential: bool = False
    expires_at: datetime | None = None
    uploaded_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> str:
        return self.employee_id


@dataclass(frozen=True)
class DocumentFilters:
    employee_id: str | None = None
    document_type: DocumentType | None = None
    status: DocumentStatus | None = None
    search: str | None = None
