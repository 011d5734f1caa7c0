"""Document repository. Implements IDocumentRepository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.document import DocumentCreate, DocumentFilters, DocumentResult
from hrms.domain.enums import DocumentStatus, DocumentType, GovernedEntity
from hrms.infrastructure.persistence.models.document import Document
from hrms.infrastructure.persistence.repositories.base import BaseRepository, plain


def _orm_to_result(d: Document) -> DocumentResult:
    return DocumentResult(
        id=d.id,
        employee_id=d.employee_id,
        title=d.title,
        document_type=DocumentType(d.document_type),
        status=DocumentStatus(d.status),
        file_name=d.file_name,
        mime_type=d.mime_type,
        file_size=d.file_size,
        checksum=d.checksum,
        storage_ref=d.storage_ref,
        description=d.description,
        is_confidential=d.is_confidential,
        expires_at=d.expires_at,
        uploaded_by_id=d.uploaded_by_id,
        created_at=d.created_at,
        updated_at=d.updated_at,
    )


class DocumentRepository(BaseRepository[Document]):
    resource_type = GovernedEntity.DOCUMENT.value

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self._get_row(document_id)
        return _orm_to_result(row) if row else None

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: DocumentFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[DocumentResult], int]:
        stmt = select(Document)
        if owner_ids is not None:
            stmt = stmt.where(Document.employee_id.in_(owner_ids))
        if filters.employee_id:
            stmt = stmt.where(Document.employee_id == filters.employee_id)
        if filters.document_type is not None:
            stmt = stmt.where(Document.document_type == filters.document_type.value)
        if filters.status is not None:
            stmt = stmt.where(Document.status == filters.status.value)
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(or_(Document.title.ilike(term), Document.file_name.ilike(term)))
        rows, total = await self._page(
            stmt.order_by(Document.created_at.desc(), Document.id), skip, limit
        )
        return [_orm_to_result(d) for d in rows], total

    async def create(self, data: DocumentCreate) -> DocumentResult:
        row = await self._insert(
            Document(
                employee_id=data.employee_id,
                title=data.title,
                document_type=plain(data.document_type),
                status=DocumentStatus.ACTIVE.value,
                file_name=data.file_name,
                mime_type=data.mime_type,
                file_size=data.file_size,
                checksum=data.checksum,
                storage_ref=data.storage_ref,
                description=data.description,
                is_confidential=data.is_confidential,
                expires_at=data.expires_at,
                uploaded_by_id=data.uploaded_by_id,
            )
        )
        return _orm_to_result(row)

    async def update(self, document_id: str, changes: dict[str, Any]) -> DocumentResult:
        return _orm_to_result(await self._update_row(document_id, changes))

    async def delete(self, document_id: str) -> None:
        await self._delete_row(document_id)
