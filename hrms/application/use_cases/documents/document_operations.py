"""Document operations: upload to storage plus record, scoped reads, download and view."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
from collections.abc import AsyncIterator
from datetime import datetime
from functools import partial
from typing import Any, BinaryIO

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.document import DocumentCreate, DocumentFilters, DocumentResult
from hrms.application.interfaces.repositories import IDocumentRepository, IEmployeeRepository
from hrms.application.interfaces.services import AfterCommit
from hrms.application.interfaces.storage import IDocumentStorage
from hrms.application.use_cases.pipeline import HR_ROLES, AccessScopedPipeline, reject_nulls
from hrms.domain.enums import AuditAction, DocumentType, GovernedEntity, ReasonCode
from hrms.domain.exceptions import (
    DependencyNotFoundException,
    ResourceNotFoundException,
    ValidationException,
)
from hrms.shared.telemetry.tracing import traced
from hrms.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

_RESOURCE = GovernedEntity.DOCUMENT
NOT_NULL_FIELDS = ("title", "document_type", "status", "is_confidential")


def _rewind_if_seekable(file_data: BinaryIO) -> None:
    if getattr(file_data, "seekable", lambda: False)():
        file_data.seek(0)


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and NUL bytes from a client-supplied filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException("Filename is empty or invalid", field="file")
    return name


def _checksum_and_size_sync(file_data: BinaryIO) -> tuple[str, int]:
    """Blocking single pass; run in a worker thread."""
    sha256 = hashlib.sha256()
    total = 0
    while chunk := file_data.read(65536):
        sha256.update(chunk)
        total += len(chunk)
    _rewind_if_seekable(file_data)
    return sha256.hexdigest(), total


class DocumentService:
    """Employee documents. Files live in IDocumentStorage; rows hold metadata and storage_ref."""

    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        document_repo: IDocumentRepository,
        employee_repo: IEmployeeRepository,
        storage: IDocumentStorage,
        max_upload_size: int | None = None,
        after_commit: AfterCommit | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.document_repo = document_repo
        self.employee_repo = employee_repo
        self.storage = storage
        self.max_upload_size = max_upload_size
        self.after_commit = after_commit

    async def list_documents(
        self,
        ctx: OperationContext,
        filters: DocumentFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[DocumentResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(scope):
            items, total = await self.document_repo.list_page(
                scope.owner_filter(), filters, paging.skip, paging.limit
            )
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(ctx, resource_type=_RESOURCE, load=load)

    async def get_document(self, ctx: OperationContext, document_id: str) -> DocumentResult:
        return await self.pipeline.read_one(
            ctx, resource_type=_RESOURCE, resource_id=document_id, load=self.document_repo.get_by_id
        )

    async def view_document(self, ctx: OperationContext, document_id: str) -> DocumentResult:
        """Same as get, audited as VIEW (inline preview)."""
        return await self.pipeline.read_one(
            ctx,
            resource_type=_RESOURCE,
            resource_id=document_id,
            load=self.document_repo.get_by_id,
            audit_action=AuditAction.VIEW,
        )

    async def download_document(
        self, ctx: OperationContext, document_id: str
    ) -> tuple[DocumentResult, AsyncIterator[bytes]]:
        scope = await self.pipeline.authorize(ctx, _RESOURCE, AuditAction.DOWNLOAD)
        doc = await self.pipeline.fetch_in_scope(
            scope, resource_type=_RESOURCE, resource_id=document_id, load=self.document_repo.get_by_id
        )
        if not await self.storage.exists(doc.storage_ref):
            raise ResourceNotFoundException("document_file", document_id)
        await self.pipeline.record(ctx, AuditAction.DOWNLOAD, _RESOURCE, document_id)
        return doc, self.storage.download(doc.storage_ref)

    @traced("document.upload")
    async def upload_document(
        self,
        ctx: OperationContext,
        *,
        employee_id: str,
        title: str,
        document_type: DocumentType,
        file_data: BinaryIO,
        filename: str,
        mime_type: str,
        description: str | None = None,
        is_confidential: bool = False,
        expires_at: datetime | None = None,
    ) -> DocumentResult:
        """Store the file, then create the record. Actors upload only within their scope."""

        async def insert(scope) -> DocumentResult:
            self.pipeline.ensure_in_scope(
                scope, (employee_id,), resource_type=_RESOURCE, resource_id=employee_id
            )
            if await self.employee_repo.get_by_id(employee_id) is None:
                raise DependencyNotFoundException(
                    ReasonCode.EMPLOYEE_NOT_FOUND, "Employee not found", employee_id
                )
            safe_name = _sanitize_filename(filename)
            checksum, size = await asyncio.to_thread(_checksum_and_size_sync, file_data)
            if size == 0:
                raise ValidationException("Uploaded file is empty", field="file")
            if self.max_upload_size is not None and size > self.max_upload_size:
                raise ValidationException(
                    f"File exceeds maximum size of {self.max_upload_size} bytes", field="file"
                )
            storage_ref = f"documents/{employee_id}/{generate_cuid()}_{safe_name}"
            await self.storage.upload(file_data, storage_ref, checksum, mime_type)
            try:
                return await self.document_repo.create(
                    DocumentCreate(
                        employee_id=employee_id,
                        title=title,
                        document_type=document_type,
                        file_name=safe_name,
                        mime_type=mime_type,
                        file_size=size,
                        checksum=checksum,
                        storage_ref=storage_ref,
                        description=description,
                        is_confidential=is_confidential,
                        expires_at=expires_at,
                        uploaded_by_id=ctx.actor.id,
                    )
                )
            except Exception:
                await self._remove_file(storage_ref)
                raise

        return await self.pipeline.create(ctx, resource_type=_RESOURCE, insert=insert)

    async def update_document(
        self, ctx: OperationContext, document_id: str, changes: dict[str, Any]
    ) -> DocumentResult:
        changes = dict(changes)
        reject_nulls(changes, NOT_NULL_FIELDS)

        async def apply(current: DocumentResult, _scope) -> DocumentResult:
            if not changes:
                return current
            return await self.document_repo.update(document_id, changes)

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=document_id,
            load=self.document_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )

    async def delete_document(self, ctx: OperationContext, document_id: str) -> None:
        """Remove the record. The stored file goes only after the row deletion commits."""
        removed: list[str] = []

        async def apply(current: DocumentResult, _scope) -> None:
            await self.document_repo.delete(document_id)
            removed.append(current.storage_ref)
            return None

        await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=document_id,
            load=self.document_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )
        for storage_ref in removed:
            remove = partial(self._remove_file, storage_ref)
            if self.after_commit is None:
                await remove()
            else:
                self.after_commit(remove)

    async def _remove_file(self, storage_ref: str) -> None:
        try:
            await self.storage.delete(storage_ref)
        except Exception as e:
            logger.warning("Failed to delete stored file %s: %s", storage_ref, e)
