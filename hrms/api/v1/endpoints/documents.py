"""Document API: upload, metadata, view and streamed download."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import Response, StreamingResponse

from hrms.api.v1.dependencies import OperationCtx, get_document_service
from hrms.application.dtos.document import DocumentFilters
from hrms.application.use_cases import DocumentService
from hrms.core.limiter import limit_upload, limit_writes
from hrms.domain.enums import DocumentStatus, DocumentType
from hrms.domain.exceptions import ValidationException
from hrms.schemas.common import PageResponse, UtcDatetime, to_page_response
from hrms.schemas.document import DocumentResponse, DocumentUpdate

router = APIRouter()

DocumentSvc = Annotated[DocumentService, Depends(get_document_service)]


@router.post("", response_model=DocumentResponse, status_code=201)
@limit_upload
async def upload_document(
    request: Request,
    ctx: OperationCtx,
    svc: DocumentSvc,
    employee_id: str = Form(...),
    title: str = Form(..., min_length=1, max_length=255),
    document_type: DocumentType = Form(...),
    file: UploadFile = File(...),
    description: str | None = Form(None),
    is_confidential: bool = Form(False),
    expires_at: UtcDatetime | None = Form(None),
):
    """Store the file and create the document record. Employees may upload only for themselves."""
    if not file.filename:
        raise ValidationException("Filename required", field="file")
    return await svc.upload_document(
        ctx,
        employee_id=employee_id,
        title=title,
        document_type=document_type,
        file_data=file.file,
        filename=file.filename,
        mime_type=file.content_type or "application/octet-stream",
        description=description,
        is_confidential=is_confidential,
        expires_at=expires_at,
    )


@router.get("", response_model=PageResponse[DocumentResponse])
async def list_documents(
    ctx: OperationCtx,
    svc: DocumentSvc,
    page: int = 1,
    limit: int = 20,
    employee_id: str | None = None,
    document_type: DocumentType | None = None,
    status: DocumentStatus | None = None,
    search: str | None = None,
):
    filters = DocumentFilters(
        employee_id=employee_id,
        document_type=document_type,
        status=status,
        search=search,
    )
    return to_page_response(await svc.list_documents(ctx, filters, page, limit), DocumentResponse)


@router.get("/{document_id}/view", response_model=DocumentResponse)
async def view_document(document_id: str, ctx: OperationCtx, svc: DocumentSvc):
    """Document metadata for display; recorded as a VIEW."""
    return await svc.view_document(ctx, document_id)


@router.get("/{document_id}/download")
async def download_document(document_id: str, ctx: OperationCtx, svc: DocumentSvc):
    """Stream the stored file; recorded as a DOWNLOAD."""
    doc, stream = await svc.download_document(ctx, document_id)
    return StreamingResponse(
        stream,
        media_type=doc.mime_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(doc.file_name)}",
            "Content-Length": str(doc.file_size),
        },
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: str, ctx: OperationCtx, svc: DocumentSvc):
    return await svc.get_document(ctx, document_id)


@router.patch("/{document_id}", response_model=DocumentResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdate,
    ctx: OperationCtx,
    svc: DocumentSvc,
):
    return await svc.update_document(ctx, document_id, body.model_dump(exclude_unset=True))


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(request: Request, document_id: str, ctx: OperationCtx, svc: DocumentSvc):
    await svc.delete_document(ctx, document_id)
    return Response(status_code=204)
