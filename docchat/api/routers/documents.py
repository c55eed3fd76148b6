"""
Document API endpoints.

Routes:
- POST /documents - Upload one or more PDF files
- POST /documents/from-url - Import a PDF by URL
- GET /documents - List stored documents
- DELETE /documents/{id} - Delete a document

Dependencies: docchat.application.services, docchat.models
System role: Document intake and store HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from pydantic import BaseModel, Field

from docchat.application.services.document_service import DocumentService
from docchat.application.services.intake_service import IntakeService, UploadedFile
from docchat.api.deps import get_document_service, get_intake_service
from docchat.core.exceptions import (
    DocumentNotFoundError,
    ExtractionError,
    PersistenceError,
    RemoteFetchError,
    ValidationError,
)
from docchat.models.document import Document, DocumentSummary, UploadResult, UrlIntakeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


class UrlIntakeResponse(BaseModel):
    """Response schema for URL intake."""

    document: DocumentSummary
    warnings: list[str] = Field(default_factory=list)


@router.post("", response_model=UploadResult)
async def upload_documents(
    files: list[UploadFile] = File(..., description="PDF files to upload"),
    last_modified: list[int] | None = Form(
        default=None,
        alias="lastModified",
        description="Client-side lastModified (epoch ms) per file, in the same order as files",
    ),
    intake_service: IntakeService = Depends(get_intake_service),
) -> UploadResult:
    """
    Upload PDF files.

    Non-PDF files are skipped and counted; each PDF succeeds or fails on
    its own. Files without a lastModified entry are stamped with the
    upload time.

    Args:
        files: Uploaded files
        last_modified: Optional per-file modification times
        intake_service: Injected IntakeService

    Returns:
        UploadResult: Stored documents, skipped count, failures, warnings

    Raises:
        HTTPException(400): No PDF files in the request
    """
    stamps = last_modified or []
    uploads = [
        UploadedFile(
            name=file.filename or "document.pdf",
            content_type=file.content_type,
            data=await file.read(),
            last_modified=stamps[index] if index < len(stamps) else None,
        )
        for index, file in enumerate(files)
    ]

    try:
        return await intake_service.upload_files(uploads)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/from-url", response_model=UrlIntakeResponse, status_code=201)
async def import_document_from_url(
    request: UrlIntakeRequest,
    intake_service: IntakeService = Depends(get_intake_service),
) -> UrlIntakeResponse:
    """
    Import a PDF by URL through the PDF proxy.

    Raises:
        HTTPException(400): URL does not end in .pdf
        HTTPException(422): PDF has no extractable text
        HTTPException(502): Fetch failed
        HTTPException(500): Store write failed
    """
    try:
        document, warnings = await intake_service.import_from_url(request.url, request.file_name)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RemoteFetchError as e:
        status = e.status_code if 400 <= e.status_code < 500 else 502
        raise HTTPException(status_code=status, detail=f"Failed to fetch PDF from URL: {e.message}")
    except ExtractionError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return UrlIntakeResponse(document=document, warnings=warnings)


@router.get("", response_model=list[Document])
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> list[Document]:
    """List stored documents, oldest upload first."""
    return await document_service.list_documents()


@router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    """
    Delete a document.

    Raises:
        HTTPException(404): Document not found
        HTTPException(500): Deletion failed
    """
    try:
        deleted = await document_service.delete_document(document_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")

    if not deleted:
        raise HTTPException(status_code=500, detail="Failed to delete document from database.")
    return Response(status_code=204)
