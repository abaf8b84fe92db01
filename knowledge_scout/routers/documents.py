"""
Documents Router - Handles document retrieval, deletion and reprocessing.

Architecture:
- Router handles HTTP request/response only
- Business logic delegated to services
- Ownership checks raise NotFoundError (404) or AccessDeniedError (403)

Example Usage:
    GET /documents - List the caller's documents
    GET /documents/{doc_id} - Get specific document
    DELETE /documents/{doc_id} - Delete document
    POST /documents/{doc_id}/reprocess - Rerun extraction and summary
    GET /documents/{doc_id}/extraction-preview - Extract without saving
"""
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ..api.dto import (
    DocumentEnvelopeDTO,
    DocumentListDTO,
    ExtractionPreviewDTO,
    MessageResponseDTO,
    ReprocessResponseDTO,
)
from ..api.mappers import DocumentMapper
from ..models import User
from ..services.document_processing_service import DocumentProcessingService
from ..services.document_service import DocumentService
from .dependencies import get_current_user, get_db, get_document_service, get_processing_service

router = APIRouter()


@router.get("/documents", response_model=DocumentListDTO)
async def list_documents(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Get all documents of the current user, newest first.
    
    Returns:
        DocumentListDTO: {"documents": [...]}
    """
    documents = document_service.list_documents(db, current_user.id)
    return DocumentListDTO(documents=DocumentMapper.to_dto_list(documents))


@router.get("/documents/{doc_id}", response_model=DocumentEnvelopeDTO)
async def get_document(
    doc_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Get a single document by its unique ID.
    
    Poll this endpoint after upload until status is "completed" or "error".
    
    Status Codes:
        200: Success
        403: Document belongs to another user
        404: Document not found
    """
    document = document_service.get_document(db, doc_id, current_user.id)
    return DocumentEnvelopeDTO(document=DocumentMapper.to_dto(document))


@router.delete("/documents/{doc_id}", response_model=MessageResponseDTO)
async def delete_document(
    doc_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
):
    """Delete a document, its stored file and its chat sessions."""
    await document_service.delete_document(db, doc_id, current_user.id)
    return MessageResponseDTO(message="Document deleted successfully")


@router.post("/documents/{doc_id}/reprocess", response_model=ReprocessResponseDTO)
async def reprocess_document(
    doc_id: str,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    processing_service: DocumentProcessingService = Depends(get_processing_service),
):
    """
    Rerun extraction and summary generation from stored content.
    
    Status Codes:
        200: Reprocessing started, or already in progress
        400: Original content is no longer available; document is set to error
        403/404: Ownership or existence check failed
    """
    document, queued = await processing_service.start_reprocess(db, doc_id, current_user.id)
    if queued:
        background_tasks.add_task(processing_service.process_document, document.id)
        message = "Document reprocessing started"
    else:
        message = "Document is already being processed"
    return ReprocessResponseDTO(message=message, document_id=document.id, status=document.status)


@router.get("/documents/{doc_id}/extraction-preview", response_model=ExtractionPreviewDTO)
async def extraction_preview(
    doc_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    processing_service: DocumentProcessingService = Depends(get_processing_service),
):
    """
    Run text extraction on the stored file and return the result without saving it.
    
    Useful for checking what a reprocess would produce.
    """
    preview = await processing_service.extraction_preview(db, doc_id, current_user.id)
    return ExtractionPreviewDTO(**preview)
