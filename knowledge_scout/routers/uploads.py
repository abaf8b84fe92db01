"""
Upload Router - Handles document uploads.

The upload process:
1. Validates the file (type and size)
2. Saves the bytes to content storage
3. Creates the document record in processing status
4. Schedules background processing (extract, summarize, finalize)

The response is sent before processing finishes. Clients poll
GET /documents/{doc_id} until status is completed or error.

Example Usage:
    POST /documents/upload - multipart/form-data, field "document"
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ..api.dto import UploadResponseDTO
from ..api.mappers import DocumentMapper
from ..core.config import ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE
from ..core.logging_config import get_logger
from ..models import User
from ..services.document_processing_service import DocumentProcessingService
from ..services.document_service import DocumentService
from ..utils.validators import generate_stored_filename, normalize_mime_type, validate_upload
from .dependencies import get_current_user, get_db, get_document_service, get_processing_service, get_storage

logger = get_logger(__name__)

router = APIRouter()


@router.post("/documents/upload", response_model=UploadResponseDTO)
async def upload_document(
    background_tasks: BackgroundTasks,
    document: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
    processing_service: DocumentProcessingService = Depends(get_processing_service),
    storage=Depends(get_storage),
):
    """
    Upload a single document.
    
    Args:
        background_tasks: FastAPI background tasks manager (injected)
        document: The file to upload (multipart field "document")
    
    Returns:
        UploadResponseDTO: Message and short document view with status "processing"
    
    Raises:
        400: No file, unsupported type (only PDF, DOC, DOCX, TXT, RTF) or over 50MB
    
    Example Response:
        {
            "message": "File uploaded successfully",
            "document": {
                "id": "abc-123",
                "title": "notes.txt",
                "filename": "document-1700000000000-42.txt",
                "fileSize": 5,
                "status": "processing",
                "createdAt": "2024-01-15T10:30:00Z"
            }
        }
    """
    if document is None:
        validate_upload(None, None, 0, ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE)
    
    # Read at most one byte past the limit so oversize files are detected without buffering them whole
    content = await document.read(MAX_UPLOAD_SIZE + 1)
    validate_upload(document.filename, document.content_type, len(content), ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE)
    
    original_name = document.filename
    stored_name = generate_stored_filename(original_name)
    storage_ref = await storage.save(content, stored_name)
    
    try:
        doc = document_service.create_document(
            db,
            user_id=current_user.id,
            original_name=original_name,
            filename=stored_name,
            storage_ref=storage_ref,
            file_size=len(content),
            mime_type=normalize_mime_type(document.content_type),
        )
    except Exception:
        # No record points at the bytes, so they would never be cleaned up
        await storage.delete(storage_ref)
        raise
    
    # Runs after the response is sent
    processing_service.mark_queued(doc.id)
    background_tasks.add_task(processing_service.process_document, doc.id)
    logger.info(f"Upload accepted: {original_name} -> document {doc.id}")
    
    return UploadResponseDTO(
        message="File uploaded successfully",
        document=DocumentMapper.to_summary_dto(doc),
    )
