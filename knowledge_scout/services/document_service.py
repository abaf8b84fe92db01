"""
Document Service - Business logic for document records.

Handles creation, ownership-checked lookup, listing and deletion.
Processing (extract, summarize, finalize) lives in DocumentProcessingService.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from ..api.exceptions import AccessDeniedError, NotFoundError
from ..core.logging_config import get_logger
from ..models import Document, DocumentStatus
from .storage import ContentStorageInterface

logger = get_logger(__name__)


class DocumentService:
    """
    Service for document business logic.
    Coordinates between the database session and content storage.
    """
    
    def __init__(self, storage: ContentStorageInterface):
        """
        Initialize document service with dependencies.
        
        Args:
            storage: Content storage adapter (dependency injection)
        """
        self._storage = storage
    
    def create_document(
        self,
        db: Session,
        *,
        user_id: str,
        original_name: str,
        filename: str,
        storage_ref: str,
        file_size: int,
        mime_type: str,
        title: Optional[str] = None
    ) -> Document:
        """
        Persist a new document in processing status.
        
        Args:
            db: Database session
            user_id: Owner of the document
            original_name: Name the user uploaded
            filename: Stored filename
            storage_ref: Reference returned by the storage adapter
            file_size: Size in bytes
            mime_type: Declared MIME type
            title: Defaults to original_name
        
        Returns:
            Created document
        """
        document = Document(
            title=title or original_name,
            filename=filename,
            original_name=original_name,
            file_path=storage_ref,
            file_size=file_size,
            mime_type=mime_type,
            status=DocumentStatus.PROCESSING.value,
            user_id=user_id,
        )
        db.add(document)
        db.commit()
        db.refresh(document)
        logger.info(f"Created document {document.id} ({original_name}, {file_size} bytes)")
        return document
    
    def get_document(self, db: Session, doc_id: str, user_id: str) -> Document:
        """
        Get a document owned by user_id.
        
        Raises:
            NotFoundError: If the document does not exist
            AccessDeniedError: If it belongs to another user
        """
        document = db.get(Document, doc_id)
        if document is None:
            raise NotFoundError("Document not found")
        if document.user_id != user_id:
            logger.warning(f"User {user_id} denied access to document {doc_id}")
            raise AccessDeniedError("Access denied")
        return document
    
    def list_documents(self, db: Session, user_id: str) -> List[Document]:
        """List a user's documents, newest first."""
        return (
            db.query(Document)
            .filter(Document.user_id == user_id)
            .order_by(Document.created_at.desc())
            .all()
        )
    
    async def delete_document(self, db: Session, doc_id: str, user_id: str) -> None:
        """Delete a document, its stored content and (by cascade) its chat sessions."""
        document = self.get_document(db, doc_id, user_id)
        storage_ref = document.file_path
        
        db.delete(document)
        db.commit()
        
        if await self._storage.delete(storage_ref):
            logger.debug(f"Deleted stored content {storage_ref}")
        logger.info(f"Deleted document {doc_id}")
