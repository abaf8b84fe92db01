"""
Document Processing Service - Runs the document lifecycle.

Create happens in the upload router through DocumentService. This service
owns the background part: Extract -> Summarize -> Finalize, and Reprocess.
"""
import asyncio
from typing import Any, Dict, Set, Tuple

from sqlalchemy.orm import Session

from .ai_service import AIService
from .database import Database
from .document_service import DocumentService
from .storage import ContentStorageInterface
from .text_extractors import TextExtractorFactory
from ..api.exceptions import ContentUnavailableError
from ..core.logging_config import get_logger
from ..models import Document, DocumentStatus

logger = get_logger(__name__)


class DocumentProcessingService:
    """
    Service for processing documents.
    Handles text extraction and summary generation, then finalizes status.
    """
    
    def __init__(
        self,
        database: Database,
        storage: ContentStorageInterface,
        ai_service: AIService,
        document_service: DocumentService
    ):
        """
        Initialize document processing service.
        
        Args:
            database: Database used to open a session per processing run
            storage: Content storage adapter
            ai_service: AIService instance
            document_service: DocumentService for ownership-checked lookups
        """
        self.database = database
        self.storage = storage
        self.ai_service = ai_service
        self.document_service = document_service
        # Document ids with a processing run queued or running in this process
        self._in_flight: Set[str] = set()
    
    async def process_document(self, doc_id: str) -> None:
        """
        Process a document in the background.
        
        Extraction and summarization failures are absorbed into placeholder
        text by the extractors and AIService. Missing content marks the
        document as error with text and summary cleared. Anything else that
        escapes marks it as error. Never raises.
        
        Args:
            doc_id: Document ID
        """
        db = self.database.session()
        storage_ref = None
        try:
            document = db.get(Document, doc_id)
            if document is None:
                logger.warning(f"Document {doc_id} disappeared before processing started")
                return
            storage_ref = document.file_path
            mime_type = document.mime_type
            
            # 1. Extract
            content = await self.storage.get(storage_ref)
            logger.info(f"Extracting text from {document.original_name} ({mime_type}, {len(content)} bytes)")
            loop = asyncio.get_event_loop()
            extracted_text = await loop.run_in_executor(
                None, TextExtractorFactory.extract_text, content, mime_type
            )
            
            # 2. Summarize
            summary = await loop.run_in_executor(None, self.ai_service.generate_summary, extracted_text)
            
            # 3. Finalize
            db.refresh(document)
            document.extracted_text = extracted_text
            document.summary = summary
            document.status = DocumentStatus.COMPLETED.value
            db.commit()
            logger.info(f"Document {doc_id} processed ({len(extracted_text)} chars extracted)")
        except ContentUnavailableError as e:
            logger.warning(f"Content for document {doc_id} is no longer available: {e}")
            db.rollback()
            self._mark_error(db, doc_id, clear_content=True)
        except Exception as e:
            logger.error(f"Document processing error for {doc_id}: {e}", exc_info=True)
            db.rollback()
            self._mark_error(db, doc_id)
        finally:
            self._in_flight.discard(doc_id)
            if storage_ref is not None:
                await self.storage.release(storage_ref)
            db.close()
    
    def _mark_error(self, db: Session, doc_id: str, clear_content: bool = False) -> None:
        try:
            document = db.get(Document, doc_id)
            if document is None:
                return
            document.status = DocumentStatus.ERROR.value
            if clear_content:
                document.extracted_text = None
                document.summary = None
            db.commit()
        except Exception as e:
            # Status update itself failed, nothing more can be recorded
            logger.error(f"Failed to mark document {doc_id} as error: {e}", exc_info=True)
            db.rollback()
    
    async def start_reprocess(self, db: Session, doc_id: str, user_id: str) -> Tuple[Document, bool]:
        """
        Prepare a document for reprocessing.
        
        Args:
            db: Request database session
            doc_id: Document ID
            user_id: Caller, must own the document
        
        Returns:
            (document, queued). queued is False when a run is already in progress
            and the caller should not schedule another one.
        
        Raises:
            ContentUnavailableError: If the stored content is gone. The
                document is left in error with text and summary cleared.
        """
        document = self.document_service.get_document(db, doc_id, user_id)

        # A persisted "processing" status with no live run (e.g. after a
        # restart) is stale and gets requeued.
        if doc_id in self._in_flight:
            logger.info(f"Document {doc_id} is already processing, not queuing again")
            return document, False

        if not await self.storage.exists(document.file_path):
            logger.warning(f"Content for document {doc_id} is no longer available")
            self._mark_error(db, doc_id, clear_content=True)
            raise ContentUnavailableError("Original file no longer available. Please upload the document again.")

        document.status = DocumentStatus.PROCESSING.value
        db.commit()
        self.mark_queued(doc_id)
        logger.info(f"Document {doc_id} queued for reprocessing")
        return document, True

    def mark_queued(self, doc_id: str) -> None:
        """Record that a processing run for doc_id has been scheduled."""
        self._in_flight.add(doc_id)
    
    async def extraction_preview(self, db: Session, doc_id: str, user_id: str) -> Dict[str, Any]:
        """
        Run extraction on stored content without persisting anything.
        
        Returns:
            Dict with the fresh extraction and the document's current state
        """
        document = self.document_service.get_document(db, doc_id, user_id)
        content = await self.storage.get(document.file_path)
        
        loop = asyncio.get_event_loop()
        extracted_text = await loop.run_in_executor(
            None, TextExtractorFactory.extract_text, content, document.mime_type
        )
        return {
            "document_id": document.id,
            "mime_type": document.mime_type,
            "extracted_text": extracted_text,
            "extracted_text_length": len(extracted_text),
            "current_status": document.status,
            "current_extracted_text": document.extracted_text,
            "current_summary": document.summary,
        }
