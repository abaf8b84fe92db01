"""
Shared dependencies for routers.
Provides database and service initialization.

Services are created once on startup and shared across all request
handlers and background tasks.
"""
from typing import Iterator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..api.exceptions import AuthenticationError
from ..core.config import DATABASE_ECHO, DATABASE_URL, STORAGE_TYPE
from ..core.logging_config import get_logger
from ..models import User
from ..services.ai_service import AIService
from ..services.auth_service import AuthService
from ..services.chat_service import ChatService
from ..services.database import Database
from ..services.document_processing_service import DocumentProcessingService
from ..services.document_service import DocumentService
from ..services.storage import ContentStorageFactory

logger = get_logger(__name__)

# Global services (will be initialized on startup)
database: Optional[Database] = None
storage = None
ai_service: Optional[AIService] = None
document_service: Optional[DocumentService] = None
processing_service: Optional[DocumentProcessingService] = None
chat_service: Optional[ChatService] = None
auth_service: Optional[AuthService] = None

bearer_scheme = HTTPBearer(auto_error=False)


async def initialize_database():
    """Create the SQLAlchemy engine and make sure tables exist."""
    global database
    
    logger.info("Initializing database...")
    database = Database(DATABASE_URL, echo=DATABASE_ECHO)
    logger.info(f"  → Database dialect: {database.engine.dialect.name}")
    database.create_tables()
    logger.info("  ✅ Database initialized")


async def initialize_services():
    """
    Initialize all services after database is ready.
    
    This function sets up:
    - Content storage (local or memory)
    - AI service for summaries and answers
    - Document, processing, chat and auth services
    """
    global storage, ai_service, document_service, processing_service, chat_service, auth_service
    
    if database is None:
        await initialize_database()
    
    logger.info("Initializing services...")
    
    logger.info(f"  → Starting Content Storage ({STORAGE_TYPE})...")
    storage = await ContentStorageFactory.create_and_initialize()
    if not storage.durable:
        logger.warning("  ⚠️  In-memory storage: documents cannot be reprocessed after first processing")
    logger.info("  ✅ Content Storage initialized")
    
    logger.info("  → Starting AI Service...")
    ai_service = AIService()
    logger.info("  ✅ AI Service initialized")
    
    document_service = DocumentService(storage)
    processing_service = DocumentProcessingService(database, storage, ai_service, document_service)
    chat_service = ChatService(ai_service, document_service)
    auth_service = AuthService(storage)
    
    logger.info("✅ All services initialized successfully")


async def shutdown_services():
    """Release storage and database connections."""
    global database, storage
    
    if storage is not None:
        await storage.close()
        storage = None
    if database is not None:
        database.close()
        database = None
    logger.info("Services shut down")


def get_database() -> Database:
    if database is None:
        raise RuntimeError("Database not initialized")
    return database


def get_db() -> Iterator[Session]:
    """Request-scoped database session (dependency injection)."""
    yield from get_database().get_db()


def get_document_service() -> DocumentService:
    """Get document service (dependency injection)."""
    if document_service is None:
        raise RuntimeError("Document service not initialized")
    return document_service


def get_processing_service() -> DocumentProcessingService:
    """Get document processing service (dependency injection)."""
    if processing_service is None:
        raise RuntimeError("Document processing service not initialized")
    return processing_service


def get_chat_service() -> ChatService:
    """Get chat service (dependency injection)."""
    if chat_service is None:
        raise RuntimeError("Chat service not initialized")
    return chat_service


def get_auth_service() -> AuthService:
    """Get auth service (dependency injection)."""
    if auth_service is None:
        raise RuntimeError("Auth service not initialized")
    return auth_service


def get_storage():
    if storage is None:
        raise RuntimeError("Content storage not initialized")
    return storage


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the Authorization: Bearer header to a user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return auth.authenticate_token(db, credentials.credentials)
