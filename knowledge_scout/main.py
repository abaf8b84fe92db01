import sys

from . import __version__
from .gateway import APIGateway, APIVersion
from .routers import auth, chat, documents, uploads
from .routers.dependencies import initialize_database, initialize_services, shutdown_services
from .core.config import (
    AI_PROVIDER,
    CHAT_CONTEXT_WINDOW,
    CORS_ORIGINS,
    ENVIRONMENT,
    MAX_UPLOAD_SIZE,
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_PER_MINUTE,
    STORAGE_TYPE,
    UPLOAD_DIR,
)
from .core.logging_config import setup_logging, get_logger
from .services.text_extractors import TextExtractorFactory

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize API Gateway
gateway = APIGateway(
    title="Knowledge Scout API",
    description="Document upload, text extraction, AI summaries and chat-style Q&A over documents",
    version=__version__
)

# Setup middleware (CORS, rate limiting, logging, error handling)
gateway.setup_middleware()

# Register routers at the root path and under /api/v1
gateway.register_router(auth.router, tags=["Auth"], version=APIVersion.V1)
gateway.register_router(uploads.router, tags=["Uploads"], version=APIVersion.V1)
gateway.register_router(documents.router, tags=["Documents"], version=APIVersion.V1)
gateway.register_router(chat.router, tags=["Chat"], version=APIVersion.V1)

# Register health check endpoints
gateway.register_health_endpoints()

# Get FastAPI app instance
app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting Knowledge Scout Backend...")
    logger.info("=" * 60)
    
    logger.info("Configuration:")
    logger.info(f"  → Environment: {ENVIRONMENT}")
    logger.info(f"  → Python Version: {sys.version.split()[0]}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  → AI Provider: {AI_PROVIDER}")
    logger.info(f"  → Storage: {STORAGE_TYPE} ({UPLOAD_DIR})")
    logger.info(f"  → Text Extraction: {', '.join(TextExtractorFactory.get_supported_mime_types())}")
    logger.info(f"  → Max Upload Size: {MAX_UPLOAD_SIZE // (1024 * 1024)}MB")
    logger.info(f"  → Chat Context Window: {CHAT_CONTEXT_WINDOW} messages")
    logger.info(f"  → Rate Limiting: {RATE_LIMIT_PER_MINUTE}/minute" if RATE_LIMIT_ENABLED else "  → Rate Limiting: Disabled")
    logger.info(f"  → CORS Origins: {', '.join(CORS_ORIGINS)}")
    
    await initialize_database()
    await initialize_services()
    
    logger.info("API Endpoints:")
    logger.info("  → Auth: /auth/* and /api/v1/auth/*")
    logger.info("  → Documents: /documents/* and /api/v1/documents/*")
    logger.info("  → Chat: /chat/* and /api/v1/chat/*")
    logger.info("✅ Knowledge Scout Backend started")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Knowledge Scout Backend...")
    await shutdown_services()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
