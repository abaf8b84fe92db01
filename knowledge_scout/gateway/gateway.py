"""
API Gateway

Main gateway class that orchestrates routing, middleware, and API versioning.
Acts as the single entry point for all API requests.
"""
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..api.exceptions import KnowledgeScoutError, handle_business_exception
from ..core.config import CORS_ORIGINS, ENVIRONMENT, RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE
from ..core.logging_config import get_logger
from .middleware import ErrorHandlingMiddleware, RequestIDMiddleware, RequestLoggingMiddleware, error_response
from .versioning import APIVersion, VersionRouter

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing, middleware, and API versioning.
    
    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Map business exceptions to JSON error responses
    - Register routers at the root path and under /api/v1
    - Provide health check endpoints
    """
    
    def __init__(
        self,
        title: str = "Knowledge Scout API",
        description: str = "Document upload, AI summaries and document Q&A",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        """
        Initialize API Gateway.
        
        Args:
            title: API title
            description: API description
            version: API version
            enable_docs: Enable API docs (auto-detected from ENVIRONMENT if None)
        """
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else ENVIRONMENT != "production"
        
        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )
        
        self.version_router = VersionRouter()
        
        # Initialize rate limiter
        self.limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[f"{RATE_LIMIT_PER_MINUTE}/minute"],
            enabled=RATE_LIMIT_ENABLED
        )
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        
        self._register_exception_handlers()
        
        logger.info("API Gateway initialized")
    
    def _register_exception_handlers(self):
        """Give every handled error the same JSON body."""
        
        @self.app.exception_handler(KnowledgeScoutError)
        async def business_exception_handler(request: Request, exc: KnowledgeScoutError) -> JSONResponse:
            http_exception = handle_business_exception(exc)
            logger.warning(
                f"Business exception for {request.method} {request.url.path}: "
                f"{http_exception.status_code} {http_exception.detail}"
            )
            return error_response(
                request, http_exception.status_code, http_exception.detail, headers=http_exception.headers
            )
        
        @self.app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
            logger.debug(f"HTTP exception for {request.method} {request.url.path}: {exc.status_code} - {exc.detail}")
            return error_response(request, exc.status_code, exc.detail, headers=getattr(exc, "headers", None))
        
        @self.app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
            logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")
            return error_response(request, 422, "Validation Error", detail=jsonable_encoder(exc.errors()))
    
    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")
        
        # Error handling (innermost, so request.state.request_id is already set)
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")
        
        # Rate limiting (default limits from the Limiter)
        self.app.add_middleware(SlowAPIMiddleware)
        logger.debug(f"  → Rate limiting middleware added (enabled: {RATE_LIMIT_ENABLED})")
        
        # Request ID (for tracing)
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")
        
        # Request logging
        self.app.add_middleware(
            RequestLoggingMiddleware,
            skip_paths=["/health", "/ready", "/docs", "/redoc", "/openapi.json"]
        )
        logger.debug("  → Request logging middleware added")
        
        # CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")
        
        logger.info("✅ All middleware configured")
    
    def register_router(
        self,
        router: APIRouter,
        tags: Optional[List[str]] = None,
        version: APIVersion = APIVersion.V1
    ):
        """
        Register a router at the root path and under its versioned prefix.
        
        Args:
            router: FastAPI router instance
            tags: OpenAPI tags for documentation
            version: API version for the prefixed mount
        """
        self.app.include_router(router, tags=tags or [])
        self.app.include_router(router, prefix=version.prefix, tags=tags or [])
        self.version_router.register(version, router)
        logger.info(f"Registered router {tags or ''} at '/' and '{version.prefix}'")
    
    def register_health_endpoints(self):
        """Register health check endpoints."""
        
        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy",
                "api_versions": [v.value for v in self.version_router.get_all_versions()]
            }
        
        @self.app.get("/health")
        async def health_check():
            """
            Health check endpoint for container orchestration.
            
            Returns 200 if services are initialized, 503 otherwise.
            """
            from ..routers import dependencies
            
            if dependencies.database is None:
                logger.warning("Health check failed: Database not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Database not initialized"}
                )
            if dependencies.processing_service is None or dependencies.chat_service is None:
                logger.warning("Health check failed: Services not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Services not initialized"}
                )
            return {
                "status": "healthy",
                "database": "connected",
                "services": "initialized"
            }
        
        @self.app.get("/ready")
        async def readiness_check():
            """
            Readiness check endpoint.
            
            Verifies the database answers a trivial query.
            """
            from ..routers import dependencies
            
            if dependencies.database is None:
                return JSONResponse(
                    status_code=503,
                    content={"ready": False, "reason": "Database not initialized"}
                )
            try:
                with dependencies.database.session() as db:
                    db.execute(text("SELECT 1"))
            except Exception as e:
                logger.error(f"Readiness check failed: {e}", exc_info=True)
                return JSONResponse(
                    status_code=503,
                    content={"ready": False, "reason": str(e)}
                )
            return {"ready": True}
        
        logger.info("Health check endpoints registered")
    
    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
