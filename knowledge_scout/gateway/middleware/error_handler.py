"""
Error Handling Middleware

Centralized error response formatting.

Business exceptions and HTTP exceptions are turned into JSON by the
exception handlers the gateway registers. This middleware is the last
line: anything that escapes a route becomes a 500 with the same body shape.
"""
import traceback
from typing import Any, Optional

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger

logger = get_logger(__name__)


def error_response(request: Request, status_code: int, error: Any, headers: Optional[dict] = None, **extra) -> JSONResponse:
    """Build the standard error body: error, status_code, path, request_id."""
    content = {
        "error": error,
        "status_code": status_code,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None),
    }
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that converts unexpected exceptions to 500 responses.
    
    In development the exception text and traceback are included;
    in production only a generic message is returned.
    """
    
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = ENVIRONMENT != "production"
            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)
            
            if is_development:
                return error_response(
                    request,
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    str(e) or "Internal server error",
                    traceback=traceback.format_exc(),
                )
            return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
