"""
Custom exceptions for API layer.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class KnowledgeScoutError(Exception):
    """Base class for business exceptions."""
    pass


class ValidationError(KnowledgeScoutError):
    """Raised when request input is invalid."""
    pass


class AuthenticationError(KnowledgeScoutError):
    """Raised when a credential is missing or invalid."""
    pass


class AccessDeniedError(KnowledgeScoutError):
    """Raised when the caller does not own the requested resource."""
    pass


class NotFoundError(KnowledgeScoutError):
    """Raised when a resource is not found."""
    pass


class ContentUnavailableError(KnowledgeScoutError):
    """Raised when the stored bytes behind a document can no longer be located."""
    pass


class DocumentNotReadyError(KnowledgeScoutError):
    """Raised when a chat is attempted against a document that is not completed."""
    pass


class AIUnavailableError(KnowledgeScoutError):
    """Raised when the external AI call fails during chat answering."""
    pass


_STATUS_BY_EXCEPTION = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ContentUnavailableError, status.HTTP_400_BAD_REQUEST),
    (DocumentNotReadyError, status.HTTP_400_BAD_REQUEST),
    (AIUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    for exc_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(e, exc_type):
            headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
            return HTTPException(status_code=status_code, detail=str(e), headers=headers)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
