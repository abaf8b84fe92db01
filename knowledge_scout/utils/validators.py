"""
Validation utilities - Pure validation functions.
"""
import random
import time
from pathlib import Path
from typing import Iterable, Optional

from ..api.exceptions import ValidationError


def normalize_mime_type(mime_type: Optional[str]) -> str:
    """Lowercase a content type and drop parameters such as charset."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def validate_upload(
    filename: Optional[str],
    mime_type: Optional[str],
    size: int,
    allowed_mime_types: Iterable[str],
    max_size: int
) -> None:
    """
    Validate an uploaded file before any document is created.
    
    Raises:
        ValidationError: If the file is missing, of a disallowed type, or too large
    """
    if not filename or not filename.strip():
        raise ValidationError("No file uploaded")
    
    if normalize_mime_type(mime_type) not in set(allowed_mime_types):
        raise ValidationError("Invalid file type. Only PDF, DOC, DOCX, TXT, and RTF files are allowed.")
    
    if size > max_size:
        raise ValidationError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")


def generate_stored_filename(original_name: str, field_name: str = "document") -> str:
    """
    Build a unique stored filename that keeps the original extension.
    
    Example: "document-1700000000000-123456789.pdf"
    """
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    extension = Path(original_name).suffix.lower()
    return f"{field_name}-{suffix}{extension}"
