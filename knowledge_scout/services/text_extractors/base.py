"""
Base Text Extractor Interface.

All text extractors must inherit from this base class and implement
the extract() method.
"""
from abc import ABC, abstractmethod
from typing import Tuple


def format_size_kb(size_in_bytes: int) -> str:
    """Format a byte count as kilobytes with one decimal (e.g. '12.3')."""
    return f"{size_in_bytes / 1024:.1f}"


class BaseTextExtractor(ABC):
    """
    Abstract base class for text extractors.
    
    Each supported MIME type maps to one extractor. Extractors turn raw bytes
    into text and express every failure as a descriptive placeholder string,
    so a bad file never fails the document pipeline.
    """
    
    def __init__(self, mime_types: Tuple[str, ...], format_name: str):
        """
        Initialize the extractor.
        
        Args:
            mime_types: MIME types handled by this extractor
            format_name: Human-readable format name (e.g., 'PDF', 'TXT')
        """
        self.mime_types = tuple(m.lower() for m in mime_types)
        self.format_name = format_name
    
    @abstractmethod
    def extract(self, file_bytes: bytes) -> str:
        """
        Extract text from file bytes.
        
        Args:
            file_bytes: Raw file content as bytes
            
        Returns:
            Extracted text content, or a placeholder describing why there is none
        """
        pass
