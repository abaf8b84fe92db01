"""
Text Extractor Factory.

Manages registration and retrieval of text extractors keyed by MIME type.
Uses the Factory pattern to provide plug-and-play text extraction.
"""
from typing import Dict, List, Optional

from .base import BaseTextExtractor
from .pdf_extractor import PDFExtractor
from .placeholder_extractor import RTFExtractor, UNSUPPORTED_PLACEHOLDER, WordExtractor
from .text_extractor import TextExtractor
from ...core.logging_config import get_logger

logger = get_logger(__name__)

EXTRACTION_FAILURE_PLACEHOLDER = (
    "Failed to extract text from document. Please check if the file is not corrupted and try again."
)


class TextExtractorFactory:
    """
    Factory for managing text extractors.
    
    Provides a centralized registry of extractors and easy extension
    for new file formats.
    """
    
    _extractors: Dict[str, BaseTextExtractor] = {}
    _initialized = False
    
    @classmethod
    def _initialize(cls):
        """Initialize default extractors."""
        if cls._initialized:
            return
        
        # skip_init=True to avoid recursion
        cls.register(PDFExtractor(), skip_init=True)
        cls.register(TextExtractor(), skip_init=True)
        cls.register(WordExtractor(), skip_init=True)
        cls.register(RTFExtractor(), skip_init=True)
        
        cls._initialized = True
        logger.info(f"TextExtractorFactory initialized with {len(cls._extractors)} MIME types")
    
    @classmethod
    def register(cls, extractor: BaseTextExtractor, skip_init: bool = False):
        """
        Register a text extractor for every MIME type it handles.
        
        Args:
            extractor: Text extractor instance to register
            skip_init: If True, skip initialization check (used internally)
        """
        if not skip_init:
            cls._initialize()
        
        for mime_type in extractor.mime_types:
            if mime_type in cls._extractors:
                logger.warning(f"Overriding existing extractor for {mime_type}")
            cls._extractors[mime_type] = extractor
            logger.debug(f"Registered extractor for {mime_type}: {extractor.format_name}")
    
    @classmethod
    def get_extractor(cls, mime_type: str) -> Optional[BaseTextExtractor]:
        """
        Get extractor for a declared MIME type.
        
        Args:
            mime_type: Declared MIME type, parameters such as charset are ignored
            
        Returns:
            Text extractor instance or None if not found
        """
        cls._initialize()
        base_type = (mime_type or "").split(";")[0].strip().lower()
        return cls._extractors.get(base_type)
    
    @classmethod
    def extract_text(cls, file_bytes: bytes, mime_type: str) -> str:
        """
        Extract text from file content using the extractor for its MIME type.
        
        Never raises: unknown types and unexpected failures resolve to
        placeholder strings.
        
        Args:
            file_bytes: File content as bytes
            mime_type: Declared MIME type of the upload
            
        Returns:
            Extracted text content or a placeholder
        """
        extractor = cls.get_extractor(mime_type)
        
        if extractor is None:
            logger.warning(f"No text extractor for MIME type '{mime_type}', returning placeholder")
            return UNSUPPORTED_PLACEHOLDER
        
        try:
            logger.debug(f"Extracting text using {extractor.format_name} extractor")
            text_content = extractor.extract(file_bytes)
            logger.info(f"Extracted {len(text_content)} characters ({extractor.format_name})")
            return text_content
        except Exception as e:
            logger.error(f"Text extraction error ({extractor.format_name}): {e}", exc_info=True)
            return EXTRACTION_FAILURE_PLACEHOLDER
    
    @classmethod
    def get_supported_mime_types(cls) -> List[str]:
        cls._initialize()
        return sorted(cls._extractors.keys())
