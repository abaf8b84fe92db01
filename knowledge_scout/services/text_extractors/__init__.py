"""
Text Extractors Module - MIME-type driven text extraction.

To add support for a new file format:
1. Create a new extractor class inheriting from BaseTextExtractor
2. Implement the extract() method
3. Register it in TextExtractorFactory
"""
from .base import BaseTextExtractor
from .factory import TextExtractorFactory, EXTRACTION_FAILURE_PLACEHOLDER
from .pdf_extractor import PDFExtractor, IMAGE_PDF_PLACEHOLDER, PDF_FAILURE_PLACEHOLDER
from .placeholder_extractor import (
    PlaceholderExtractor,
    WordExtractor,
    RTFExtractor,
    WORD_PLACEHOLDER,
    RTF_PLACEHOLDER,
    UNSUPPORTED_PLACEHOLDER,
)
from .text_extractor import TextExtractor, EMPTY_TEXT_PLACEHOLDER

__all__ = [
    "BaseTextExtractor",
    "TextExtractorFactory",
    "PDFExtractor",
    "TextExtractor",
    "PlaceholderExtractor",
    "WordExtractor",
    "RTFExtractor",
    "EMPTY_TEXT_PLACEHOLDER",
    "IMAGE_PDF_PLACEHOLDER",
    "PDF_FAILURE_PLACEHOLDER",
    "WORD_PLACEHOLDER",
    "RTF_PLACEHOLDER",
    "UNSUPPORTED_PLACEHOLDER",
    "EXTRACTION_FAILURE_PLACEHOLDER",
]
