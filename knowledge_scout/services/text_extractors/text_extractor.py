"""
Plain Text Extractor.
"""
from .base import BaseTextExtractor

EMPTY_TEXT_PLACEHOLDER = "Text file uploaded successfully but appears to be empty."


class TextExtractor(BaseTextExtractor):
    """Extractor for text/plain files."""
    
    def __init__(self):
        super().__init__(("text/plain",), "TXT")
    
    def extract(self, file_bytes: bytes) -> str:
        text_content = file_bytes.decode("utf-8", errors="replace").strip()
        return text_content or EMPTY_TEXT_PLACEHOLDER
