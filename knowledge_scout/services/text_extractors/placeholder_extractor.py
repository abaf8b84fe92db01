"""
Placeholder extractors for formats without text extraction support.

Word and RTF uploads are accepted and stored, but their content is not
parsed. The user gets a note asking them to convert the file instead.
"""
from typing import Tuple

from .base import BaseTextExtractor

WORD_PLACEHOLDER = (
    "Word document uploaded successfully. Text extraction for Word documents is not yet "
    "implemented. Please convert to PDF or plain text for full functionality."
)
RTF_PLACEHOLDER = (
    "RTF document uploaded successfully. Text extraction for RTF documents is not yet "
    "implemented. Please convert to PDF or plain text for full functionality."
)
UNSUPPORTED_PLACEHOLDER = (
    "File uploaded successfully. Text extraction is not yet implemented for this file type. "
    "Please use PDF or plain text files for full functionality."
)


class PlaceholderExtractor(BaseTextExtractor):
    """Returns a fixed notice without looking at the file content."""
    
    def __init__(self, mime_types: Tuple[str, ...], format_name: str, placeholder: str):
        super().__init__(mime_types, format_name)
        self.placeholder = placeholder
    
    def extract(self, file_bytes: bytes) -> str:
        return self.placeholder


class WordExtractor(PlaceholderExtractor):
    
    def __init__(self):
        super().__init__(
            (
                "application/msword",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            ),
            "Word",
            WORD_PLACEHOLDER,
        )


class RTFExtractor(PlaceholderExtractor):
    
    def __init__(self):
        super().__init__(("application/rtf", "text/rtf"), "RTF", RTF_PLACEHOLDER)
