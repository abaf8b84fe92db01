"""
PDF Text Extractor.

Extracts text from PDF files using pypdf library.
"""
import io

from pypdf import PdfReader

from .base import BaseTextExtractor, format_size_kb
from ...core.logging_config import get_logger

logger = get_logger(__name__)

# Extracted text this short usually means the PDF only contains scanned images
MIN_TEXT_LENGTH = 10

IMAGE_PDF_PLACEHOLDER = (
    "PDF file uploaded successfully ({size_kb} KB). This appears to be an image-based PDF "
    "or contains minimal text content. For best results, please upload a text-based PDF document."
)
PDF_FAILURE_PLACEHOLDER = (
    "PDF file uploaded successfully ({size_kb} KB). Text extraction failed - this may be due to "
    "image-based PDF, encryption, or corrupted file. Please try with a different PDF document."
)


class PDFExtractor(BaseTextExtractor):
    """Extractor for PDF files."""
    
    def __init__(self):
        super().__init__(("application/pdf",), "PDF")
    
    def extract(self, file_bytes: bytes) -> str:
        """
        Extract text from PDF file.
        
        Parse failures and image-only PDFs resolve to placeholder strings
        that mention the file size.
        
        Args:
            file_bytes: PDF file content as bytes
            
        Returns:
            Extracted text content or a placeholder
        """
        size_kb = format_size_kb(len(file_bytes))
        try:
            reader = PdfReader(io.BytesIO(file_bytes))
            pages = []
            for page in reader.pages:
                page_text = page.extract_text()
                if page_text:
                    pages.append(page_text)
            text_content = "\n".join(pages)
        except Exception as e:
            logger.error(f"PDF processing error: {e}", exc_info=True)
            return PDF_FAILURE_PLACEHOLDER.format(size_kb=size_kb)
        
        logger.info(
            f"PDF text extraction completed. Extracted {len(text_content)} characters "
            f"from {len(reader.pages)} pages."
        )
        
        cleaned_text = text_content.strip()
        if len(cleaned_text) > MIN_TEXT_LENGTH:
            return cleaned_text
        
        logger.warning("PDF text extraction returned minimal content, likely an image-based PDF")
        return IMAGE_PDF_PLACEHOLDER.format(size_kb=size_kb)
