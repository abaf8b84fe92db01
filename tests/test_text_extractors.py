import io

from pypdf import PdfWriter

from knowledge_scout.services.text_extractors import (
    EMPTY_TEXT_PLACEHOLDER,
    IMAGE_PDF_PLACEHOLDER,
    PDF_FAILURE_PLACEHOLDER,
    RTF_PLACEHOLDER,
    UNSUPPORTED_PLACEHOLDER,
    WORD_PLACEHOLDER,
    TextExtractorFactory,
)


def test_plain_text_is_trimmed():
    assert TextExtractorFactory.extract_text(b"  hello \n", "text/plain") == "hello"


def test_plain_text_with_charset_parameter():
    assert TextExtractorFactory.extract_text(b"hi there", "text/plain; charset=utf-8") == "hi there"


def test_empty_text():
    assert TextExtractorFactory.extract_text(b"", "text/plain") == EMPTY_TEXT_PLACEHOLDER


def test_image_only_pdf_mentions_size():
    writer = PdfWriter()
    writer.add_blank_page(width=100, height=100)
    buffer = io.BytesIO()
    writer.write(buffer)
    content = buffer.getvalue()
    
    result = TextExtractorFactory.extract_text(content, "application/pdf")
    assert result == IMAGE_PDF_PLACEHOLDER.format(size_kb=f"{len(content) / 1024:.1f}")


def test_corrupt_pdf():
    content = b"definitely not a pdf" * 100
    result = TextExtractorFactory.extract_text(content, "application/pdf")
    assert result == PDF_FAILURE_PLACEHOLDER.format(size_kb=f"{len(content) / 1024:.1f}")


def test_word_and_rtf_placeholders_ignore_content():
    assert TextExtractorFactory.extract_text(b"anything", "application/msword") == WORD_PLACEHOLDER
    assert TextExtractorFactory.extract_text(b"{\\rtf1 hi}", "application/rtf") == RTF_PLACEHOLDER


def test_unknown_type():
    assert TextExtractorFactory.extract_text(b"x", "application/x-unknown") == UNSUPPORTED_PLACEHOLDER
