import asyncio
import io
import time

import pytest
from pypdf import PdfWriter

from knowledge_scout.models import ChatSession, Document, Message, User
from knowledge_scout.routers import dependencies
from knowledge_scout.services.auth_service import AuthService
from knowledge_scout.services.chat_service import ChatService
from knowledge_scout.services.document_processing_service import DocumentProcessingService
from knowledge_scout.services.document_service import DocumentService
from knowledge_scout.services.storage import MemoryContentStorage
from knowledge_scout.services.text_extractors import (
    EMPTY_TEXT_PLACEHOLDER,
    IMAGE_PDF_PLACEHOLDER,
    WORD_PLACEHOLDER,
)

from .conftest import upload, wait_for_document

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def blank_pdf_bytes():
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def memory_storage(client, monkeypatch):
    """Rewire the running services onto in-memory content storage."""
    storage = MemoryContentStorage()
    document_service = DocumentService(storage)
    monkeypatch.setattr(dependencies, "storage", storage)
    monkeypatch.setattr(dependencies, "document_service", document_service)
    monkeypatch.setattr(
        dependencies,
        "processing_service",
        DocumentProcessingService(dependencies.database, storage, dependencies.ai_service, document_service),
    )
    monkeypatch.setattr(dependencies, "chat_service", ChatService(dependencies.ai_service, document_service))
    monkeypatch.setattr(dependencies, "auth_service", AuthService(storage))
    return storage


def test_upload_text_document(client, auth_headers):
    response = upload(client, auth_headers)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "File uploaded successfully"
    assert body["document"]["title"] == "notes.txt"
    assert body["document"]["fileSize"] == 5
    assert set(body["document"]) == {"id", "title", "filename", "fileSize", "status", "createdAt"}
    
    document = wait_for_document(client, auth_headers, body["document"]["id"])
    assert document["status"] == "completed"
    assert document["extractedText"] == "hello"
    assert document["summary"].startswith("This is a MOCK summary")
    assert document["originalName"] == "notes.txt"
    assert document["mimeType"] == "text/plain"


def test_empty_text_document(client, auth_headers):
    doc_id = upload(client, auth_headers, content=b"   ").json()["document"]["id"]
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["extractedText"] == EMPTY_TEXT_PLACEHOLDER


def test_image_only_pdf(client, auth_headers):
    content = blank_pdf_bytes()
    doc_id = upload(client, auth_headers, "scan.pdf", content, "application/pdf").json()["document"]["id"]
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["extractedText"] == IMAGE_PDF_PLACEHOLDER.format(size_kb=f"{len(content) / 1024:.1f}")


def test_docx_placeholder(client, auth_headers):
    doc_id = upload(client, auth_headers, "report.docx", b"PK\x03\x04 anything", DOCX).json()["document"]["id"]
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["extractedText"] == WORD_PLACEHOLDER


def test_summary_failure_still_completes(client, auth_headers, fake_provider):
    fake_provider.fail = True
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["summary"] == "AI summary generation is currently unavailable."


def test_rejects_unsupported_type(client, auth_headers):
    response = upload(client, auth_headers, "photo.png", b"\x89PNG", "image/png")
    assert response.status_code == 400
    assert "Invalid file type" in response.json()["error"]
    assert client.get("/documents", headers=auth_headers).json()["documents"] == []


def test_rejects_oversized_upload(client, auth_headers, monkeypatch):
    from knowledge_scout.routers import uploads
    monkeypatch.setattr(uploads, "MAX_UPLOAD_SIZE", 4)
    response = upload(client, auth_headers, content=b"hello")
    assert response.status_code == 400
    assert "File too large" in response.json()["error"]


def test_upload_without_file(client, auth_headers):
    response = client.post("/documents/upload", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"


def test_list_and_delete(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    documents = client.get("/documents", headers=auth_headers).json()["documents"]
    assert [d["id"] for d in documents] == [doc_id]
    
    assert client.delete(f"/documents/{doc_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/documents/{doc_id}", headers=auth_headers).status_code == 404


def test_cross_user_access_denied(client, auth_headers, other_auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    assert client.get(f"/documents/{doc_id}", headers=other_auth_headers).status_code == 403
    assert client.delete(f"/documents/{doc_id}", headers=other_auth_headers).status_code == 403
    assert client.post(f"/documents/{doc_id}/reprocess", headers=other_auth_headers).status_code == 403
    assert client.get("/documents", headers=other_auth_headers).json()["documents"] == []


def test_missing_document_is_404(client, auth_headers):
    response = client.get("/documents/does-not-exist", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Document not found"


def test_reprocess(client, auth_headers, fake_provider):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    fake_provider.summary = "Second summary"
    response = client.post(f"/documents/{doc_id}/reprocess", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "processing"
    
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["summary"] == "Second summary"


def test_reprocess_with_missing_content(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    with dependencies.database.session() as db:
        storage_ref = db.get(Document, doc_id).file_path
    dependencies.storage._get_full_path(storage_ref).unlink()
    
    response = client.post(f"/documents/{doc_id}/reprocess", headers=auth_headers)
    assert response.status_code == 400
    
    document = client.get(f"/documents/{doc_id}", headers=auth_headers).json()["document"]
    assert document["status"] == "error"
    assert document["extractedText"] is None
    assert document["summary"] is None


def test_reprocess_while_processing_is_not_queued(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    dependencies.processing_service.mark_queued(doc_id)
    try:
        response = client.post(f"/documents/{doc_id}/reprocess", headers=auth_headers)
    finally:
        dependencies.processing_service._in_flight.discard(doc_id)
    assert response.status_code == 200
    assert response.json()["message"] == "Document is already being processed"


def test_stale_processing_document_is_requeued(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    # Left in processing by a run that never finished, e.g. before a restart
    with dependencies.database.session() as db:
        db.get(Document, doc_id).status = "processing"
        db.commit()
    
    response = client.post(f"/documents/{doc_id}/reprocess", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Document reprocessing started"
    
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["extractedText"] == "hello"


def test_processing_with_missing_content_clears_results(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    with dependencies.database.session() as db:
        document = db.get(Document, doc_id)
        document.status = "processing"
        storage_ref = document.file_path
        db.commit()
    dependencies.storage._get_full_path(storage_ref).unlink()
    
    asyncio.run(dependencies.processing_service.process_document(doc_id))
    
    document = client.get(f"/documents/{doc_id}", headers=auth_headers).json()["document"]
    assert document["status"] == "error"
    assert document["extractedText"] is None
    assert document["summary"] is None
    assert doc_id not in dependencies.processing_service._in_flight


def test_memory_storage_document_cannot_be_reprocessed(client, auth_headers, memory_storage):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    document = wait_for_document(client, auth_headers, doc_id)
    assert document["status"] == "completed"
    assert document["extractedText"] == "hello"
    # Content is released just after the status commit
    for _ in range(50):
        if not memory_storage._content:
            break
        time.sleep(0.05)
    assert memory_storage._content == {}
    
    response = client.post(f"/documents/{doc_id}/reprocess", headers=auth_headers)
    assert response.status_code == 400
    
    document = client.get(f"/documents/{doc_id}", headers=auth_headers).json()["document"]
    assert document["status"] == "error"
    assert document["extractedText"] is None
    assert document["summary"] is None


def test_failed_record_creation_removes_stored_bytes(client, auth_headers, memory_storage, monkeypatch):
    def broken_create_document(*args, **kwargs):
        raise RuntimeError("database unavailable")
    
    monkeypatch.setattr(dependencies.document_service, "create_document", broken_create_document)
    
    response = upload(client, auth_headers)
    assert response.status_code == 500
    assert memory_storage._content == {}
    with dependencies.database.session() as db:
        assert db.query(Document).count() == 0


def test_extraction_preview_does_not_persist(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    
    with dependencies.database.session() as db:
        db.get(Document, doc_id).extracted_text = "stale"
        db.commit()
    
    preview = client.get(f"/documents/{doc_id}/extraction-preview", headers=auth_headers).json()
    assert preview["extractedText"] == "hello"
    assert preview["extractedTextLength"] == 5
    assert preview["currentExtractedText"] == "stale"


def test_user_delete_cascades(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    session = client.post(
        "/chat/sessions", headers=auth_headers, json={"documentId": doc_id, "question": "What is this?"}
    )
    assert session.status_code == 201, session.text
    
    assert client.delete("/auth/me", headers=auth_headers).status_code == 200
    
    with dependencies.database.session() as db:
        assert db.query(User).count() == 0
        assert db.query(Document).count() == 0
        assert db.query(ChatSession).count() == 0
        assert db.query(Message).count() == 0


def test_document_delete_cascades_to_chat(client, auth_headers):
    doc_id = upload(client, auth_headers).json()["document"]["id"]
    wait_for_document(client, auth_headers, doc_id)
    session = client.post(
        "/chat/sessions", headers=auth_headers, json={"documentId": doc_id, "question": "What is this?"}
    )
    assert session.status_code == 201, session.text
    
    assert client.delete(f"/documents/{doc_id}", headers=auth_headers).status_code == 200
    
    with dependencies.database.session() as db:
        assert db.query(Document).count() == 0
        assert db.query(ChatSession).count() == 0
        assert db.query(Message).count() == 0
        assert db.query(User).count() == 1
