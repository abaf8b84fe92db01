import os
import tempfile
import time

# Configuration is read at import time, so the environment must be set first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AI_PROVIDER"] = "mock"
os.environ["STORAGE_TYPE"] = "local"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="knowledge-scout-uploads-")
os.environ["LOG_TO_FILE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from knowledge_scout.main import app
from knowledge_scout.routers import dependencies
from knowledge_scout.services.providers import AIProvider, ProviderAnswer


class FakeProvider(AIProvider):
    """Scriptable provider that records what it was asked."""
    
    def __init__(self, answer="Fake answer", confidence=0.9, summary="Fake summary", fail=False):
        self.answer = answer
        self.confidence = confidence
        self.summary = summary
        self.fail = fail
        self.summary_calls = []
        self.answer_calls = []
    
    def generate_summary(self, text):
        self.summary_calls.append(text)
        if self.fail:
            raise RuntimeError("provider down")
        return self.summary
    
    def answer_question(self, question, document_text, history):
        self.answer_calls.append({"question": question, "document_text": document_text, "history": list(history)})
        if self.fail:
            raise RuntimeError("provider down")
        return ProviderAnswer(text=self.answer, confidence=self.confidence)


@pytest.fixture
def client():
    # Each startup builds a fresh in-memory database
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_provider(client):
    provider = FakeProvider()
    dependencies.ai_service.provider = provider
    return provider


def register(client, email="alice@example.com", name="Alice", password="secret123"):
    response = client.post("/auth/register", json={"email": email, "name": name, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(client):
    token = register(client, email="bob@example.com", name="Bob")["token"]
    return {"Authorization": f"Bearer {token}"}


def upload(client, headers, filename="notes.txt", content=b"hello", mime_type="text/plain"):
    return client.post(
        "/documents/upload",
        headers=headers,
        files={"document": (filename, content, mime_type)},
    )


def wait_for_document(client, headers, doc_id, attempts=50):
    """Poll until the document leaves processing."""
    document = None
    for _ in range(attempts):
        response = client.get(f"/documents/{doc_id}", headers=headers)
        assert response.status_code == 200, response.text
        document = response.json()["document"]
        if document["status"] != "processing":
            return document
        time.sleep(0.05)
    return document
