import logging

from knowledge_scout.core.logging_config import setup_logging


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert "v1" in body["api_versions"]


def test_health_and_ready(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").json() == {"ready": True}


def test_404_handler(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    body = response.json()
    assert body["status_code"] == 404
    assert body["path"] == "/non-existent-route"
    assert body["request_id"]


def test_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_cors_headers(client):
    response = client.options(
        "/documents",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_documents_require_token(client):
    response = client.get("/documents")
    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


def test_versioned_mount(client, auth_headers):
    assert client.get("/api/v1/documents", headers=auth_headers).status_code == 200


def test_setup_logging_writes_file_and_quiets_libraries(tmp_path):
    log_file = tmp_path / "nested" / "app.log"
    try:
        setup_logging(log_level="DEBUG", log_file=str(log_file), enable_file_logging=True)
        setup_logging(log_level="DEBUG", log_file=str(log_file), enable_file_logging=True)
        assert len(logging.getLogger().handlers) == 2
        
        logging.getLogger("knowledge_scout.test").debug("file only detail")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "file only detail" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger("pypdf").level == logging.ERROR
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        setup_logging(enable_file_logging=False)
