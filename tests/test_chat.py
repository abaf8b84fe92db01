from knowledge_scout.models import Document, Message
from knowledge_scout.routers import dependencies

from .conftest import upload, wait_for_document


def completed_document(client, headers, content=b"The capital of France is Paris."):
    doc_id = upload(client, headers, content=content).json()["document"]["id"]
    assert wait_for_document(client, headers, doc_id)["status"] == "completed"
    return doc_id


def start_session(client, headers, doc_id, **extra):
    response = client.post("/chat/sessions", headers=headers, json={"documentId": doc_id, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_ask_question(client, auth_headers, fake_provider):
    doc_id = completed_document(client, auth_headers)
    session = start_session(client, auth_headers, doc_id)["session"]
    assert session["title"] == "Chat about notes.txt"
    
    response = client.post(
        f"/chat/sessions/{session['id']}/messages", headers=auth_headers, json={"content": "What is the capital?"}
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["userMessage"]["role"] == "user"
    assert body["assistantMessage"]["role"] == "assistant"
    assert body["assistantMessage"]["content"] == "Fake answer"
    assert body["sources"] == ["notes.txt"]
    assert body["confidence"] == 0.9
    
    call = fake_provider.answer_calls[-1]
    assert call["document_text"] == "The capital of France is Paris."
    assert call["history"] == []


def test_first_question_on_session_create(client, auth_headers, fake_provider):
    doc_id = completed_document(client, auth_headers)
    body = start_session(client, auth_headers, doc_id, title="Geography", question="Capital?")
    assert body["session"]["title"] == "Geography"
    assert body["exchange"]["assistantMessage"]["content"] == "Fake answer"


def test_ai_failure_keeps_only_user_message(client, auth_headers, fake_provider):
    doc_id = completed_document(client, auth_headers)
    session_id = start_session(client, auth_headers, doc_id)["session"]["id"]
    
    fake_provider.fail = True
    response = client.post(
        f"/chat/sessions/{session_id}/messages", headers=auth_headers, json={"content": "Anyone there?"}
    )
    assert response.status_code == 503
    
    messages = client.get(f"/chat/sessions/{session_id}/messages", headers=auth_headers).json()["messages"]
    assert [(m["role"], m["content"]) for m in messages] == [("user", "Anyone there?")]


def test_context_window_is_bounded(client, auth_headers, fake_provider):
    doc_id = completed_document(client, auth_headers)
    session_id = start_session(client, auth_headers, doc_id)["session"]["id"]
    
    for i in range(5):
        response = client.post(
            f"/chat/sessions/{session_id}/messages", headers=auth_headers, json={"content": f"Question {i}"}
        )
        assert response.status_code == 200
    
    history_sizes = [len(call["history"]) for call in fake_provider.answer_calls]
    assert history_sizes == [0, 2, 4, 5, 5]
    
    last_history = fake_provider.answer_calls[-1]["history"]
    # Most recent five prior messages, oldest first
    assert [turn.content for turn in last_history] == [
        "Fake answer", "Question 2", "Fake answer", "Question 3", "Fake answer"
    ]
    assert all(len(call["history"]) <= 5 for call in fake_provider.answer_calls)


def test_document_not_ready(client, auth_headers, fake_provider):
    doc_id = completed_document(client, auth_headers)
    session_id = start_session(client, auth_headers, doc_id)["session"]["id"]
    
    with dependencies.database.session() as db:
        db.get(Document, doc_id).status = "error"
        db.commit()
    
    response = client.post(
        f"/chat/sessions/{session_id}/messages", headers=auth_headers, json={"content": "Hello?"}
    )
    assert response.status_code == 400
    assert fake_provider.answer_calls == []
    
    refused = client.post("/chat/sessions", headers=auth_headers, json={"documentId": doc_id})
    assert refused.status_code == 400


def test_sessions_are_private(client, auth_headers, other_auth_headers):
    doc_id = completed_document(client, auth_headers)
    session_id = start_session(client, auth_headers, doc_id)["session"]["id"]
    
    assert client.get(f"/chat/sessions/{session_id}", headers=other_auth_headers).status_code == 403
    assert client.get(f"/chat/sessions/{session_id}/messages", headers=other_auth_headers).status_code == 403
    assert client.get("/chat/sessions", headers=other_auth_headers).json()["sessions"] == []
    assert client.post("/chat/sessions", headers=other_auth_headers, json={"documentId": doc_id}).status_code == 403


def test_delete_session_removes_messages(client, auth_headers, fake_provider):
    doc_id = completed_document(client, auth_headers)
    session_id = start_session(client, auth_headers, doc_id, question="Capital?")["session"]["id"]
    
    assert client.delete(f"/chat/sessions/{session_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/chat/sessions/{session_id}", headers=auth_headers).status_code == 404
    with dependencies.database.session() as db:
        assert db.query(Message).count() == 0


def test_mock_provider_answers_from_document(client, auth_headers):
    doc_id = completed_document(client, auth_headers)
    body = start_session(client, auth_headers, doc_id, question="What is the capital of France?")
    assert "Paris" in body["exchange"]["assistantMessage"]["content"]
