from .conftest import register


def test_register_and_me(client):
    body = register(client, email="Carol@Example.com", name="Carol")
    assert body["token"]
    assert body["user"]["email"] == "carol@example.com"
    assert "createdAt" in body["user"]
    
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert response.status_code == 200
    assert response.json()["name"] == "Carol"


def test_duplicate_email_rejected(client):
    register(client)
    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "name": "Alice", "password": "secret123"},
    )
    assert response.status_code == 400


def test_login(client):
    register(client)
    ok = client.post("/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["token"]
    
    bad = client.post("/auth/login", json={"email": "alice@example.com", "password": "wrong"})
    assert bad.status_code == 401


def test_invalid_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_delete_me_invalidates_token(client, auth_headers):
    assert client.delete("/auth/me", headers=auth_headers).status_code == 200
    assert client.get("/auth/me", headers=auth_headers).status_code == 401
