"""Unit tests for user API endpoints."""

from fastapi.testclient import TestClient

from quizserver.core.security import create_access_token


def _register(client: TestClient, email: str, role: str = "student", password: str = "pwd1"):
    return client.post(
        "/api/users/register",
        json={"email": email, "password": password, "name": "Test User", "role": role},
    )


def test_register_user(client: TestClient):
    """Test user registration."""
    response = _register(client, "u1@ex.com")
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "u1@ex.com"
    assert data["user"]["name"] == "Test User"
    assert data["user"]["role"] == "student"
    assert data["access_token"]


def test_register_duplicate_email(client: TestClient):
    """Test registering with duplicate email."""
    _register(client, "u2@ex.com")
    response = _register(client, "u2@ex.com", password="pwd2")
    assert response.status_code == 409
    assert "already registered" in response.json()["detail"].lower()


def test_register_admin(client: TestClient):
    response = _register(client, "boss@ex.com", role="admin")
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "admin"


def test_register_unknown_role(client: TestClient):
    response = _register(client, "who@ex.com", role="superuser")
    assert response.status_code == 422


def test_login_user(client: TestClient):
    """Test user login."""
    _register(client, "u3@ex.com")
    response = client.post("/api/users/login", json={"email": "u3@ex.com", "password": "pwd1"})
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_invalid_credentials(client: TestClient):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/users/login",
        json={"email": "nonexistent@example.com", "password": "wrongpassword"},
    )
    assert response.status_code == 401


def test_get_current_user(client: TestClient):
    token = _register(client, "u4@ex.com").json()["access_token"]
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "u4@ex.com"


def test_unauthorized_access(client: TestClient):
    """Test accessing protected endpoint without token."""
    response = client.get("/api/users/me")
    assert response.status_code == 401


def test_token_for_unknown_user(client: TestClient):
    token = create_access_token({"sub": "00000000-0000-0000-0000-000000000000"})
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_with_garbage_subject(client: TestClient):
    token = create_access_token({"sub": "not-a-uuid"})
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
