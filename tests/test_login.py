"""
Tests for login and the signed-in user endpoint.
"""
from datetime import timedelta

from covercraft.core.security import create_access_token


def test_login_success(client, test_user):
    """Test successful login returns a bearer token that authenticates."""
    response = client.post(
        "/auth/login",
        data={"username": "jane@example.com", "password": "testpass123"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json() == {"id": test_user.id, "email": "jane@example.com"}


def test_login_email_is_case_insensitive(client, test_user):
    response = client.post(
        "/auth/login",
        data={"username": "JANE@example.com", "password": "testpass123"}
    )

    assert response.status_code == 200


def test_login_wrong_password(client, test_user):
    """Test login with wrong password returns 401."""
    response = client.post(
        "/auth/login",
        data={"username": "jane@example.com", "password": "wrongpassword"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_nonexistent_email(client):
    """Test login with non-existent email returns 401."""
    response = client.post(
        "/auth/login",
        data={"username": "nobody@example.com", "password": "somepassword123"}
    )

    assert response.status_code == 401


def test_login_missing_fields(client):
    """Test login with missing password."""
    response = client.post("/auth/login", data={"username": "jane@example.com"})

    assert response.status_code == 422


def test_expired_token_rejected(client, test_user):
    token = create_access_token({"sub": test_user.email}, expires_delta=timedelta(minutes=-5))

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_token_for_deleted_user(client):
    token = create_access_token({"sub": "ghost@example.com"})

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
