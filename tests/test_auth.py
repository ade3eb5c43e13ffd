"""Integration tests for authentication endpoints."""
from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from academy.config import settings


def test_user_registration_success(client: TestClient) -> None:
    payload = {
        "email": "learner@example.com",
        "password": "securepassword",
        "first_name": "Léa",
        "last_name": "Martin",
    }

    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert uuid.UUID(data["id"])
    assert data["email"] == payload["email"]
    assert data["role"] == "student"
    assert (data["xp"], data["level"]) == (0, 1)
    assert data["is_active"] is True


def test_user_registration_duplicate_email(client: TestClient) -> None:
    payload = {"email": "duplicate@example.com", "password": "anothersecurepassword"}

    first_response = client.post("/api/v1/auth/register", json=payload)
    assert first_response.status_code == 201

    duplicate_response = client.post("/api/v1/auth/register", json=payload)
    assert duplicate_response.status_code == 400
    assert duplicate_response.json()["detail"] == "A user with this email already exists."


def test_registration_rejects_short_password(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/register", json={"email": "short@example.com", "password": "abc"}
    )
    assert response.status_code == 422


def test_user_login_success(client: TestClient) -> None:
    client.post(
        "/api/v1/auth/register", json={"email": "login@example.com", "password": "supersecure"}
    )

    response = client.post(
        "/api/v1/auth/login", json={"email": "login@example.com", "password": "supersecure"}
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"
    assert data["role"] == "student"
    assert data["expires_in"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_admin_login_reports_admin_role(client: TestClient, admin) -> None:
    response = client.post(
        "/api/v1/auth/login", json={"email": admin.email, "password": "securepass123"}
    )

    assert response.status_code == 200
    assert response.json()["role"] == "admin"


def test_user_login_invalid_credentials(client: TestClient) -> None:
    payload = {
        "email": "unknown@example.com",
        "password": "wrongpassword",
    }
    response = client.post("/api/v1/auth/login", json=payload)

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_refresh_token_is_not_accepted_as_access_token(client: TestClient) -> None:
    client.post(
        "/api/v1/auth/register", json={"email": "refresh@example.com", "password": "supersecure"}
    )
    tokens = client.post(
        "/api/v1/auth/login", json={"email": "refresh@example.com", "password": "supersecure"}
    ).json()

    response = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )
    assert response.status_code == 401
