"""
Login and the access-token guard, with the user store mocked.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from auth import repository, security


@pytest.fixture
def stored_user():
    return {
        "id": 5,
        "name": "Rae",
        "email": "rae@example.com",
        "usertype": "user",
        "is_active": True,
        "password_hash": security.hash_password("s3cret-pass"),
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


@pytest.fixture
def users(monkeypatch, stored_user):
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setattr(repository, "get_user_by_email", AsyncMock(return_value=stored_user))
    monkeypatch.setattr(repository, "get_user_by_id", AsyncMock(return_value=stored_user))
    monkeypatch.setattr(repository, "insert_refresh_token", AsyncMock(return_value={"id": 1}))
    return stored_user


def test_login_returns_token_pair(client, users):
    response = client.post("/api/v1/auth/login", json={"email": "rae@example.com", "password": "s3cret-pass"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["usertype"] == "user"
    assert "password_hash" not in body["user"]
    assert body["tokens"]["token_type"] == "bearer"


def test_wrong_password_is_401(client, users):
    response = client.post("/api/v1/auth/login", json={"email": "rae@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid email or password."}


def test_inactive_account_is_403(client, users):
    users["is_active"] = False

    response = client.post("/api/v1/auth/login", json={"email": "rae@example.com", "password": "s3cret-pass"})

    assert response.status_code == 403


def test_token_opens_authenticated_routes_but_not_admin_ones(client, users, memory_db):
    token = security.build_access_token(user_id=users["id"], email=users["email"])
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/api/v1/agency/all", headers=headers).status_code == 200
    assert client.post(
        "/api/v1/agency/create",
        headers=headers,
        json={"owner_name": "A", "office_name": "B", "email": "a@b.com"},
    ).status_code == 403


class TestRefresh:
    @pytest.fixture
    def token_row(self, users):
        return {
            "id": 11,
            "user_id": users["id"],
            "revoked_at": None,
            "expires_at": datetime(2999, 1, 1, tzinfo=timezone.utc),
        }

    def test_refresh_rotates_token(self, client, users, token_row, monkeypatch):
        rotate = AsyncMock(return_value={"id": 12})
        monkeypatch.setattr(repository, "get_refresh_token_by_hash", AsyncMock(return_value=token_row))
        monkeypatch.setattr(repository, "rotate_refresh_token", rotate)
        old_token = "x" * 40

        response = client.post("/api/v1/auth/refresh", json={"refresh_token": old_token})

        assert response.status_code == 200
        new_token = response.json()["refresh_token"]
        assert new_token != old_token
        assert rotate.await_args.kwargs["old_token_id"] == 11
        assert rotate.await_args.kwargs["token_hash"] == security.hash_refresh_token(new_token)

    def test_concurrent_reuse_is_rejected(self, client, users, token_row, monkeypatch):
        monkeypatch.setattr(repository, "get_refresh_token_by_hash", AsyncMock(return_value=token_row))
        monkeypatch.setattr(repository, "rotate_refresh_token", AsyncMock(return_value=None))

        response = client.post("/api/v1/auth/refresh", json={"refresh_token": "x" * 40})

        assert response.status_code == 401

    def test_expired_token_is_revoked(self, client, users, token_row, monkeypatch):
        token_row["expires_at"] = datetime(2000, 1, 1, tzinfo=timezone.utc)
        revoke = AsyncMock(return_value=1)
        monkeypatch.setattr(repository, "get_refresh_token_by_hash", AsyncMock(return_value=token_row))
        monkeypatch.setattr(repository, "revoke_refresh_tokens", revoke)

        response = client.post("/api/v1/auth/refresh", json={"refresh_token": "x" * 40})

        assert response.status_code == 401
        revoke.assert_awaited_once_with("id", 11)


def test_logout_without_token_revokes_every_session(client, users, monkeypatch):
    revoke = AsyncMock(return_value=3)
    monkeypatch.setattr(repository, "revoke_refresh_tokens", revoke)
    token = security.build_access_token(user_id=users["id"], email=users["email"])

    response = client.post("/api/v1/auth/logout", json={}, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    revoke.assert_awaited_once_with("user_id", users["id"])


def test_register_creates_a_regular_user(client, users, stored_user, monkeypatch):
    monkeypatch.setattr(repository, "get_user_by_email", AsyncMock(return_value=None))
    create = AsyncMock(return_value=stored_user)
    monkeypatch.setattr(repository, "create_user", create)

    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Rae", "email": "rae@example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 201
    assert response.json()["user"]["usertype"] == "user"
    assert "usertype" not in create.await_args.kwargs


def test_register_rejects_short_password(client, users):
    response = client.post("/api/v1/auth/register", json={"email": "rae@example.com", "password": "short"})

    assert response.status_code == 400
    assert response.json()["message"].startswith("password: ")
