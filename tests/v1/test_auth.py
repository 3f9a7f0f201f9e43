# tests/v1/test_auth.py
"""HTTP tests for registration, login, refresh and bearer handling."""

from datetime import timedelta

import pytest
from fastapi import status
from jose import jwt

from social_api.core.settings import settings
from tests.conftest import TEST_PASSWORD, token_for


def _register(client, username="dave", email="dave@example.com", password=TEST_PASSWORD):
    return client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )


class TestRegisterAndLogin:
    def test_register(self, client):
        response = _register(client)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["user"]["username"] == "dave"
        assert body["user"]["role"] == "USER"
        assert "password_hash" not in body["user"]

        me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.status_code == status.HTTP_200_OK
        assert me.json()["email"] == "dave@example.com"

    def test_register_duplicate(self, client):
        _register(client)
        response = _register(client, username="dave2")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["kind"] == "BAD_USER_INPUT"

    def test_register_short_password(self, client):
        response = _register(client, password="short")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["kind"] == "BAD_USER_INPUT"
        assert body["message"] == "Validation failed"

    def test_login(self, client, test_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": TEST_PASSWORD},
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["id"] == test_user.id

    def test_login_wrong_password(self, client, test_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "not-the-password"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "kind": "UNAUTHENTICATED",
            "message": "Invalid email or password",
            "status": 401,
        }


class TestRefresh:
    def test_refresh(self, client, codec, test_user):
        response = client.post(
            "/api/v1/auth/refresh",
            json={"token": token_for(codec, test_user), "expires_in_minutes": 5},
        )
        assert response.status_code == status.HTTP_200_OK
        claims = codec.verify(response.json()["token"])
        assert claims.subject == test_user.id
        assert claims.expires_at - claims.issued_at == timedelta(minutes=5)

    def test_refresh_expired(self, client, codec, test_user):
        stale = token_for(codec, test_user, expires_in=timedelta(seconds=-1))
        response = client.post("/api/v1/auth/refresh", json={"token": stale})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Token has expired"


class TestBearerHandling:
    @pytest.mark.parametrize(
        "header",
        ["InvalidToken123", "Bearer ", "Bearer not.a.valid.jwt", "Basic dXNlcjpwYXNz"],
    )
    def test_bad_headers_are_anonymous(self, client, header):
        response = client.get("/api/v1/users/me", headers={"Authorization": header})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["kind"] == "UNAUTHENTICATED"

    def test_wrong_secret(self, client, test_user):
        token = jwt.encode(
            {"sub": test_user.id, "iss": settings.jwt_issuer, "aud": settings.jwt_audience},
            "wrong_secret_key",
            algorithm=settings.jwt_algorithm,
        )
        response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_out_of_range_expiry_is_unauthenticated(self, client, test_post):
        forged = jwt.encode({"sub": "someone", "exp": 10**20}, "whatever", algorithm="HS256")
        response = client.post(
            "/api/v1/likes/",
            json={"post_id": test_post.id},
            headers={"Authorization": f"Bearer {forged}"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["kind"] == "UNAUTHENTICATED"

    def test_expired_token_cannot_write(self, client, codec, test_user):
        stale = token_for(codec, test_user, expires_in=timedelta(seconds=-1))
        response = client.post(
            "/api/v1/posts/",
            json={"media_file": "a.jpg"},
            headers={"Authorization": f"Bearer {stale}"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert client.get("/api/v1/posts/").json() == []
