"""API tests for signup, signin and the caller's profile."""

from datetime import timedelta

import jwt

from locals_api.core.config import settings
from locals_api.core.security import create_access_token
from tests.conftest import API, bearer, make_user

SIGNUP = f"{API}/auth/signup"
SIGNIN = f"{API}/auth/signin"
ME = f"{API}/users/me"
UPDATE_ME = f"{API}/users/update"


def signup(client, email="new@example.com", **extra):
    payload = {"email": email, "password": "password123", "first_name": "Ada"}
    payload.update(extra)
    return client.post(SIGNUP, json=payload)


class TestSignup:
    def test_creates_user_with_default_role(self, client):
        response = signup(client)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "new@example.com"
        assert data["first_name"] == "Ada"
        assert data["role"] == "user"
        assert "password" not in data
        assert "hashed_password" not in data

    def test_requested_role_ignored_by_default(self, client):
        response = signup(client, role="admin")

        assert response.json()["data"]["role"] == "user"

    def test_requested_role_honoured_when_allowed(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ALLOW_SIGNUP_ROLE", True)

        response = signup(client, role="admin")

        assert response.json()["data"]["role"] == "admin"

    def test_duplicate_email_conflicts(self, client):
        signup(client)

        response = signup(client)

        assert response.status_code == 409
        assert response.json()["message"] == "User with this email already exists"

    def test_short_password_is_invalid(self, client):
        response = signup(client, password="short")

        assert response.status_code == 400


class TestSignin:
    def test_returns_token_with_claims(self, client):
        signup(client)

        response = client.post(
            SIGNIN, json={"email": "new@example.com", "password": "password123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        claims = jwt.decode(
            body["access_token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        assert claims["sub"] == body["data"]["id"]
        assert claims["email"] == "new@example.com"
        assert claims["per"] == "user"

    def test_wrong_password(self, client):
        signup(client)

        response = client.post(
            SIGNIN, json={"email": "new@example.com", "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email_gets_same_answer(self, client):
        response = client.post(
            SIGNIN, json={"email": "ghost@example.com", "password": "password123"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestProfile:
    def test_me_requires_token(self, client):
        response = client.get(ME)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_me_rejects_garbage_token(self, client):
        response = client.get(ME, headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_me_rejects_expired_token(self, client, regular_user):
        token, _ = create_access_token(
            regular_user.id,
            email=regular_user.email,
            role=regular_user.role.value,
            expires_delta=timedelta(seconds=-1),
        )

        response = client.get(ME, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_me(self, client, regular_user, user_headers):
        response = client.get(ME, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["email"] == regular_user.email

    def test_update(self, client, user_headers):
        response = client.put(
            UPDATE_ME, headers=user_headers, json={"last_name": "Lovelace"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["last_name"] == "Lovelace"

    def test_empty_update_is_invalid(self, client, user_headers):
        response = client.put(UPDATE_ME, headers=user_headers, json={})

        assert response.status_code == 400

    def test_null_email_is_invalid(self, client, regular_user, user_headers):
        response = client.put(UPDATE_ME, headers=user_headers, json={"email": None})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"
        me = client.get(ME, headers=user_headers).json()["data"]
        assert me["email"] == regular_user.email

    def test_names_can_be_cleared(self, client, user_headers):
        client.put(UPDATE_ME, headers=user_headers, json={"first_name": "Ada"})

        response = client.put(
            UPDATE_ME, headers=user_headers, json={"first_name": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["first_name"] is None

    def test_update_to_taken_email_conflicts(self, client, session, user_headers):
        make_user(session, "taken@example.com")

        response = client.put(
            UPDATE_ME, headers=user_headers, json={"email": "taken@example.com"}
        )

        assert response.status_code == 409

    def test_deleted_user_token_is_rejected(self, client, session, regular_user):
        headers = bearer(regular_user)
        session.delete(regular_user)
        session.commit()

        response = client.get(ME, headers=headers)

        assert response.status_code == 401
