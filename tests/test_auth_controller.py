from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.exc import SQLAlchemyError

from authgate.application.services.session_manager import AuthSessionManager
from authgate.interfaces.http.controllers.auth_controller import AuthController
from authgate.shared.middleware.error_handler import configure_error_handling


def _client_for(session_manager: AuthSessionManager) -> FlaskClient:
    app = Flask(__name__)
    configure_error_handling(app)
    app.register_blueprint(AuthController(session_manager=session_manager).as_blueprint())
    return app.test_client()


@pytest.fixture()
def client(session_manager) -> FlaskClient:
    return _client_for(session_manager)


def _signup(client: FlaskClient, username: str = "alice", email: str = "a@x.com", password: str = "secret1"):
    return client.post(
        "/api/auth/signup", json={"username": username, "email": email, "password": password}
    )


def test_signup_returns_message(client: FlaskClient, store) -> None:
    response = _signup(client)

    assert response.status_code == 200
    assert response.get_json() == {"message": "User registered successfully!"}
    assert store.exists_by_username("alice")


def test_signup_duplicate_username_returns_400(client: FlaskClient) -> None:
    _signup(client)

    response = _signup(client, email="b@x.com")

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "duplicate_username",
        "message": "Error: Username is already taken!",
    }


def test_signup_duplicate_email_returns_400(client: FlaskClient) -> None:
    _signup(client)

    response = _signup(client, username="bob")

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_email"
    assert response.get_json()["message"] == "Error: Email is already in use!"


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"username": "al", "email": "a@x.com", "password": "secret1"}, "username"),
        ({"username": "alice", "email": "not-an-email", "password": "secret1"}, "email"),
        ({"username": "alice", "email": "a@x.com", "password": "123"}, "password"),
        ({"username": "   ", "email": "a@x.com", "password": "secret1"}, "username"),
        ({"email": "a@x.com", "password": "secret1"}, "username"),
    ],
)
def test_signup_invalid_payload_returns_400(client: FlaskClient, payload, field) -> None:
    response = client.post("/api/auth/signup", json=payload)

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert field in body["context"]["fields"]


def test_signup_without_json_body_returns_400(client: FlaskClient) -> None:
    response = client.post("/api/auth/signup", data="nope", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_signin_sets_session_cookie(client: FlaskClient) -> None:
    _signup(client)

    response = client.post("/api/auth/signin", json={"username": "alice", "password": "secret1"})

    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "username": "alice", "email": "a@x.com"}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("authgate_session=ey")
    assert "HttpOnly" in cookie
    assert "Path=/api" in cookie
    assert "Max-Age=3600" in cookie
    assert "SameSite=Strict" in cookie


def test_signin_wrong_password_returns_401(client: FlaskClient) -> None:
    _signup(client)

    response = client.post("/api/auth/signin", json={"username": "alice", "password": "wrong"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"
    assert "Set-Cookie" not in response.headers


def test_signin_blank_password_is_a_validation_error(client: FlaskClient) -> None:
    response = client.post("/api/auth/signin", json={"username": "alice", "password": " "})

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["password"]


def test_signout_clears_cookie_without_session(client: FlaskClient) -> None:
    response = client.post("/api/auth/signout")

    assert response.status_code == 200
    assert response.get_json() == {"message": "You've been signed out!"}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("authgate_session=;")
    assert "Max-Age=0" in cookie
    assert "Expires=Thu, 01 Jan 1970 00:00:00 GMT" in cookie
    assert "Path=/api" in cookie


def test_me_requires_session_cookie(client: FlaskClient) -> None:
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_session"


def test_me_returns_signed_in_account(client: FlaskClient) -> None:
    _signup(client)
    client.post("/api/auth/signin", json={"username": "alice", "password": "secret1"})

    response = client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "username": "alice", "email": "a@x.com"}


def test_me_after_signout_is_unauthorized(client: FlaskClient) -> None:
    _signup(client)
    client.post("/api/auth/signin", json={"username": "alice", "password": "secret1"})
    client.post("/api/auth/signout")

    response = client.get("/api/auth/me")

    assert response.status_code == 401


def test_forged_cookie_is_unauthorized(client: FlaskClient) -> None:
    client.set_cookie("authgate_session", "forged.token.value", path="/api")

    response = client.get("/api/auth/me")

    assert response.status_code == 401


class _UnavailableStore:
    def _fail(self, *args, **kwargs):
        raise SQLAlchemyError("database unavailable")

    exists_by_username = exists_by_email = find_by_username = find_by_id = add = _fail


class _BrokenHasher:
    def hash(self, password: str) -> str:
        raise RuntimeError("hashing backend missing")

    def verify(self, password: str, hashed: str) -> bool:
        raise RuntimeError("hashing backend missing")


def test_store_failure_on_signin_returns_500(hasher, token_issuer, cookie_policy) -> None:
    client = _client_for(
        AuthSessionManager(
            accounts=_UnavailableStore(),
            password_hasher=hasher,
            tokens=token_issuer,
            cookie_policy=cookie_policy,
        )
    )

    response = client.post("/api/auth/signin", json={"username": "alice", "password": "secret1"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
    assert "Set-Cookie" not in response.headers


def test_hasher_failure_on_signup_returns_500(store, token_issuer, cookie_policy) -> None:
    client = _client_for(
        AuthSessionManager(
            accounts=store,
            password_hasher=_BrokenHasher(),
            tokens=token_issuer,
            cookie_policy=cookie_policy,
        )
    )

    response = _signup(client)

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
    assert "Set-Cookie" not in response.headers
    assert not store.exists_by_username("alice")
