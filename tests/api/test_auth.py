from __future__ import annotations

import jwt
from fastapi.testclient import TestClient

from learning_api.api.dependencies import demo_store
from learning_api.db.seed import DEMO_EMAIL, DEMO_PASSWORD
from learning_api.models.user import User
from learning_api.services import auth_service, token_service

_INVALID = {"message": "Login failed. Invalid credentials."}
_DEMO_LOGIN = {"email": DEMO_EMAIL, "password": DEMO_PASSWORD}


def test_login_returns_token_and_user(client: TestClient) -> None:
    resp = client.post("/auth", json=_DEMO_LOGIN)
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {"id": 1, "name": "Admin", "email": DEMO_EMAIL}

    claims = token_service.decode_access_token(body["token"])
    assert claims["sub"] == "1"


def test_login_email_is_case_insensitive(client: TestClient) -> None:
    resp = client.post(
        "/auth", json={"email": "  ADMIN@Example.com ", "password": DEMO_PASSWORD}
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == 1


def test_login_repeated_returns_same_user(client: TestClient) -> None:
    first = client.post("/auth", json=_DEMO_LOGIN)
    second = client.post("/auth", json=_DEMO_LOGIN)
    assert first.json()["user"] == second.json()["user"]
    assert first.json()["message"] == second.json()["message"]


def test_login_wrong_password_returns_401(client: TestClient) -> None:
    resp = client.post("/auth", json={"email": DEMO_EMAIL, "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == _INVALID


def test_login_unknown_email_matches_wrong_password(client: TestClient) -> None:
    unknown = client.post(
        "/auth", json={"email": "ghost@example.com", "password": "whatever"}
    )
    wrong = client.post("/auth", json={"email": DEMO_EMAIL, "password": "whatever"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == _INVALID


def test_login_inactive_user_returns_401(client: TestClient) -> None:
    demo_store.add_user(
        User.new(
            id=2,
            name="Former Student",
            email="former@example.com",
            password_hash=auth_service.hash_password("pw-former"),
            is_active=False,
        )
    )
    resp = client.post(
        "/auth", json={"email": "former@example.com", "password": "pw-former"}
    )
    assert resp.status_code == 401
    assert resp.json() == _INVALID


def test_login_missing_fields_returns_400(client: TestClient) -> None:
    for body in (
        {},
        {"email": DEMO_EMAIL},
        {"password": "x"},
        {"email": "", "password": ""},
    ):
        resp = client.post("/auth", json=body)
        assert resp.status_code == 400, body
        assert resp.json() == {"message": "Email and password are required."}


def test_login_malformed_json_returns_400(client: TestClient) -> None:
    resp = client.post(
        "/auth", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid request body"}


def test_protected_endpoint_requires_token(client: TestClient) -> None:
    resp = client.get("/dashboard")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authenticated"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_protected_endpoint_rejects_garbage_token(client: TestClient) -> None:
    resp = client.get("/dashboard", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_protected_endpoint_rejects_expired_token(client: TestClient) -> None:
    expired = token_service.create_access_token(sub="1", ttl_minutes=-1)
    resp = client.get("/dashboard", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Token expired"}


def test_protected_endpoint_rejects_foreign_signature(client: TestClient) -> None:
    forged = jwt.encode(
        {"sub": "1", "exp": 9999999999, "iat": 0, "jti": "x"},
        "some-shared-secret",
        algorithm="HS256",
    )
    resp = client.get("/courses", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_protected_endpoint_rejects_non_numeric_subject(client: TestClient) -> None:
    token = token_service.create_access_token(sub="admin")
    resp = client.get("/videos", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_login_token_opens_protected_endpoints(client: TestClient) -> None:
    login = client.post("/auth", json=_DEMO_LOGIN)
    headers = {"Authorization": f"Bearer {login.json()['token']}"}
    assert client.get("/dashboard", headers=headers).status_code == 200


def test_login_without_body_returns_400(client: TestClient) -> None:
    resp = client.post("/auth")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Email and password are required."}
