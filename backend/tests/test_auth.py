from datetime import datetime, timedelta, timezone

from jose import jwt

from app import app
from services.auth import get_identity_driver
from services.identity import IdentityDriver, IdentityVerificationError
from shared.utils import config


def test_missing_authorization_header(client):
    response = client.get("/projects")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "No valid authorization header"


def test_non_bearer_scheme_is_rejected(client):
    response = client.get("/projects", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401


def test_expired_token_reports_reason(client):
    token = jwt.encode(
        {"sub": "uid-1", "email": "a@example.com", "exp": datetime.now(timezone.utc) - timedelta(seconds=5)},
        config.get("secret_key"),
        algorithm="HS256",
    )
    response = client.get("/projects", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired. Please reauthenticate."


def test_invalid_token(client):
    response = client.get("/projects", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token format. Please reauthenticate."


def test_identity_without_email(client, make_token):
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {make_token(email=None)}"})
    assert response.status_code == 401


def test_first_sighting_creates_user_once(client, make_token):
    headers = {"Authorization": f"Bearer {make_token('New.Person@Example.com')}"}
    first = client.get("/auth/me", headers=headers)
    second = client.get("/auth/me", headers=headers)

    assert first.status_code == 200
    assert first.json()["email"] == "new.person@example.com"
    assert first.json()["id"] == second.json()["id"]
    assert "createdAt" in first.json()


def test_login_issues_access_token(client, auth_headers):
    response = client.post("/auth/login", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "founder@example.com"

    verify = client.post("/auth/verify", json={"token": body["access_token"]})
    assert verify.status_code == 200
    assert verify.json() == {"valid": True, "user": body["user"]}


def test_login_requires_identity(client):
    assert client.post("/auth/login").status_code == 401


def test_verify_invalid_token(client):
    response = client.post("/auth/verify", json={"token": "nope"})
    assert response.status_code == 200
    assert response.json() == {"valid": False}


def test_verify_rejects_identity_tokens_without_user_claims(client, make_token):
    response = client.post("/auth/verify", json={"token": make_token()})
    assert response.json() == {"valid": False}


def test_unavailable_provider_is_503(client):
    class DownDriver(IdentityDriver):
        name = "down"

        def verify_token(self, token):
            raise IdentityVerificationError("unavailable", "certificates unreachable")

    app.dependency_overrides[get_identity_driver] = lambda: DownDriver()
    response = client.get("/projects", headers={"Authorization": "Bearer anything"})
    assert response.status_code == 503
