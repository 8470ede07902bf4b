import base64
import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth as firebase_auth
from jose import jwt

from services.identity import IdentityVerificationError, JWTIdentityDriver, build_identity_driver, create_access_token
from services.identity.firebase_driver import FirebaseIdentityDriver, load_service_account
from shared.utils import config


class TestJWTIdentityDriver:
    def test_valid_token(self):
        token = create_access_token({"sub": "uid-1", "email": "a@example.com", "email_verified": True})
        identity = JWTIdentityDriver().verify_token(token)

        assert identity.uid == "uid-1"
        assert identity.email == "a@example.com"
        assert identity.email_verified is True

    def test_expired_token(self):
        payload = {"sub": "uid-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)}
        token = jwt.encode(payload, config.get("secret_key"), algorithm="HS256")

        with pytest.raises(IdentityVerificationError) as exc_info:
            JWTIdentityDriver().verify_token(token)
        assert exc_info.value.reason == "expired"

    def test_wrong_signature(self):
        token = jwt.encode({"sub": "uid-1"}, "some-other-secret", algorithm="HS256")
        with pytest.raises(IdentityVerificationError) as exc_info:
            JWTIdentityDriver().verify_token(token)
        assert exc_info.value.reason == "invalid"

    def test_garbage_token(self):
        with pytest.raises(IdentityVerificationError) as exc_info:
            JWTIdentityDriver().verify_token("not-a-jwt")
        assert exc_info.value.reason == "invalid"

    def test_missing_subject(self):
        token = create_access_token({"email": "a@example.com"})
        with pytest.raises(IdentityVerificationError) as exc_info:
            JWTIdentityDriver().verify_token(token)
        assert exc_info.value.reason == "invalid"


class TestFirebaseIdentityDriver:
    @pytest.fixture
    def driver(self):
        return FirebaseIdentityDriver(app=MagicMock(name="firebase-app"))

    def test_valid_token(self, driver):
        decoded = {"uid": "fb-1", "email": "fb@example.com", "email_verified": True}
        with patch.object(firebase_auth, "verify_id_token", return_value=decoded) as verify:
            identity = driver.verify_token("id-token")

        verify.assert_called_once_with("id-token", app=driver.app, check_revoked=False)
        assert identity.uid == "fb-1"
        assert identity.email == "fb@example.com"

    @pytest.mark.parametrize(
        "error,reason",
        [
            (firebase_auth.ExpiredIdTokenError("expired", cause=None), "expired"),
            (firebase_auth.RevokedIdTokenError("revoked"), "revoked"),
            (firebase_auth.UserDisabledError("disabled"), "disabled"),
            (firebase_auth.InvalidIdTokenError("bad token"), "invalid"),
            (firebase_auth.CertificateFetchError("no certs", cause=None), "unavailable"),
            (ValueError("empty token"), "invalid"),
        ],
    )
    def test_error_mapping(self, driver, error, reason):
        with patch.object(firebase_auth, "verify_id_token", side_effect=error):
            with pytest.raises(IdentityVerificationError) as exc_info:
                driver.verify_token("id-token")
        assert exc_info.value.reason == reason

    def test_revocation_check_follows_config(self, monkeypatch):
        monkeypatch.setitem(config.config, "firebase_check_revoked", True)
        driver = FirebaseIdentityDriver(app=MagicMock(name="firebase-app"))
        decoded = {"uid": "fb-2", "email": "revoke@example.com"}
        with patch.object(firebase_auth, "verify_id_token", return_value=decoded) as verify:
            driver.verify_token("id-token")

        assert driver.check_revoked is True
        verify.assert_called_once_with("id-token", app=driver.app, check_revoked=True)


class TestServiceAccount:
    def test_base64_json(self):
        info = {"type": "service_account", "project_id": "pitch"}
        encoded = base64.b64encode(json.dumps(info).encode()).decode()
        assert load_service_account(encoded, None) == info

    def test_path(self):
        assert load_service_account(None, "/secrets/sa.json") == "/secrets/sa.json"

    def test_bad_base64(self):
        with pytest.raises(IdentityVerificationError) as exc_info:
            load_service_account("%%%not-base64%%%", None)
        assert exc_info.value.reason == "unconfigured"

    def test_nothing_configured(self):
        with pytest.raises(IdentityVerificationError) as exc_info:
            load_service_account(None, None)
        assert exc_info.value.reason == "unconfigured"


def test_build_identity_driver():
    assert isinstance(build_identity_driver("jwt"), JWTIdentityDriver)
    with pytest.raises(IdentityVerificationError) as exc_info:
        build_identity_driver("ldap")
    assert exc_info.value.reason == "unconfigured"
