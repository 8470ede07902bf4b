"""Identity driver backed by the Firebase Admin SDK."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials

from shared.utils import config, setup_logging

from .base import IdentityDriver, IdentityVerificationError, VerifiedIdentity

logger = setup_logging("firebase-identity")


def load_service_account(
    service_account_base64: str | None = None,
    service_account_path: str | None = None,
) -> dict[str, Any] | str:
    """
    Resolve the service-account credential.

    Args:
        service_account_base64: Base64-encoded service-account JSON
        service_account_path: Path to a service-account JSON file

    Returns:
        Parsed service-account mapping, or the file path

    Raises:
        IdentityVerificationError: If neither source is configured or the
            base64 payload does not decode to a JSON object
    """
    if service_account_base64:
        try:
            decoded = base64.b64decode(service_account_base64).decode("utf-8")
            info = json.loads(decoded)
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise IdentityVerificationError(
                "unconfigured", f"Failed to decode Firebase service account: {e}"
            ) from e
        if not isinstance(info, dict):
            raise IdentityVerificationError(
                "unconfigured", "Firebase service account must be a JSON object"
            )
        return info

    if service_account_path:
        return service_account_path

    raise IdentityVerificationError(
        "unconfigured",
        "Set FIREBASE_SERVICE_ACCOUNT_BASE64 or FIREBASE_SERVICE_ACCOUNT_PATH",
    )


class FirebaseIdentityDriver(IdentityDriver):
    """Verifies Firebase ID tokens issued to the frontend."""

    name = "firebase"

    def __init__(
        self,
        app: firebase_admin.App | None = None,
        service_account_base64: str | None = None,
        service_account_path: str | None = None,
        check_revoked: bool | None = None,
    ):
        if check_revoked is None:
            check_revoked = config.get("firebase_check_revoked", False)
        self.check_revoked = check_revoked
        self.app = app or self._initialize_app(
            service_account_base64 or config.get("firebase_service_account_base64"),
            service_account_path or config.get("firebase_service_account_path"),
        )

    @staticmethod
    def _initialize_app(
        service_account_base64: str | None, service_account_path: str | None
    ) -> firebase_admin.App:
        try:
            return firebase_admin.get_app()
        except ValueError:
            pass

        source = load_service_account(service_account_base64, service_account_path)
        try:
            app = firebase_admin.initialize_app(credentials.Certificate(source))
        except (ValueError, OSError) as e:
            raise IdentityVerificationError(
                "unconfigured", f"Failed to initialize Firebase Admin SDK: {e}"
            ) from e
        logger.info(f"Firebase Admin SDK initialized for project {app.project_id}")
        return app

    def verify_token(self, token: str) -> VerifiedIdentity:
        try:
            decoded = firebase_auth.verify_id_token(
                token, app=self.app, check_revoked=self.check_revoked
            )
        except firebase_auth.ExpiredIdTokenError as e:
            raise IdentityVerificationError("expired", "Firebase ID token has expired") from e
        except firebase_auth.RevokedIdTokenError as e:
            raise IdentityVerificationError("revoked", "Firebase ID token has been revoked") from e
        except firebase_auth.UserDisabledError as e:
            raise IdentityVerificationError("disabled", "Firebase user account is disabled") from e
        except firebase_auth.InvalidIdTokenError as e:
            raise IdentityVerificationError("invalid", "Invalid Firebase ID token format") from e
        except firebase_auth.CertificateFetchError as e:
            raise IdentityVerificationError(
                "unavailable", f"Could not fetch Firebase signing certificates: {e}"
            ) from e
        except ValueError as e:
            raise IdentityVerificationError("invalid", "Invalid Firebase ID token argument") from e

        return VerifiedIdentity(
            uid=decoded["uid"],
            email=decoded.get("email"),
            email_verified=bool(decoded.get("email_verified", False)),
        )
