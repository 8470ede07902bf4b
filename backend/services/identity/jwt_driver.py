"""Identity driver for locally signed JWTs (development and tests)."""

from __future__ import annotations

from jose import ExpiredSignatureError, JWTError

from .base import IdentityDriver, IdentityVerificationError, VerifiedIdentity
from .tokens import decode_access_token


class JWTIdentityDriver(IdentityDriver):
    """Accepts HS256 tokens signed with SECRET_KEY carrying ``sub`` and ``email``."""

    name = "jwt"

    def verify_token(self, token: str) -> VerifiedIdentity:
        try:
            payload = decode_access_token(token)
        except ExpiredSignatureError as e:
            raise IdentityVerificationError("expired", "Token has expired") from e
        except JWTError as e:
            raise IdentityVerificationError("invalid", f"Invalid token: {e}") from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise IdentityVerificationError("invalid", "Token has no subject")

        email = payload.get("email")
        return VerifiedIdentity(
            uid=subject,
            email=email if isinstance(email, str) else None,
            email_verified=bool(payload.get("email_verified", False)),
        )
