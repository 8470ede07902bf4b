"""
Locally signed access tokens (python-jose, HS256 by default).
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from shared.utils import config


def create_access_token(data: dict[str, Any], expires_minutes: int | None = None) -> str:
    """Create JWT access token."""
    minutes = expires_minutes or config.get("access_token_expire_minutes", 1440)
    payload = dict(data)
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(payload, config.get("secret_key"), algorithm=config.get("jwt_algorithm", "HS256"))


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT access token. Raises jose.JWTError on failure."""
    return jwt.decode(
        token, config.get("secret_key"), algorithms=[config.get("jwt_algorithm", "HS256")]
    )
