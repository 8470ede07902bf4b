"""
Identity provider drivers.
"""

from shared.utils import config

from .base import IdentityDriver, IdentityVerificationError, VerifiedIdentity
from .jwt_driver import JWTIdentityDriver
from .tokens import create_access_token, decode_access_token


def build_identity_driver(driver_name: str | None = None) -> IdentityDriver:
    """
    Create the identity driver selected by AUTH_DRIVER.

    Raises:
        IdentityVerificationError: If the driver is unknown or unconfigured
    """
    name = (driver_name or config.get("auth_driver", "firebase")).lower()
    if name == "jwt":
        return JWTIdentityDriver()
    if name == "firebase":
        from .firebase_driver import FirebaseIdentityDriver

        return FirebaseIdentityDriver()
    raise IdentityVerificationError("unconfigured", f"Unknown auth driver: {name}")


__all__ = [
    "IdentityDriver",
    "IdentityVerificationError",
    "JWTIdentityDriver",
    "VerifiedIdentity",
    "build_identity_driver",
    "create_access_token",
    "decode_access_token",
]
