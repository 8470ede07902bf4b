"""
Identity verification primitives shared by all drivers.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class VerifiedIdentity(BaseModel):
    """Identity asserted by a successfully verified bearer token."""

    uid: str
    email: str | None = None
    email_verified: bool = False


class IdentityVerificationError(Exception):
    """Raised when a bearer token cannot be verified.

    ``reason`` is one of: missing, expired, revoked, disabled, invalid,
    unavailable, unconfigured.
    """

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class IdentityDriver(ABC):
    """Abstract base class for identity verification drivers."""

    name: str = "unknown"

    @abstractmethod
    def verify_token(self, token: str) -> VerifiedIdentity:
        """Verify a bearer token and return the identity it asserts."""
        pass
