"""
Authentication request and response models.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """Identity carried by a locally issued access token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    email: str


class LoginResponse(BaseModel):
    """Access token issued in exchange for a verified identity."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: AuthUser


class TokenVerifyRequest(BaseModel):
    """Token verification request."""

    token: str


class TokenVerifyResponse(BaseModel):
    """Token verification result; user is omitted for invalid tokens."""

    valid: bool
    user: AuthUser | None = None


class UserOut(BaseModel):
    """Local user record."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    email: str
    created_at: datetime = Field(..., serialization_alias="createdAt")
