from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db
from models.database import User
from services.identity import (
    IdentityDriver,
    IdentityVerificationError,
    build_identity_driver,
    create_access_token,
    decode_access_token,
)
from shared.auth_models import (
    AuthUser,
    LoginResponse,
    TokenVerifyRequest,
    TokenVerifyResponse,
    UserOut,
)
from shared.utils import config, setup_logging

logger = setup_logging("auth-service")

bearer_scheme = HTTPBearer(auto_error=False)

AUTH_FAILURE_MESSAGES = {
    "expired": "Token has expired. Please reauthenticate.",
    "revoked": "Token has been revoked. Please reauthenticate.",
    "disabled": "User account is disabled.",
    "invalid": "Invalid token format. Please reauthenticate.",
}

_identity_driver: IdentityDriver | None = None


def get_identity_driver() -> IdentityDriver:
    """Return the process-wide identity driver, creating it on first use."""
    global _identity_driver
    if _identity_driver is None:
        try:
            _identity_driver = build_identity_driver()
        except IdentityVerificationError as e:
            logger.error(f"Identity provider unavailable: {e.message}")
            raise HTTPException(
                status_code=503, detail="Authentication provider not configured"
            ) from e
        logger.info(f"Identity driver initialized: {_identity_driver.name}")
    return _identity_driver


def _auth_error(error: IdentityVerificationError) -> HTTPException:
    if error.reason in ("unconfigured", "unavailable"):
        return HTTPException(status_code=503, detail=f"Authentication unavailable: {error.message}")
    detail = AUTH_FAILURE_MESSAGES.get(error.reason, f"Authentication failed: {error.message}")
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_or_create_user(db: Session, email: str) -> User:
    """Find the local user for a verified email, creating it on first sight."""
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user

    user = User(email=email)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same user first
        db.rollback()
        return db.query(User).filter(User.email == email).one()
    db.refresh(user)
    logger.info(f"Created user {user.id} for {email}")
    return user


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    driver: IdentityDriver = Depends(get_identity_driver),
    db: Session = Depends(get_db),
) -> User:
    """Verify the bearer token and resolve the local user it belongs to."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="No valid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity = await run_in_threadpool(driver.verify_token, credentials.credentials)
    except IdentityVerificationError as e:
        logger.warning(f"Token verification failed ({e.reason}) for {request.url.path}")
        raise _auth_error(e) from e

    if not identity.email:
        raise HTTPException(
            status_code=401,
            detail="Verified identity has no email address",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = get_or_create_user(db, identity.email)
    request.state.user = user
    return user


router = APIRouter(prefix="/auth")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Exchange Identity Token",
    description="Exchange a verified identity-provider token for a locally signed access token",
    responses={
        401: {
            "description": "Missing, invalid or expired identity token",
            "content": {"application/json": {"example": {"message": "Token has expired. Please reauthenticate."}}},
        },
    },
)
async def login(current_user: User = Depends(get_current_user)):
    """Issue an access token for the authenticated user."""
    expires_minutes = config.get("access_token_expire_minutes", 1440)
    token = create_access_token(
        {"sub": f"user:{current_user.id}", "userId": current_user.id, "email": current_user.email},
        expires_minutes=expires_minutes,
    )
    return LoginResponse(
        access_token=token,
        expires_in=expires_minutes * 60,
        user=AuthUser(user_id=current_user.id, email=current_user.email),
    )


@router.post(
    "/verify",
    response_model=TokenVerifyResponse,
    response_model_exclude_none=True,
    summary="Verify Access Token",
    description="Check a locally issued access token; invalid tokens yield valid=false",
)
async def verify_token(body: TokenVerifyRequest):
    """Report whether an access token is valid and whom it identifies."""
    try:
        payload = decode_access_token(body.token)
    except JWTError:
        return TokenVerifyResponse(valid=False)

    user_id = payload.get("userId")
    email = payload.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        return TokenVerifyResponse(valid=False)
    return TokenVerifyResponse(valid=True, user=AuthUser(user_id=user_id, email=email))


@router.get(
    "/me",
    response_model=UserOut,
    summary="Get Current User",
    description="Retrieve the local user record for the bearer token",
)
async def read_users_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user profile."""
    return current_user
