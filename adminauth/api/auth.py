"""Admin login, logout, session verification and password reset endpoints"""
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from adminauth.api.deps import get_admin_repository, get_session_store
from adminauth.config import settings
from adminauth.exceptions import AccountInactive, InvalidCredentials, Unauthenticated, ValidationFailed
from adminauth.middleware.monitoring import record_login_attempt, record_sessions_revoked
from adminauth.middleware.rate_limit import get_rate_limit, limiter
from adminauth.repositories.admins import AdminRepository
from adminauth.schemas.admin import AdminProfile
from adminauth.schemas.auth import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest
from adminauth.services.authenticator import extract_token
from adminauth.services.session_store import SessionStore
from adminauth.utils.jwt_utils import create_access_token
from adminauth.utils.logger import logger
from adminauth.utils.notifications import send_password_reset
from adminauth.utils.passwords import hash_password, hash_reset_token, mint_reset_token, verify_password

router = APIRouter(prefix="/api/admin/auth", tags=["admin-auth"])

_RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset link has been sent."

# Verified against when the email is unknown so both failure paths cost one bcrypt check
_dummy_hash: Optional[str] = None


def _timing_equalizer_hash() -> str:
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password")
    return _dummy_hash


# ---------------------------------------------------------------------------
# Cookie helpers
# ---------------------------------------------------------------------------

def set_admin_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.ADMIN_COOKIE_SECURE,
        samesite=settings.ADMIN_COOKIE_SAMESITE,
        domain=settings.ADMIN_COOKIE_DOMAIN,
        path="/",
        max_age=settings.SESSION_TTL_SECONDS,
    )


def clear_admin_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        domain=settings.ADMIN_COOKIE_DOMAIN,
        path="/",
    )


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------

@router.post("/login")
@limiter.limit(get_rate_limit("login"))
def login(
    request: Request,
    payload: LoginRequest,
    response: Response,
    admins: AdminRepository = Depends(get_admin_repository),
    store: SessionStore = Depends(get_session_store),
):
    """Exchange email and password for an admin token.

    The token is returned in the body for client-side fetches and set as an
    httpOnly cookie for server-rendered pages. Unknown email and wrong
    password produce the same 401.
    """
    if not payload.email or not payload.password:
        raise ValidationFailed("Email and password are required")

    admin = admins.get_by_email(payload.email)
    if admin is None:
        verify_password(payload.password, _timing_equalizer_hash())
        record_login_attempt("invalid_credentials")
        raise InvalidCredentials()

    if not verify_password(payload.password, admin.password_hash):
        record_login_attempt("invalid_credentials")
        logger.info("Admin login rejected: bad password", extra={"admin_id": admin.admin_id, "action": "login"})
        raise InvalidCredentials()

    if not admin.is_active:
        record_login_attempt("inactive")
        logger.info("Admin login rejected: inactive", extra={"admin_id": admin.admin_id, "action": "login"})
        raise AccountInactive()

    profile = AdminProfile.from_admin(admin)
    token = create_access_token(
        admin_id=profile.id,
        email=profile.email,
        role=profile.role,
        permissions=profile.permissions,
    )

    store.create(profile.id, token)
    store.update_last_login(profile.id)

    record_login_attempt("success")
    logger.info(f"Admin logged in: {profile.id}", extra={"admin_id": profile.id, "action": "login"})

    set_admin_cookie(response, token)
    return {
        "success": True,
        "data": {
            "token": token,
            "admin": profile.public(),
        },
        "message": "Login successful",
    }


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------

@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """Invalidate the presented session. Always succeeds, even for a token
    that is unknown or already invalid."""
    token = extract_token(request)
    if token:
        record_sessions_revoked("logout", store.invalidate(token))

    clear_admin_cookie(response)
    return {"success": True, "message": "Logout successful"}


# ---------------------------------------------------------------------------
# GET /verify
# ---------------------------------------------------------------------------

@router.get("/verify")
def verify(
    request: Request,
    store: SessionStore = Depends(get_session_store),
):
    """Return the current admin profile for a valid session (frontend bootstrap)."""
    token = extract_token(request)
    if not token:
        raise Unauthenticated("No token provided")

    admin = store.validate(token)
    if admin is None:
        raise Unauthenticated("Invalid or expired token")

    return {"success": True, "data": {"admin": admin.public()}}


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------

@router.post("/forgot-password")
@limiter.limit(get_rate_limit("forgot_password"))
def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    admins: AdminRepository = Depends(get_admin_repository),
):
    """Start a password reset.

    Always answers with the same message so the endpoint cannot be used to
    discover which emails have accounts.
    """
    if not payload.email:
        raise ValidationFailed("Email is required")

    data = {}
    admin = admins.get_by_email(payload.email)
    if admin is not None and admin.is_active:
        token = mint_reset_token()
        admins.update(
            admin,
            reset_token_hash=hash_reset_token(token),
            reset_token_expiry=datetime.utcnow() + timedelta(seconds=settings.PASSWORD_RESET_TTL_SECONDS),
        )
        admins.db.commit()

        send_password_reset(admin.email, f"{settings.PASSWORD_RESET_URL}?token={token}")
        logger.info("Password reset requested", extra={"admin_id": admin.admin_id, "action": "forgot_password"})

        if settings.PASSWORD_RESET_DEBUG_RETURN_TOKEN:
            data["resetToken"] = token

    body = {"success": True, "message": _RESET_REQUESTED_MESSAGE}
    if data:
        body["data"] = data
    return body


@router.post("/reset-password")
@limiter.limit(get_rate_limit("reset_password"))
def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    admins: AdminRepository = Depends(get_admin_repository),
    store: SessionStore = Depends(get_session_store),
):
    """Set a new password with a reset token; every existing session of the
    admin is invalidated."""
    if not payload.token or not payload.new_password:
        raise ValidationFailed("Token and new password are required")

    if len(payload.new_password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationFailed(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
        )

    admin = admins.get_by_reset_token_hash(hash_reset_token(payload.token.strip()))
    if (
        admin is None
        or not admin.is_active
        or admin.reset_token_expiry is None
        or admin.reset_token_expiry <= datetime.utcnow()
    ):
        raise ValidationFailed("Invalid or expired reset token")

    admins.update(
        admin,
        password_hash=hash_password(payload.new_password),
        reset_token_hash=None,
        reset_token_expiry=None,
    )
    admins.db.commit()

    revoked = store.invalidate_all(admin.admin_id)
    record_sessions_revoked("password_reset", revoked)
    logger.info("Password reset completed", extra={"admin_id": admin.admin_id, "action": "reset_password"})

    return {"success": True, "message": "Password reset successful"}
