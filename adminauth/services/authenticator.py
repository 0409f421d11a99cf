"""Request authenticator: token extraction, session validation, permission check.

Run once per request, holds no state between requests::

    no token ──────────────────────────────► UNAUTHENTICATED
    token ─► SessionStore.validate ─ None ─► UNAUTHENTICATED
                    │ admin
                    ▼
             permission check ─── fail ────► FORBIDDEN
                    │ pass
                    ▼
                AUTHORIZED (live admin profile)
"""
from enum import Enum
from typing import Iterable, Literal, NamedTuple, Optional

from starlette.requests import Request

from adminauth.config import settings
from adminauth.schemas.admin import AdminProfile
from adminauth.services.session_store import SessionStore
from adminauth.utils.permissions import PermissionLike, has_all_permissions, has_any_permission

PermissionMode = Literal["any", "all"]


class AuthOutcome(str, Enum):
    AUTHORIZED = "authorized"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


class AuthResult(NamedTuple):
    outcome: AuthOutcome
    admin: Optional[AdminProfile] = None
    token: Optional[str] = None

    @property
    def authorized(self) -> bool:
        return self.outcome is AuthOutcome.AUTHORIZED


def extract_token(request: Request) -> Optional[str]:
    """Cookie first, then ``Authorization: Bearer``."""
    cookie = request.cookies.get(settings.ADMIN_COOKIE_NAME)
    if cookie:
        return cookie

    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    return None


class RequestAuthenticator:
    def __init__(self, session_store: SessionStore) -> None:
        self.session_store = session_store

    def authenticate(
        self,
        token: Optional[str],
        required: Iterable[PermissionLike] = (),
        mode: PermissionMode = "any",
    ) -> AuthResult:
        if not token:
            return AuthResult(AuthOutcome.UNAUTHENTICATED)

        admin = self.session_store.validate(token)
        if admin is None:
            return AuthResult(AuthOutcome.UNAUTHENTICATED, token=token)

        required = list(required)
        if required:
            check = has_all_permissions if mode == "all" else has_any_permission
            if not check(admin, required):
                return AuthResult(AuthOutcome.FORBIDDEN, admin=admin, token=token)

        return AuthResult(AuthOutcome.AUTHORIZED, admin=admin, token=token)

    def authenticate_request(
        self,
        request: Request,
        required: Iterable[PermissionLike] = (),
        mode: PermissionMode = "any",
    ) -> AuthResult:
        return self.authenticate(extract_token(request), required, mode)
