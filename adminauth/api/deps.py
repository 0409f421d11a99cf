"""API dependencies for authentication and authorization.

Every protected endpoint goes through :func:`require_admin`, which accepts
EITHER
  - the admin cookie (set by login, checked first), or
  - Authorization: Bearer <JWT>

and re-validates the token against the session table and the live admin row
on every request.

Permissions
-----------
``require_admin(Permission.ORDERS_UPDATE)`` passes when the admin holds the
permission; several permissions pass on any of them unless ``mode="all"``.
``super_admin`` passes every check.
"""
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from adminauth.database import get_db
from adminauth.exceptions import Forbidden, Unauthenticated
from adminauth.middleware.monitoring import record_auth_failure
from adminauth.repositories.admins import AdminRepository
from adminauth.repositories.sessions import SessionRepository
from adminauth.schemas.admin import AdminProfile
from adminauth.services.authenticator import AuthOutcome, PermissionMode, RequestAuthenticator
from adminauth.services.session_store import SessionStore
from adminauth.utils.logger import logger
from adminauth.utils.permissions import PermissionLike


# ---------------------------------------------------------------------------
# Repositories and services
# ---------------------------------------------------------------------------

def get_admin_repository(db: Session = Depends(get_db)) -> AdminRepository:
    return AdminRepository(db)


def get_session_store(
    db: Session = Depends(get_db),
    admins: AdminRepository = Depends(get_admin_repository),
) -> SessionStore:
    return SessionStore(SessionRepository(db), admins)


def get_authenticator(store: SessionStore = Depends(get_session_store)) -> RequestAuthenticator:
    return RequestAuthenticator(store)


# ---------------------------------------------------------------------------
# require_admin factory: session + permission gated dependency
# ---------------------------------------------------------------------------

def require_admin(*permissions: PermissionLike, mode: PermissionMode = "any") -> Callable:
    """Return a FastAPI dependency that resolves the calling admin.

    Usage::

        @router.get("/admins")
        def list_admins(admin: AdminProfile = Depends(require_admin(Permission.ADMINS_VIEW))):
            ...

    Raises:
        Unauthenticated: no token, or the session is not valid.
        Forbidden: valid session without the required permission(s).
    """
    required = list(permissions)

    def _admin_dep(
        request: Request,
        authenticator: RequestAuthenticator = Depends(get_authenticator),
    ) -> AdminProfile:
        result = authenticator.authenticate_request(request, required, mode)

        if result.outcome is AuthOutcome.UNAUTHENTICATED:
            record_auth_failure("unauthenticated")
            raise Unauthenticated()

        if result.outcome is AuthOutcome.FORBIDDEN:
            record_auth_failure("forbidden")
            logger.info(
                f"Permission denied on {request.url.path}",
                extra={"admin_id": result.admin.id, "action": "permission_denied"},
            )
            raise Forbidden()

        request.state.admin = result.admin
        return result.admin

    # Give FastAPI a unique name so it doesn't collapse distinct dependencies
    suffix = "_".join(str(getattr(p, "value", p)).replace(":", "_") for p in required) or "any"
    _admin_dep.__name__ = f"require_admin_{mode}_{suffix}"
    return _admin_dep
