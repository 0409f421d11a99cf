"""Admin user management endpoints"""
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from adminauth.api.deps import get_admin_repository, get_session_store, require_admin
from adminauth.config import settings
from adminauth.exceptions import Forbidden, NotFound, ValidationFailed
from adminauth.middleware.monitoring import record_sessions_revoked
from adminauth.middleware.rate_limit import get_rate_limit, limiter
from adminauth.models.admin import Admin
from adminauth.repositories.admins import AdminRepository
from adminauth.schemas.admin import AdminCreate, AdminProfile, AdminRecord, AdminUpdate
from adminauth.services.session_store import SessionStore
from adminauth.utils.logger import logger
from adminauth.utils.passwords import hash_password
from adminauth.utils.permissions import (
    AdminRole,
    Permission,
    has_all_permissions,
    is_super_admin,
    normalize_permissions,
    permissions_for_role,
)

router = APIRouter(prefix="/api/admin/admins", tags=["admins"])

_VALID_ROLES = {role.value for role in AdminRole}


def _get_or_404(admins: AdminRepository, admin_id: str) -> Admin:
    admin = admins.get_by_admin_id(admin_id)
    if admin is None:
        raise NotFound(f"Admin {admin_id} not found")
    return admin


def _guard_super_admin_grant(caller: AdminProfile, role: Optional[str]) -> None:
    """Only a super admin may hand out the super_admin role."""
    if role == AdminRole.SUPER_ADMIN.value and not is_super_admin(caller):
        raise Forbidden()


def _guard_super_admin_target(caller: AdminProfile, target: Admin) -> None:
    """Only a super admin may modify or force-logout a super admin."""
    if is_super_admin(target) and not is_super_admin(caller):
        raise Forbidden()


def _guard_permission_grant(caller: AdminProfile, granted: List[str]) -> None:
    """Callers can only hand out permissions they hold themselves."""
    if not has_all_permissions(caller, granted):
        raise Forbidden()


# ---------------------------------------------------------------------------
# GET / (admins:view)
# ---------------------------------------------------------------------------

@router.get("")
def list_admins(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    role: Optional[str] = None,
    admins: AdminRepository = Depends(get_admin_repository),
    _: AdminProfile = Depends(require_admin(Permission.ADMINS_VIEW)),
):
    """
    List admins, newest first.

    Query parameters:
    - page / limit: pagination (1-indexed)
    - search: matches first name, last name or email (case-insensitive)
    - role: exact role, or "all"
    """
    rows, total = admins.list_page(page=page, limit=limit, search=search, role=role)

    return {
        "success": True,
        "data": {
            "admins": [
                AdminRecord.from_admin(admin, session_count).model_dump(by_alias=True, mode="json")
                for admin, session_count in rows
            ],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": math.ceil(total / limit),
                "hasNext": page * limit < total,
                "hasPrev": page > 1,
            },
        },
    }


# ---------------------------------------------------------------------------
# POST / (admins:create)
# ---------------------------------------------------------------------------

@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit("admin_write"))
def create_admin(
    request: Request,
    data: AdminCreate,
    admins: AdminRepository = Depends(get_admin_repository),
    caller: AdminProfile = Depends(require_admin(Permission.ADMINS_CREATE)),
):
    """
    Create an admin. Permissions are seeded from the role's defaults.
    """
    if not all([data.email, data.password, data.first_name, data.last_name, data.role]):
        raise ValidationFailed("All fields are required")

    if len(data.password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationFailed(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
        )

    if data.role not in _VALID_ROLES:
        raise ValidationFailed("Invalid role")

    _guard_super_admin_grant(caller, data.role)
    permissions = permissions_for_role(data.role)
    _guard_permission_grant(caller, permissions)

    if admins.email_exists(data.email):
        raise ValidationFailed("Admin with this email already exists")

    admin = admins.create(
        email=data.email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
        permissions=permissions,
    )
    admins.db.commit()

    logger.info(
        f"Created admin: {admin.admin_id}",
        extra={"admin_id": caller.id, "action": "create_admin"},
    )

    return {
        "success": True,
        "data": AdminRecord.from_admin(admin).model_dump(by_alias=True, mode="json", exclude={"session_count"}),
        "message": "Admin created successfully",
    }


# ---------------------------------------------------------------------------
# GET /{admin_id} (admins:view)
# ---------------------------------------------------------------------------

@router.get("/{admin_id}")
def get_admin(
    admin_id: str,
    admins: AdminRepository = Depends(get_admin_repository),
    _: AdminProfile = Depends(require_admin(Permission.ADMINS_VIEW)),
):
    admin = _get_or_404(admins, admin_id)
    return {
        "success": True,
        "data": AdminRecord.from_admin(admin).model_dump(by_alias=True, mode="json", exclude={"session_count"}),
    }


# ---------------------------------------------------------------------------
# PATCH /{admin_id} (admins:update)
# ---------------------------------------------------------------------------

@router.patch("/{admin_id}")
def update_admin(
    admin_id: str,
    data: AdminUpdate,
    admins: AdminRepository = Depends(get_admin_repository),
    store: SessionStore = Depends(get_session_store),
    caller: AdminProfile = Depends(require_admin(Permission.ADMINS_UPDATE)),
):
    """
    Update profile, role, permissions or active flag.

    Deactivating an admin also invalidates every session it holds.
    """
    admin = _get_or_404(admins, admin_id)
    _guard_super_admin_target(caller, admin)
    changes = data.model_dump(exclude_unset=True)

    for field in ("first_name", "last_name", "role", "permissions", "is_active"):
        if field in changes and changes[field] is None:
            raise ValidationFailed(f"{field} cannot be null")

    if "role" in changes:
        changes["role"] = changes["role"].value
        _guard_super_admin_grant(caller, changes["role"])

    if "permissions" in changes:
        changes["permissions"] = normalize_permissions(changes["permissions"])
        added = [p for p in changes["permissions"] if p not in (admin.permissions or [])]
        _guard_permission_grant(caller, added)

    if changes.get("is_active") is False and admin.admin_id == caller.id:
        raise ValidationFailed("You cannot deactivate your own account")

    if changes:
        admins.update(admin, **changes)
        admins.db.commit()

    if changes.get("is_active") is False:
        revoked = store.invalidate_all(admin.admin_id)
        record_sessions_revoked("deactivation", revoked)

    logger.info(
        f"Updated admin: {admin.admin_id}",
        extra={"admin_id": caller.id, "action": "update_admin"},
    )

    return {
        "success": True,
        "data": AdminRecord.from_admin(admin).model_dump(by_alias=True, mode="json", exclude={"session_count"}),
        "message": "Admin updated successfully",
    }


# ---------------------------------------------------------------------------
# POST /{admin_id}/sessions/revoke (admins:update)
# ---------------------------------------------------------------------------

@router.post("/{admin_id}/sessions/revoke")
def revoke_admin_sessions(
    admin_id: str,
    admins: AdminRepository = Depends(get_admin_repository),
    store: SessionStore = Depends(get_session_store),
    caller: AdminProfile = Depends(require_admin(Permission.ADMINS_UPDATE)),
):
    """Force-logout an admin everywhere."""
    admin = _get_or_404(admins, admin_id)
    _guard_super_admin_target(caller, admin)
    revoked = store.invalidate_all(admin.admin_id)
    record_sessions_revoked("admin_revoke", revoked)

    logger.info(
        f"Revoked {revoked} session(s) of {admin.admin_id}",
        extra={"admin_id": caller.id, "action": "revoke_sessions"},
    )
    return {"success": True, "data": {"revoked": revoked}}
