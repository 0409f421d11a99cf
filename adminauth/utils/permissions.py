"""Admin roles, permission strings and the permission evaluator.

Permission checks read the permissions stored on the admin record. The
role map below only seeds that list when an admin is created; the one role
that bypasses the stored list is ``super_admin``, which satisfies every check.
"""
from enum import Enum
from typing import Dict, Iterable, List, Protocol, Sequence, Union


class AdminRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"


class Permission(str, Enum):
    # Products
    PRODUCTS_VIEW = "products:view"
    PRODUCTS_CREATE = "products:create"
    PRODUCTS_UPDATE = "products:update"
    PRODUCTS_DELETE = "products:delete"

    # Orders
    ORDERS_VIEW = "orders:view"
    ORDERS_UPDATE = "orders:update"
    ORDERS_DELETE = "orders:delete"

    # Customers
    CUSTOMERS_VIEW = "customers:view"
    CUSTOMERS_UPDATE = "customers:update"
    CUSTOMERS_DELETE = "customers:delete"

    # Content
    CONTENT_VIEW = "content:view"
    CONTENT_CREATE = "content:create"
    CONTENT_UPDATE = "content:update"
    CONTENT_DELETE = "content:delete"

    # Analytics
    ANALYTICS_VIEW = "analytics:view"
    REPORTS_VIEW = "reports:view"

    # System
    SETTINGS_VIEW = "settings:view"
    SETTINGS_UPDATE = "settings:update"
    ADMINS_VIEW = "admins:view"
    ADMINS_CREATE = "admins:create"
    ADMINS_UPDATE = "admins:update"
    ADMINS_DELETE = "admins:delete"


ALL_PERMISSIONS: List[str] = [p.value for p in Permission]

ROLE_PERMISSIONS: Dict[AdminRole, List[Permission]] = {
    AdminRole.SUPER_ADMIN: list(Permission),
    AdminRole.ADMIN: [
        Permission.PRODUCTS_VIEW,
        Permission.PRODUCTS_CREATE,
        Permission.PRODUCTS_UPDATE,
        Permission.PRODUCTS_DELETE,
        Permission.ORDERS_VIEW,
        Permission.ORDERS_UPDATE,
        Permission.CUSTOMERS_VIEW,
        Permission.CUSTOMERS_UPDATE,
        Permission.CONTENT_VIEW,
        Permission.CONTENT_CREATE,
        Permission.CONTENT_UPDATE,
        Permission.CONTENT_DELETE,
        Permission.ANALYTICS_VIEW,
        Permission.REPORTS_VIEW,
        Permission.SETTINGS_VIEW,
    ],
    AdminRole.MANAGER: [
        Permission.PRODUCTS_VIEW,
        Permission.PRODUCTS_CREATE,
        Permission.PRODUCTS_UPDATE,
        Permission.ORDERS_VIEW,
        Permission.ORDERS_UPDATE,
        Permission.CUSTOMERS_VIEW,
        Permission.CONTENT_VIEW,
        Permission.CONTENT_CREATE,
        Permission.CONTENT_UPDATE,
        Permission.ANALYTICS_VIEW,
    ],
}

PermissionLike = Union[Permission, str]


class HasPermissions(Protocol):
    """Anything carrying a role and a stored permission list (ORM row or profile)."""

    role: str
    permissions: Sequence[str]


def _value(member: Union[Enum, str]) -> str:
    return member.value if isinstance(member, Enum) else member


def is_super_admin(admin: HasPermissions) -> bool:
    return _value(admin.role) == AdminRole.SUPER_ADMIN.value


def permissions_for_role(role: Union[AdminRole, str]) -> List[str]:
    """Default permission list for a newly created admin of ``role``."""
    return [p.value for p in ROLE_PERMISSIONS.get(AdminRole(role), [])]


def normalize_permissions(permissions: Iterable[PermissionLike]) -> List[str]:
    """Validate against the closed set, drop duplicates, keep first-seen order.

    Raises:
        ValueError: on a string that is not a known permission.
    """
    seen: List[str] = []
    for permission in permissions:
        value = Permission(_value(permission)).value
        if value not in seen:
            seen.append(value)
    return seen


def has_permission(admin: HasPermissions, permission: PermissionLike) -> bool:
    if is_super_admin(admin):
        return True
    return _value(permission) in (admin.permissions or [])


def has_any_permission(admin: HasPermissions, permissions: Iterable[PermissionLike]) -> bool:
    """True if any listed permission is held. An empty list is never satisfied,
    except by a super admin."""
    if is_super_admin(admin):
        return True
    return any(has_permission(admin, p) for p in permissions)


def has_all_permissions(admin: HasPermissions, permissions: Iterable[PermissionLike]) -> bool:
    """True if every listed permission is held. An empty list is vacuously satisfied."""
    if is_super_admin(admin):
        return True
    return all(has_permission(admin, p) for p in permissions)
