"""
Admin repository.

Credential store adapter: admin lookups by email, id and reset token, plus
the listing query used by the management endpoints.
"""
import secrets
from datetime import datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from adminauth.models.admin import Admin
from adminauth.models.admin_session import AdminSession
from adminauth.repositories.base import BaseRepository

_ADMIN_ID_PREFIX = "adm_"


def generate_admin_id() -> str:
    return f"{_ADMIN_ID_PREFIX}{secrets.token_urlsafe(10)}"


class AdminRepository(BaseRepository[Admin]):
    """Admin repository with login and management queries."""

    def __init__(self, db: Session) -> None:
        super().__init__(Admin, db)

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self.get_by(email=email)

    def get_by_admin_id(self, admin_id: str) -> Optional[Admin]:
        return self.get_by(admin_id=admin_id)

    def get_by_reset_token_hash(self, token_hash: str) -> Optional[Admin]:
        return self.get_by(reset_token_hash=token_hash)

    def email_exists(self, email: str) -> bool:
        return self.count(email=email) > 0

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: str,
        permissions: List[str],
        is_active: bool = True,
    ) -> Admin:
        """Insert a new admin row and return it (flushed, not committed)."""
        admin = Admin(
            admin_id=generate_admin_id(),
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            permissions=list(permissions),
            is_active=is_active,
        )
        return self.add(admin)

    def update(self, admin: Admin, **data: Any) -> Admin:
        for key, value in data.items():
            setattr(admin, key, value)
        self.db.flush()
        return admin

    def touch_last_login(self, admin_id: str, when: datetime) -> int:
        """Single-row UPDATE of last_login; returns rows touched."""
        return (
            self.db.query(Admin)
            .filter(Admin.admin_id == admin_id)
            .update({Admin.last_login: when})
        )

    def list_page(
        self,
        *,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Tuple[List[Tuple[Admin, int]], int]:
        """
        Page through admins, newest first.

        Args:
            page: 1-indexed page number
            limit: Page size
            search: Case-insensitive match on first name, last name or email
            role: Exact role filter; None or "all" disables it

        Returns:
            ([(admin, session_count), ...], total matching admins)
        """
        query = self.db.query(Admin)

        if search:
            escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{escaped}%"
            query = query.filter(
                or_(
                    func.lower(Admin.first_name).like(pattern, escape="\\"),
                    func.lower(Admin.last_name).like(pattern, escape="\\"),
                    func.lower(Admin.email).like(pattern, escape="\\"),
                )
            )

        if role and role != "all":
            query = query.filter(Admin.role == role)

        total = query.count()

        session_counts = (
            self.db.query(AdminSession.admin_id, func.count(AdminSession.id).label("session_count"))
            .group_by(AdminSession.admin_id)
            .subquery()
        )

        rows = (
            query.outerjoin(session_counts, session_counts.c.admin_id == Admin.admin_id)
            .add_columns(func.coalesce(session_counts.c.session_count, 0))
            .order_by(Admin.created_at.desc(), Admin.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return [(admin, int(count)) for admin, count in rows], total
