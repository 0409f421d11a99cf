"""
Session repository.

Row-level access to ``admin_sessions``. Each write is a single UPDATE or
DELETE statement, so every row transition is atomic in the database.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from adminauth.models.admin_session import AdminSession
from adminauth.repositories.base import BaseRepository


class SessionRepository(BaseRepository[AdminSession]):

    def __init__(self, db: Session) -> None:
        super().__init__(AdminSession, db)

    def get_by_token(self, token: str) -> Optional[AdminSession]:
        return self.get_by(token=token)

    def create(self, *, admin_id: str, token: str, created_at: datetime, expires_at: datetime) -> AdminSession:
        return self.add(
            AdminSession(
                admin_id=admin_id,
                token=token,
                created_at=created_at,
                expires_at=expires_at,
                invalidated=False,
            )
        )

    def mark_invalidated(self, token: str) -> int:
        return (
            self.db.query(AdminSession)
            .filter(AdminSession.token == token, AdminSession.invalidated == False)  # noqa: E712
            .update({AdminSession.invalidated: True})
        )

    def mark_all_invalidated(self, admin_id: str) -> int:
        return (
            self.db.query(AdminSession)
            .filter(AdminSession.admin_id == admin_id, AdminSession.invalidated == False)  # noqa: E712
            .update({AdminSession.invalidated: True})
        )

    def delete_expired(self, now: datetime) -> int:
        return (
            self.db.query(AdminSession)
            .filter(AdminSession.expires_at < now)
            .delete()
        )
