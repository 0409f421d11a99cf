"""Session store: server-side lifecycle of issued admin tokens"""
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from adminauth.config import settings
from adminauth.models.admin_session import AdminSession
from adminauth.repositories.admins import AdminRepository
from adminauth.repositories.sessions import SessionRepository
from adminauth.schemas.admin import AdminProfile
from adminauth.utils.jwt_utils import verify_access_token
from adminauth.utils.logger import logger


class SessionStore:
    """Create, invalidate and validate admin sessions.

    Every write commits on its own, so each session row transition is an
    independent atomic statement. ``validate`` always reads the live admin
    row; the claims embedded in the token are only used to cross-check the
    owner.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        admins: AdminRepository,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self.sessions = sessions
        self.admins = admins
        self.ttl = timedelta(seconds=ttl_seconds or settings.SESSION_TTL_SECONDS)
        self._now = clock

    @property
    def db(self):
        return self.sessions.db

    def create(self, admin_id: str, token: str) -> AdminSession:
        now = self._now()
        session = self.sessions.create(
            admin_id=admin_id,
            token=token,
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.db.commit()
        logger.info("Admin session created", extra={"admin_id": admin_id, "action": "create_session"})
        return session

    def invalidate(self, token: str) -> int:
        """Invalidate one session; returns 1 if a live session was flipped, 0 for
        unknown or already-invalid tokens."""
        touched = self.sessions.mark_invalidated(token)
        self.db.commit()
        if touched:
            logger.info("Admin session invalidated", extra={"action": "invalidate_session"})
        return touched

    def invalidate_all(self, admin_id: str) -> int:
        touched = self.sessions.mark_all_invalidated(admin_id)
        self.db.commit()
        logger.info(
            f"Invalidated {touched} session(s) for {admin_id}",
            extra={"admin_id": admin_id, "action": "invalidate_all_sessions"},
        )
        return touched

    def validate(self, token: str) -> Optional[AdminProfile]:
        """Return the admin's current profile if ``token`` maps to a valid
        session of an active admin, else None."""
        verification = verify_access_token(token)
        if not verification.ok:
            logger.debug(f"Token rejected: {verification.failure.value}")
            return None

        session = self.sessions.get_by_token(token)
        if session is None or session.invalidated:
            return None
        if session.expires_at <= self._now():
            return None
        if session.admin_id != verification.claims["sub"]:
            logger.warning(
                "Token subject does not match session owner",
                extra={"admin_id": session.admin_id, "action": "validate_session"},
            )
            return None

        admin = self.admins.get_by_admin_id(session.admin_id)
        if admin is None or not admin.is_active:
            return None

        return AdminProfile.from_admin(admin)

    def update_last_login(self, admin_id: str) -> None:
        """Best-effort timestamp write; a failure is logged and never raised."""
        try:
            self.admins.touch_last_login(admin_id, self._now())
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(
                "Failed to update last login",
                extra={"admin_id": admin_id, "action": "update_last_login"},
                exc_info=True,
            )

    def purge_expired(self) -> int:
        """Delete sessions whose expiry has passed; returns rows deleted."""
        deleted = self.sessions.delete_expired(self._now())
        self.db.commit()
        logger.info(f"Purged {deleted} expired admin session(s)", extra={"action": "purge_sessions"})
        return deleted
