"""AdminSession model: one row per issued admin token"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from adminauth.database import Base


class AdminSession(Base):
    """Server-side record of an issued token.

    A session is valid while ``invalidated`` is false, ``expires_at`` is in the
    future and the owning admin is active. Rows are only ever flipped to
    invalidated or deleted once expired.
    """

    __tablename__ = "admin_sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(Text, unique=True, nullable=False)
    admin_id = Column(String(50), ForeignKey("admins.admin_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    invalidated = Column(Boolean, default=False, nullable=False)

    # Relationships
    admin = relationship("Admin", back_populates="sessions")
