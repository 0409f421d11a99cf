"""Admin model: privileged backend users with a role and permission list"""
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from adminauth.database import Base


class Admin(Base):
    """An admin account.

    ``permissions`` is seeded from the role map at creation and is what
    permission checks read afterwards; ``super_admin`` bypasses it.
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True)
    admin_id = Column(String(50), unique=True, nullable=False, index=True)   # "adm_xxx"
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)                                # super_admin|admin|manager
    permissions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)
    reset_token_hash = Column(String(64), nullable=True, index=True)         # peppered SHA-256
    reset_token_expiry = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    sessions = relationship("AdminSession", back_populates="admin", cascade="all, delete-orphan")
