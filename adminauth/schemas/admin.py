"""Admin schemas"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from adminauth.utils.permissions import AdminRole, Permission


class AdminProfile(BaseModel):
    """Public view of an admin, built from the live database row"""

    id: str
    email: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    role: str
    permissions: List[str] = Field(default_factory=list)
    is_active: bool = Field(True, alias="isActive")

    class Config:
        populate_by_name = True

    @classmethod
    def from_admin(cls, admin) -> "AdminProfile":
        return cls(
            id=admin.admin_id,
            email=admin.email,
            first_name=admin.first_name,
            last_name=admin.last_name,
            role=admin.role,
            permissions=list(admin.permissions or []),
            is_active=admin.is_active,
        )

    def public(self) -> dict:
        """Shape returned by login and verify (no activity flag)."""
        return self.model_dump(by_alias=True, exclude={"is_active"})


class AdminCreate(BaseModel):
    """Body of POST /api/admin/admins. Presence is checked by the handler so
    missing fields produce the same message as the rest of the API."""

    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    role: Optional[str] = None

    class Config:
        populate_by_name = True


class AdminUpdate(BaseModel):
    first_name: Optional[str] = Field(None, alias="firstName", min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", min_length=1, max_length=100)
    role: Optional[AdminRole] = None
    permissions: Optional[List[Permission]] = None
    is_active: Optional[bool] = Field(None, alias="isActive")

    class Config:
        populate_by_name = True


class AdminRecord(BaseModel):
    """Row returned by the management endpoints"""

    id: str
    email: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    role: str
    permissions: List[str]
    is_active: bool = Field(..., alias="isActive")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")
    created_at: datetime = Field(..., alias="createdAt")
    session_count: Optional[int] = Field(None, alias="sessionCount")

    class Config:
        populate_by_name = True

    @classmethod
    def from_admin(cls, admin, session_count: Optional[int] = None) -> "AdminRecord":
        return cls(
            id=admin.admin_id,
            email=admin.email,
            first_name=admin.first_name,
            last_name=admin.last_name,
            role=admin.role,
            permissions=list(admin.permissions or []),
            is_active=admin.is_active,
            last_login=admin.last_login,
            created_at=admin.created_at,
            session_count=session_count,
        )
