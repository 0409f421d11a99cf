"""Database models"""
from adminauth.models.admin import Admin
from adminauth.models.admin_session import AdminSession

__all__ = ["Admin", "AdminSession"]
