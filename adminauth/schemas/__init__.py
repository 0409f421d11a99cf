"""Pydantic schemas for request/response validation"""
from adminauth.schemas.admin import AdminCreate, AdminProfile, AdminRecord, AdminUpdate
from adminauth.schemas.auth import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest

__all__ = [
    "AdminCreate",
    "AdminProfile",
    "AdminRecord",
    "AdminUpdate",
    "LoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
]
