"""Auth endpoint request bodies.

Fields are optional at the schema level; the handlers check presence so the
client gets the same "... required" messages for every missing field.
"""
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    token: Optional[str] = None
    new_password: Optional[str] = Field(None, alias="newPassword")

    class Config:
        populate_by_name = True
