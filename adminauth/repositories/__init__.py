"""Data access layer: repositories over a SQLAlchemy session"""
from adminauth.repositories.admins import AdminRepository
from adminauth.repositories.sessions import SessionRepository

__all__ = ["AdminRepository", "SessionRepository"]
