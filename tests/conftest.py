"""Pytest configuration and fixtures"""
import os

# Settings are read at import time; configure the test environment first.
os.environ["JWT_SECRET"] = "test-secret-for-adminauth-0123456789abcdef"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

from typing import Callable, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from adminauth.database import Base, get_db
from adminauth.main import app
from adminauth.middleware.rate_limit import limiter
from adminauth.models.admin import Admin
from adminauth.repositories.admins import AdminRepository
from adminauth.repositories.sessions import SessionRepository
from adminauth.services.session_store import SessionStore
from adminauth.utils.passwords import hash_password
from adminauth.utils.permissions import ALL_PERMISSIONS

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "admin123"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def session_store(db: Session) -> SessionStore:
    return SessionStore(SessionRepository(db), AdminRepository(db))


@pytest.fixture
def make_admin(db: Session) -> Callable[..., Admin]:
    """Factory inserting an admin row directly"""

    def _make(
        email: str,
        role: str = "manager",
        permissions: Optional[List[str]] = None,
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
        first_name: str = "Test",
        last_name: str = "Admin",
    ) -> Admin:
        admin = AdminRepository(db).create(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            permissions=permissions if permissions is not None else [],
            is_active=is_active,
        )
        db.commit()
        return admin

    return _make


@pytest.fixture
def super_admin(make_admin) -> Admin:
    return make_admin("admin@x.com", role="super_admin", permissions=ALL_PERMISSIONS,
                      first_name="Super", last_name="Admin")


@pytest.fixture
def manager(make_admin) -> Admin:
    return make_admin("manager@x.com", role="manager", permissions=["products:view"],
                      first_name="Content", last_name="Manager")


@pytest.fixture
def login(client: TestClient) -> Callable[..., str]:
    """Log in and return the token; the login cookie is dropped so each request
    authenticates only with what the test passes explicitly."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> str:
        response = client.post("/api/admin/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return response.json()["data"]["token"]

    return _login

@pytest.fixture
def admin_headers(super_admin, login) -> dict:
    """Bearer headers for the seeded super admin"""
    return {"Authorization": f"Bearer {login('admin@x.com')}"}


@pytest.fixture
def rate_limited(monkeypatch):
    """Turn the limiter on with empty buckets for one test"""
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield limiter
    limiter.reset()
