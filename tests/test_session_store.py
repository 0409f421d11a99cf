"""Tests for the session store"""
from datetime import datetime, timedelta

from adminauth.models.admin_session import AdminSession
from adminauth.repositories.admins import AdminRepository
from adminauth.repositories.sessions import SessionRepository
from adminauth.services.session_store import SessionStore
from adminauth.utils.jwt_utils import create_access_token


def _token_for(admin) -> str:
    return create_access_token(
        admin_id=admin.admin_id,
        email=admin.email,
        role=admin.role,
        permissions=list(admin.permissions),
    )


def _store_at(db, when: datetime) -> SessionStore:
    return SessionStore(SessionRepository(db), AdminRepository(db), clock=lambda: when)


def test_create_then_validate(session_store, super_admin):
    token = _token_for(super_admin)
    session = session_store.create(super_admin.admin_id, token)

    assert session.invalidated is False
    assert session.expires_at - session.created_at == timedelta(days=7)

    profile = session_store.validate(token)
    assert profile is not None
    assert profile.id == super_admin.admin_id
    assert profile.role == "super_admin"


def test_validate_unknown_token(session_store, super_admin):
    """A correctly signed token with no session row is not valid"""
    assert session_store.validate(_token_for(super_admin)) is None


def test_validate_garbage_token(session_store):
    assert session_store.validate("garbage") is None
    assert session_store.validate("") is None


def test_invalidate_is_idempotent(session_store, super_admin):
    token = _token_for(super_admin)
    session_store.create(super_admin.admin_id, token)

    assert session_store.invalidate(token) == 1
    assert session_store.validate(token) is None

    assert session_store.invalidate(token) == 0
    assert session_store.invalidate("never-issued") == 0
    assert session_store.validate(token) is None


def test_invalidate_all_returns_count(db, session_store, super_admin, manager):
    tokens = [_token_for(super_admin) for _ in range(3)]
    for token in tokens:
        session_store.create(super_admin.admin_id, token)
    other = _token_for(manager)
    session_store.create(manager.admin_id, other)

    assert session_store.invalidate_all(super_admin.admin_id) == 3
    assert all(session_store.validate(token) is None for token in tokens)
    assert session_store.validate(other) is not None

    # Already-invalidated sessions are not counted again
    assert session_store.invalidate_all(super_admin.admin_id) == 0


def test_expired_session_is_invalid(db, session_store, super_admin):
    token = _token_for(super_admin)
    session_store.create(super_admin.admin_id, token)

    later = datetime.utcnow() + timedelta(days=7, seconds=1)
    assert _store_at(db, later).validate(token) is None


def test_deactivated_admin_invalidates_live_sessions(db, session_store, manager):
    token = _token_for(manager)
    session_store.create(manager.admin_id, token)
    assert session_store.validate(token) is not None

    manager.is_active = False
    db.commit()

    assert session_store.validate(token) is None


def test_validate_reads_live_permissions(db, session_store, manager):
    """Claims embedded at login do not override the current row"""
    token = _token_for(manager)
    session_store.create(manager.admin_id, token)

    manager.permissions = ["orders:view"]
    db.commit()

    assert session_store.validate(token).permissions == ["orders:view"]


def test_session_owner_must_match_subject(db, session_store, super_admin, manager):
    token = _token_for(super_admin)
    session_store.create(manager.admin_id, token)
    assert session_store.validate(token) is None


def test_update_last_login(db, session_store, manager):
    assert manager.last_login is None
    session_store.update_last_login(manager.admin_id)
    db.refresh(manager)
    assert manager.last_login is not None


def test_purge_expired(db, session_store, super_admin):
    fresh = _token_for(super_admin)
    session_store.create(super_admin.admin_id, fresh)

    stale = _token_for(super_admin)
    _store_at(db, datetime.utcnow() - timedelta(days=8)).create(super_admin.admin_id, stale)

    assert session_store.purge_expired() == 1
    assert db.query(AdminSession).count() == 1
    assert session_store.validate(fresh) is not None
