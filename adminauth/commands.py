"""Operator commands.

    adminauth-seed            create the first super admin and manager
    adminauth-purge-sessions  delete expired admin sessions
"""
import sys

from adminauth.config import settings
from adminauth.database import SessionLocal
from adminauth.repositories.admins import AdminRepository
from adminauth.repositories.sessions import SessionRepository
from adminauth.services.session_store import SessionStore
from adminauth.utils.passwords import hash_password
from adminauth.utils.permissions import AdminRole, permissions_for_role


def _seed_rows():
    return [
        (settings.SEED_SUPER_ADMIN_EMAIL, "Super", "Admin", AdminRole.SUPER_ADMIN),
        (settings.SEED_MANAGER_EMAIL, "Content", "Manager", AdminRole.MANAGER),
    ]


def seed_admins(admins: AdminRepository, password: str) -> int:
    """Create the bootstrap admins when the table is empty; returns how many were created."""
    if admins.count() > 0:
        return 0

    rows = _seed_rows()
    password_hash = hash_password(password)
    for email, first_name, last_name, role in rows:
        admins.create(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role.value,
            permissions=permissions_for_role(role),
        )
    admins.db.commit()
    return len(rows)


def seed() -> None:
    print("\n🌱 Seeding admin users...\n")

    password = settings.SEED_ADMIN_PASSWORD
    if not password or len(password) < settings.PASSWORD_MIN_LENGTH:
        print(f"  ❌ SEED_ADMIN_PASSWORD must be set (at least {settings.PASSWORD_MIN_LENGTH} characters)")
        sys.exit(1)

    db = SessionLocal()
    try:
        admins = AdminRepository(db)
        created = seed_admins(admins, password)
        if created:
            print(f"  ✓ Created {created} admin users")
            print(f"    super_admin: {settings.SEED_SUPER_ADMIN_EMAIL}")
            print(f"    manager:     {settings.SEED_MANAGER_EMAIL}")
        else:
            print(f"  ✓ Admin users already exist ({admins.count()} found), nothing to do")
    finally:
        db.close()


def purge_sessions() -> None:
    db = SessionLocal()
    try:
        store = SessionStore(SessionRepository(db), AdminRepository(db))
        deleted = store.purge_expired()
        print(f"  ✓ Deleted {deleted} expired admin sessions")
    finally:
        db.close()
