"""Password hashing and verification (bcrypt via passlib)"""
import hashlib
import secrets

from passlib.context import CryptContext

from adminauth.config import settings

pwd = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``.

    Raises:
        ValueError: if ``password`` is empty.
    """
    if not password:
        raise ValueError("Password must not be empty")
    return pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash.

    Any malformed or unrecognised hash counts as a mismatch, so callers can
    treat ``False`` uniformly as "not authenticated".
    """
    if not password or not password_hash:
        return False
    try:
        return pwd.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


# --------------------------
# Password reset tokens
# --------------------------

def mint_reset_token() -> str:
    return f"rst_{secrets.token_urlsafe(32)}"


def hash_reset_token(token: str) -> str:
    """Stable lookup hash of a reset token, peppered with the server secret."""
    h = hashlib.sha256()
    h.update(settings.JWT_SECRET.encode("utf-8"))
    h.update(b":")
    h.update(token.encode("utf-8"))
    return h.hexdigest()
