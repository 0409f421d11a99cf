"""JWT utilities: admin token signing and verification.

Tokens are self-contained but are never trusted alone. The role and
permissions they embed are a snapshot taken at login; every request is
re-checked against the live session row and the live admin record.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from adminauth.config import settings
from adminauth.utils.logger import logger

TOKEN_TYPE = "admin"


class TokenFailure(str, Enum):
    MALFORMED = "malformed"
    SIGNATURE_INVALID = "signature_invalid"
    EXPIRED = "expired"


class TokenVerification(NamedTuple):
    """Outcome of :func:`verify_access_token`; exactly one field is set."""
    claims: Optional[Dict[str, Any]] = None
    failure: Optional[TokenFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


# ---------------------------------------------------------------------------
# Token creation
# ---------------------------------------------------------------------------

def create_access_token(
    admin_id: str,
    email: str,
    role: str,
    permissions: List[str],
) -> str:
    """Sign and return an admin access token.

    Args:
        admin_id:    Value for the 'sub' claim and the 'adminId' claim.
        email:       Admin email at issuance time.
        role:        Admin role at issuance time.
        permissions: Admin permission list at issuance time.

    Returns:
        Signed JWT string.
    """
    now = int(datetime.now(timezone.utc).timestamp())

    payload: Dict[str, Any] = {
        "sub": admin_id,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + settings.JWT_EXPIRE_SECONDS,
        "type": TOKEN_TYPE,
        "adminId": admin_id,
        "email": email,
        "role": role,
        "permissions": list(permissions),
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# ---------------------------------------------------------------------------
# Token verification
# ---------------------------------------------------------------------------

def verify_access_token(token: str) -> TokenVerification:
    """Check signature and expiry of ``token``.

    Never raises for bad input; the failure kind is reported instead so the
    caller can map every kind to the same outward 401.
    """
    if not token:
        return TokenVerification(failure=TokenFailure.MALFORMED)

    try:
        jwt.get_unverified_claims(token)
    except JWTError:
        return TokenVerification(failure=TokenFailure.MALFORMED)

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        return TokenVerification(failure=TokenFailure.EXPIRED)
    except JWTClaimsError:
        return TokenVerification(failure=TokenFailure.MALFORMED)
    except JWTError as exc:
        logger.debug(f"JWT decode failed: {exc}")
        return TokenVerification(failure=TokenFailure.SIGNATURE_INVALID)

    if payload.get("type") != TOKEN_TYPE or not payload.get("sub"):
        return TokenVerification(failure=TokenFailure.MALFORMED)

    return TokenVerification(claims=payload)
