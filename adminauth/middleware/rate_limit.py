"""Rate limiting middleware for API protection"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from adminauth.config import settings


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting.

    Keyed by client address. Protected endpoints resolve their dependencies
    before the limit is checked, so once ``require_admin`` has validated the
    session the bucket narrows to that admin. Raw header contents never feed
    the key.
    """
    admin = getattr(request.state, "admin", None)
    if admin is not None:
        return f"admin:{admin.id}"

    return get_remote_address(request)


# Create limiter instance
limiter = Limiter(
    key_func=get_identifier,
    default_limits=settings.RATE_LIMIT_DEFAULT,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


# Rate limit configurations for different endpoints
RATE_LIMITS = {
    "login": settings.RATE_LIMIT_LOGIN,
    "forgot_password": "5/minute",
    "reset_password": "10/minute",
    "admin_write": "50/hour",
}


def get_rate_limit(endpoint: str) -> str:
    """Get rate limit for specific endpoint"""
    return RATE_LIMITS.get(endpoint, settings.RATE_LIMIT_DEFAULT[0])
