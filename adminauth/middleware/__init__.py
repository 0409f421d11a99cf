"""Middleware modules for production-ready features"""
from adminauth.middleware.monitoring import (
    MonitoringMiddleware,
    record_auth_failure,
    record_login_attempt,
    record_sessions_revoked,
)
from adminauth.middleware.rate_limit import get_rate_limit, limiter

__all__ = [
    "MonitoringMiddleware",
    "record_auth_failure",
    "record_login_attempt",
    "record_sessions_revoked",
    "limiter",
    "get_rate_limit",
]
