"""Monitoring and observability middleware"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from adminauth.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "adminauth_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "adminauth_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

# Auth-specific metrics
login_attempts_total = Counter(
    "adminauth_login_attempts_total",
    "Total admin login attempts",
    ["outcome"]  # success, invalid_credentials, inactive
)

sessions_revoked_total = Counter(
    "adminauth_sessions_revoked_total",
    "Total admin sessions invalidated",
    ["reason"]  # logout, deactivation, password_reset, admin_revoke
)

authentication_failures_total = Counter(
    "adminauth_authentication_failures_total",
    "Total authentication failures on protected endpoints",
    ["type"]  # unauthenticated, forbidden
)

# Error metrics
http_errors_total = Counter(
    "adminauth_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

SLOW_REQUEST_SECONDS = 2.0


def _route_label(request: Request) -> str:
    """Templated route path ("/api/admin/admins/{admin_id}") so admin ids do not
    become label values; unmatched paths collapse to one label."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Count and time every request, tag it with a request id"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get("x-request-id") or f"req_{uuid.uuid4().hex[:16]}"
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            http_errors_total.labels(method=request.method, endpoint=_route_label(request), status=500).inc()
            logger.error(
                f"Request failed: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration": round(time.perf_counter() - started, 4),
                },
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        endpoint = _route_label(request)
        status = response.status_code

        http_requests_total.labels(method=request.method, endpoint=endpoint, status=status).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(duration)
        if status >= 400:
            http_errors_total.labels(method=request.method, endpoint=endpoint, status=status).inc()

        # bcrypt makes login the slowest legitimate path
        if duration > SLOW_REQUEST_SECONDS:
            admin = getattr(request.state, "admin", None)
            logger.warning(
                f"Slow request: {request.method} {endpoint}",
                extra={
                    "request_id": request_id,
                    "admin_id": getattr(admin, "id", None),
                    "path": request.url.path,
                    "duration": round(duration, 4),
                    "status": status,
                },
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response



def record_login_attempt(outcome: str):
    """Record login outcome"""
    login_attempts_total.labels(outcome=outcome).inc()


def record_sessions_revoked(reason: str, count: int = 1):
    """Record invalidated sessions"""
    if count:
        sessions_revoked_total.labels(reason=reason).inc(count)


def record_auth_failure(auth_type: str):
    """Record authentication failure"""
    authentication_failures_total.labels(type=auth_type).inc()
