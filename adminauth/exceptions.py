"""Error taxonomy for the admin auth service.

Every class maps to one HTTP status and one client-facing message. The
handlers registered in ``adminauth.main`` render them as
``{"success": false, "error": <message>}``.
"""
from typing import Optional

from adminauth.config import settings


class AdminAuthError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(AdminAuthError):
    """Unknown email or wrong password (one message, no enumeration)"""

    status_code = 401
    default_message = "Invalid credentials"


class AccountInactive(AdminAuthError):
    status_code = 401
    default_message = "Account is deactivated"


class Unauthenticated(AdminAuthError):
    """Missing, malformed, expired or invalidated token, or deactivated admin"""

    status_code = 401
    default_message = "Unauthorized"


class Forbidden(AdminAuthError):
    """Valid session without the required permission.

    Surfaced as 401 or 403 depending on AUTHZ_DENIAL_STATUS_CODE.
    """

    default_message = "Unauthorized"

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return settings.AUTHZ_DENIAL_STATUS_CODE


class ValidationFailed(AdminAuthError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(AdminAuthError):
    status_code = 404
    default_message = "Not found"
