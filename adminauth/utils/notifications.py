"""Outbound admin notifications.

Email delivery is not wired up; messages are written to the log so an
operator can pick up reset links in development.
"""
from adminauth.utils.logger import logger


def send_password_reset(email: str, reset_url: str) -> None:
    logger.info(
        f"Password reset link for {email}: {reset_url}",
        extra={"action": "send_password_reset"},
    )
