"""
Transactional email.

No outbound provider is wired up: messages are written to the log with a
[DEV] prefix so links can be copied from the console during development.
"""
import logging

from flask import current_app

logger = logging.getLogger(__name__)


def send_email(to_email, subject, body):
    """Log an email. Never raises."""
    try:
        logger.info("[DEV] Email to %s: %s\n%s", to_email, subject, body)
    except Exception:
        logger.exception("Failed to send email to %s", to_email)


def _link(path, token):
    base = current_app.config.get("FRONTEND_URL", "http://localhost:3000").rstrip("/")
    return f"{base}{path}?token={token}"


def send_verification_email(user, token):
    send_email(
        user.email,
        "Verify your email address",
        f"Hello {user.first_name},\n\nConfirm your email address:\n"
        f"{_link('/verify-email', token)}\n\nThe link is valid for 24 hours.",
    )


def send_password_reset_email(user, token):
    send_email(
        user.email,
        "Reset your password",
        f"Hello {user.first_name},\n\nReset your password here:\n"
        f"{_link('/reset-password', token)}\n\n"
        "The link is valid for one hour. If you did not ask for a reset, ignore this email.",
    )
