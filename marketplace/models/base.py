"""
Shared column helpers and enumerations for marketplace models
"""
import uuid
from datetime import datetime, timezone


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    return value.isoformat() if value else None


def in_check(column, values, name):
    """Build a CHECK constraint limiting `column` to the given string values."""
    from sqlalchemy import CheckConstraint

    allowed = ", ".join("'{}'".format(v) for v in values)
    return CheckConstraint("{} IN ({})".format(column, allowed), name=name)


# ---------------------------------------------------------------------------
# Enumerations (stored as strings)
# ---------------------------------------------------------------------------
ROLES = ("CUSTOMER", "PROVIDER", "ADMIN")
LANGUAGES = ("LATVIAN", "RUSSIAN", "ENGLISH")
PRICE_TYPES = ("FIXED", "HOURLY", "DAILY", "NEGOTIABLE")
BOOKING_STATUSES = ("PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELLED")
MESSAGE_TYPES = ("TEXT", "IMAGE", "FILE", "SYSTEM")
NOTIFICATION_TYPES = (
    "INFO",
    "BOOKING_UPDATE",
    "MESSAGE_RECEIVED",
    "REVIEW_RECEIVED",
    "PAYMENT_UPDATE",
    "SERVICE_UPDATE",
    "PROMOTIONAL",
)
NOTIFICATION_PRIORITIES = ("LOW", "NORMAL", "HIGH", "URGENT")

# Language code used in query strings -> column suffix
LANGUAGE_SUFFIXES = {
    "lv": "lv",
    "ru": "ru",
    "en": "en",
    "LATVIAN": "lv",
    "RUSSIAN": "ru",
    "ENGLISH": "en",
}
