"""
In-app notification helpers.

No function in this module raises. A notification failure is logged and
never takes down the booking, review or message flow that triggered it.
Call these after the triggering write has been committed.
"""
import logging

from marketplace.extensions import db
from marketplace.models import Notification

logger = logging.getLogger(__name__)


def create_notification(user_id, title, message, type="INFO", priority="NORMAL",
                        action_url=None, action_text=None, related_id=None,
                        related_type=None, metadata=None, expires_at=None):
    """Create and commit a notification. Returns it, or None on failure."""
    try:
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            priority=priority,
            action_url=action_url,
            action_text=action_text,
            related_id=related_id,
            related_type=related_type,
            extra_data=metadata,
            expires_at=expires_at,
        )
        db.session.add(notification)
        db.session.commit()
        return notification
    except Exception:
        db.session.rollback()
        logger.exception("Failed to create notification for user %s", user_id)
        return None


# ---------------------------------------------------------------------------
# Flow-specific notifications
# ---------------------------------------------------------------------------

def notify_welcome(user):
    return create_notification(
        user.id,
        "Welcome to VisiPakalpojumi!",
        f"Hello {user.first_name}, your account is ready. "
        "Browse services or complete your profile to get started.",
        type="INFO",
        action_url="/dashboard",
        action_text="Open dashboard",
    )


def notify_booking_created(booking):
    service_title = booking.service.title if booking.service else "your service"
    return create_notification(
        booking.provider_id,
        "New booking request",
        f"You have a new booking request for {service_title}.",
        type="BOOKING_UPDATE",
        priority="HIGH",
        action_url=f"/bookings/{booking.id}",
        action_text="View booking",
        related_id=booking.id,
        related_type="booking",
        metadata={"status": booking.status},
    )


def notify_booking_status(booking, recipient_id):
    service_title = booking.service.title if booking.service else "your booking"
    status = booking.status.replace("_", " ").lower()
    priority = "HIGH" if booking.status in ("CANCELLED", "CONFIRMED") else "NORMAL"
    return create_notification(
        recipient_id,
        "Booking status updated",
        f"Your booking for {service_title} is now {status}.",
        type="BOOKING_UPDATE",
        priority=priority,
        action_url=f"/bookings/{booking.id}",
        action_text="View booking",
        related_id=booking.id,
        related_type="booking",
        metadata={"status": booking.status},
    )


def notify_message_received(message):
    sender_name = message.sender.full_name if message.sender else "Someone"
    preview = message.content if len(message.content) <= 100 else message.content[:97] + "..."
    return create_notification(
        message.receiver_id,
        f"New message from {sender_name}",
        preview,
        type="MESSAGE_RECEIVED",
        action_url="/messages",
        action_text="Reply",
        related_id=message.id,
        related_type="message",
    )


def notify_review_received(review):
    service_title = review.service.title if review.service else "your service"
    return create_notification(
        review.provider_id,
        "New review received",
        f"You received a {review.rating}-star review for {service_title}.",
        type="REVIEW_RECEIVED",
        action_url=f"/services/{review.service_id}",
        action_text="View review",
        related_id=review.id,
        related_type="review",
        metadata={"rating": review.rating},
    )
