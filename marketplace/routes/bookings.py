"""
Booking routes for customers and providers
"""
import logging

from flask import Blueprint, request

from marketplace.extensions import db
from marketplace.middleware.auth import require_auth, require_role
from marketplace.middleware.validation import validate_json
from marketplace.models import Booking, Service, utcnow
from marketplace.models.base import BOOKING_STATUSES
from marketplace.schemas import BookingStatusSchema, CancelBookingSchema, CreateBookingSchema
from marketplace.services.notifications import notify_booking_created, notify_booking_status
from marketplace.utils.pagination import get_pagination_args, paginate_query
from marketplace.utils.responses import error_response, success_response

logger = logging.getLogger(__name__)

bookings_bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


def _list_bookings(**filters):
    page, limit = get_pagination_args()
    query = Booking.query.filter_by(**filters)

    status = request.args.get("status")
    if status in BOOKING_STATUSES:
        query = query.filter(Booking.status == status)

    query = query.order_by(Booking.created_at.desc(), Booking.id)
    bookings, pagination = paginate_query(query, page, limit)
    return success_response(
        [b.to_dict(include_related=True) for b in bookings],
        pagination=pagination,
    )


def _booking_detail(booking_id, current_user):
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return error_response("Booking not found", 404)
    if not booking.involves(current_user.id):
        return error_response("Access denied", 403)
    return success_response(booking.to_dict(include_related=True, include_messages=True))


# ---------------------------------------------------------------------------
# POST /api/bookings
# ---------------------------------------------------------------------------
@bookings_bp.route("", methods=["POST"])
@require_auth
@validate_json(CreateBookingSchema)
def create_booking(current_user, payload):
    """Request a booking.

    Body JSON:
        serviceId: str (required)
        scheduledDate: ISO-8601 (required)
        address: str 5-200 (required)
        city: str 2-50 (required)
        totalAmount: number >= 0 (required)
        scheduledTime, duration, postalCode, notes (optional)
    """
    service = db.session.get(Service, payload.service_id)
    if not service or not service.is_active:
        return error_response("Service not found", 404)
    if not service.is_available:
        return error_response("Service is not available", 400)
    if service.provider_id == current_user.id:
        return error_response("You cannot book your own service", 400)

    booking = Booking(
        customer_id=current_user.id,
        provider_id=service.provider_id,
        service_id=service.id,
        scheduled_date=payload.scheduled_date,
        scheduled_time=payload.scheduled_time,
        duration=payload.duration,
        address=payload.address,
        city=payload.city,
        postal_code=payload.postal_code,
        notes=payload.notes,
        total_amount=payload.total_amount,
        status="PENDING",
    )
    db.session.add(booking)
    db.session.commit()
    logger.info("Booking %s created for service %s", booking.id, service.id)

    notify_booking_created(booking)

    return success_response(
        booking.to_dict(include_related=True),
        message="Booking created successfully",
        status=201,
    )


# ---------------------------------------------------------------------------
# Customer views
# ---------------------------------------------------------------------------
@bookings_bp.route("/user", methods=["GET"])
@require_auth
def get_user_bookings(current_user):
    return _list_bookings(customer_id=current_user.id)


@bookings_bp.route("/user/<booking_id>", methods=["GET"])
@require_auth
def get_user_booking(booking_id, current_user):
    return _booking_detail(booking_id, current_user)


@bookings_bp.route("/user/<booking_id>/cancel", methods=["PUT"])
@require_auth
@validate_json(CancelBookingSchema)
def cancel_booking(booking_id, current_user, payload):
    """Cancel one of the caller's bookings.

    Body JSON:
        reason: str (optional)
    """
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return error_response("Booking not found", 404)
    if booking.customer_id != current_user.id:
        return error_response("You can only cancel your own bookings", 403)
    if booking.status == "CANCELLED":
        return error_response("Booking is already cancelled", 400)
    if booking.status == "COMPLETED":
        return error_response("Completed bookings cannot be cancelled", 400)

    booking.status = "CANCELLED"
    booking.cancelled_at = utcnow()
    booking.cancellation_reason = payload.reason
    db.session.commit()
    logger.info("Booking %s cancelled by customer", booking.id)

    notify_booking_status(booking, booking.provider_id)

    return success_response(
        booking.to_dict(include_related=True),
        message="Booking cancelled successfully",
    )


# ---------------------------------------------------------------------------
# Provider views
# ---------------------------------------------------------------------------
@bookings_bp.route("/provider", methods=["GET"])
@require_auth
@require_role("PROVIDER")
def get_provider_bookings(current_user):
    return _list_bookings(provider_id=current_user.id)


@bookings_bp.route("/provider/<booking_id>", methods=["GET"])
@require_auth
@require_role("PROVIDER")
def get_provider_booking(booking_id, current_user):
    return _booking_detail(booking_id, current_user)


@bookings_bp.route("/provider/<booking_id>/status", methods=["PUT"])
@require_auth
@require_role("PROVIDER")
@validate_json(BookingStatusSchema)
def update_booking_status(booking_id, current_user, payload):
    """Move a booking through its lifecycle.

    Body JSON:
        status: PENDING | CONFIRMED | IN_PROGRESS | COMPLETED | CANCELLED (required)
        completionNotes: str (optional, used with COMPLETED)
    """
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return error_response("Booking not found", 404)
    if booking.provider_id != current_user.id:
        return error_response("Only the service provider can update booking status", 403)
    if booking.status == payload.status:
        return error_response(f"Booking is already {payload.status}", 400)
    if booking.is_terminal:
        return error_response(f"Cannot change status of a {booking.status} booking", 400)

    booking.status = payload.status
    if payload.status == "COMPLETED":
        booking.completed_at = utcnow()
        booking.completion_notes = payload.completion_notes
    elif payload.status == "CANCELLED":
        booking.cancelled_at = utcnow()
    db.session.commit()
    logger.info("Booking %s -> %s", booking.id, booking.status)

    notify_booking_status(booking, booking.customer_id)

    return success_response(
        booking.to_dict(include_related=True),
        message="Booking status updated successfully",
    )
