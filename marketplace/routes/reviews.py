"""
Review routes.
Customers review completed bookings; providers may respond.
"""
import logging

from flask import Blueprint
from sqlalchemy.exc import IntegrityError

from marketplace.extensions import db
from marketplace.middleware.auth import require_auth, require_role
from marketplace.middleware.validation import validate_json
from marketplace.models import Booking, Review, utcnow
from marketplace.schemas import CreateReviewSchema, ReviewResponseSchema, UpdateReviewSchema
from marketplace.services.notifications import notify_review_received
from marketplace.services.ratings import refresh_service_rating
from marketplace.utils.pagination import get_pagination_args, paginate_query
from marketplace.utils.responses import error_response, success_response

logger = logging.getLogger(__name__)

reviews_bp = Blueprint("reviews", __name__, url_prefix="/api/reviews")


def _already_reviewed(customer_id, booking_id):
    return Review.query.filter_by(customer_id=customer_id, booking_id=booking_id).first() is not None


def _list_reviews(**filters):
    page, limit = get_pagination_args()
    query = (
        Review.query.filter_by(is_approved=True, **filters)
        .order_by(Review.created_at.desc(), Review.id)
    )
    reviews, pagination = paginate_query(query, page, limit)
    return success_response(
        [r.to_dict(include_related=True) for r in reviews],
        pagination=pagination,
    )


# ---------------------------------------------------------------------------
# GET /api/reviews/service/<service_id> and /provider/<provider_id>
# ---------------------------------------------------------------------------
@reviews_bp.route("/service/<service_id>", methods=["GET"])
def get_service_reviews(service_id):
    return _list_reviews(service_id=service_id)


@reviews_bp.route("/provider/<provider_id>", methods=["GET"])
def get_provider_reviews(provider_id):
    return _list_reviews(provider_id=provider_id)


# ---------------------------------------------------------------------------
# POST /api/reviews
# ---------------------------------------------------------------------------
@reviews_bp.route("", methods=["POST"])
@require_auth
@validate_json(CreateReviewSchema)
def create_review(current_user, payload):
    """Review a completed booking.

    Body JSON:
        bookingId: str (required)
        rating: int 1-5 (required)
        title: str 3-100 (optional)
        comment: str 10-500 (optional)
        images: list (optional)
    """
    booking = db.session.get(Booking, payload.booking_id)
    if not booking:
        return error_response("Booking not found", 404)
    if booking.customer_id != current_user.id:
        return error_response("You can only review your own bookings", 403)
    if booking.status != "COMPLETED":
        return error_response("You can only review completed bookings", 400)

    if _already_reviewed(current_user.id, booking.id):
        return error_response("You have already reviewed this booking", 400)

    review = Review(
        customer_id=current_user.id,
        provider_id=booking.provider_id,
        service_id=booking.service_id,
        booking_id=booking.id,
        rating=payload.rating,
        title=payload.title,
        comment=payload.comment,
        images=payload.images or [],
    )
    db.session.add(review)
    try:
        refresh_service_rating(booking.service_id)
        db.session.commit()
    except IntegrityError:
        # A concurrent submission for the same booking won the unique constraint
        db.session.rollback()
        return error_response("You have already reviewed this booking", 400)
    logger.info("Review %s created for service %s", review.id, review.service_id)

    notify_review_received(review)

    return success_response(
        review.to_dict(include_related=True),
        message="Review created successfully",
        status=201,
    )


def _own_review(review_id, current_user, action):
    review = db.session.get(Review, review_id)
    if not review:
        return None, error_response("Review not found", 404)
    if review.customer_id != current_user.id:
        return None, error_response(f"You can only {action} your own reviews", 403)
    return review, None


# ---------------------------------------------------------------------------
# PUT /api/reviews/<id>
# ---------------------------------------------------------------------------
@reviews_bp.route("/<review_id>", methods=["PUT"])
@require_auth
@validate_json(UpdateReviewSchema)
def update_review(review_id, current_user, payload):
    review, error = _own_review(review_id, current_user, "update")
    if error:
        return error

    for field, value in payload.changes().items():
        if field == "rating" and value is None:
            continue
        if field == "images":
            value = value or []
        setattr(review, field, value)
    refresh_service_rating(review.service_id)
    db.session.commit()

    return success_response(
        review.to_dict(include_related=True),
        message="Review updated successfully",
    )


# ---------------------------------------------------------------------------
# DELETE /api/reviews/<id>
# ---------------------------------------------------------------------------
@reviews_bp.route("/<review_id>", methods=["DELETE"])
@require_auth
def delete_review(review_id, current_user):
    review, error = _own_review(review_id, current_user, "delete")
    if error:
        return error

    service_id = review.service_id
    db.session.delete(review)
    refresh_service_rating(service_id)
    db.session.commit()
    logger.info("Review %s deleted", review_id)

    return success_response(message="Review deleted successfully")


# ---------------------------------------------------------------------------
# POST /api/reviews/<id>/respond
# ---------------------------------------------------------------------------
@reviews_bp.route("/<review_id>/respond", methods=["POST"])
@require_auth
@require_role("PROVIDER")
@validate_json(ReviewResponseSchema)
def respond_to_review(review_id, current_user, payload):
    """
    Body JSON:
        response: str (required)
    """
    review = db.session.get(Review, review_id)
    if not review:
        return error_response("Review not found", 404)
    if review.provider_id != current_user.id:
        return error_response("You can only respond to reviews for your services", 403)

    review.response = payload.response
    review.response_date = utcnow()
    db.session.commit()

    return success_response(
        review.to_dict(include_related=True),
        message="Response added successfully",
    )
