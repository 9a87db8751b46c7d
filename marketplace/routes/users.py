"""
User profile routes
"""
import logging

from flask import Blueprint

from marketplace.extensions import db
from marketplace.middleware.auth import require_auth, require_role
from marketplace.middleware.validation import validate_json
from marketplace.models import Booking, ProviderProfile, Review, Service
from marketplace.schemas import ProviderProfileSchema, UpdateProfileSchema
from marketplace.utils.responses import success_response

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__, url_prefix="/api/users")


# ---------------------------------------------------------------------------
# GET /api/users/profile
# ---------------------------------------------------------------------------
@users_bp.route("/profile", methods=["GET"])
@require_auth
def get_profile(current_user):
    return success_response(current_user.to_dict(include_profile=True))


# ---------------------------------------------------------------------------
# PUT /api/users/profile
# ---------------------------------------------------------------------------
@users_bp.route("/profile", methods=["PUT"])
@require_auth
@validate_json(UpdateProfileSchema)
def update_profile(current_user, payload):
    """Update the caller's own profile.

    Body JSON (all optional):
        firstName, lastName, phone, language, avatar
    """
    for field, value in payload.changes().items():
        if field in ("first_name", "last_name", "language") and value is None:
            continue
        setattr(current_user, field, value)
    db.session.commit()

    return success_response(
        current_user.to_dict(include_profile=True),
        message="Profile updated successfully",
    )


# ---------------------------------------------------------------------------
# PUT /api/users/provider-profile
# ---------------------------------------------------------------------------
@users_bp.route("/provider-profile", methods=["PUT"])
@require_auth
@require_role("PROVIDER")
@validate_json(ProviderProfileSchema)
def update_provider_profile(current_user, payload):
    """Create or update the caller's business profile."""
    profile = current_user.provider_profile
    if profile is None:
        profile = ProviderProfile(user_id=current_user.id, certifications=[])
        db.session.add(profile)

    for field, value in payload.changes().items():
        if field == "has_insurance" and value is None:
            continue
        setattr(profile, field, value)
    db.session.commit()
    logger.info("Provider profile updated for %s", current_user.id)

    return success_response(profile.to_dict(), message="Provider profile updated successfully")


# ---------------------------------------------------------------------------
# GET /api/users/stats
# ---------------------------------------------------------------------------
@users_bp.route("/stats", methods=["GET"])
@require_auth
def get_stats(current_user):
    uid = current_user.id
    stats = {
        "bookings": Booking.query.filter_by(customer_id=uid).count(),
        "reviews": Review.query.filter_by(customer_id=uid).count(),
        "services": Service.query.filter_by(provider_id=uid, is_active=True).count(),
        "providerBookings": Booking.query.filter_by(provider_id=uid).count(),
        "providerReviews": Review.query.filter_by(provider_id=uid).count(),
    }
    return success_response(stats)


# ---------------------------------------------------------------------------
# DELETE /api/users/account
# ---------------------------------------------------------------------------
@users_bp.route("/account", methods=["DELETE"])
@require_auth
def delete_account(current_user):
    """Deactivate the caller's account. Rows are kept for bookings and reviews."""
    current_user.is_active = False
    db.session.commit()
    logger.info("Account deactivated: %s", current_user.id)
    return success_response(message="Account deleted successfully")
