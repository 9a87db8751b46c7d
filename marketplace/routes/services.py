"""
Service listing routes: public browsing plus provider CRUD
"""
import logging

from flask import Blueprint, request
from sqlalchemy import func, or_

from marketplace.extensions import db
from marketplace.middleware.auth import require_auth, require_role
from marketplace.middleware.validation import validate_json
from marketplace.models import (
    Booking, Review, Service, ServiceCategory, ServiceSubcategory,
)
from marketplace.schemas import ServiceSchema
from marketplace.utils.pagination import get_pagination_args, paginate_query
from marketplace.utils.responses import (
    error_response, success_response, validation_error_response,
)

logger = logging.getLogger(__name__)

services_bp = Blueprint("services", __name__, url_prefix="/api/services")

SEARCH_COLUMNS = (
    Service.title, Service.title_lv, Service.title_ru, Service.title_en,
    Service.description, Service.description_lv, Service.description_ru,
    Service.description_en,
)


def _float_arg(name):
    raw = request.args.get(name)
    if raw in (None, ""):
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _counts_for(service_ids):
    """{service_id: {"reviews": n, "bookings": m}} for a page of services."""
    if not service_ids:
        return {}
    reviews = dict(
        db.session.query(Review.service_id, func.count(Review.id))
        .filter(Review.service_id.in_(service_ids), Review.is_approved.is_(True))
        .group_by(Review.service_id)
        .all()
    )
    bookings = dict(
        db.session.query(Booking.service_id, func.count(Booking.id))
        .filter(Booking.service_id.in_(service_ids))
        .group_by(Booking.service_id)
        .all()
    )
    return {
        sid: {"reviews": reviews.get(sid, 0), "bookings": bookings.get(sid, 0)}
        for sid in service_ids
    }


def _check_category(payload):
    """Return a validation error response if the category tree is inconsistent."""
    category = db.session.get(ServiceCategory, payload.category_id)
    if not category or not category.is_active:
        return validation_error_response([{
            "field": "categoryId",
            "message": "Category not found",
            "value": payload.category_id,
        }])
    if payload.subcategory_id:
        sub = db.session.get(ServiceSubcategory, payload.subcategory_id)
        if not sub or sub.category_id != category.id:
            return validation_error_response([{
                "field": "subcategoryId",
                "message": "Subcategory does not belong to the selected category",
                "value": payload.subcategory_id,
            }])
    return None


def _owned_service(service_id, current_user):
    """Return (service, None) or (None, error response)."""
    service = db.session.get(Service, service_id)
    if not service or not service.is_active:
        return None, error_response("Service not found", 404)
    if service.provider_id != current_user.id:
        return None, error_response("You can only modify your own services", 403)
    return service, None


# ---------------------------------------------------------------------------
# GET /api/services
# ---------------------------------------------------------------------------
@services_bp.route("", methods=["GET"])
def list_services():
    """List active, available services.

    Query params:
        category, subcategory, providerId: ids
        search: text matched against titles and descriptions in every language
        minPrice, maxPrice, rating: numbers
        lang: lv | ru | en, selects displayTitle / displayDescription
        page, limit
    """
    page, limit = get_pagination_args()
    lang = request.args.get("lang")

    query = Service.query.filter(Service.is_active.is_(True), Service.is_available.is_(True))

    if request.args.get("category"):
        query = query.filter(Service.category_id == request.args["category"])
    if request.args.get("subcategory"):
        query = query.filter(Service.subcategory_id == request.args["subcategory"])
    if request.args.get("providerId"):
        query = query.filter(Service.provider_id == request.args["providerId"])

    search = (request.args.get("search") or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(*[col.ilike(pattern) for col in SEARCH_COLUMNS]))

    min_price = _float_arg("minPrice")
    if min_price is not None:
        query = query.filter(Service.price >= min_price)
    max_price = _float_arg("maxPrice")
    if max_price is not None:
        query = query.filter(Service.price <= max_price)
    min_rating = _float_arg("rating")
    if min_rating is not None:
        query = query.filter(Service.average_rating >= min_rating)

    query = query.order_by(Service.created_at.desc(), Service.id)
    services, pagination = paginate_query(query, page, limit)

    counts = _counts_for([s.id for s in services])
    data = [
        s.to_dict(lang=lang, include_provider=True, counts=counts.get(s.id))
        for s in services
    ]
    return success_response(data, pagination=pagination)


# ---------------------------------------------------------------------------
# GET /api/services/categories
# ---------------------------------------------------------------------------
@services_bp.route("/categories", methods=["GET"])
def list_categories():
    categories = (
        ServiceCategory.query.filter_by(is_active=True)
        .order_by(ServiceCategory.name)
        .all()
    )
    return success_response([c.to_dict(include_subcategories=True) for c in categories])


# ---------------------------------------------------------------------------
# GET /api/services/<id>
# ---------------------------------------------------------------------------
@services_bp.route("/<service_id>", methods=["GET"])
def get_service(service_id):
    service = db.session.get(Service, service_id)
    if not service or not service.is_active:
        return error_response("Service not found", 404)

    reviews = (
        Review.query.filter_by(service_id=service.id, is_approved=True)
        .order_by(Review.created_at.desc())
        .limit(10)
        .all()
    )
    data = service.to_dict(
        lang=request.args.get("lang"),
        include_provider=True,
        counts=_counts_for([service.id])[service.id],
    )
    data["reviews"] = [r.to_dict(include_related=True) for r in reviews]
    return success_response(data)


# ---------------------------------------------------------------------------
# POST /api/services
# ---------------------------------------------------------------------------
@services_bp.route("", methods=["POST"])
@require_auth
@require_role("PROVIDER")
@validate_json(ServiceSchema)
def create_service(current_user, payload):
    """Create a listing owned by the caller.

    Body JSON:
        title, description, price, priceType, categoryId, serviceArea (required)
        subcategoryId, localized titles/descriptions, currency, travelFee,
        images, videos, isAvailable (optional)
    """
    invalid = _check_category(payload)
    if invalid:
        return invalid

    fields = {k: v for k, v in payload.changes().items() if v is not None}
    service = Service(provider_id=current_user.id, **fields)
    db.session.add(service)
    db.session.commit()
    logger.info("Service %s created by %s", service.id, current_user.id)

    return success_response(
        service.to_dict(include_provider=True),
        message="Service created successfully",
        status=201,
    )


# ---------------------------------------------------------------------------
# PUT /api/services/<id>
# ---------------------------------------------------------------------------
@services_bp.route("/<service_id>", methods=["PUT"])
@require_auth
@require_role("PROVIDER")
@validate_json(ServiceSchema)
def update_service(service_id, current_user, payload):
    service, error = _owned_service(service_id, current_user)
    if error:
        return error

    invalid = _check_category(payload)
    if invalid:
        return invalid

    changes = payload.changes()
    # A subcategory never outlives a move to another category
    if service.category_id != payload.category_id and "subcategory_id" not in changes:
        service.subcategory_id = None

    for field, value in changes.items():
        if value is None and field in ("images", "videos", "currency", "is_available"):
            continue
        setattr(service, field, value)
    db.session.commit()

    return success_response(
        service.to_dict(include_provider=True),
        message="Service updated successfully",
    )


# ---------------------------------------------------------------------------
# DELETE /api/services/<id>
# ---------------------------------------------------------------------------
@services_bp.route("/<service_id>", methods=["DELETE"])
@require_auth
@require_role("PROVIDER")
def delete_service(service_id, current_user):
    """Withdraw a listing. Bookings and reviews keep pointing at the row."""
    service, error = _owned_service(service_id, current_user)
    if error:
        return error

    service.is_active = False
    service.is_available = False
    db.session.commit()
    logger.info("Service %s withdrawn by %s", service.id, current_user.id)

    return success_response(message="Service deleted successfully")
