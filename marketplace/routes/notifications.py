"""
In-app notification routes
"""
from flask import Blueprint, request
from sqlalchemy import or_

from marketplace.extensions import db
from marketplace.middleware.auth import require_auth
from marketplace.models import Notification, utcnow
from marketplace.models.base import NOTIFICATION_PRIORITIES, NOTIFICATION_TYPES
from marketplace.utils.pagination import get_pagination_args, paginate_query
from marketplace.utils.responses import error_response, success_response

notifications_bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


def _visible(user_id):
    """The user's notifications that have not expired."""
    return Notification.query.filter(
        Notification.user_id == user_id,
        or_(Notification.expires_at.is_(None), Notification.expires_at > utcnow()),
    )


def _own_notification(notification_id, user_id):
    notification = db.session.get(Notification, notification_id)
    if not notification or notification.user_id != user_id:
        return None
    return notification


# ---------------------------------------------------------------------------
# GET /api/notifications
# ---------------------------------------------------------------------------
@notifications_bp.route("", methods=["GET"])
@require_auth
def list_notifications(current_user):
    """
    Query params:
        type, priority: enum filters
        isRead: true | false
        page, limit
    """
    page, limit = get_pagination_args()
    query = _visible(current_user.id)

    ntype = request.args.get("type")
    if ntype in NOTIFICATION_TYPES:
        query = query.filter(Notification.type == ntype)
    priority = request.args.get("priority")
    if priority in NOTIFICATION_PRIORITIES:
        query = query.filter(Notification.priority == priority)
    is_read = (request.args.get("isRead") or "").lower()
    if is_read in ("true", "false"):
        query = query.filter(Notification.is_read.is_(is_read == "true"))

    query = query.order_by(
        Notification.priority_rank(),
        Notification.created_at.desc(),
        Notification.id,
    )
    notifications, pagination = paginate_query(query, page, limit)
    return success_response([n.to_dict() for n in notifications], pagination=pagination)


@notifications_bp.route("/unread-count", methods=["GET"])
@require_auth
def unread_count(current_user):
    count = _visible(current_user.id).filter(Notification.is_read.is_(False)).count()
    return success_response({"count": count})


@notifications_bp.route("/<notification_id>/read", methods=["PATCH"])
@require_auth
def mark_read(notification_id, current_user):
    notification = _own_notification(notification_id, current_user.id)
    if not notification:
        return error_response("Notification not found", 404)

    if not notification.is_read:
        notification.is_read = True
        notification.read_at = utcnow()
        db.session.commit()
    return success_response(notification.to_dict(), message="Notification marked as read")


@notifications_bp.route("/mark-all-read", methods=["PATCH"])
@require_auth
def mark_all_read(current_user):
    updated = (
        Notification.query.filter_by(user_id=current_user.id, is_read=False)
        .update({"is_read": True, "read_at": utcnow()}, synchronize_session=False)
    )
    db.session.commit()
    return success_response({"updated": updated}, message="All notifications marked as read")


@notifications_bp.route("/<notification_id>", methods=["DELETE"])
@require_auth
def delete_notification(notification_id, current_user):
    notification = _own_notification(notification_id, current_user.id)
    if not notification:
        return error_response("Notification not found", 404)

    db.session.delete(notification)
    db.session.commit()
    return success_response(message="Notification deleted successfully")
