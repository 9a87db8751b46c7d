"""
Direct messaging routes
"""
import logging

from flask import Blueprint, request
from sqlalchemy import and_, func, or_

from marketplace.extensions import db
from marketplace.middleware.auth import require_auth
from marketplace.middleware.validation import validate_json
from marketplace.models import Booking, Message, User, utcnow
from marketplace.schemas import MarkReadSchema, SendMessageSchema
from marketplace.services.notifications import notify_message_received
from marketplace.utils.pagination import get_pagination_args, paginate_query
from marketplace.utils.responses import error_response, success_response

logger = logging.getLogger(__name__)

messages_bp = Blueprint("messages", __name__, url_prefix="/api/messages")


# ---------------------------------------------------------------------------
# POST /api/messages
# ---------------------------------------------------------------------------
@messages_bp.route("", methods=["POST"])
@require_auth
@validate_json(SendMessageSchema)
def send_message(current_user, payload):
    """Send a message.

    Body JSON:
        receiverId: str (required)
        content: str 1-1000 (required)
        messageType: TEXT | IMAGE | FILE | SYSTEM (optional)
        bookingId: str (optional)
        attachments: list (optional)
    """
    receiver = db.session.get(User, payload.receiver_id)
    if not receiver or not receiver.is_active:
        return error_response("Receiver not found", 404)
    if receiver.id == current_user.id:
        return error_response("You cannot send a message to yourself", 400)

    if payload.booking_id:
        booking = db.session.get(Booking, payload.booking_id)
        if not booking:
            return error_response("Booking not found", 404)
        if not booking.involves(current_user.id):
            return error_response("Access denied", 403)

    message = Message(
        sender_id=current_user.id,
        receiver_id=receiver.id,
        booking_id=payload.booking_id,
        content=payload.content,
        message_type=payload.message_type,
        attachments=payload.attachments or [],
    )
    db.session.add(message)
    db.session.commit()

    notify_message_received(message)

    return success_response(
        message.to_dict(include_users=True),
        message="Message sent successfully",
        status=201,
    )


# ---------------------------------------------------------------------------
# GET /api/messages/conversations
# ---------------------------------------------------------------------------
@messages_bp.route("/conversations", methods=["GET"])
@require_auth
def get_conversations(current_user):
    """One entry per counterpart, most recent conversation first."""
    uid = current_user.id
    messages = (
        Message.query.filter(or_(Message.sender_id == uid, Message.receiver_id == uid))
        .order_by(Message.created_at.desc(), Message.id.desc())
        .all()
    )

    unread = dict(
        db.session.query(Message.sender_id, func.count(Message.id))
        .filter(Message.receiver_id == uid, Message.is_read.is_(False))
        .group_by(Message.sender_id)
        .all()
    )

    conversations = []
    seen = set()
    for message in messages:
        other_id = message.receiver_id if message.sender_id == uid else message.sender_id
        if other_id in seen:
            continue
        seen.add(other_id)
        other = message.other_party(uid)
        conversations.append({
            "otherUser": other.to_summary() if other else None,
            "lastMessage": message.to_dict(),
            "unreadCount": unread.get(other_id, 0),
        })

    return success_response(conversations)


# ---------------------------------------------------------------------------
# GET /api/messages/conversation?otherUserId=&bookingId=
# ---------------------------------------------------------------------------
@messages_bp.route("/conversation", methods=["GET"])
@require_auth
def get_conversation(current_user):
    other_user_id = request.args.get("otherUserId")
    if not other_user_id:
        return error_response("otherUserId is required", 400)

    uid = current_user.id
    page, limit = get_pagination_args(default_limit=50)
    query = Message.query.filter(or_(
        and_(Message.sender_id == uid, Message.receiver_id == other_user_id),
        and_(Message.sender_id == other_user_id, Message.receiver_id == uid),
    ))
    booking_id = request.args.get("bookingId")
    if booking_id:
        query = query.filter(Message.booking_id == booking_id)

    # Newest page first, each page shown in chronological order
    query = query.order_by(Message.created_at.desc(), Message.id.desc())
    messages, pagination = paginate_query(query, page, limit)
    messages.reverse()

    return success_response(
        [m.to_dict(include_users=True) for m in messages],
        pagination=pagination,
    )


# ---------------------------------------------------------------------------
# PUT /api/messages/read
# ---------------------------------------------------------------------------
@messages_bp.route("/read", methods=["PUT"])
@require_auth
@validate_json(MarkReadSchema)
def mark_as_read(current_user, payload):
    """
    Body JSON:
        messageIds: list of str (required)
    """
    updated = 0
    if payload.message_ids:
        updated = (
            Message.query.filter(
                Message.id.in_(payload.message_ids),
                Message.receiver_id == current_user.id,
                Message.is_read.is_(False),
            )
            .update({"is_read": True, "read_at": utcnow()}, synchronize_session=False)
        )
        db.session.commit()

    return success_response({"updated": updated}, message="Messages marked as read")


# ---------------------------------------------------------------------------
# DELETE /api/messages/<id>
# ---------------------------------------------------------------------------
@messages_bp.route("/<message_id>", methods=["DELETE"])
@require_auth
def delete_message(message_id, current_user):
    message = db.session.get(Message, message_id)
    if not message:
        return error_response("Message not found", 404)
    if message.sender_id != current_user.id:
        return error_response("You can only delete your own messages", 403)

    db.session.delete(message)
    db.session.commit()
    return success_response(message="Message deleted successfully")
