"""Direct messages between users, optionally tied to a booking"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship

from marketplace.extensions import db
from .base import MESSAGE_TYPES, generate_uuid, in_check, isoformat, utcnow


class Message(db.Model):
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    message_type = Column(String(20), nullable=False, default="TEXT")
    attachments = Column(JSON, nullable=False, default=list)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)

    __table_args__ = (
        in_check("message_type", MESSAGE_TYPES, "ck_message_type"),
    )

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])
    booking = relationship("Booking", back_populates="messages")

    def other_party(self, user_id):
        return self.receiver if self.sender_id == user_id else self.sender

    def to_dict(self, include_users=False):
        data = {
            "id": self.id,
            "senderId": self.sender_id,
            "receiverId": self.receiver_id,
            "bookingId": self.booking_id,
            "content": self.content,
            "messageType": self.message_type,
            "attachments": self.attachments or [],
            "isRead": self.is_read,
            "readAt": isoformat(self.read_at),
            "createdAt": isoformat(self.created_at),
        }
        if include_users:
            data["sender"] = self.sender.to_summary() if self.sender else None
            data["receiver"] = self.receiver.to_summary() if self.receiver else None
        return data
