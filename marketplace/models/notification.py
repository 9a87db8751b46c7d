"""In-app notifications"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String, Text, case

from marketplace.extensions import db
from .base import (
    NOTIFICATION_PRIORITIES, NOTIFICATION_TYPES, generate_uuid, in_check,
    isoformat, utcnow,
)


class Notification(db.Model):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(30), nullable=False, default="INFO")
    priority = Column(String(10), nullable=False, default="NORMAL")
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    read_at = Column(DateTime, nullable=True)
    action_url = Column(String(500), nullable=True)
    action_text = Column(String(100), nullable=True)
    related_id = Column(String(36), nullable=True)
    related_type = Column(String(50), nullable=True)
    # "metadata" is reserved on declarative classes
    extra_data = Column("metadata", JSON, nullable=True)
    expires_at = Column(DateTime, nullable=True, index=True)

    created_at = Column(DateTime, default=utcnow, index=True)

    __table_args__ = (
        in_check("type", NOTIFICATION_TYPES, "ck_notification_type"),
        in_check("priority", NOTIFICATION_PRIORITIES, "ck_notification_priority"),
    )

    @classmethod
    def priority_rank(cls):
        """SQL expression ranking URGENT first, LOW last."""
        return case(
            {"URGENT": 0, "HIGH": 1, "NORMAL": 2, "LOW": 3},
            value=cls.priority,
            else_=4,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "priority": self.priority,
            "isRead": self.is_read,
            "readAt": isoformat(self.read_at),
            "actionUrl": self.action_url,
            "actionText": self.action_text,
            "relatedId": self.related_id,
            "relatedType": self.related_type,
            "metadata": self.extra_data,
            "expiresAt": isoformat(self.expires_at),
            "createdAt": isoformat(self.created_at),
        }
