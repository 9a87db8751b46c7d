"""Bookings between a customer and a provider for one service"""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from marketplace.extensions import db
from .base import BOOKING_STATUSES, generate_uuid, in_check, isoformat, utcnow


TERMINAL_STATUSES = ("CANCELLED", "COMPLETED")


class Booking(db.Model):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False, index=True)

    scheduled_date = Column(DateTime, nullable=False)
    scheduled_time = Column(String(20), nullable=True)
    duration = Column(Integer, nullable=True)  # minutes
    address = Column(String(200), nullable=False)
    city = Column(String(50), nullable=False)
    postal_code = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)
    total_amount = Column(Float, nullable=False)

    status = Column(String(20), nullable=False, default="PENDING", index=True)
    cancelled_at = Column(DateTime, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    completion_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        in_check("status", BOOKING_STATUSES, "ck_booking_status"),
    )

    customer = relationship("User", foreign_keys=[customer_id])
    provider = relationship("User", foreign_keys=[provider_id])
    service = relationship("Service")
    messages = relationship("Message", back_populates="booking", order_by="Message.created_at")

    def __repr__(self):
        return f"<Booking {self.id} {self.status}>"

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    def involves(self, user_id):
        return user_id in (self.customer_id, self.provider_id)

    def to_dict(self, include_related=False, include_messages=False):
        data = {
            "id": self.id,
            "customerId": self.customer_id,
            "providerId": self.provider_id,
            "serviceId": self.service_id,
            "scheduledDate": isoformat(self.scheduled_date),
            "scheduledTime": self.scheduled_time,
            "duration": self.duration,
            "address": self.address,
            "city": self.city,
            "postalCode": self.postal_code,
            "notes": self.notes,
            "totalAmount": self.total_amount,
            "status": self.status,
            "cancelledAt": isoformat(self.cancelled_at),
            "cancellationReason": self.cancellation_reason,
            "completedAt": isoformat(self.completed_at),
            "completionNotes": self.completion_notes,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_related:
            data["service"] = self.service.to_summary() if self.service else None
            data["customer"] = self.customer.to_summary() if self.customer else None
            data["provider"] = self.provider.to_summary() if self.provider else None
        if include_messages:
            data["messages"] = [m.to_dict() for m in self.messages]
        return data
