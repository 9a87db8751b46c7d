"""Customer reviews of completed bookings"""
from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, JSON,
    String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from marketplace.extensions import db
from .base import generate_uuid, isoformat, utcnow


class Review(db.Model):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False, index=True)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False)
    rating = Column(Integer, nullable=False)
    title = Column(String(100), nullable=True)
    comment = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    is_approved = Column(Boolean, nullable=False, default=True)
    response = Column(Text, nullable=True)
    response_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("customer_id", "booking_id", name="uq_review_customer_booking"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating"),
    )

    customer = relationship("User", foreign_keys=[customer_id])
    provider = relationship("User", foreign_keys=[provider_id])
    service = relationship("Service")
    booking = relationship("Booking")

    def __repr__(self):
        return f"<Review {self.id} rating={self.rating}>"

    def to_dict(self, include_related=False):
        data = {
            "id": self.id,
            "customerId": self.customer_id,
            "providerId": self.provider_id,
            "serviceId": self.service_id,
            "bookingId": self.booking_id,
            "rating": self.rating,
            "title": self.title,
            "comment": self.comment,
            "images": self.images or [],
            "isApproved": self.is_approved,
            "response": self.response,
            "responseDate": isoformat(self.response_date),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_related:
            data["customer"] = self.customer.to_summary() if self.customer else None
            data["service"] = (
                {"id": self.service.id, "title": self.service.title}
                if self.service else None
            )
        return data
