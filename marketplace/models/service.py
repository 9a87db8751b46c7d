"""Service listings offered by providers"""
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from marketplace.extensions import db
from .base import LANGUAGE_SUFFIXES, PRICE_TYPES, generate_uuid, in_check, isoformat, utcnow


class Service(db.Model):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    provider_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("service_categories.id"), nullable=False, index=True)
    subcategory_id = Column(String(36), ForeignKey("service_subcategories.id"), nullable=True)

    title = Column(String(100), nullable=False)
    title_lv = Column(String(100), nullable=True)
    title_ru = Column(String(100), nullable=True)
    title_en = Column(String(100), nullable=True)
    description = Column(Text, nullable=False)
    description_lv = Column(Text, nullable=True)
    description_ru = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)

    price = Column(Float, nullable=False)
    price_type = Column(String(20), nullable=False, default="FIXED")
    currency = Column(String(3), nullable=False, default="EUR")
    service_area = Column(JSON, nullable=False, default=list)
    travel_fee = Column(Float, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    videos = Column(JSON, nullable=False, default=list)

    is_available = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    # Maintained by marketplace.services.ratings; never written by request payloads
    average_rating = Column(Float, nullable=False, default=0.0)
    total_reviews = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        in_check("price_type", PRICE_TYPES, "ck_service_price_type"),
    )

    provider = relationship("User", foreign_keys=[provider_id])
    category = relationship("ServiceCategory")
    subcategory = relationship("ServiceSubcategory")

    def __repr__(self):
        return f"<Service {self.id} {self.title!r}>"

    def localized(self, field, lang):
        """Return `field` in the requested language, falling back to the base column."""
        suffix = LANGUAGE_SUFFIXES.get(lang or "")
        if suffix:
            value = getattr(self, f"{field}_{suffix}", None)
            if value:
                return value
        return getattr(self, field)

    def to_summary(self):
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "priceType": self.price_type,
            "currency": self.currency,
            "images": self.images or [],
        }

    def to_dict(self, lang=None, include_provider=False, counts=None):
        data = {
            "id": self.id,
            "providerId": self.provider_id,
            "categoryId": self.category_id,
            "subcategoryId": self.subcategory_id,
            "title": self.title,
            "titleLv": self.title_lv,
            "titleRu": self.title_ru,
            "titleEn": self.title_en,
            "description": self.description,
            "descriptionLv": self.description_lv,
            "descriptionRu": self.description_ru,
            "descriptionEn": self.description_en,
            "displayTitle": self.localized("title", lang),
            "displayDescription": self.localized("description", lang),
            "price": self.price,
            "priceType": self.price_type,
            "currency": self.currency,
            "serviceArea": self.service_area or [],
            "travelFee": self.travel_fee,
            "images": self.images or [],
            "videos": self.videos or [],
            "isAvailable": self.is_available,
            "isActive": self.is_active,
            "averageRating": self.average_rating or 0.0,
            "totalReviews": self.total_reviews or 0,
            "category": self.category.to_summary() if self.category else None,
            "subcategory": self.subcategory.to_summary() if self.subcategory else None,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_provider and self.provider:
            provider = self.provider.to_summary()
            profile = self.provider.provider_profile
            provider["providerProfile"] = profile.to_summary() if profile else None
            data["provider"] = provider
        if counts is not None:
            data["_count"] = counts
        return data
