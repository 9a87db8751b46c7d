"""Service category tree (trilingual)"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from marketplace.extensions import db
from .base import generate_uuid, isoformat, utcnow


class ServiceCategory(db.Model):
    __tablename__ = "service_categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False)
    name_lv = Column(String(100), nullable=False)
    name_ru = Column(String(100), nullable=False)
    name_en = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    subcategories = relationship(
        "ServiceSubcategory",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="ServiceSubcategory.name",
    )

    def __repr__(self):
        return f"<ServiceCategory {self.name}>"

    def to_summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "nameLv": self.name_lv,
            "nameRu": self.name_ru,
            "nameEn": self.name_en,
            "icon": self.icon,
        }

    def to_dict(self, include_subcategories=False):
        data = self.to_summary()
        data.update({
            "description": self.description,
            "isActive": self.is_active,
            "sortOrder": self.sort_order,
            "createdAt": isoformat(self.created_at),
        })
        if include_subcategories:
            data["subcategories"] = [
                s.to_summary() for s in self.subcategories if s.is_active
            ]
        return data


class ServiceSubcategory(db.Model):
    __tablename__ = "service_subcategories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    category_id = Column(String(36), ForeignKey("service_categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    name_lv = Column(String(100), nullable=False)
    name_ru = Column(String(100), nullable=False)
    name_en = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    category = relationship("ServiceCategory", back_populates="subcategories")

    def to_summary(self):
        return {
            "id": self.id,
            "categoryId": self.category_id,
            "name": self.name,
            "nameLv": self.name_lv,
            "nameRu": self.name_ru,
            "nameEn": self.name_en,
        }
