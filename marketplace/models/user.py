"""User and provider profile models"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship

from marketplace.extensions import db
from .base import LANGUAGES, ROLES, generate_uuid, in_check, isoformat, utcnow


class User(db.Model):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # null for OAuth-only accounts
    first_name = Column(String(50), nullable=False, default="")
    last_name = Column(String(50), nullable=False, default="")
    phone = Column(String(30), nullable=True)
    avatar = Column(Text, nullable=True)
    role = Column(String(20), nullable=False, default="CUSTOMER")
    language = Column(String(20), nullable=False, default="LATVIAN")
    is_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    google_id = Column(String(255), unique=True, nullable=True)
    facebook_id = Column(String(255), unique=True, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        in_check("role", ROLES, "ck_user_role"),
        in_check("language", LANGUAGES, "ck_user_language"),
    )

    provider_profile = relationship(
        "ProviderProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_provider(self):
        return self.role == "PROVIDER"

    def to_auth_dict(self):
        """Shape returned alongside a token by the auth endpoints."""
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role,
            "language": self.language,
            "isVerified": self.is_verified,
        }

    def to_summary(self):
        """Public subset embedded in services, bookings, reviews and messages."""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "avatar": self.avatar,
        }

    def to_dict(self, include_profile=False):
        data = {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "avatar": self.avatar,
            "role": self.role,
            "language": self.language,
            "isVerified": self.is_verified,
            "isActive": self.is_active,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_profile:
            data["providerProfile"] = self.provider_profile.to_dict() if self.provider_profile else None
        return data


class ProviderProfile(db.Model):
    __tablename__ = "provider_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    business_name = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    address = Column(String(200), nullable=True)
    city = Column(String(50), nullable=True)
    postal_code = Column(String(10), nullable=True)
    website = Column(String(255), nullable=True)
    social_media = Column(JSON, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    has_insurance = Column(Boolean, nullable=False, default=False)
    insurance_details = Column(Text, nullable=True)
    certifications = Column(JSON, nullable=True, default=list)
    business_hours = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="provider_profile")

    def to_summary(self):
        return {
            "businessName": self.business_name,
            "isVerified": self.is_verified,
            "city": self.city,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "businessName": self.business_name,
            "description": self.description,
            "address": self.address,
            "city": self.city,
            "postalCode": self.postal_code,
            "website": self.website,
            "socialMedia": self.social_media,
            "isVerified": self.is_verified,
            "hasInsurance": self.has_insurance,
            "insuranceDetails": self.insurance_details,
            "certifications": self.certifications or [],
            "businessHours": self.business_hours,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
