from typing import Any, Dict, List, Literal, Optional

from pydantic import field_validator

from marketplace.utils.validators import validate_phone, validate_url
from .base import RequestSchema, check_length


class UpdateProfileSchema(RequestSchema):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    language: Optional[Literal["LATVIAN", "RUSSIAN", "ENGLISH"]] = None
    avatar: Optional[str] = None

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v):
        return check_length(v, 2, 50, "First name must be between 2 and 50 characters")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, v):
        return check_length(v, 2, 50, "Last name must be between 2 and 50 characters")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v and not validate_phone(v):
            raise ValueError("Please provide a valid phone number")
        return v


class ProviderProfileSchema(RequestSchema):
    business_name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    website: Optional[str] = None
    has_insurance: Optional[bool] = None
    insurance_details: Optional[str] = None
    certifications: Optional[List[str]] = None
    business_hours: Optional[Dict[str, Any]] = None
    social_media: Optional[Dict[str, Any]] = None

    @field_validator("business_name")
    @classmethod
    def check_business_name(cls, v):
        return check_length(v, 2, 100, "Business name must be between 2 and 100 characters")

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        return check_length(v, 10, 1000, "Description must be between 10 and 1000 characters")

    @field_validator("address")
    @classmethod
    def check_address(cls, v):
        return check_length(v, 5, 200, "Address must be between 5 and 200 characters")

    @field_validator("city")
    @classmethod
    def check_city(cls, v):
        return check_length(v, 2, 50, "City must be between 2 and 50 characters")

    @field_validator("postal_code")
    @classmethod
    def check_postal_code(cls, v):
        return check_length(v, 4, 10, "Postal code must be between 4 and 10 characters")

    @field_validator("website")
    @classmethod
    def check_website(cls, v):
        if v and not validate_url(v):
            raise ValueError("Please provide a valid website URL")
        return v

    @field_validator("insurance_details")
    @classmethod
    def check_insurance_details(cls, v):
        return check_length(v, 5, 500, "Insurance details must be between 5 and 500 characters")
