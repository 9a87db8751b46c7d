from typing import List, Literal, Optional

from pydantic import Field, field_validator

from .base import RequestSchema, check_length


class ServiceSchema(RequestSchema):
    """Body for creating or updating a service listing."""

    title: str
    description: str
    price: float = Field(ge=0)
    price_type: Literal["FIXED", "HOURLY", "DAILY", "NEGOTIABLE"]
    category_id: str
    subcategory_id: Optional[str] = None
    service_area: List[str]

    title_lv: Optional[str] = None
    title_ru: Optional[str] = None
    title_en: Optional[str] = None
    description_lv: Optional[str] = None
    description_ru: Optional[str] = None
    description_en: Optional[str] = None
    currency: Optional[str] = None
    travel_fee: Optional[float] = Field(default=None, ge=0)
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    is_available: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        return check_length(v, 3, 100, "Title must be between 3 and 100 characters")

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        return check_length(v, 10, 1000, "Description must be between 10 and 1000 characters")

    @field_validator("category_id")
    @classmethod
    def check_category(cls, v):
        if not v:
            raise ValueError("Category is required")
        return v

    @field_validator("service_area")
    @classmethod
    def check_service_area(cls, v):
        if not v:
            raise ValueError("At least one service area must be specified")
        return v

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v):
        if v is not None:
            if len(v) != 3:
                raise ValueError("Currency must be a 3-letter code")
            return v.upper()
        return v
