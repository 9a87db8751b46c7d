from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import Field, field_validator

from .base import RequestSchema, check_length


class CreateBookingSchema(RequestSchema):
    service_id: str
    scheduled_date: datetime
    scheduled_time: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    address: str
    city: str
    postal_code: Optional[str] = None
    notes: Optional[str] = None
    total_amount: float = Field(ge=0)

    @field_validator("service_id")
    @classmethod
    def check_service(cls, v):
        if not v:
            raise ValueError("Service ID is required")
        return v

    @field_validator("scheduled_date", mode="before")
    @classmethod
    def check_date(cls, v):
        if not isinstance(v, str):
            raise ValueError("Scheduled date must be a valid date")
        try:
            parsed = datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("Scheduled date must be a valid date")
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed

    @field_validator("address")
    @classmethod
    def check_address(cls, v):
        return check_length(v, 5, 200, "Address must be between 5 and 200 characters")

    @field_validator("city")
    @classmethod
    def check_city(cls, v):
        return check_length(v, 2, 50, "City must be between 2 and 50 characters")


class CancelBookingSchema(RequestSchema):
    reason: Optional[str] = None


class BookingStatusSchema(RequestSchema):
    status: Literal["PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELLED"]
    completion_notes: Optional[str] = None
