from typing import Annotated, List, Optional

from pydantic import AfterValidator, field_validator

from .base import RequestSchema, check_length


def _rating(v):
    if not (1 <= v <= 5):
        raise ValueError("Rating must be between 1 and 5")
    return v


def _title(v):
    return check_length(v, 3, 100, "Title must be between 3 and 100 characters")


def _comment(v):
    return check_length(v, 10, 500, "Comment must be between 10 and 500 characters")


Rating = Annotated[int, AfterValidator(_rating)]
Title = Annotated[str, AfterValidator(_title)]
Comment = Annotated[str, AfterValidator(_comment)]


class CreateReviewSchema(RequestSchema):
    booking_id: str
    rating: Rating
    title: Optional[Title] = None
    comment: Optional[Comment] = None
    images: Optional[List[str]] = None

    @field_validator("booking_id")
    @classmethod
    def check_booking(cls, v):
        if not v:
            raise ValueError("Booking ID is required")
        return v


class UpdateReviewSchema(RequestSchema):
    rating: Optional[Rating] = None
    title: Optional[Title] = None
    comment: Optional[Comment] = None
    images: Optional[List[str]] = None


class ReviewResponseSchema(RequestSchema):
    response: str

    @field_validator("response")
    @classmethod
    def check_response(cls, v):
        return check_length(v, 1, 1000, "Response must be between 1 and 1000 characters")
