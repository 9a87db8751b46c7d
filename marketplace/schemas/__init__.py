from .auth import (
    ForgotPasswordSchema, LoginSchema, OAuthSchema, RegisterSchema,
    ResetPasswordSchema, VerifyEmailSchema,
)
from .bookings import BookingStatusSchema, CancelBookingSchema, CreateBookingSchema
from .messages import MarkReadSchema, SendMessageSchema
from .reviews import CreateReviewSchema, ReviewResponseSchema, UpdateReviewSchema
from .services import ServiceSchema
from .users import ProviderProfileSchema, UpdateProfileSchema

__all__ = [
    "ForgotPasswordSchema",
    "LoginSchema",
    "OAuthSchema",
    "RegisterSchema",
    "ResetPasswordSchema",
    "VerifyEmailSchema",
    "BookingStatusSchema",
    "CancelBookingSchema",
    "CreateBookingSchema",
    "MarkReadSchema",
    "SendMessageSchema",
    "CreateReviewSchema",
    "ReviewResponseSchema",
    "UpdateReviewSchema",
    "ServiceSchema",
    "ProviderProfileSchema",
    "UpdateProfileSchema",
]
