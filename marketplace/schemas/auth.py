from typing import Annotated, Literal, Optional

from pydantic import BeforeValidator, field_validator

from marketplace.utils.validators import password_problems, validate_email, validate_phone
from .base import RequestSchema, check_length

PASSWORD_MESSAGE = (
    "Password must be at least 8 characters long and contain at least one "
    "uppercase letter, one lowercase letter, and one number"
)


def normalize_email(value):
    if not isinstance(value, str) or not validate_email(value.strip()):
        raise ValueError("Please provide a valid email address")
    return value.strip().lower()


def strong_password(value):
    if password_problems(value):
        raise ValueError(PASSWORD_MESSAGE)
    return value


Email = Annotated[str, BeforeValidator(normalize_email)]


class RegisterSchema(RequestSchema):
    email: Email
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: Literal["CUSTOMER", "PROVIDER"] = "CUSTOMER"
    language: Literal["LATVIAN", "RUSSIAN", "ENGLISH"] = "LATVIAN"

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return strong_password(v)

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
        if v is not None and not validate_phone(v):
            raise ValueError("Please provide a valid phone number")
        return v


class LoginSchema(RequestSchema):
    email: Email
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if not v:
            raise ValueError("Password is required")
        return v


class ForgotPasswordSchema(RequestSchema):
    email: Email


class ResetPasswordSchema(RequestSchema):
    token: str
    new_password: str

    @field_validator("token")
    @classmethod
    def check_token(cls, v):
        if not v:
            raise ValueError("Token is required")
        return v

    @field_validator("new_password")
    @classmethod
    def check_password(cls, v):
        return strong_password(v)


class VerifyEmailSchema(RequestSchema):
    token: str

    @field_validator("token")
    @classmethod
    def check_token(cls, v):
        if not v:
            raise ValueError("Token is required")
        return v


class OAuthSchema(RequestSchema):
    access_token: str

    @field_validator("access_token")
    @classmethod
    def check_token(cls, v):
        if not v:
            raise ValueError("Access token is required")
        return v
