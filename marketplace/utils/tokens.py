"""
JWT helpers for access tokens and single-purpose tokens
(password reset, email verification)
"""
import hashlib
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app


class TokenError(ValueError):
    """Raised when a token is malformed, tampered with, expired or of the wrong purpose."""


def _secret():
    return current_app.config["JWT_SECRET_KEY"]


def _algorithm():
    return current_app.config.get("JWT_ALGORITHM", "HS256")


def generate_token(user) -> str:
    """Generate an access token carrying {userId, email, role}."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user.id,
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + current_app.config["JWT_EXPIRES_IN"],
    }
    return jwt.encode(payload, _secret(), algorithm=_algorithm())


def decode_token(token: str) -> dict:
    """Decode and verify an access token"""
    try:
        payload = jwt.decode(token, _secret(), algorithms=[_algorithm()])
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")
    if "purpose" in payload or "userId" not in payload:
        raise TokenError("Invalid token")
    return payload


def decode_token_for_refresh(token: str) -> dict:
    """
    Verify the signature of an access token, accepting expired tokens
    for up to JWT_REFRESH_GRACE_DAYS after their expiry.
    """
    try:
        payload = jwt.decode(
            token,
            _secret(),
            algorithms=[_algorithm()],
            options={"verify_exp": False},
        )
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")

    if "purpose" in payload or "userId" not in payload:
        raise TokenError("Invalid token")

    exp = payload.get("exp")
    if exp is not None:
        grace = timedelta(days=current_app.config.get("JWT_REFRESH_GRACE_DAYS", 7))
        expired_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        if datetime.now(timezone.utc) > expired_at + grace:
            raise TokenError("Token has expired")
    return payload


def _password_fingerprint(user):
    # Changes whenever the password does, so a reset token works only once
    return hashlib.sha256((user.password_hash or "").encode("utf-8")).hexdigest()[:16]


def generate_purpose_token(user, purpose: str, expires_in: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user.id,
        "purpose": purpose,
        "iat": now,
        "exp": now + expires_in,
    }
    if purpose == "password_reset":
        payload["pwd"] = _password_fingerprint(user)
    return jwt.encode(payload, _secret(), algorithm=_algorithm())


def decode_purpose_token(token: str, purpose: str) -> dict:
    try:
        payload = jwt.decode(token, _secret(), algorithms=[_algorithm()])
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")
    if payload.get("purpose") != purpose or "userId" not in payload:
        raise TokenError("Invalid token")
    return payload


def password_token_matches(user, payload) -> bool:
    return payload.get("pwd") == _password_fingerprint(user)
