"""
Authentication routes
Handles email/password registration and login, token refresh,
password reset, email verification and OAuth token exchange
"""
import logging

from flask import Blueprint, current_app, jsonify

from marketplace.extensions import db, limiter
from marketplace.middleware.auth import get_bearer_token
from marketplace.middleware.validation import validate_json
from marketplace.models import ProviderProfile, User
from marketplace.schemas import (
    ForgotPasswordSchema, LoginSchema, OAuthSchema, RegisterSchema,
    ResetPasswordSchema, VerifyEmailSchema,
)
from marketplace.services import mailer
from marketplace.services.notifications import notify_welcome
from marketplace.services.oauth import SUPPORTED_PROVIDERS, OAuthError, fetch_profile
from marketplace.utils.passwords import hash_password, verify_password
from marketplace.utils.responses import error_response, success_response
from marketplace.utils.tokens import (
    TokenError, decode_purpose_token, decode_token_for_refresh, generate_purpose_token,
    generate_token, password_token_matches,
)

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

INVALID_CREDENTIALS = "Invalid credentials"
RESET_REQUESTED = "If an account with this email exists, a password reset link has been sent"


def _auth_payload(user, message, status=200):
    return jsonify({
        "success": True,
        "message": message,
        "token": generate_token(user),
        "user": user.to_auth_dict(),
    }), status


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------
@auth_bp.route("/register", methods=["POST"])
@limiter.limit("5 per minute")
@validate_json(RegisterSchema)
def register(payload):
    """Create a new account.

    Body JSON:
        email, password, firstName, lastName: str (required)
        phone: str (optional)
        role: CUSTOMER | PROVIDER (optional)
        language: LATVIAN | RUSSIAN | ENGLISH (optional)
    """
    if User.query.filter_by(email=payload.email).first():
        return error_response("User with this email already exists", 400)

    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
        role=payload.role,
        language=payload.language,
    )
    db.session.add(user)
    if user.role == "PROVIDER":
        user.provider_profile = ProviderProfile(certifications=[])
    db.session.commit()
    logger.info("User registered: %s (%s)", user.id, user.role)

    notify_welcome(user)
    verification_token = generate_purpose_token(
        user, "email_verification", current_app.config["EMAIL_VERIFICATION_EXPIRES_IN"]
    )
    mailer.send_verification_email(user, verification_token)

    return _auth_payload(user, "User registered successfully", 201)


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------
@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
@validate_json(LoginSchema)
def login(payload):
    """Login with email and password"""
    user = User.query.filter_by(email=payload.email).first()

    # One message for every failure so accounts cannot be enumerated
    if not user or not user.is_active or not user.password_hash:
        return error_response(INVALID_CREDENTIALS, 401)
    if not verify_password(payload.password, user.password_hash):
        return error_response(INVALID_CREDENTIALS, 401)

    return _auth_payload(user, "Login successful")


# ---------------------------------------------------------------------------
# POST /api/auth/refresh-token
# ---------------------------------------------------------------------------
@auth_bp.route("/refresh-token", methods=["POST"])
def refresh_token():
    """Issue a new token for a valid or recently expired one."""
    token = get_bearer_token()
    if not token:
        return error_response("Access token required", 401)

    try:
        payload = decode_token_for_refresh(token)
    except TokenError as e:
        return error_response(str(e), 401)

    user = db.session.get(User, payload["userId"])
    if not user or not user.is_active:
        return error_response("User not found or inactive", 401)

    return _auth_payload(user, "Token refreshed successfully")


# ---------------------------------------------------------------------------
# POST /api/auth/forgot-password
# ---------------------------------------------------------------------------
@auth_bp.route("/forgot-password", methods=["POST"])
@limiter.limit("3 per minute")
@validate_json(ForgotPasswordSchema)
def forgot_password(payload):
    """Request a password reset link. The reply never reveals whether the email exists."""
    user = User.query.filter_by(email=payload.email).first()
    if user and user.is_active:
        token = generate_purpose_token(
            user, "password_reset", current_app.config["PASSWORD_RESET_EXPIRES_IN"]
        )
        mailer.send_password_reset_email(user, token)

    return success_response(message=RESET_REQUESTED)


# ---------------------------------------------------------------------------
# POST /api/auth/reset-password
# ---------------------------------------------------------------------------
@auth_bp.route("/reset-password", methods=["POST"])
@limiter.limit("5 per minute")
@validate_json(ResetPasswordSchema)
def reset_password(payload):
    """
    Body JSON:
        token: str (required)
        newPassword: str (required)
    """
    try:
        claims = decode_purpose_token(payload.token, "password_reset")
    except TokenError:
        return error_response("Invalid or expired reset token", 400)

    user = db.session.get(User, claims["userId"])
    if not user or not user.is_active or not password_token_matches(user, claims):
        return error_response("Invalid or expired reset token", 400)

    user.password_hash = hash_password(payload.new_password)
    db.session.commit()
    logger.info("Password reset for user %s", user.id)

    return success_response(message="Password has been reset successfully")


# ---------------------------------------------------------------------------
# POST /api/auth/verify-email
# ---------------------------------------------------------------------------
@auth_bp.route("/verify-email", methods=["POST"])
@validate_json(VerifyEmailSchema)
def verify_email(payload):
    try:
        claims = decode_purpose_token(payload.token, "email_verification")
    except TokenError:
        return error_response("Invalid or expired verification token", 400)

    user = db.session.get(User, claims["userId"])
    if not user:
        return error_response("Invalid or expired verification token", 400)

    if not user.is_verified:
        user.is_verified = True
        db.session.commit()

    return success_response(message="Email verified successfully")


# ---------------------------------------------------------------------------
# POST /api/auth/oauth/<provider>
# ---------------------------------------------------------------------------
@auth_bp.route("/oauth/<provider>", methods=["POST"])
@limiter.limit("10 per minute")
@validate_json(OAuthSchema)
def oauth_login(provider, payload):
    """Exchange a Google or Facebook access token for an API token.

    Body JSON:
        accessToken: str (required)
    """
    if provider not in SUPPORTED_PROVIDERS:
        return error_response("Unsupported OAuth provider", 404)

    try:
        profile = fetch_profile(provider, payload.access_token)
    except OAuthError as e:
        return error_response(str(e), 401)

    id_column = User.google_id if provider == "google" else User.facebook_id
    id_attr = f"{provider}_id"

    user = User.query.filter(id_column == profile.provider_id).first()
    if not user and profile.email:
        user = User.query.filter_by(email=profile.email.lower()).first()
        if user:
            setattr(user, id_attr, profile.provider_id)
            if not user.avatar and profile.avatar:
                user.avatar = profile.avatar
            logger.info("Linked %s account to user %s", provider, user.id)

    created = False
    if not user:
        if not profile.email:
            return error_response("OAuth account has no email address", 400)
        user = User(
            email=profile.email.lower(),
            first_name=profile.first_name,
            last_name=profile.last_name,
            avatar=profile.avatar,
            role="CUSTOMER",
            is_verified=True,
        )
        setattr(user, id_attr, profile.provider_id)
        db.session.add(user)
        created = True

    if not user.is_active:
        db.session.rollback()
        return error_response("Account is deactivated", 401)

    db.session.commit()
    if created:
        logger.info("User registered via %s: %s", provider, user.id)
        notify_welcome(user)

    return _auth_payload(user, "Login successful", 201 if created else 200)
