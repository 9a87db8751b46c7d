"""
Bearer-token authentication and role checks for routes
"""
import logging
from functools import wraps

from flask import request

from marketplace.extensions import db
from marketplace.models import User
from marketplace.utils.responses import error_response
from marketplace.utils.tokens import TokenError, decode_token

logger = logging.getLogger(__name__)


def get_bearer_token():
    """Return the token from an `Authorization: Bearer <token>` header, or None."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[len("Bearer "):].strip()
    return token or None


def require_auth(f):
    """Decorator to require a valid bearer token.

    The authenticated User is passed to the view as the `current_user` kwarg.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            return error_response("Access token required", 401)

        try:
            payload = decode_token(token)
        except TokenError:
            return error_response("Invalid or expired token", 401)

        user = db.session.get(User, payload.get("userId"))
        if not user or not user.is_active:
            return error_response("User not found or inactive", 401)

        request.user_id = user.id
        request.user_role = user.role
        kwargs["current_user"] = user
        return f(*args, **kwargs)

    return decorated


def require_role(*roles):
    """Decorator to require one of `roles`; must sit below @require_auth."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            user = kwargs.get("current_user")
            if user is None:
                return error_response("Authentication required", 401)
            if user.role not in roles:
                logger.info("Role %s denied for %s %s", user.role, request.method, request.path)
                return error_response("Insufficient permissions", 403)
            return f(*args, **kwargs)

        return decorated
    return decorator
