from .auth import require_auth, require_role
from .request_id import RequestIdFilter, RequestIdMiddleware
from .validation import validate_json

__all__ = [
    "require_auth",
    "require_role",
    "RequestIdFilter",
    "RequestIdMiddleware",
    "validate_json",
]
