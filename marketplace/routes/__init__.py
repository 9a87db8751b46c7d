from .auth import auth_bp
from .users import users_bp
from .services import services_bp
from .bookings import bookings_bp
from .reviews import reviews_bp
from .messages import messages_bp
from .notifications import notifications_bp

ALL_BLUEPRINTS = (
    auth_bp,
    users_bp,
    services_bp,
    bookings_bp,
    reviews_bp,
    messages_bp,
    notifications_bp,
)

__all__ = [
    "ALL_BLUEPRINTS",
    "auth_bp",
    "users_bp",
    "services_bp",
    "bookings_bp",
    "reviews_bp",
    "messages_bp",
    "notifications_bp",
]
