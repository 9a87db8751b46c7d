from .base import generate_uuid, utcnow
from .user import User, ProviderProfile
from .category import ServiceCategory, ServiceSubcategory
from .service import Service
from .booking import Booking
from .message import Message
from .review import Review
from .notification import Notification

__all__ = [
    "generate_uuid",
    "utcnow",
    "User",
    "ProviderProfile",
    "ServiceCategory",
    "ServiceSubcategory",
    "Service",
    "Booking",
    "Message",
    "Review",
    "Notification",
]
