"""
Python client for the VisiPakalpojumi marketplace API.

    client = MarketplaceClient(store=FileTokenStore("~/.visipakalpojumi/credentials.json"))
    client.auth.login("anna@example.com", "Secret123")
    client.services.get_all(search="plumbing", lang="lv")
"""
from .api import ApiClient, ApiError, AuthenticationRequired
from .config import get_api_base_url, get_health_url
from .resources import (
    AuthAPI, BookingsAPI, MessagesAPI, NotificationsAPI, ReviewsAPI,
    ServicesAPI, UserAPI,
)
from .storage import FileTokenStore, TokenStore


class MarketplaceClient(ApiClient):
    """ApiClient with one attribute per resource."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.auth = AuthAPI(self)
        self.users = UserAPI(self)
        self.services = ServicesAPI(self)
        self.bookings = BookingsAPI(self)
        self.reviews = ReviewsAPI(self)
        self.messages = MessagesAPI(self)
        self.notifications = NotificationsAPI(self)


__all__ = [
    "ApiClient",
    "ApiError",
    "AuthenticationRequired",
    "MarketplaceClient",
    "get_api_base_url",
    "get_health_url",
    "AuthAPI",
    "BookingsAPI",
    "MessagesAPI",
    "NotificationsAPI",
    "ReviewsAPI",
    "ServicesAPI",
    "UserAPI",
    "FileTokenStore",
    "TokenStore",
]
