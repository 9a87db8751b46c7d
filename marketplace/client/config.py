"""
API base URL resolution
"""
import os
from urllib.parse import urlsplit

DEFAULT_API_URL = "http://localhost:3001"
FRONTEND_DEV_PORT = 3000


def get_api_base_url(origin=None):
    """
    Resolve the API base URL.

    Args:
        origin (str): Origin the caller is served from, e.g. "http://localhost:3000"

    Returns:
        str: NEXT_PUBLIC_API_URL when set; the local API when the origin is the
        frontend dev server on port 3000; otherwise the origin itself; and the
        local API when there is no origin at all. Never ends with a slash.
    """
    env_url = (os.environ.get("NEXT_PUBLIC_API_URL") or "").strip()
    if env_url:
        return env_url.rstrip("/")

    if origin:
        try:
            port = urlsplit(origin).port
        except ValueError:
            port = None
        if port == FRONTEND_DEV_PORT:
            return DEFAULT_API_URL
        return origin.rstrip("/")

    return DEFAULT_API_URL


def get_health_url(origin=None):
    return f"{get_api_base_url(origin)}/health"
