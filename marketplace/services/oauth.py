"""
OAuth access-token exchange for Google and Facebook.

The client completes the provider's login flow and posts the resulting
access token; the profile is fetched server-side to prove the token.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import requests
from flask import current_app

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("google", "facebook")


class OAuthError(Exception):
    """The provider rejected the token or could not be reached."""


@dataclass
class OAuthProfile:
    provider: str
    provider_id: str
    email: Optional[str]
    first_name: str
    last_name: str
    avatar: Optional[str] = None


def _fetch_json(url, **kwargs):
    timeout = current_app.config.get("OAUTH_TIMEOUT", 5)
    try:
        response = requests.get(url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        logger.error("OAuth profile request to %s failed: %s", url, e)
        raise OAuthError("OAuth provider unavailable")
    if response.status_code != 200:
        logger.info("OAuth provider %s returned %s", url, response.status_code)
        raise OAuthError("Invalid OAuth token")
    try:
        return response.json()
    except ValueError:
        raise OAuthError("Invalid OAuth provider response")


def _google_profile(access_token):
    data = _fetch_json(
        current_app.config["GOOGLE_USERINFO_URL"],
        headers={"Authorization": f"Bearer {access_token}"},
    )
    if not data.get("sub"):
        raise OAuthError("Invalid OAuth token")
    return OAuthProfile(
        provider="google",
        provider_id=str(data["sub"]),
        email=data.get("email"),
        first_name=data.get("given_name") or "",
        last_name=data.get("family_name") or "",
        avatar=data.get("picture"),
    )


def _facebook_profile(access_token):
    data = _fetch_json(
        current_app.config["FACEBOOK_GRAPH_URL"],
        params={
            "fields": "id,email,first_name,last_name,picture",
            "access_token": access_token,
        },
    )
    if not data.get("id"):
        raise OAuthError("Invalid OAuth token")
    picture = (data.get("picture") or {}).get("data") or {}
    return OAuthProfile(
        provider="facebook",
        provider_id=str(data["id"]),
        email=data.get("email"),
        first_name=data.get("first_name") or "",
        last_name=data.get("last_name") or "",
        avatar=picture.get("url"),
    )


def fetch_profile(provider, access_token) -> OAuthProfile:
    if provider == "google":
        return _google_profile(access_token)
    if provider == "facebook":
        return _facebook_profile(access_token)
    raise ValueError(f"Unsupported OAuth provider: {provider}")
