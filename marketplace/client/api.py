"""
HTTP client for the marketplace API.

Every request carries the stored bearer token. When a request to a
non-auth endpoint comes back 401, exactly one thread refreshes the token
while the others wait; every waiting request is then replayed once with
the new token. A failed refresh clears the store and invokes the
`on_auth_failure` hook (send the user back to the login screen).
"""
import logging
import threading

import requests

from .config import get_api_base_url
from .storage import TokenStore

logger = logging.getLogger(__name__)

AUTH_PREFIX = "/api/auth/"
REFRESH_PATH = "/api/auth/refresh-token"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status, message, errors=None, payload=None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.errors = errors or []
        self.payload = payload

    def __str__(self):
        return f"{self.status}: {self.message}"

    @classmethod
    def from_response(cls, response):
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            message = payload.get("message") or response.reason or "Request failed"
            errors = payload.get("errors")
        else:
            message = response.reason or "Request failed"
            errors = None
        return cls(response.status_code, message, errors=errors, payload=payload)


class AuthenticationRequired(ApiError):
    """The session could not be refreshed; the user must log in again."""

    def __init__(self, message="Authentication required", payload=None):
        super().__init__(401, message, payload=payload)


class ApiClient:
    def __init__(self, base_url=None, store=None, on_auth_failure=None,
                 session=None, timeout=10):
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.store = store if store is not None else TokenStore()
        self.on_auth_failure = on_auth_failure
        self.session = session or requests.Session()
        self.session.headers.setdefault("Content-Type", "application/json")
        self.timeout = timeout

        self._refresh_cond = threading.Condition()
        self._refreshing = False

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _send(self, method, path, token, params=None, json=None):
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return self.session.request(
            method,
            self.base_url + path,
            params=params,
            json=json,
            headers=headers,
            timeout=self.timeout,
        )

    def request(self, method, path, params=None, json=None):
        """Send a request and return the decoded JSON envelope."""
        token = self.store.token
        response = self._send(method, path, token, params=params, json=json)

        if response.status_code == 401 and token and not path.startswith(AUTH_PREFIX):
            new_token = self._refresh_after_401(token)
            response = self._send(method, path, new_token, params=params, json=json)

        return self._decode(response)

    @staticmethod
    def _decode(response):
        if not 200 <= response.status_code < 300:
            raise ApiError.from_response(response)
        if not response.content:
            return None
        return response.json()

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, json=None):
        return self.request("POST", path, json=json)

    def put(self, path, json=None):
        return self.request("PUT", path, json=json)

    def patch(self, path, json=None):
        return self.request("PATCH", path, json=json)

    def delete(self, path):
        return self.request("DELETE", path)

    # ------------------------------------------------------------------
    # Token refresh coordination
    # ------------------------------------------------------------------
    def _refresh_after_401(self, stale_token):
        """Return a token to replay with, refreshing at most once per stale token."""
        with self._refresh_cond:
            while self._refreshing:
                self._refresh_cond.wait()

            current = self.store.token
            if current and current != stale_token:
                # Someone else refreshed while this request was in flight
                return current
            if not current:
                raise AuthenticationRequired()

            self._refreshing = True

        new_token = None
        try:
            new_token = self._refresh(stale_token)
        finally:
            with self._refresh_cond:
                if new_token is None:
                    self.store.clear()
                self._refreshing = False
                self._refresh_cond.notify_all()

        return new_token

    def _refresh(self, stale_token):
        """POST the refresh endpoint. Returns the new token or raises AuthenticationRequired."""
        try:
            response = self._send("POST", REFRESH_PATH, stale_token)
        except requests.RequestException as e:
            logger.warning("Token refresh failed: %s", e)
            self._auth_failed()
            raise AuthenticationRequired("Session refresh failed")

        payload = None
        if response.status_code == 200:
            try:
                payload = response.json()
            except ValueError:
                payload = None

        if not payload or not payload.get("token"):
            logger.info("Token refresh rejected with status %s", response.status_code)
            self._auth_failed()
            raise AuthenticationRequired("Session expired, please log in again")

        self.store.save(payload["token"], payload.get("user"))
        return payload["token"]

    def _auth_failed(self):
        self.store.clear()
        if self.on_auth_failure is not None:
            try:
                self.on_auth_failure()
            except Exception:
                logger.exception("on_auth_failure hook raised")
