"""
Credential storage for the API client.

A store holds the bearer token and the authenticated user returned by the
auth endpoints.
"""
import json
import logging
import os
import threading

logger = logging.getLogger(__name__)


class TokenStore:
    """In-memory token store, safe to share between threads."""

    def __init__(self, token=None, user=None):
        self._lock = threading.Lock()
        self._token = token
        self._user = user

    @property
    def token(self):
        with self._lock:
            return self._token

    @property
    def user(self):
        with self._lock:
            return self._user

    def save(self, token, user=None):
        with self._lock:
            self._token = token
            if user is not None:
                self._user = user
        self._persist()

    def clear(self):
        with self._lock:
            self._token = None
            self._user = None
        self._persist()

    def _persist(self):
        pass


class FileTokenStore(TokenStore):
    """Token store persisted as JSON, e.g. ~/.visipakalpojumi/credentials.json"""

    def __init__(self, path):
        self.path = os.path.expanduser(path)
        token, user = self._load()
        super().__init__(token=token, user=user)

    def _load(self):
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None, None
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable credentials file %s", self.path)
            return None, None
        return data.get("token"), data.get("user")

    def _persist(self):
        with self._lock:
            token, user = self._token, self._user
        if token is None and user is None:
            try:
                os.remove(self.path)
            except FileNotFoundError:
                pass
            return

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump({"token": token, "user": user}, f)
        os.replace(tmp_path, self.path)
