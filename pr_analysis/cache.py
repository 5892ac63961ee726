"""Per-run cache of user email lookups."""

import logging
from threading import Lock
from typing import Dict

import requests

from .api_client import GitHubAPIClient
from .errors import UpstreamApiError
from .models import EMAIL_NOT_AVAILABLE


class EmailCache:
    """Resolves user emails, looking each identity up at most once per run.

    The cache is shared by all repository workers, so access is guarded by a
    lock and concurrent lookups of the same identity wait for the first one.
    """

    def __init__(self, api_client: GitHubAPIClient):
        """Initialize the cache.

        Args:
            api_client: Client used for user lookups
        """
        self.api_client = api_client
        self.emails: Dict[str, str] = {}
        self._lock = Lock()
        self._pending: Dict[str, Lock] = {}

    def get(self, login: str) -> str:
        """Return the public email of a user, or "Not available".

        Lookup failures never propagate; they are cached as "Not available".
        """
        with self._lock:
            if login in self.emails:
                return self.emails[login]
            login_lock = self._pending.setdefault(login, Lock())

        with login_lock:
            with self._lock:
                if login in self.emails:
                    return self.emails[login]

            email = self._lookup(login)

            with self._lock:
                self.emails[login] = email
                self._pending.pop(login, None)

        return email

    def _lookup(self, login: str) -> str:
        try:
            data = self.api_client.get_user(login)
        except (UpstreamApiError, requests.RequestException) as e:
            logging.debug(f"Email lookup failed for {login}: {e}")
            return EMAIL_NOT_AVAILABLE
        return data.get('email') or EMAIL_NOT_AVAILABLE

    def __contains__(self, login: str) -> bool:
        with self._lock:
            return login in self.emails

    def __len__(self) -> int:
        with self._lock:
            return len(self.emails)
