"""Process-wide in-memory holder for the current Cookidoo token.

The cache outlives individual requests (warm invocations of the same process
reuse it). Every read and write happens under one lock so that concurrent
requests never observe a half-written token. The lock guards only the swap:
two requests that both see an expiring token will each refresh on their own
and the last ``set`` wins.
"""

from __future__ import annotations

import threading
from typing import Optional

from cookidoo_skill.core.models import AuthToken


class TokenCache:
    """Lock-guarded slot for at most one ``AuthToken``."""

    def __init__(self, token: Optional[AuthToken] = None) -> None:
        self._lock = threading.RLock()
        self._token = token

    def get(self) -> Optional[AuthToken]:
        """Return the cached token snapshot, if any."""
        with self._lock:
            return self._token

    def set(self, token: AuthToken) -> None:
        """Replace whatever token is cached with ``token``."""
        with self._lock:
            self._token = token

    def clear(self) -> None:
        """Drop the cached token so the next caller re-authenticates."""
        with self._lock:
            self._token = None

    def is_valid(self) -> bool:
        """True when a token is cached and it has not expired."""
        token = self.get()
        return token is not None and not token.is_expired()

    def needs_refresh(self) -> bool:
        """True when no token is cached or it is inside the refresh buffer."""
        token = self.get()
        return token is None or token.needs_refresh()


__all__ = ["TokenCache"]
