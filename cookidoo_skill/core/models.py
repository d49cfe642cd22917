"""Core domain objects shared across layers."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from cookidoo_skill.core.exceptions import InvalidItemNameError

# Refresh this long before the server-declared expiry
REFRESH_BUFFER_SECONDS = 5 * 60
MAX_ITEM_NAME_LENGTH = 200


@dataclass(frozen=True, slots=True)
class CookidooCredentials:
    """Account credentials for the Cookidoo password grant."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class AuthToken:
    """OAuth token pair with an absolute expiry on the monotonic clock.

    Instances are immutable; the token cache swaps whole tokens rather than
    mutating one in place.
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expires_at: float

    @classmethod
    def issue(
        cls,
        access_token: str,
        refresh_token: str,
        expires_in: float,
        *,
        now: float | None = None,
    ) -> "AuthToken":
        """Build a token that expires ``expires_in`` seconds from ``now``."""
        issued_at = time.monotonic() if now is None else now
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=issued_at + expires_in,
        )

    def remaining_seconds(self, now: float | None = None) -> float:
        """Seconds left before expiry (negative once expired)."""
        current = time.monotonic() if now is None else now
        return self.expires_at - current

    def is_expired(self, now: float | None = None) -> bool:
        """True once the expiry instant has been reached."""
        return self.remaining_seconds(now) <= 0

    def needs_refresh(self, now: float | None = None) -> bool:
        """True when the token is within the refresh buffer of its expiry."""
        return self.remaining_seconds(now) <= REFRESH_BUFFER_SECONDS


@dataclass(frozen=True, slots=True)
class ShoppingListItem:
    """A validated shopping list entry.

    Build instances through :meth:`create`, which trims the name and enforces
    the length rules.
    """

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidItemNameError("Item name cannot be empty")
        if self.name != self.name.strip():
            raise InvalidItemNameError("Item name must not carry surrounding whitespace")
        if len(self.name) > MAX_ITEM_NAME_LENGTH:
            raise InvalidItemNameError(
                f"Item name exceeds maximum length of {MAX_ITEM_NAME_LENGTH} characters"
            )

    @classmethod
    def create(cls, raw_name: str) -> "ShoppingListItem":
        """Trim and validate ``raw_name``; raise ``InvalidItemNameError`` on failure."""
        return cls(name=raw_name.strip())


@dataclass(frozen=True, slots=True)
class SkillOutcome:
    """User-facing result of handling one parsed intent."""

    text: str
    should_end_session: bool


__all__ = [
    "AuthToken",
    "CookidooCredentials",
    "MAX_ITEM_NAME_LENGTH",
    "REFRESH_BUFFER_SECONDS",
    "ShoppingListItem",
    "SkillOutcome",
]
