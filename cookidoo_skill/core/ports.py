"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Protocol

from cookidoo_skill.core.models import AuthToken, CookidooCredentials, ShoppingListItem


class AuthenticationPort(Protocol):
    """Port exposing the OAuth grants of the shopping-list backend."""

    async def authenticate(self, credentials: CookidooCredentials) -> AuthToken:
        """Run the password grant for ``credentials`` and return a fresh token.

        Raises ``AuthenticationFailedError`` or ``RepositoryError``.
        """
        ...

    async def refresh_token(self, refresh_token: str) -> AuthToken:
        """Exchange ``refresh_token`` for a fresh token.

        Raises ``AuthenticationFailedError`` when the refresh is rejected.
        """
        ...


class ShoppingListPort(Protocol):
    """Port exposing the single shopping-list capability the skill needs."""

    async def add_item(self, item: ShoppingListItem) -> None:
        """Add ``item`` to the user's shopping list.

        Raises ``AuthenticationFailedError`` or ``RepositoryError``.
        """
        ...


__all__ = ["AuthenticationPort", "ShoppingListPort"]
