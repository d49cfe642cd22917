"""Cookidoo adapters implementing the authentication and shopping-list ports."""

from __future__ import annotations

from typing import Optional

import httpx

from cookidoo_skill.adapters.cookidoo_http import (
    AddItemRequest,
    CookidooAuthenticationError,
    CookidooBadRequestError,
    CookidooClient,
    CookidooError,
    CookidooHttpError,
    CookidooTokenExpiredError,
    parse_token_response,
)
from cookidoo_skill.adapters.token_cache import TokenCache
from cookidoo_skill.core.logging import get_logger
from cookidoo_skill.core.models import AuthToken, CookidooCredentials, ShoppingListItem
from cookidoo_skill.core.ports import AuthenticationPort, ShoppingListPort

logger = get_logger(__name__)

TOKEN_ENDPOINT = "/ciam/auth/token"
SHOPPING_LIST_ENDPOINT = "/shopping/de-DE/additional-items/add"


class CookidooAuthAdapter(AuthenticationPort):
    """Obtain valid access tokens, serving from cache whenever possible.

    ``get_valid_token`` walks a small state machine on every call:

    1. a cached token outside the refresh buffer is returned as is;
    2. a cached token inside the buffer is refreshed; on any refresh failure
       the cache is cleared and the call falls through to step 3;
    3. a full password-grant authentication runs and its token is cached.

    Failures of step 3 propagate and leave the cache empty.
    """

    def __init__(
        self,
        client: CookidooClient,
        credentials: CookidooCredentials,
        auth_header: str,
        cache: Optional[TokenCache] = None,
    ) -> None:
        self._client = client
        self._credentials = credentials
        self._auth_header = auth_header
        self.cache = cache if cache is not None else TokenCache()

    async def get_valid_token(self) -> str:
        """Return an access token, refreshing or re-authenticating as needed."""
        token = self.cache.get()
        if token is not None:
            if not token.needs_refresh():
                logger.debug("Using cached token")
                return token.access_token

            logger.debug("Token needs refresh, attempting refresh")
            try:
                refreshed = await self._refresh_internal(token.refresh_token)
            except CookidooError as exc:
                logger.debug("Token refresh failed, will re-authenticate: %s", exc)
                self.cache.clear()
            else:
                self.cache.set(refreshed)
                return refreshed.access_token

        logger.debug("Performing full authentication")
        fresh = await self._authenticate_internal(self._credentials)
        self.cache.set(fresh)
        return fresh.access_token

    async def authenticate(self, credentials: CookidooCredentials) -> AuthToken:
        try:
            return await self._authenticate_internal(credentials)
        except CookidooError as exc:
            raise exc.to_domain_error() from exc

    async def refresh_token(self, refresh_token: str) -> AuthToken:
        try:
            return await self._refresh_internal(refresh_token)
        except CookidooError as exc:
            raise exc.to_domain_error() from exc

    def _token_headers(self) -> dict[str, str]:
        return {"Authorization": self._auth_header}

    async def _authenticate_internal(self, credentials: CookidooCredentials) -> AuthToken:
        response = await self._client.post_form(
            TOKEN_ENDPOINT,
            {
                "grant_type": "password",
                "username": credentials.email,
                "password": credentials.password,
            },
            self._token_headers(),
        )
        if response.is_success:
            return parse_token_response(response)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.error("Authentication failed: invalid credentials")
            raise CookidooAuthenticationError("Invalid credentials")
        if response.status_code == httpx.codes.BAD_REQUEST:
            logger.error(
                "Bad request during authentication",
                extra={"status_code": response.status_code, "body": response.text},
            )
            raise CookidooBadRequestError(response.text)
        logger.error(
            "HTTP error during authentication",
            extra={"status_code": response.status_code, "body": response.text},
        )
        raise CookidooHttpError(response.status_code, response.text)

    async def _refresh_internal(self, refresh_token: str) -> AuthToken:
        response = await self._client.post_form(
            TOKEN_ENDPOINT,
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
            self._token_headers(),
        )
        if not response.is_success:
            logger.error("Token refresh failed", extra={"status_code": response.status_code})
            raise CookidooTokenExpiredError(
                f"Refresh failed with status {response.status_code}: {response.text}"
            )
        try:
            return parse_token_response(response)
        except CookidooError as exc:
            raise CookidooTokenExpiredError(str(exc)) from exc


class CookidooShoppingListAdapter(ShoppingListPort):
    """Add items to the Cookidoo "additional items" list.

    A 401 on the first attempt means the token was rejected even though it
    looked valid locally (for example revoked server-side). The cache is then
    cleared, a new token is obtained through full authentication and the call
    is repeated exactly once.
    """

    def __init__(self, client: CookidooClient, auth: CookidooAuthAdapter) -> None:
        self._client = client
        self._auth = auth

    async def add_item(self, item: ShoppingListItem) -> None:
        try:
            await self._add_item_internal(item)
        except CookidooError as exc:
            raise exc.to_domain_error() from exc

    async def _post_item(self, body: AddItemRequest, access_token: str) -> httpx.Response:
        return await self._client.post_json(
            SHOPPING_LIST_ENDPOINT,
            body.to_payload(),
            {"Authorization": f"Bearer {access_token}"},
        )

    async def _add_item_internal(self, item: ShoppingListItem) -> None:
        body = AddItemRequest.for_item(item.name)
        token = await self._auth.get_valid_token()

        logger.debug("Adding item to shopping list", extra={"item_name": item.name})
        response = await self._post_item(body, token)

        if response.is_success:
            logger.info("Item added successfully", extra={"item_name": item.name})
            return

        if response.status_code != httpx.codes.UNAUTHORIZED:
            logger.error(
                "Failed to add item",
                extra={"status_code": response.status_code, "body": response.text},
            )
            raise CookidooHttpError(response.status_code, response.text)

        logger.error("Received 401, clearing token cache")
        self._auth.cache.clear()
        retry_token = await self._auth.get_valid_token()
        retry_response = await self._post_item(body, retry_token)

        if retry_response.is_success:
            logger.info("Item added successfully on retry", extra={"item_name": item.name})
            return

        logger.error(
            "Failed to add item after retry",
            extra={"status_code": retry_response.status_code, "body": retry_response.text},
        )
        raise CookidooAuthenticationError("Authentication failed after retry")


__all__ = [
    "CookidooAuthAdapter",
    "CookidooShoppingListAdapter",
    "SHOPPING_LIST_ENDPOINT",
    "TOKEN_ENDPOINT",
]
