"""HTTP plumbing shared by the Cookidoo adapters: client, wire models, errors."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cookidoo_skill.core.exceptions import (
    AuthenticationFailedError,
    DomainError,
    RepositoryError,
)
from cookidoo_skill.core.models import AuthToken

DEFAULT_BASE_URL = "https://de.tmmobile.vorwerk-digital.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "AlexaCookidooSkill/1.0"


class CookidooError(Exception):
    """Base error for failures talking to the Cookidoo API."""

    def to_domain_error(self) -> DomainError:
        """Translate into the domain taxonomy; non-auth failures are repository errors."""
        return RepositoryError(str(self))


class CookidooRequestError(CookidooError):
    """Transport-level failure: timeout, connection refused, protocol error."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Request failed: {reason}")
        self.reason = reason


class CookidooAuthenticationError(CookidooError):
    """Credentials or access token rejected with HTTP 401."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Authentication failed: {reason}")
        self.reason = reason

    def to_domain_error(self) -> DomainError:
        return AuthenticationFailedError(self.reason)


class CookidooBadRequestError(CookidooError):
    """HTTP 400 from the token endpoint; carries the response body."""

    def __init__(self, body: str) -> None:
        super().__init__(f"Bad request: {body}")
        self.body = body


class CookidooParseError(CookidooError):
    """A success response whose body does not have the expected shape."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to parse response: {reason}")
        self.reason = reason


class CookidooHttpError(CookidooError):
    """Any other non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class CookidooTokenExpiredError(CookidooError):
    """Refresh grant failed, whatever the status code."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Token expired and refresh failed: {reason}")
        self.reason = reason

    def to_domain_error(self) -> DomainError:
        return AuthenticationFailedError(self.reason)


class CookidooAuthResponse(BaseModel):
    """Body of a successful OAuth token response."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str
    expires_in: int = Field(gt=0, description="Access token lifetime in seconds")

    def to_token(self) -> AuthToken:
        """Anchor the declared lifetime to the current monotonic time."""
        return AuthToken.issue(self.access_token, self.refresh_token, self.expires_in)


class AddItemRequest(BaseModel):
    """JSON body of the additional-items endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    items_value: list[str] = Field(alias="itemsValue")

    @classmethod
    def for_item(cls, name: str) -> "AddItemRequest":
        """Wrap a single item name."""
        return cls(items_value=[name])

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the wire field names."""
        return self.model_dump(by_alias=True)


def parse_token_response(response: httpx.Response) -> AuthToken:
    """Decode a 2xx token endpoint response into an ``AuthToken``."""
    try:
        payload = CookidooAuthResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise CookidooParseError(str(exc)) from exc
    return payload.to_token()


class CookidooClient:
    """Thin wrapper around one shared ``httpx.AsyncClient`` for the Cookidoo API.

    Transport exceptions are classified into ``CookidooRequestError``; HTTP
    statuses are returned untouched for the callers to interpret.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def url(self, path: str) -> str:
        """Build a full URL from an API path."""
        return f"{self.base_url}{path}"

    async def post_form(
        self, path: str, data: Mapping[str, str], headers: Mapping[str, str]
    ) -> httpx.Response:
        """POST ``data`` as ``application/x-www-form-urlencoded``."""
        return await self._post(
            path,
            data=dict(data),
            headers={**headers, "Content-Type": "application/x-www-form-urlencoded"},
        )

    async def post_json(
        self, path: str, payload: Mapping[str, Any], headers: Mapping[str, str]
    ) -> httpx.Response:
        """POST ``payload`` as JSON."""
        return await self._post(path, json=dict(payload), headers=dict(headers))

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.post(self.url(path), **kwargs)
        except httpx.TimeoutException as exc:
            raise CookidooRequestError("Request timed out") from exc
        except httpx.ConnectError as exc:
            raise CookidooRequestError("Failed to connect") from exc
        except httpx.RequestError as exc:
            raise CookidooRequestError(str(exc) or exc.__class__.__name__) from exc


__all__ = [
    "AddItemRequest",
    "CookidooAuthResponse",
    "CookidooAuthenticationError",
    "CookidooBadRequestError",
    "CookidooClient",
    "CookidooError",
    "CookidooHttpError",
    "CookidooParseError",
    "CookidooRequestError",
    "CookidooTokenExpiredError",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_USER_AGENT",
    "parse_token_response",
]
