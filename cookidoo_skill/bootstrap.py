"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from cookidoo_skill.adapters.cookidoo import CookidooAuthAdapter, CookidooShoppingListAdapter
from cookidoo_skill.adapters.cookidoo_http import CookidooClient
from cookidoo_skill.adapters.token_cache import TokenCache
from cookidoo_skill.core.config import Settings, settings as default_settings
from cookidoo_skill.core.models import CookidooCredentials
from cookidoo_skill.services import ServiceContainer, build_default_services


@dataclass(slots=True)
class CookidooAdapters:
    """The Cookidoo adapters sharing one HTTP client and one token cache."""

    client: CookidooClient
    cache: TokenCache
    auth: CookidooAuthAdapter
    shopping_list: CookidooShoppingListAdapter


def build_cookidoo_adapters(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CookidooAdapters:
    """Wire the Cookidoo adapters from ``settings``."""

    cfg = settings or default_settings
    client = CookidooClient(
        cfg.COOKIDOO_BASE_URL,
        timeout=cfg.COOKIDOO_REQUEST_TIMEOUT_SECONDS,
        user_agent=cfg.COOKIDOO_USER_AGENT,
        transport=transport,
    )
    cache = TokenCache()
    credentials = CookidooCredentials(email=cfg.COOKIDOO_EMAIL, password=cfg.COOKIDOO_PASSWORD)
    auth = CookidooAuthAdapter(client, credentials, cfg.COOKIDOO_AUTH_HEADER, cache)
    return CookidooAdapters(
        client=client,
        cache=cache,
        auth=auth,
        shopping_list=CookidooShoppingListAdapter(client, auth),
    )


def build_default_service_container(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ServiceContainer:
    """Return the default service container wired to production adapters."""

    cfg = settings or default_settings
    adapters = build_cookidoo_adapters(cfg, transport=transport)
    return build_default_services(
        shopping_list_port=adapters.shopping_list,
        skill_id=cfg.ALEXA_SKILL_ID,
        shutdown_hooks=[adapters.client.aclose],
    )


__all__ = ["CookidooAdapters", "build_cookidoo_adapters", "build_default_service_container"]
