"""AWS Lambda entry point.

One service container and one event loop live for the lifetime of the
execution environment, so warm invocations reuse the HTTP connection pool
and the cached Cookidoo token.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from cookidoo_skill.bootstrap import build_default_service_container
from cookidoo_skill.core.logging import correlation_id_context, get_logger
from cookidoo_skill.services import runtime

logger = get_logger(__name__)

_state: dict[str, Optional[asyncio.AbstractEventLoop]] = {"loop": None}


def _event_loop() -> asyncio.AbstractEventLoop:
    loop = _state["loop"]
    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        _state["loop"] = loop
    return loop


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Handle one Alexa event delivered by Lambda."""
    if not runtime.has_services():
        logger.info("Cold start: building service container")
        runtime.set_services(build_default_service_container())
    skill_handler = runtime.get_services().require_skill_handler()
    request_id = getattr(context, "aws_request_id", None)
    with correlation_id_context(request_id):
        return _event_loop().run_until_complete(skill_handler.handle_event(event))


__all__ = ["handler"]
