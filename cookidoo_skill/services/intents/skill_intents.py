"""Handlers for the skill's intents.

Session rules: adding an item ends the session whatever the outcome, as does
stopping or cancelling. Launch, help and unrecognised utterances keep the
session open so the user can follow up with a command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cookidoo_skill.core.intents import IntentType, ParsedIntent
from cookidoo_skill.core.logging import get_logger
from cookidoo_skill.core.models import SkillOutcome
from cookidoo_skill.services import messages

if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from cookidoo_skill.services import ServiceContainer
    from cookidoo_skill.services.add_item_service import AddItemService
    from cookidoo_skill.services.intent_router import IntentRouter

logger = get_logger(__name__)


def _require_add_item(services: "ServiceContainer") -> "AddItemService":
    if services.add_item is None:
        raise RuntimeError("AddItemService has not been configured.")
    return services.add_item


async def handle_launch(_parsed: ParsedIntent, _services: "ServiceContainer") -> SkillOutcome:
    """Greet the user and wait for a command."""
    logger.info("Handling launch request")
    return SkillOutcome(messages.WELCOME, should_end_session=False)


async def handle_add_item(parsed: ParsedIntent, services: "ServiceContainer") -> SkillOutcome:
    """Add the spoken item and report the result."""
    if parsed.item_name is None:
        raise ValueError("ADD_ITEM intent without item name")
    logger.info("Handling add item intent", extra={"item_name": parsed.item_name})
    result = await _require_add_item(services).execute(parsed.item_name)
    return SkillOutcome(result.message, should_end_session=True)


async def handle_help(_parsed: ParsedIntent, _services: "ServiceContainer") -> SkillOutcome:
    logger.info("Handling help intent")
    return SkillOutcome(messages.HELP, should_end_session=False)


async def handle_goodbye(parsed: ParsedIntent, _services: "ServiceContainer") -> SkillOutcome:
    """Shared by cancel, stop and session-ended requests."""
    logger.info("Handling session end", extra={"intent": parsed.intent.value})
    return SkillOutcome(messages.GOODBYE, should_end_session=True)


async def handle_unknown(_parsed: ParsedIntent, _services: "ServiceContainer") -> SkillOutcome:
    logger.info("Handling unknown intent")
    return SkillOutcome(messages.UNKNOWN, should_end_session=False)


def register_default_handlers(router: "IntentRouter") -> None:
    """Register a handler for every ``IntentType`` on ``router``."""
    router.register(IntentType.LAUNCH, handle_launch)
    router.register(IntentType.ADD_ITEM, handle_add_item)
    router.register(IntentType.HELP, handle_help)
    router.register(IntentType.CANCEL, handle_goodbye)
    router.register(IntentType.STOP, handle_goodbye)
    router.register(IntentType.UNKNOWN, handle_unknown)


__all__ = [
    "handle_add_item",
    "handle_goodbye",
    "handle_help",
    "handle_launch",
    "handle_unknown",
    "register_default_handlers",
]
