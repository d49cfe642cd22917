"""Map decoded Alexa requests onto the skill's closed intent set."""

from __future__ import annotations

from cookidoo_skill.core.alexa_models import (
    AlexaRequest,
    IntentRequest,
    LaunchRequest,
    SessionEndedRequest,
)
from cookidoo_skill.core.intents import AlexaIntentName, IntentType, ITEM_SLOT_NAME, ParsedIntent

_SIMPLE_INTENTS: dict[str, IntentType] = {
    AlexaIntentName.HELP.value: IntentType.HELP,
    AlexaIntentName.CANCEL.value: IntentType.CANCEL,
    AlexaIntentName.STOP.value: IntentType.STOP,
    AlexaIntentName.FALLBACK.value: IntentType.UNKNOWN,
}


def _parse_intent_request(intent_request: IntentRequest) -> ParsedIntent:
    intent = intent_request.intent
    if intent.name == AlexaIntentName.ADD_ITEM.value:
        slot = intent.slots.get(ITEM_SLOT_NAME)
        value = slot.value if slot is not None else None
        if value is None or not value.strip():
            return ParsedIntent.of(IntentType.UNKNOWN)
        # Trimming is left to ShoppingListItem.create.
        return ParsedIntent.add_item(value)
    return ParsedIntent.of(_SIMPLE_INTENTS.get(intent.name, IntentType.UNKNOWN))


def parse(request: AlexaRequest) -> ParsedIntent:
    """Return the ``ParsedIntent`` for ``request``; never raises."""
    body = request.request
    if isinstance(body, LaunchRequest):
        return ParsedIntent.of(IntentType.LAUNCH)
    if isinstance(body, SessionEndedRequest):
        return ParsedIntent.of(IntentType.STOP)
    if isinstance(body, IntentRequest):
        return _parse_intent_request(body)
    return ParsedIntent.of(IntentType.UNKNOWN)


__all__ = ["parse"]
