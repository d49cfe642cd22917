"""Intent types and models for the Cookidoo skill."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IntentType(str, Enum):
    """Closed set of intents the skill acts on."""

    LAUNCH = "launch"
    ADD_ITEM = "add-item"
    HELP = "help"
    CANCEL = "cancel"
    STOP = "stop"
    UNKNOWN = "unknown"


class AlexaIntentName(str, Enum):
    """Intent names as sent by the Alexa interaction model."""

    ADD_ITEM = "AddItemIntent"
    HELP = "AMAZON.HelpIntent"
    CANCEL = "AMAZON.CancelIntent"
    STOP = "AMAZON.StopIntent"
    FALLBACK = "AMAZON.FallbackIntent"


ITEM_SLOT_NAME = "Item"


@dataclass(frozen=True, slots=True)
class ParsedIntent:
    """One parsed voice command; ``item_name`` is set only for ``ADD_ITEM``."""

    intent: IntentType
    item_name: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.intent is IntentType.ADD_ITEM) != (self.item_name is not None):
            raise ValueError("item_name is required for ADD_ITEM and forbidden otherwise")

    @classmethod
    def add_item(cls, item_name: str) -> "ParsedIntent":
        """Build an ``ADD_ITEM`` intent carrying the raw slot value."""
        return cls(IntentType.ADD_ITEM, item_name)

    @classmethod
    def of(cls, intent: IntentType) -> "ParsedIntent":
        """Build one of the payload-free intents."""
        return cls(intent)


__all__ = ["AlexaIntentName", "IntentType", "ITEM_SLOT_NAME", "ParsedIntent"]
