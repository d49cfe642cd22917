"""Intent router: dispatch parsed intents to their handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable, Callable, Mapping, MutableMapping

from cookidoo_skill.core.intents import IntentType, ParsedIntent
from cookidoo_skill.core.models import SkillOutcome

if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from . import ServiceContainer


IntentHandler = Callable[[ParsedIntent, "ServiceContainer"], Awaitable[SkillOutcome]]


class IntentRouterError(RuntimeError):
    """Base error for router failures."""


class IntentHandlerNotFoundError(IntentRouterError):
    """Raised when no handler is registered for the requested intent."""


class IntentRouter:
    """Dispatch intents to registered handlers.

    Handlers decide the spoken text and whether the session stays open; the
    router only selects one. ``build_default_services`` registers a handler for
    every ``IntentType`` so dispatch is total for the default wiring.
    """

    def __init__(self, handlers: Mapping[IntentType, IntentHandler] | None = None) -> None:
        self._handlers: MutableMapping[IntentType, IntentHandler] = dict(handlers or {})

    def register(self, intent: IntentType, handler: IntentHandler) -> None:
        """Register or replace a handler for ``intent``."""

        self._handlers[intent] = handler

    def unregister(self, intent: IntentType) -> None:
        """Remove a handler if present."""

        self._handlers.pop(intent, None)

    async def dispatch(self, parsed: ParsedIntent, services: "ServiceContainer") -> SkillOutcome:
        """Invoke the handler for ``parsed.intent`` with the provided services."""

        try:
            handler = self._handlers[parsed.intent]
        except KeyError as exc:
            raise IntentHandlerNotFoundError(
                f"No handler registered for intent {parsed.intent.value}"
            ) from exc
        return await handler(parsed, services)

    def handlers(self) -> Mapping[IntentType, IntentHandler]:
        """Return a shallow copy of the current intent handler registry."""

        return dict(self._handlers)


__all__ = [
    "IntentRouter",
    "IntentRouterError",
    "IntentHandlerNotFoundError",
    "IntentHandler",
]
