"""Application service layer for intent handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from cookidoo_skill.core.ports import ShoppingListPort

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .add_item_service import AddItemService
    from .intent_router import IntentRouter
    from .skill_handler import SkillHandler

ShutdownHook = Callable[[], Awaitable[None]]


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    add_item: Optional["AddItemService"] = None
    intent_router: Optional["IntentRouter"] = None
    skill_handler: Optional["SkillHandler"] = None
    shutdown_hooks: list[ShutdownHook] = field(default_factory=list)

    def require_skill_handler(self) -> "SkillHandler":
        if self.skill_handler is None:
            raise RuntimeError("SkillHandler has not been configured.")
        return self.skill_handler

    async def aclose(self) -> None:
        """Run shutdown hooks (closing HTTP clients and the like) once."""
        hooks, self.shutdown_hooks = self.shutdown_hooks, []
        for hook in hooks:
            await hook()


def build_default_services(
    *,
    shopping_list_port: Optional[ShoppingListPort] = None,
    skill_id: Optional[str] = None,
    shutdown_hooks: Optional[list[ShutdownHook]] = None,
) -> ServiceContainer:
    """Return a service container with the default intent router wiring."""

    # pylint: disable=import-outside-toplevel
    from .add_item_service import AddItemService
    from .intent_router import IntentRouter
    from .intents.skill_intents import register_default_handlers
    from .skill_handler import SkillHandler

    intent_router = IntentRouter()
    register_default_handlers(intent_router)
    container = ServiceContainer(
        add_item=AddItemService(shopping_list_port) if shopping_list_port is not None else None,
        intent_router=intent_router,
        shutdown_hooks=list(shutdown_hooks or []),
    )
    container.skill_handler = SkillHandler(container, skill_id=skill_id)
    return container


__all__ = ["ServiceContainer", "ShutdownHook", "build_default_services"]
