"""Add-item use case: validate the spoken name and hand it to the shopping list."""

from __future__ import annotations

from dataclasses import dataclass

from cookidoo_skill.core.exceptions import (
    AuthenticationFailedError,
    DomainError,
    InvalidItemNameError,
    RepositoryError,
)
from cookidoo_skill.core.logging import get_logger
from cookidoo_skill.core.models import ShoppingListItem
from cookidoo_skill.core.ports import ShoppingListPort
from cookidoo_skill.services import messages

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AddItemResult:
    """Outcome of one add-item attempt, already phrased for the user."""

    succeeded: bool
    message: str


class AddItemService:
    """Translate every failure kind into one of the fixed user messages."""

    def __init__(self, repository: ShoppingListPort) -> None:
        self._repository = repository

    async def execute(self, item_name: str) -> AddItemResult:
        """Add ``item_name`` (raw slot text) to the shopping list."""
        try:
            item = ShoppingListItem.create(item_name)
        except InvalidItemNameError as exc:
            logger.error("Invalid item name provided: %s", exc)
            return AddItemResult(False, messages.invalid_item_name(str(exc)))

        try:
            await self._repository.add_item(item)
        except AuthenticationFailedError as exc:
            logger.error("Authentication failed while adding item: %s", exc)
            return AddItemResult(False, messages.LOGIN_FAILED)
        except RepositoryError as exc:
            logger.error("Repository error while adding item: %s", exc)
            return AddItemResult(False, messages.ITEM_NOT_ADDED)
        except DomainError as exc:
            logger.error("Unexpected error adding item: %s", exc)
            return AddItemResult(False, messages.UNEXPECTED_ERROR)

        logger.info("Item added to shopping list", extra={"item_name": item.name})
        return AddItemResult(True, messages.item_added(item.name))


__all__ = ["AddItemResult", "AddItemService"]
