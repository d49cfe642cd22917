"""Infrastructure adapter exports."""

from cookidoo_skill.core.exceptions import (  # noqa: F401
    AuthenticationFailedError,
    RepositoryError,
)

from .cookidoo import CookidooAuthAdapter, CookidooShoppingListAdapter
from .cookidoo_http import CookidooClient, CookidooError
from .token_cache import TokenCache

__all__ = [
    "CookidooAuthAdapter",
    "CookidooClient",
    "CookidooError",
    "CookidooShoppingListAdapter",
    "TokenCache",
    "AuthenticationFailedError",
    "RepositoryError",
]
