"""Core exception types shared across layers."""


class DomainError(Exception):
    """Base class for technology-agnostic failures of the skill's use cases."""


class InvalidItemNameError(DomainError):
    """Raised when an item name is empty after trimming or too long."""


class AuthenticationFailedError(DomainError):
    """Raised when the shopping-list backend cannot be authenticated against."""


class RepositoryError(DomainError):
    """Raised when a shopping-list operation fails for any non-auth reason."""


__all__ = [
    "DomainError",
    "InvalidItemNameError",
    "AuthenticationFailedError",
    "RepositoryError",
]
