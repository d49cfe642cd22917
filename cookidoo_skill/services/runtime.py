"""Process-wide registry for the active :class:`ServiceContainer`.

The FastAPI app registers its container during startup and the Lambda handler
on first invocation, so entry points that cannot receive the container as an
argument can still resolve it. Tests override it with in-memory stubs.
"""

from __future__ import annotations

from typing import Optional

from . import ServiceContainer

_registry: dict[str, Optional[ServiceContainer]] = {"services": None}


def set_services(container: ServiceContainer) -> None:
    """Register the active service container."""
    _registry["services"] = container


def get_services() -> ServiceContainer:
    """Return the registered service container or raise if missing."""
    container = _registry.get("services")
    if container is None:
        raise RuntimeError("Service container has not been configured.")
    return container


def has_services() -> bool:
    return _registry.get("services") is not None


def clear_services() -> None:
    """Reset the registry (used primarily in tests)."""
    _registry["services"] = None


__all__ = ["set_services", "get_services", "has_services", "clear_services"]
