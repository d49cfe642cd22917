"""Shared FastAPI dependencies for token validation and service access."""

import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from cookidoo_skill.core.config import config
from cookidoo_skill.services import ServiceContainer, runtime
from cookidoo_skill.services.skill_handler import SkillHandler


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _validate_token(
    *,
    expected: Optional[str],
    authorization: Optional[str],
    x_api_token: Optional[str],
) -> None:
    """Validate a bearer or X-API-Token header against ``expected``."""
    if not expected:
        raise _unauthorized("Token not configured")

    provided = None
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1].strip()
    elif x_api_token:
        provided = x_api_token.strip()

    if not provided:
        raise _unauthorized("Missing credentials")
    if not hmac.compare_digest(provided, expected):
        raise _unauthorized("Invalid credentials")


async def require_healthcheck_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_api_token: Annotated[Optional[str], Header(alias="X-API-Token")] = None,
) -> None:
    """Token guard for the health check endpoint."""
    if not config.ENABLE_HEALTHCHECK_AUTH:
        return
    _validate_token(
        expected=config.HEALTHCHECK_API_TOKEN,
        authorization=authorization,
        x_api_token=x_api_token,
    )


def get_service_container() -> ServiceContainer:
    """Resolve the globally configured service container."""
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_skill_handler(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> SkillHandler:
    """Return the skill handler bound to the active container."""
    try:
        return container.require_skill_handler()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Skill handler is unavailable",
        ) from exc


__all__ = ["get_service_container", "get_skill_handler", "require_healthcheck_token"]
