"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from cookidoo_skill.apps.api.middleware import CorrelationIdMiddleware
from cookidoo_skill.core.logging import get_logger
from cookidoo_skill.services import ServiceContainer
from cookidoo_skill.services import runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register the container at startup and release its resources on shutdown."""
    logger.info("Starting Cookidoo skill API...")
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
    try:
        yield
    finally:
        if isinstance(services, ServiceContainer):
            await services.aclose()
        logger.info("Cookidoo skill API stopped.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    from .routes import alexa, health  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(alexa.router)
    return app


__all__ = ["create_app", "lifespan"]
