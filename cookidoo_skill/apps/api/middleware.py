"""ASGI middleware for the skill API."""

from __future__ import annotations

import time
import uuid

from cookidoo_skill.core.logging import correlation_id_context, get_logger

logger = get_logger(__name__)

CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")


def resolve_correlation_id(raw_headers) -> str:  # type: ignore[no-untyped-def]
    """Return the caller's correlation id, or mint one when none was sent."""
    wanted = {name.lower().encode() for name in CORRELATION_HEADERS}
    for key, value in raw_headers:
        if key.lower() in wanted and value:
            return value.decode()
    return uuid.uuid4().hex


def _echo_correlation_id(message, correlation_id: str) -> None:  # type: ignore[no-untyped-def]
    headers = list(message.get("headers", []))
    present = {key.lower() for key, _ in headers}
    headers.extend(
        (name.encode(), correlation_id.encode())
        for name in CORRELATION_HEADERS
        if name.lower().encode() not in present
    )
    message["headers"] = headers


class CorrelationIdMiddleware:  # pylint: disable=too-few-public-methods
    """Bind a correlation id per HTTP request, echo it back and log the access."""

    def __init__(self, app) -> None:  # type: ignore[no-untyped-def]
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = resolve_correlation_id(scope.get("headers", []))
        status_code = 500
        started = time.perf_counter()

        async def send_with_id(message):  # type: ignore[no-untyped-def]
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                _echo_correlation_id(message, correlation_id)
            await send(message)

        with correlation_id_context(correlation_id):
            try:
                await self.app(scope, receive, send_with_id)
            finally:
                logger.info(
                    "%s %s -> %s",
                    scope.get("method", ""),
                    scope.get("path", ""),
                    status_code,
                    extra={
                        "event": "http_request",
                        "status_code": status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                    },
                )


__all__ = ["CORRELATION_HEADERS", "CorrelationIdMiddleware", "resolve_correlation_id"]
