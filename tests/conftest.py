"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so real credentials are used when present.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Ensure required env vars exist for config import (fallbacks only)
os.environ.setdefault("COOKIDOO_EMAIL", "test@example.com")
os.environ.setdefault("COOKIDOO_PASSWORD", "test-password")
os.environ.setdefault("COOKIDOO_AUTH_HEADER", "Basic dGVzdC1jbGllbnQ6dGVzdC1zZWNyZXQ=")

# pylint: disable=wrong-import-position
from cookidoo_skill.adapters.cookidoo import SHOPPING_LIST_ENDPOINT, TOKEN_ENDPOINT  # noqa: E402
from cookidoo_skill.bootstrap import CookidooAdapters, build_cookidoo_adapters  # noqa: E402
from cookidoo_skill.core.config import Settings  # noqa: E402
from cookidoo_skill.services import runtime  # noqa: E402

TEST_BASE_URL = "https://cookidoo.test"
TEST_AUTH_HEADER = "Basic dGVzdC1jbGllbnQ6dGVzdC1zZWNyZXQ="


class FakeCookidooServer:
    """Scripted stand-in for the Cookidoo API behind ``httpx.MockTransport``.

    Responses are queued per endpoint and consumed in order; the last queued
    response keeps being served once the queue is down to one entry.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queues: dict[str, list[Any]] = {TOKEN_ENDPOINT: [], SHOPPING_LIST_ENDPOINT: []}

    def queue_token(
        self, access: str = "access-1", refresh: str = "refresh-1", expires_in: int = 3600
    ) -> None:
        self._queues[TOKEN_ENDPOINT].append(
            httpx.Response(
                200,
                json={
                    "access_token": access,
                    "refresh_token": refresh,
                    "expires_in": expires_in,
                    "token_type": "bearer",
                },
            )
        )

    def queue_token_response(self, response: httpx.Response) -> None:
        self._queues[TOKEN_ENDPOINT].append(response)

    def queue_add(self, status_code: int = 200, text: str = "") -> None:
        self._queues[SHOPPING_LIST_ENDPOINT].append(httpx.Response(status_code, text=text))

    def queue_add_error(self, exc: Exception) -> None:
        self._queues[SHOPPING_LIST_ENDPOINT].append(exc)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._queues.get(request.url.path)
        if queue is None:
            return httpx.Response(404, text="not found")
        if not queue:
            raise AssertionError(f"unexpected request to {request.url.path}")
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, path: str) -> list[httpx.Request]:
        return [req for req in self.requests if req.url.path == path]

    @property
    def token_calls(self) -> list[httpx.Request]:
        return self.calls(TOKEN_ENDPOINT)

    @property
    def add_calls(self) -> list[httpx.Request]:
        return self.calls(SHOPPING_LIST_ENDPOINT)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        COOKIDOO_EMAIL="cook@example.com",
        COOKIDOO_PASSWORD="s3cret",
        COOKIDOO_AUTH_HEADER=TEST_AUTH_HEADER,
        COOKIDOO_BASE_URL=TEST_BASE_URL,
        ALEXA_SKILL_ID=None,
    )


@pytest.fixture
def cookidoo_server() -> FakeCookidooServer:
    return FakeCookidooServer()


@pytest.fixture
def cookidoo_adapters(
    test_settings: Settings, cookidoo_server: FakeCookidooServer
) -> CookidooAdapters:
    return build_cookidoo_adapters(test_settings, transport=cookidoo_server.transport())


@pytest.fixture(autouse=True)
def _reset_runtime_registry():
    yield
    runtime.clear_services()


TEST_SKILL_ID = "amzn1.ask.skill.cookidoo-test"


def build_alexa_event(
    request_type: str = "IntentRequest",
    *,
    intent: str | None = None,
    slots: dict[str, str | None] | None = None,
    application_id: str = TEST_SKILL_ID,
    request_id: str = "amzn1.echo-api.request.test",
) -> dict[str, Any]:
    request: dict[str, Any] = {
        "type": request_type,
        "requestId": request_id,
        "timestamp": "2024-05-01T12:00:00Z",
        "locale": "de-DE",
    }
    if intent is not None:
        slot_map: dict[str, Any] = {}
        for name, value in (slots or {}).items():
            slot_map[name] = {"name": name} if value is None else {"name": name, "value": value}
        request["intent"] = {"name": intent, "slots": slot_map}
    return {
        "version": "1.0",
        "session": {
            "new": True,
            "sessionId": "amzn1.echo-api.session.test",
            "application": {"applicationId": application_id},
            "user": {"userId": "amzn1.ask.account.test"},
        },
        "request": request,
    }


@pytest.fixture
def alexa_event():
    return build_alexa_event
