"""Tests for the AWS Lambda entry point."""

# pylint: disable=missing-function-docstring

from __future__ import annotations

from types import SimpleNamespace

import pytest

from cookidoo_skill.apps import lambda_handler
from cookidoo_skill.bootstrap import build_default_service_container
from cookidoo_skill.services import runtime


@pytest.fixture
def wired(monkeypatch, test_settings, cookidoo_server):
    built: list[object] = []

    def _build():
        services = build_default_service_container(
            test_settings, transport=cookidoo_server.transport()
        )
        built.append(services)
        return services

    monkeypatch.setattr(lambda_handler, "build_default_service_container", _build)
    return built


def test_cold_start_builds_container_once(wired, cookidoo_server, alexa_event):
    cookidoo_server.queue_token(access="access-1")
    cookidoo_server.queue_add(200)
    event = alexa_event(intent="AddItemIntent", slots={"Item": "Milch"})
    context = SimpleNamespace(aws_request_id="lambda-req-1")

    first = lambda_handler.handler(event, context)
    second = lambda_handler.handler(event, context)

    assert len(wired) == 1
    assert runtime.get_services() is wired[0]
    assert first == second
    assert first["response"]["outputSpeech"]["text"] == "Milch wurde zur Einkaufsliste hinzugefügt."
    # warm invocation reuses the cached token
    assert len(cookidoo_server.token_calls) == 1


def test_bad_event_returns_error_speech(wired):
    payload = lambda_handler.handler({"nonsense": True}, None)
    assert payload["response"]["outputSpeech"]["text"] == "Fehler beim Verarbeiten der Anfrage."
    assert payload["response"]["shouldEndSession"] is True
