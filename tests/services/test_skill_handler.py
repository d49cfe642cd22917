"""End-to-end tests: Alexa envelope in, Alexa envelope out, Cookidoo stubbed."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from cookidoo_skill.bootstrap import build_default_service_container
from cookidoo_skill.services.skill_handler import SkillIdMismatchError

# pylint: disable=missing-function-docstring

SKILL_ID = "amzn1.ask.skill.cookidoo-test"


def _speech(payload: dict) -> tuple[str, bool]:
    return (
        payload["response"]["outputSpeech"]["text"],
        payload["response"]["shouldEndSession"],
    )


def _handle_all(services, events: list[dict]) -> list[dict]:
    async def _exercise() -> list[dict]:
        try:
            handler = services.require_skill_handler()
            return [await handler.handle_event(event) for event in events]
        finally:
            await services.aclose()

    return asyncio.run(_exercise())


@pytest.fixture
def services(test_settings, cookidoo_server):
    return build_default_service_container(test_settings, transport=cookidoo_server.transport())


def test_happy_path_adds_item(services, cookidoo_server, alexa_event):
    cookidoo_server.queue_token(access="access-1", expires_in=3600)
    cookidoo_server.queue_add(200)

    [payload] = _handle_all(
        services, [alexa_event(intent="AddItemIntent", slots={"Item": "Milch"})]
    )

    assert payload["version"] == "1.0"
    assert payload["response"]["outputSpeech"]["type"] == "PlainText"
    assert _speech(payload) == ("Milch wurde zur Einkaufsliste hinzugefügt.", True)
    assert json.loads(cookidoo_server.add_calls[0].content) == {"itemsValue": ["Milch"]}


def test_second_request_reuses_cached_token(services, cookidoo_server, alexa_event):
    cookidoo_server.queue_token(access="access-1", expires_in=3600)
    cookidoo_server.queue_add(200)
    event = alexa_event(intent="AddItemIntent", slots={"Item": "Milch"})

    _handle_all(services, [event, event])

    assert len(cookidoo_server.token_calls) == 1
    assert len(cookidoo_server.add_calls) == 2


def test_short_lived_token_is_refreshed_on_next_request(services, cookidoo_server, alexa_event):
    cookidoo_server.queue_token(access="access-1", refresh="refresh-1", expires_in=60)
    cookidoo_server.queue_token(access="access-2", refresh="refresh-2", expires_in=3600)
    cookidoo_server.queue_add(200)
    event = alexa_event(intent="AddItemIntent", slots={"Item": "Eier"})

    _handle_all(services, [event, event])

    _, refresh_call = cookidoo_server.token_calls
    assert b"grant_type=refresh_token" in refresh_call.content
    assert b"refresh_token=refresh-1" in refresh_call.content
    assert cookidoo_server.add_calls[1].headers["Authorization"] == "Bearer access-2"


def test_rejected_token_is_replaced_and_item_added(services, cookidoo_server, alexa_event):
    cookidoo_server.queue_token(access="access-1")
    cookidoo_server.queue_token(access="access-2")
    cookidoo_server.queue_add(401)
    cookidoo_server.queue_add(200)

    [payload] = _handle_all(
        services, [alexa_event(intent="AddItemIntent", slots={"Item": "Brot"})]
    )

    assert _speech(payload) == ("Brot wurde zur Einkaufsliste hinzugefügt.", True)
    assert len(cookidoo_server.token_calls) == 2
    assert len(cookidoo_server.add_calls) == 2


def test_invalid_credentials_speak_login_failure(services, cookidoo_server, alexa_event):
    cookidoo_server.queue_token_response(httpx.Response(401, text="denied"))

    [payload] = _handle_all(
        services, [alexa_event(intent="AddItemIntent", slots={"Item": "Milch"})]
    )

    assert _speech(payload) == (
        "Die Anmeldung bei Cookidoo ist fehlgeschlagen. Bitte überprüfe deine Zugangsdaten.",
        True,
    )
    assert cookidoo_server.add_calls == []


def test_server_error_speaks_retry_later(services, cookidoo_server, alexa_event):
    cookidoo_server.queue_token(access="access-1")
    cookidoo_server.queue_add(503, text="down")

    [payload] = _handle_all(
        services, [alexa_event(intent="AddItemIntent", slots={"Item": "Milch"})]
    )

    assert _speech(payload) == (
        "Der Artikel konnte nicht hinzugefügt werden. Bitte versuche es später erneut.",
        True,
    )
    assert len(cookidoo_server.add_calls) == 1


def test_overlong_item_name_ends_session_without_network(
    services, cookidoo_server, alexa_event
):
    [payload] = _handle_all(
        services, [alexa_event(intent="AddItemIntent", slots={"Item": "a" * 201})]
    )

    text, ends = _speech(payload)
    assert text.startswith("Der Artikelname ist ungültig: ")
    assert ends is True
    assert cookidoo_server.requests == []


@pytest.mark.parametrize(
    ("kwargs", "text", "ends"),
    [
        ({"request_type": "LaunchRequest"}, "Willkommen bei der Cookidoo Einkaufsliste.", False),
        ({"intent": "AMAZON.HelpIntent"}, "Du kannst Artikel zu deiner", False),
        ({"intent": "AMAZON.StopIntent"}, "Auf Wiedersehen!", True),
        ({"intent": "AMAZON.CancelIntent"}, "Auf Wiedersehen!", True),
        ({"intent": "AMAZON.FallbackIntent"}, "Das habe ich leider nicht verstanden.", False),
        ({"intent": "AddItemIntent", "slots": {"Item": None}}, "Das habe ich leider", False),
        ({"request_type": "SessionEndedRequest"}, "Auf Wiedersehen!", True),
    ],
)
def test_conversation_intents(services, cookidoo_server, alexa_event, kwargs, text, ends):
    [payload] = _handle_all(services, [alexa_event(**kwargs)])

    spoken, end_session = _speech(payload)
    assert spoken.startswith(text)
    assert end_session is ends
    assert cookidoo_server.requests == []


@pytest.mark.parametrize(
    "event",
    [
        {},
        {"version": "1.0"},
        {"version": "1.0", "request": {"type": "Bogus", "requestId": "r", "timestamp": "t"}},
        ["not", "an", "object"],
    ],
)
def test_undecodable_envelope_yields_fixed_error(services, event):
    [payload] = _handle_all(services, [event])

    assert payload == {
        "version": "1.0",
        "response": {
            "outputSpeech": {"type": "PlainText", "text": "Fehler beim Verarbeiten der Anfrage."},
            "shouldEndSession": True,
        },
    }


def test_foreign_skill_id_is_rejected(test_settings, cookidoo_server, alexa_event):
    test_settings.ALEXA_SKILL_ID = SKILL_ID
    services = build_default_service_container(
        test_settings, transport=cookidoo_server.transport()
    )

    with pytest.raises(SkillIdMismatchError):
        _handle_all(services, [alexa_event("LaunchRequest", application_id="amzn1.ask.skill.other")])


def test_matching_skill_id_is_accepted(test_settings, cookidoo_server, alexa_event):
    test_settings.ALEXA_SKILL_ID = SKILL_ID
    services = build_default_service_container(
        test_settings, transport=cookidoo_server.transport()
    )

    [payload] = _handle_all(services, [alexa_event("LaunchRequest", application_id=SKILL_ID)])

    assert _speech(payload)[1] is False
