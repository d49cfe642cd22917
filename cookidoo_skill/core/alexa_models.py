"""Alexa Skills Kit request/response envelope models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ALEXA_RESPONSE_VERSION = "1.0"


class _AlexaModel(BaseModel):
    """Shared camelCase aliasing; unknown envelope fields are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Application(_AlexaModel):
    """Skill application the request is addressed to."""

    application_id: str


class User(_AlexaModel):
    """Alexa account user issuing the request."""

    user_id: str


class Session(_AlexaModel):
    """Session information attached to in-session requests."""

    new: bool = False
    session_id: str
    application: Application
    user: User


class Slot(_AlexaModel):
    """Slot value captured from user speech."""

    name: str
    value: str | None = None


class Intent(_AlexaModel):
    """Intent with name and slots."""

    name: str
    slots: dict[str, Slot] = Field(default_factory=dict)


class LaunchRequest(_AlexaModel):
    """Sent when the user opens the skill without a command."""

    type: Literal["LaunchRequest"]
    request_id: str
    timestamp: str
    locale: str | None = None


class IntentRequest(_AlexaModel):
    """Sent when the user speaks a command mapped to an intent."""

    type: Literal["IntentRequest"]
    request_id: str
    timestamp: str
    locale: str | None = None
    intent: Intent


class SessionEndedRequest(_AlexaModel):
    """Sent when the session closes for any reason."""

    type: Literal["SessionEndedRequest"]
    request_id: str
    timestamp: str
    locale: str | None = None
    reason: str | None = None


AlexaRequestBody = Annotated[
    Union[LaunchRequest, IntentRequest, SessionEndedRequest],
    Field(discriminator="type"),
]


class AlexaRequest(_AlexaModel):
    """Top-level Alexa request envelope."""

    version: str
    session: Session | None = None
    request: AlexaRequestBody


class OutputSpeech(_AlexaModel):
    """Plain text speech output."""

    type: Literal["PlainText"] = "PlainText"
    text: str


class ResponseBody(_AlexaModel):
    """Speech plus session control."""

    output_speech: OutputSpeech
    should_end_session: bool


class AlexaResponse(_AlexaModel):
    """Top-level Alexa response envelope."""

    version: str = ALEXA_RESPONSE_VERSION
    response: ResponseBody

    def to_payload(self) -> dict:
        """Serialize using the camelCase wire names."""
        return self.model_dump(by_alias=True)


__all__ = [
    "ALEXA_RESPONSE_VERSION",
    "AlexaRequest",
    "AlexaResponse",
    "Application",
    "Intent",
    "IntentRequest",
    "LaunchRequest",
    "OutputSpeech",
    "ResponseBody",
    "Session",
    "SessionEndedRequest",
    "Slot",
    "User",
]
