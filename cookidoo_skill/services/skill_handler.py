"""Turn Alexa request envelopes into response envelopes.

``handle`` is the typed pipeline (parse, dispatch, build). ``handle_event``
wraps it for transports that deliver raw JSON: an undecodable envelope yields
a session-ending error response instead of an exception.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from cookidoo_skill.core.alexa_models import ALEXA_RESPONSE_VERSION, AlexaRequest, AlexaResponse
from cookidoo_skill.core.logging import alexa_request_id_context, get_logger
from cookidoo_skill.services import ServiceContainer, messages
from cookidoo_skill.services.intent_parser import parse
from cookidoo_skill.services.intent_router import IntentRouter
from cookidoo_skill.services.response_builder import ResponseBuilder

logger = get_logger(__name__)


class SkillIdMismatchError(RuntimeError):
    """Raised when an envelope is addressed to a different skill."""

    def __init__(self, application_id: Optional[str]) -> None:
        super().__init__(f"Request addressed to unexpected skill id {application_id!r}")
        self.application_id = application_id


class SkillHandler:
    """Entry point shared by the HTTP app, the Lambda handler and the CLI."""

    def __init__(self, services: ServiceContainer, *, skill_id: Optional[str] = None) -> None:
        self._services = services
        self._skill_id = skill_id

    def _router(self) -> IntentRouter:
        if self._services.intent_router is None:
            raise RuntimeError("IntentRouter has not been configured.")
        return self._services.intent_router

    def verify_skill_id(self, request: AlexaRequest) -> None:
        """Reject envelopes for another skill when a skill id is configured."""
        if self._skill_id is None:
            return
        application_id = (
            request.session.application.application_id if request.session is not None else None
        )
        if application_id != self._skill_id:
            logger.warning(
                "Rejecting request for foreign skill id",
                extra={"application_id": application_id},
            )
            raise SkillIdMismatchError(application_id)

    async def handle(self, request: AlexaRequest) -> AlexaResponse:
        """Parse, dispatch and build the response for one decoded request."""
        with alexa_request_id_context(request.request.request_id):
            self.verify_skill_id(request)
            parsed = parse(request)
            logger.info(
                "Dispatching intent",
                extra={"request_type": request.request.type, "intent": parsed.intent.value},
            )
            outcome = await self._router().dispatch(parsed, self._services)
            return ResponseBuilder.from_outcome(outcome)

    async def handle_event(self, payload: Any) -> dict[str, Any]:
        """Decode ``payload``, handle it and encode the response by alias."""
        try:
            request = AlexaRequest.model_validate(payload)
        except ValidationError as exc:
            logger.error("Failed to parse Alexa request: %s", exc)
            return ResponseBuilder.error(messages.REQUEST_NOT_UNDERSTOOD).to_payload()

        response = await self.handle(request)
        try:
            return response.to_payload()
        except PydanticSerializationError as exc:
            logger.error("Failed to serialize Alexa response: %s", exc)
            return {
                "version": ALEXA_RESPONSE_VERSION,
                "response": {
                    "outputSpeech": {"type": "PlainText", "text": messages.INTERNAL_ERROR},
                    "shouldEndSession": True,
                },
            }


__all__ = ["SkillHandler", "SkillIdMismatchError"]
