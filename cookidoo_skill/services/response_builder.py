"""Build Alexa response envelopes."""

from __future__ import annotations

from cookidoo_skill.core.alexa_models import AlexaResponse, OutputSpeech, ResponseBody
from cookidoo_skill.core.models import SkillOutcome


class ResponseBuilder:
    """Wrap speech text and the session flag in an Alexa envelope.

    Which responses end the session is decided by the intent handlers; this
    class only renders their :class:`SkillOutcome`.
    """

    @staticmethod
    def build(text: str, should_end_session: bool) -> AlexaResponse:
        return AlexaResponse(
            response=ResponseBody(
                output_speech=OutputSpeech(text=text),
                should_end_session=should_end_session,
            )
        )

    @classmethod
    def from_outcome(cls, outcome: SkillOutcome) -> AlexaResponse:
        return cls.build(outcome.text, outcome.should_end_session)

    @classmethod
    def error(cls, message: str) -> AlexaResponse:
        """Session-ending response for requests that never reached a handler."""
        return cls.build(message, True)


__all__ = ["ResponseBuilder"]
