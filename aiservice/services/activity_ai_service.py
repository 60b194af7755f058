"""Gemini-powered activity analysis pipeline."""
from __future__ import annotations

import logging

from aiservice.models.schemas import Activity, Recommendation
from aiservice.services.gemini_service import GeminiService
from aiservice.services.prompt_builder import PromptBuilder
from aiservice.services.recommendation_synthesizer import synthesize, synthesize_default
from aiservice.services.response_parser import (
    EnvelopeError,
    Failure,
    extract_candidate_text,
    normalize_payload,
    parse_analysis,
)


logger = logging.getLogger(__name__)


class ActivityAIService:
    """Turns an activity into a structured recommendation via Gemini.

    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        gemini_service: GeminiService | None = None,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self.gemini_service = gemini_service or GeminiService()
        self.prompt_builder = prompt_builder or PromptBuilder()

    def generate_recommendation(self, activity: Activity) -> Recommendation:
        """
        Analyze ``activity`` and return its recommendation.

        Malformed or empty AI output yields the default recommendation. Errors
        raised by the Gemini client itself propagate to the caller.
        """
        prompt = self.prompt_builder.build(activity)
        logger.info("Requesting AI analysis | activity=%s type=%s", activity.id, activity.type.value)
        ai_response = self.gemini_service.get_answer(prompt)
        logger.debug("AI response for activity %s: %s", activity.id, ai_response)
        return self.process_ai_response(activity, ai_response)

    def process_ai_response(self, activity: Activity, ai_response: str) -> Recommendation:
        """Convert a raw Gemini envelope into a recommendation. Never raises."""

        raw_text = extract_candidate_text(ai_response)
        if raw_text == "":
            raw_text = EnvelopeError("empty candidate text")
        if isinstance(raw_text, Failure):
            return self._fallback(activity, raw_text)

        cleaned_json = normalize_payload(raw_text)
        logger.debug("Extracted JSON string for activity %s: %s", activity.id, cleaned_json)

        fields = parse_analysis(cleaned_json)
        if isinstance(fields, Failure):
            return self._fallback(activity, fields)

        recommendation = synthesize(activity, fields)
        logger.info(
            "Recommendation ready | activity=%s improvements=%d suggestions=%d safety=%d",
            activity.id,
            len(recommendation.improvements),
            len(recommendation.suggestions),
            len(recommendation.safety),
        )
        return recommendation

    @staticmethod
    def _fallback(activity: Activity, failure: Failure) -> Recommendation:
        logger.error(
            "Unusable AI response for activity %s (%s): %s",
            activity.id,
            type(failure).__name__,
            failure.reason,
        )
        return synthesize_default(activity)
