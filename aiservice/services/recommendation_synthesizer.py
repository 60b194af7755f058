"""Assemble Recommendation records from parsed AI analysis."""
from __future__ import annotations

from datetime import datetime, timezone

from aiservice.models.schemas import Activity, Recommendation
from aiservice.services.response_parser import (
    NO_IMPROVEMENTS,
    NO_SUGGESTIONS,
    ParsedAnalysisFields,
)


DEFAULT_NARRATIVE = "No analysis available due to AI response failure."
DEFAULT_SAFETY = (
    "Always warm up before exercise.",
    "Stay hydrated.",
    "Listen to your body.",
)


def synthesize(activity: Activity, fields: ParsedAnalysisFields) -> Recommendation:
    """Build the recommendation for ``activity`` from parsed fields."""

    return Recommendation(
        activity_id=activity.id,
        user_id=activity.user_id,
        activity_type=activity.type.value,
        recommendation=fields.narrative(),
        improvements=fields.improvement_lines(),
        suggestions=fields.suggestion_lines(),
        safety=fields.safety_lines(),
        created_at=datetime.now(timezone.utc),
    )


def synthesize_default(activity: Activity) -> Recommendation:
    """Fallback recommendation used whenever the AI response is unusable."""

    return Recommendation(
        activity_id=activity.id,
        user_id=activity.user_id,
        activity_type=activity.type.value,
        recommendation=DEFAULT_NARRATIVE,
        improvements=[NO_IMPROVEMENTS],
        suggestions=[NO_SUGGESTIONS],
        safety=list(DEFAULT_SAFETY),
        created_at=datetime.now(timezone.utc),
    )
