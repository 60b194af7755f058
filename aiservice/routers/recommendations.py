"""API endpoints for AI-generated activity recommendations."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from aiservice.database import get_db
from aiservice.models.schemas import Activity, Recommendation
from aiservice.services.activity_ai_service import ActivityAIService
from aiservice.services.gemini_service import GeminiServiceError
from aiservice.services.recommendation_service import (
    RecommendationNotFoundError,
    RecommendationService,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendation", tags=["recommendations"])


def get_ai_service() -> ActivityAIService:
    """Dependency providing the analysis pipeline."""
    return ActivityAIService()


@router.get("/user/{user_id}", response_model=list[Recommendation])
def get_user_recommendations(user_id: str, db: Session = Depends(get_db)):
    """Return every stored recommendation for a user, newest first."""

    logger.info("Listing recommendations | user=%s", user_id)
    return RecommendationService(db).get_user_recommendations(user_id)


@router.get("/activity/{activity_id}", response_model=Recommendation)
def get_activity_recommendation(activity_id: str, db: Session = Depends(get_db)):
    """Return the recommendation generated for an activity."""

    try:
        return RecommendationService(db).get_activity_recommendation(activity_id)
    except RecommendationNotFoundError as e:
        logger.warning("Recommendation lookup missed | activity=%s", activity_id)
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/generate", response_model=Recommendation, status_code=201)
def generate_recommendation(
    activity: Activity,
    db: Session = Depends(get_db),
    ai_service: ActivityAIService = Depends(get_ai_service),
):
    """
    Analyze an activity with Gemini and store the result.

    Unparseable AI output still yields a (default) recommendation; only a
    failure to reach Gemini is reported as an error.

    Returns:
        Recommendation: the stored recommendation including its id
    """

    try:
        recommendation = ai_service.generate_recommendation(activity)
    except GeminiServiceError as e:
        logger.error("AI analysis unavailable for activity %s: %s", activity.id, e)
        raise HTTPException(
            status_code=502,
            detail=f"Failed to generate recommendation: {str(e)}"
        )

    return RecommendationService(db).save(recommendation)
