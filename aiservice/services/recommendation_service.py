"""Storage and lookup of generated recommendations."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from aiservice.database import SessionLocal
from aiservice.models import database_models
from aiservice.models.schemas import Recommendation


logger = logging.getLogger(__name__)


class RecommendationNotFoundError(LookupError):
    """No recommendation exists for the requested activity."""


class RecommendationService:
    """Persist recommendations and query them by user or activity."""

    def __init__(self, db: Session | None = None):
        """Initialize with optional database session."""
        self.db = db or SessionLocal()

    def save(self, recommendation: Recommendation) -> Recommendation:
        """Store ``recommendation`` and return it with its database id."""

        row = database_models.Recommendation(
            activity_id=recommendation.activity_id,
            user_id=recommendation.user_id,
            activity_type=recommendation.activity_type,
            recommendation=recommendation.recommendation,
            improvements=list(recommendation.improvements),
            suggestions=list(recommendation.suggestions),
            safety=list(recommendation.safety),
            created_at=_as_utc(recommendation.created_at),
        )
        self.db.add(row)
        self.db.flush()
        logger.info("Saved recommendation %d for activity %s", row.id, row.activity_id)
        return recommendation.model_copy(update={"id": row.id})

    def get_user_recommendations(self, user_id: str) -> list[Recommendation]:
        """All recommendations for ``user_id``, newest first."""

        rows = (
            self.db.query(database_models.Recommendation)
            .filter(database_models.Recommendation.user_id == user_id)
            .order_by(
                database_models.Recommendation.created_at.desc(),
                database_models.Recommendation.id.desc(),
            )
            .all()
        )
        return [_to_schema(row) for row in rows]

    def get_activity_recommendation(self, activity_id: str) -> Recommendation:
        """
        Latest recommendation for ``activity_id``.

        Raises:
            RecommendationNotFoundError: if none has been generated yet.
        """
        row = (
            self.db.query(database_models.Recommendation)
            .filter(database_models.Recommendation.activity_id == activity_id)
            .order_by(database_models.Recommendation.id.desc())
            .first()
        )
        if row is None:
            raise RecommendationNotFoundError(f"No recommendation found for this activity: {activity_id}")
        return _to_schema(row)


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps are UTC; SQLite drops the offset on storage."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_schema(row: database_models.Recommendation) -> Recommendation:
    recommendation = Recommendation.model_validate(row)
    return recommendation.model_copy(update={"created_at": _as_utc(recommendation.created_at)})
