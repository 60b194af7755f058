"""Router exposing basic system endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from aiservice.database import get_db
from aiservice.models.database_models import Recommendation


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload."""
    return {"status": "online"}


@router.get("/storage")
def get_storage_status(db: Session = Depends(get_db)) -> dict:
    """
    Report whether the recommendation store is reachable.

    Returns:
        dict: {
            "database": "ok",
            "recommendation_count": int,
            "latest_recommendation_at": ISO timestamp or None
        }
    """
    try:
        count, latest = db.query(
            func.count(Recommendation.id),
            func.max(Recommendation.created_at),
        ).one()
    except Exception:
        logger.exception("Storage status check failed")
        raise HTTPException(status_code=503, detail="Recommendation store unavailable")

    return {
        "database": "ok",
        "recommendation_count": count,
        "latest_recommendation_at": latest.isoformat() if latest else None,
    }
