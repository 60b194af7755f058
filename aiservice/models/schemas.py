"""Pydantic models describing activities, recommendations and API payloads."""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ActivityType(str, Enum):
    """Activity types published by the activity tracking service."""

    RUNNING = "RUNNING"
    WALKING = "WALKING"
    CYCLING = "CYCLING"
    SWIMMING = "SWIMMING"
    WEIGHT_TRAINING = "WEIGHT_TRAINING"
    YOGA = "YOGA"
    HIIT = "HIIT"
    CARDIO = "CARDIO"
    STRETCHING = "STRETCHING"
    OTHER = "OTHER"


class CamelModel(BaseModel):
    """Base schema accepting both snake_case and camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Activity(CamelModel):
    """A recorded fitness activity submitted for analysis."""

    id: str
    user_id: str
    type: ActivityType
    duration: int = Field(ge=0, description="Duration in minutes")
    calories_burned: int = Field(ge=0)
    start_time: datetime | None = None
    additional_metrics: dict[str, Any] | None = None


class Recommendation(CamelModel):
    """Structured AI analysis of a single activity."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    activity_id: str
    user_id: str
    activity_type: str
    recommendation: str
    improvements: list[str] = Field(min_length=1)
    suggestions: list[str] = Field(min_length=1)
    safety: list[str] = Field(min_length=1)
    created_at: datetime
