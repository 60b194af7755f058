"""SQLAlchemy ORM models for persisted recommendations."""
from datetime import datetime, timezone
from sqlalchemy import Integer, DateTime, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from aiservice.database import Base


class Recommendation(Base):
    """AI-generated analysis stored per activity."""

    __tablename__ = "recommendations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    activity_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    activity_type: Mapped[str] = mapped_column(String(50), nullable=False)

    # Narrative sections joined by blank lines
    recommendation: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Ordered string lists, never empty
    improvements: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    suggestions: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    safety: Mapped[list[str]] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
