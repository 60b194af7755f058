"""Generate an AI recommendation for an activity described in a JSON file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from aiservice.database import SessionLocal, run_migrations
from aiservice.logging_config import configure_logging
from aiservice.models.schemas import Activity
from aiservice.services.activity_ai_service import ActivityAIService
from aiservice.services.gemini_service import GeminiServiceError
from aiservice.services.recommendation_service import RecommendationService


logger = logging.getLogger("scripts.generate_recommendation")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze one activity with Gemini",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the recommendation as JSON
  python scripts/generate_recommendation.py activity.json

  # Also store it in the recommendation database
  python scripts/generate_recommendation.py activity.json --save
        """
    )
    parser.add_argument(
        "activity_file",
        type=Path,
        help="JSON file with id, userId, type, duration, caloriesBurned and optional additionalMetrics"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist the recommendation after printing it"
    )
    return parser.parse_args(argv)


def load_activity(path: Path) -> Activity:
    """Read and validate an activity JSON document."""
    with path.open("r", encoding="utf-8") as fh:
        return Activity.model_validate(json.load(fh))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        activity = load_activity(args.activity_file)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Could not read activity from %s: %s", args.activity_file, e)
        return 1

    try:
        recommendation = ActivityAIService().generate_recommendation(activity)
    except GeminiServiceError as e:
        logger.error("Gemini unavailable: %s", e)
        return 2

    if args.save:
        run_migrations()
        db = SessionLocal()
        try:
            recommendation = RecommendationService(db).save(recommendation)
            db.commit()
        finally:
            db.close()
        logger.info("Stored recommendation %s", recommendation.id)

    print(recommendation.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
