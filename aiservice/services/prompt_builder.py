"""Render activities into the Gemini analysis prompt."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from aiservice.config import get_settings
from aiservice.models.schemas import Activity


class PromptBuilder:
    """Builds the analysis prompt from the packaged YAML template."""

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = get_settings().prompt_config_path
        prompt_config = self._load_prompt_config(Path(config_path))
        self.template: str = prompt_config["activity_analysis"]
        self.empty_metrics: str = prompt_config.get("empty_metrics", "{}")

    def build(self, activity: Activity) -> str:
        """Return the prompt for ``activity``. Deterministic for equal activities."""

        return self.template.format(
            activity_type=activity.type.value,
            duration=activity.duration,
            calories_burned=activity.calories_burned,
            additional_metrics=self._format_metrics(activity.additional_metrics),
        )

    def _format_metrics(self, metrics: dict[str, Any] | None) -> str:
        if not metrics:
            return self.empty_metrics
        return json.dumps(metrics, sort_keys=True, default=str)

    @staticmethod
    def _load_prompt_config(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
