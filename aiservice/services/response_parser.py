"""Parse Gemini responses into structured analysis fields.

Each stage returns either its value or a ``Failure``. Callers check with
``isinstance`` and fall back to the default recommendation; nothing in this
module raises on bad provider output.
"""
from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


NO_IMPROVEMENTS = "No improvements provided."
NO_SUGGESTIONS = "No workout suggestions provided."
NO_SAFETY = "No safety guidelines provided."

# (json key, label) in render order
NARRATIVE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("overall", "Overall: "),
    ("pace", "Pace: "),
    ("heartRate", "Heart Rate: "),
    ("caloriesBurned", "Calories Burned: "),
)

_LEADING_FENCE = re.compile(r"\A```json\n?")
_TRAILING_FENCE = re.compile(r"\n```\Z")


@dataclass(frozen=True)
class Failure:
    """A pipeline stage that could not produce a value."""

    reason: str


@dataclass(frozen=True)
class EnvelopeError(Failure):
    """The provider envelope lacks usable candidate text."""


@dataclass(frozen=True)
class PayloadParseError(Failure):
    """The candidate text is not valid JSON."""


@dataclass(frozen=True)
class ParsedAnalysisFields:
    """Analysis fields extracted from one AI response."""

    sections: Mapping[str, str] = field(default_factory=dict)
    improvements: tuple[Any, ...] = ()
    suggestions: tuple[Any, ...] = ()
    safety: tuple[Any, ...] = ()

    def narrative(self) -> str:
        """Labelled sections in fixed order, separated by blank lines."""
        parts = []
        for key, label in NARRATIVE_SECTIONS:
            if key in self.sections:
                parts.append(f"{label}{self.sections[key]}\n\n")
        return "".join(parts).rstrip()

    def improvement_lines(self) -> list[str]:
        return extract_items(self.improvements, _format_improvement, NO_IMPROVEMENTS)

    def suggestion_lines(self) -> list[str]:
        return extract_items(self.suggestions, _format_suggestion, NO_SUGGESTIONS)

    def safety_lines(self) -> list[str]:
        return extract_items(self.safety, _as_text, NO_SAFETY)


def extract_items(
    nodes: Sequence[Any],
    formatter: Callable[[Any], str],
    fallback: str,
) -> list[str]:
    """Format every node, or return ``[fallback]`` when there are none."""

    items = [formatter(node) for node in nodes]
    return items or [fallback]


def extract_candidate_text(raw_envelope: str | bytes | Mapping[str, Any]) -> str | EnvelopeError:
    """
    Pull ``candidates[0].content.parts[0].text`` out of a Gemini envelope.

    Args:
        raw_envelope: Response body as returned by the API, or an already
            decoded mapping.

    Returns:
        The candidate text (possibly empty when the content path is missing),
        or an ``EnvelopeError`` when the candidates structure is unusable.
    """

    if isinstance(raw_envelope, (str, bytes)):
        try:
            document = json.loads(raw_envelope)
        except (ValueError, RecursionError) as exc:
            return EnvelopeError(f"invalid envelope: {exc}")
    else:
        document = raw_envelope

    candidates = document.get("candidates") if isinstance(document, Mapping) else None
    if not isinstance(candidates, list) or not candidates:
        return EnvelopeError("missing candidates")

    first = candidates[0]
    if first is None:
        return EnvelopeError("missing first candidate")

    content = first.get("content") if isinstance(first, Mapping) else None
    parts = content.get("parts") if isinstance(content, Mapping) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], Mapping):
        return ""
    return _as_text(parts[0].get("text"))


def normalize_payload(raw_text: str) -> str:
    """Strip a ```json code fence and surrounding whitespace."""

    cleaned = raw_text.strip()
    while True:
        stripped = _LEADING_FENCE.sub("", cleaned, count=1)
        stripped = _TRAILING_FENCE.sub("", stripped, count=1).strip()
        if stripped == cleaned:
            return cleaned
        cleaned = stripped


def parse_analysis(cleaned_text: str) -> ParsedAnalysisFields | PayloadParseError:
    """Parse normalized payload text into ``ParsedAnalysisFields``.

    Missing or ill-typed fields are treated as absent; only text that is not
    JSON at all yields a ``PayloadParseError``.
    """

    try:
        document = json.loads(cleaned_text)
    except (ValueError, RecursionError) as exc:
        return PayloadParseError(f"invalid analysis JSON: {exc}")

    if not isinstance(document, Mapping):
        document = {}

    analysis = document.get("analysis")
    sections: dict[str, str] = {}
    if isinstance(analysis, Mapping):
        for key, _label in NARRATIVE_SECTIONS:
            if analysis.get(key) is not None:
                sections[key] = _as_text(analysis[key])

    return ParsedAnalysisFields(
        sections=sections,
        improvements=_as_nodes(document.get("improvements")),
        suggestions=_as_nodes(document.get("suggestions")),
        safety=_as_nodes(document.get("safety")),
    )


def _as_nodes(value: Any) -> tuple[Any, ...]:
    return tuple(value) if isinstance(value, list) else ()


def _as_text(value: Any) -> str:
    """Scalar JSON values as text; null and containers become ''."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _field_text(node: Any, key: str) -> str:
    if not isinstance(node, Mapping):
        return ""
    return _as_text(node.get(key))


def _format_improvement(node: Any) -> str:
    # Improvements carry their detail under "recommendation", not "description".
    return f"{_field_text(node, 'area')}: {_field_text(node, 'recommendation')}"


def _format_suggestion(node: Any) -> str:
    return f"{_field_text(node, 'workout')}: {_field_text(node, 'description')}"
