"""Unit tests for Gemini envelope extraction and analysis parsing."""
import json

import pytest

from aiservice.services.response_parser import (
    NO_IMPROVEMENTS,
    NO_SAFETY,
    NO_SUGGESTIONS,
    EnvelopeError,
    ParsedAnalysisFields,
    PayloadParseError,
    extract_candidate_text,
    extract_items,
    normalize_payload,
    parse_analysis,
)


class TestExtractCandidateText:

    def test_returns_first_candidate_text(self, gemini_fixture):
        text = extract_candidate_text(json.dumps(gemini_fixture))
        assert text.startswith("```json\n{")
        assert text.endswith("}\n```")

    def test_accepts_decoded_mapping(self, gemini_fixture):
        assert extract_candidate_text(gemini_fixture) == extract_candidate_text(json.dumps(gemini_fixture))

    @pytest.mark.parametrize(
        "envelope",
        [
            {},
            {"candidates": []},
            {"candidates": "not-a-list"},
            {"candidates": {"content": {}}},
            {"candidates": None},
            [],
        ],
    )
    def test_missing_candidates(self, envelope):
        result = extract_candidate_text(json.dumps(envelope))
        assert isinstance(result, EnvelopeError)
        assert result.reason == "missing candidates"

    def test_null_first_candidate(self):
        result = extract_candidate_text('{"candidates": [null]}')
        assert result == EnvelopeError("missing first candidate")

    def test_invalid_envelope_json(self):
        result = extract_candidate_text('{"candidates": [')
        assert isinstance(result, EnvelopeError)
        assert result.reason.startswith("invalid envelope")

    def test_deeply_nested_envelope(self):
        result = extract_candidate_text("[" * 200000)
        assert isinstance(result, EnvelopeError)
        assert result.reason.startswith("invalid envelope")

    @pytest.mark.parametrize(
        "candidate",
        [
            {},
            {"content": {}},
            {"content": {"parts": []}},
            {"content": {"parts": [{}]}},
            {"content": {"parts": ["plain string"]}},
            {"content": {"parts": [{"text": None}]}},
        ],
    )
    def test_missing_text_path_yields_empty_string(self, candidate):
        assert extract_candidate_text({"candidates": [candidate]}) == ""


class TestNormalizePayload:

    def test_strips_json_fence(self):
        assert normalize_payload('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_fenced_matches_unfenced(self):
        body = '{"safety": ["Stretch after running"]}'
        assert normalize_payload(f"```json\n{body}\n```") == normalize_payload(body)

    def test_fence_without_newline_after_marker(self):
        assert normalize_payload('```json{"a": 1}\n```') == '{"a": 1}'

    def test_trims_surrounding_whitespace(self):
        assert normalize_payload('  \n```json\n{"a": 1}\n```\n  ') == '{"a": 1}'

    def test_does_not_validate_json(self):
        assert normalize_payload("not json at all") == "not json at all"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            '{"a": 1}',
            '```json\n{"a": 1}\n```',
            '```json\n```json\n{"a": 1}\n```\n```',
            "```json\n",
            "\n```",
            "```json\n\n```",
            "``` json\n{}\n```",
            '  ```json\n  {"a": 1}  \n```  ',
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_payload(raw)
        assert normalize_payload(once) == once


class TestParseAnalysis:

    def test_invalid_json_is_failure(self):
        result = parse_analysis('{"analysis": {"overall": "Good"')
        assert isinstance(result, PayloadParseError)

    def test_empty_text_is_failure(self):
        assert isinstance(parse_analysis(""), PayloadParseError)

    def test_deeply_nested_payload_is_failure(self):
        assert isinstance(parse_analysis("[" * 200000), PayloadParseError)

    def test_oversized_number_is_failure(self):
        assert isinstance(parse_analysis("9" * 5000), PayloadParseError)

    def test_narrative_sections_in_fixed_order(self):
        payload = {
            "analysis": {
                "caloriesBurned": "C",
                "heartRate": "H",
                "pace": "P",
                "overall": "O",
            }
        }
        fields = parse_analysis(json.dumps(payload))
        assert fields.narrative() == "Overall: O\n\nPace: P\n\nHeart Rate: H\n\nCalories Burned: C"

    def test_absent_sections_are_skipped(self):
        fields = parse_analysis(json.dumps({"analysis": {"pace": "P", "caloriesBurned": "C"}}))
        assert fields.narrative() == "Pace: P\n\nCalories Burned: C"

    def test_null_section_is_treated_as_absent(self):
        fields = parse_analysis(json.dumps({"analysis": {"overall": None, "pace": "P"}}))
        assert fields.narrative() == "Pace: P"

    def test_numeric_section_rendered_as_text(self):
        fields = parse_analysis(json.dumps({"analysis": {"caloriesBurned": 300}}))
        assert fields.narrative() == "Calories Burned: 300"

    def test_no_analysis_gives_empty_narrative(self):
        assert parse_analysis("{}").narrative() == ""

    def test_improvements_use_recommendation_key(self):
        payload = {
            "improvements": [
                {"area": "Cadence", "recommendation": "Shorter strides", "description": "ignored"},
                {"area": "Form", "description": "ignored"},
                {"recommendation": "Rest more"},
            ]
        }
        fields = parse_analysis(json.dumps(payload))
        assert fields.improvement_lines() == ["Cadence: Shorter strides", "Form: ", ": Rest more"]

    def test_suggestions_use_description_key(self):
        payload = {
            "suggestions": [
                {"workout": "Intervals", "description": "6 x 400m", "recommendation": "ignored"},
                {"workout": "Easy Run"},
            ]
        }
        fields = parse_analysis(json.dumps(payload))
        assert fields.suggestion_lines() == ["Intervals: 6 x 400m", "Easy Run: "]

    def test_safety_items_taken_verbatim(self):
        fields = parse_analysis(json.dumps({"safety": ["Hydrate", "Warm up"]}))
        assert fields.safety_lines() == ["Hydrate", "Warm up"]

    @pytest.mark.parametrize("value", [None, [], "not-a-list", {"area": "x"}])
    def test_list_fallbacks(self, value):
        payload = {"improvements": value, "suggestions": value, "safety": value}
        fields = parse_analysis(json.dumps(payload))
        assert fields.improvement_lines() == [NO_IMPROVEMENTS]
        assert fields.suggestion_lines() == [NO_SUGGESTIONS]
        assert fields.safety_lines() == [NO_SAFETY]

    def test_non_object_document_degrades_to_defaults(self):
        fields = parse_analysis('["unexpected", "array"]')
        assert isinstance(fields, ParsedAnalysisFields)
        assert fields.narrative() == ""
        assert fields.improvement_lines() == [NO_IMPROVEMENTS]

    def test_non_object_list_items_format_as_empty_fields(self):
        fields = parse_analysis(json.dumps({"improvements": ["just text"]}))
        assert fields.improvement_lines() == [": "]


def test_extract_items_applies_formatter_or_fallback():
    assert extract_items([1, 2], lambda n: f"#{n}", "none") == ["#1", "#2"]
    assert extract_items([], lambda n: f"#{n}", "none") == ["none"]
