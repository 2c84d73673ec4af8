"""Tests for boostiq.engine.parser."""

from __future__ import annotations

import json

import pytest

from boostiq.engine.parser import ResponseParser
from boostiq.errors import ParseError
from boostiq.models import Priority, Recommendation


# ── helpers ────────────────────────────────────────────

MEMORY = {
    "type": "Memory Optimization",
    "description": "Close heavy background apps",
    "impact": 25,
    "priority": "high",
    "actions": ["Close Game App", "Clear caches"],
    "requiresPermission": False,
    "isAutomated": True,
}

BATTERY = {
    "type": "Battery Management",
    "description": "Lower screen brightness",
    "impact": 12.5,
    "priority": "medium",
    "actions": [],
    "requiresPermission": True,
    "isAutomated": False,
}


@pytest.fixture
def parser() -> ResponseParser:
    return ResponseParser()


def _expected(*entries: dict) -> list[Recommendation]:
    return [Recommendation.model_validate(e) for e in entries]


# ── direct parse ───────────────────────────────────────


class TestDirectParse:
    def test_round_trip(self, parser):
        raw = json.dumps([MEMORY, BATTERY])
        assert parser.parse(raw) == _expected(MEMORY, BATTERY)

    def test_field_mapping(self, parser):
        rec = parser.parse(json.dumps([MEMORY]))[0]
        assert rec.type == "Memory Optimization"
        assert rec.impact == 25
        assert rec.priority == Priority.HIGH
        assert rec.actions == ["Close Game App", "Clear caches"]
        assert rec.requires_permission is False
        assert rec.is_automated is True

    def test_single_object_is_wrapped(self, parser):
        assert parser.parse(json.dumps(MEMORY)) == _expected(MEMORY)

    def test_json_embedded_in_prose(self, parser):
        raw = f"Sure! Here are my suggestions:\n{json.dumps([MEMORY])}\nHope this helps."
        assert parser.parse(raw) == _expected(MEMORY)

    def test_multiline_pretty_printed_json(self, parser):
        raw = json.dumps([MEMORY, BATTERY], indent=4).replace("\n", "\r\n")
        assert parser.parse(raw) == _expected(MEMORY, BATTERY)

    def test_markdown_fence(self, parser):
        raw = "```json\n" + json.dumps([BATTERY], indent=2) + "\n```"
        assert parser.parse(raw) == _expected(BATTERY)


# ── repair heuristics ──────────────────────────────────


class TestRepair:
    def test_missing_comma_between_objects(self, parser):
        raw = "[" + json.dumps(MEMORY) + json.dumps(BATTERY) + "]"
        assert parser.parse(raw) == _expected(MEMORY, BATTERY)

    def test_missing_comma_with_whitespace(self, parser):
        raw = "[" + json.dumps(MEMORY) + "\n   " + json.dumps(BATTERY) + "]"
        assert parser.parse(raw) == _expected(MEMORY, BATTERY)

    def test_trailing_comma_before_bracket(self, parser):
        raw = "[" + json.dumps(MEMORY) + "," + json.dumps(BATTERY) + ", ]"
        assert parser.parse(raw) == _expected(MEMORY, BATTERY)

    def test_trailing_comma_before_brace(self, parser):
        raw = json.dumps([MEMORY])[:-2] + ",}]"
        assert parser.parse(raw) == _expected(MEMORY)

    def test_concatenated_objects_without_array(self, parser):
        raw = json.dumps(MEMORY) + " " + json.dumps(BATTERY)
        assert parser.parse(raw) == _expected(MEMORY, BATTERY)

    def test_repair_helper(self):
        assert ResponseParser.repair('{"a":1} {"b":2,}') == '[{"a":1},{"b":2}]'
        assert ResponseParser.repair("[1,2,]") == "[1,2]"

    def test_unrepairable_raises(self, parser):
        with pytest.raises(ParseError, match="Failed to parse AI response"):
            parser.parse('[{"type": "x", "description": }]')


# ── extraction / normalization ─────────────────────────


class TestExtraction:
    def test_array_preferred_when_it_starts_first(self):
        assert ResponseParser.extract('x [1, {"a": 2}] y') == '[1, {"a": 2}]'

    def test_object_when_it_starts_first(self):
        assert ResponseParser.extract('x {"a": [1]} y') == '{"a": [1]}'

    def test_greedy_to_last_bracket(self):
        assert ResponseParser.extract("[1] and [2]") == "[1] and [2]"

    def test_normalize(self):
        assert ResponseParser.normalize(' [\r\n  1,\n\t2 ]\r ') == "[ 1, 2 ]"


# ── validation / rejection ─────────────────────────────


class TestValidation:
    def test_invalid_records_dropped(self, parser):
        broken = dict(BATTERY)
        del broken["isAutomated"]
        raw = json.dumps([MEMORY, broken, "text", 7])
        assert parser.parse(raw) == _expected(MEMORY)

    def test_invalid_records_are_not_corrected(self, parser):
        stringly = dict(MEMORY, impact="25")
        with pytest.raises(ParseError, match="No valid optimizations"):
            parser.parse(json.dumps([stringly]))

    def test_no_valid_records(self, parser):
        with pytest.raises(ParseError, match="No valid optimizations"):
            parser.parse('[{"type": "x"}]')

    def test_empty_array(self, parser):
        with pytest.raises(ParseError):
            parser.parse("[]")

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "I could not analyze your device right now.",
            "Try closing some apps (especially games).",
        ],
    )
    def test_no_json_like_text(self, parser, raw):
        with pytest.raises(ParseError, match="No JSON content found"):
            parser.parse(raw)

    def test_wrapper_object_without_records(self, parser):
        # json_object mode sometimes nests the array under a key
        raw = json.dumps({"optimizations": [MEMORY]})
        with pytest.raises(ParseError):
            parser.parse(raw)

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literals_rejected(self, parser, literal):
        raw = json.dumps([MEMORY]).replace('"impact": 25', f'"impact": {literal}')
        assert literal in raw
        with pytest.raises(ParseError, match="Failed to parse AI response"):
            parser.parse(raw)

    def test_non_finite_literal_after_repair_rejected(self, parser):
        raw = json.dumps(MEMORY) + " " + json.dumps(BATTERY).replace('"impact": 12.5', '"impact": NaN')
        with pytest.raises(ParseError, match="NaN is not valid JSON"):
            parser.parse(raw)
