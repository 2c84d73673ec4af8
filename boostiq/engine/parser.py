"""Recovery of recommendation records from free-form LLM output.

Completion endpoints regularly wrap their JSON in prose, break it across
lines, or emit near-JSON with trailing commas and missing separators
between objects. ``ResponseParser`` extracts the JSON-looking span, tries
a strict decode, then applies a fixed set of textual repairs and tries
once more. Records that do not satisfy the recommendation contract are
dropped rather than corrected.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from boostiq.errors import ParseError
from boostiq.models import Recommendation, is_valid_recommendation

logger = logging.getLogger(__name__)

_JSON_SPAN = re.compile(r"\[[\s\S]*\]|\{[\s\S]*\}")
_NEWLINES = re.compile(r"\r\n|\n|\r")
_WHITESPACE = re.compile(r"\s+")

# Applied in order before the second decode attempt.
_REPAIRS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"}\s*{"), "},{"),
    (re.compile(r",\s*]"), "]"),
    (re.compile(r",\s*}"), "}"),
)

_ERROR_PREFIX = "Failed to parse AI response: "


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


class ResponseParser:
    def parse(self, raw_text: str) -> list[Recommendation]:
        logger.debug("Raw AI response content: %r", raw_text)
        try:
            entries = self._decode(self.normalize(self.extract(raw_text)))
        except (ValueError, TypeError) as exc:
            raise ParseError(f"{_ERROR_PREFIX}{exc}") from exc

        valid = [Recommendation.model_validate(e) for e in entries if is_valid_recommendation(e)]
        dropped = len(entries) - len(valid)
        if dropped:
            logger.info("Dropped %d invalid recommendation record(s)", dropped)
        if not valid:
            raise ParseError(f"{_ERROR_PREFIX}No valid optimizations found in response")
        return valid

    @staticmethod
    def extract(raw_text: str) -> str:
        """Return the widest ``[...]`` or ``{...}`` span, whichever starts first."""
        match = _JSON_SPAN.search(raw_text or "")
        if not match:
            raise ParseError(f"{_ERROR_PREFIX}No JSON content found in response")
        return match.group(0)

    @staticmethod
    def normalize(text: str) -> str:
        text = _NEWLINES.sub("", text)
        return _WHITESPACE.sub(" ", text).strip()

    @staticmethod
    def repair(text: str) -> str:
        for pattern, replacement in _REPAIRS:
            text = pattern.sub(replacement, text)
        if not text.startswith("["):
            text = f"[{text}]"
        return text

    def _decode(self, text: str) -> list[Any]:
        try:
            return self._load(text)
        except json.JSONDecodeError as exc:
            logger.debug("Initial parse failed (%s), attempting to fix JSON format", exc)
        repaired = self.repair(text)
        logger.debug("Attempting to parse fixed JSON: %s", repaired)
        return self._load(repaired)

    @staticmethod
    def _load(text: str) -> list[Any]:
        if text.startswith("["):
            return json.loads(text, parse_constant=_reject_constant)
        return [json.loads(text, parse_constant=_reject_constant)]
