from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recommendation(BaseModel):
    """One optimization suggestion, as produced by the LLM or the rule set."""

    type: str
    description: str
    impact: float
    priority: Priority = Priority.MEDIUM
    actions: list[str] = Field(default_factory=list)
    requires_permission: bool = False
    is_automated: bool = False

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Priority:
        # Unknown or missing priorities are not grounds for dropping a record.
        if isinstance(value, str):
            try:
                return Priority(value.strip().lower())
            except ValueError:
                pass
        return Priority.MEDIUM

    @field_validator("actions", mode="before")
    @classmethod
    def _stringify_actions(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [a if isinstance(a, str) else str(a) for a in value]
        return value


def is_valid_recommendation(entry: Any) -> bool:
    """Check a raw decoded JSON value against the recommendation contract.

    Records missing a required field are rejected outright; nothing is
    patched up here.
    """
    if not isinstance(entry, dict):
        return False
    impact = entry.get("impact")
    return (
        isinstance(entry.get("type"), str)
        and bool(entry["type"])
        and isinstance(entry.get("description"), str)
        and bool(entry["description"])
        and _is_finite_number(impact)
        and isinstance(entry.get("actions"), list)
        and isinstance(entry.get("requiresPermission"), bool)
        and isinstance(entry.get("isAutomated"), bool)
    )


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False
