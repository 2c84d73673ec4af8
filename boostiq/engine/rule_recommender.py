from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from boostiq.models import (
    DeviceMetrics,
    Gains,
    OptimizationResult,
    OptimizationSummary,
    Recommendation,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "AI optimization completed (using rule-based recommendations)"


class RuleCondition(BaseModel):
    field: str
    operator: str
    value: Any


class RecommendationRule(BaseModel):
    id: str
    description: str = ""
    conditions: list[RuleCondition] = Field(default_factory=list)
    recommendation: Recommendation


class RuleRecommender:
    """Offline recommender driven by YAML rules over device metrics.

    Used when AI optimization is switched off. A rule fires when all of its
    conditions hold; a rule without conditions always fires.
    """

    def __init__(self, rules_path: str | Path) -> None:
        self._rules_path = Path(rules_path)
        self.rules: list[RecommendationRule] = self.load_rules()

    def load_rules(self) -> list[RecommendationRule]:
        raw = yaml.safe_load(self._rules_path.read_text())
        entries = raw.get("rules", []) if isinstance(raw, dict) else raw
        rules: list[RecommendationRule] = []
        for entry in entries or []:
            try:
                rules.append(RecommendationRule(**entry))
            except Exception:
                logger.warning("Skipping invalid rule: %s", entry.get("id", "?"))
        return rules

    def evaluate(self, metrics: DeviceMetrics) -> list[Recommendation]:
        values = metrics.model_dump(mode="json")
        return [
            rule.recommendation.model_copy(deep=True)
            for rule in self.rules
            if all(self._check_condition(c, values) for c in rule.conditions)
        ]

    def run(self, metrics: DeviceMetrics) -> OptimizationResult:
        recommendations = self.evaluate(metrics)
        return OptimizationResult(
            success=True,
            message=SUCCESS_MESSAGE,
            optimizations=recommendations,
            summary=OptimizationSummary.from_recommendations(
                recommendations, self.estimate_gains(metrics)
            ),
        )

    @staticmethod
    def estimate_gains(metrics: DeviceMetrics) -> Gains:
        """Gains scaled from current pressure rather than from impacts."""
        memory = math.floor(metrics.memory_usage_pct / 100 * 300)
        battery = math.floor(15 - metrics.battery_level_pct / 10)
        storage = math.floor(metrics.storage_used_pct / 100 * 1.5 * 1024)
        return Gains(
            memory_gain=f"{memory}MB",
            battery_gain=f"{battery}%",
            storage_gain=f"{storage}MB",
        )

    def _check_condition(self, cond: RuleCondition, values: dict) -> bool:
        field_val = values.get(cond.field)
        if field_val is None:
            return False

        op = cond.operator
        rule_val = cond.value

        if op == "gt":
            return float(field_val) > float(rule_val)
        elif op == "lt":
            return float(field_val) < float(rule_val)
        elif op == "gte":
            return float(field_val) >= float(rule_val)
        elif op == "lte":
            return float(field_val) <= float(rule_val)
        elif op == "eq":
            return str(field_val) == str(rule_val)
        elif op == "in":
            return field_val in rule_val
        else:
            logger.warning("Unknown operator: %s", op)
            return False
