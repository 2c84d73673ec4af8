from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from boostiq.models.recommendation import Recommendation

MAX_TOTAL_IMPACT = 100.0


class Gains(BaseModel):
    """Human-readable estimates of the resources a run would recover."""

    memory_gain: str = "0MB"
    battery_gain: str = "0%"
    storage_gain: str = "0MB"

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class OptimizationSummary(Gains):
    total_impact: float = 0.0
    high_priority_count: int = 0
    automated_actions_count: int = 0

    @classmethod
    def from_recommendations(
        cls,
        recommendations: list[Recommendation],
        gains: Gains,
    ) -> OptimizationSummary:
        total = sum(r.impact for r in recommendations)
        return cls(
            total_impact=min(total, MAX_TOTAL_IMPACT),
            high_priority_count=sum(1 for r in recommendations if r.priority == "high"),
            automated_actions_count=sum(1 for r in recommendations if r.is_automated),
            memory_gain=gains.memory_gain,
            battery_gain=gains.battery_gain,
            storage_gain=gains.storage_gain,
        )


class OptimizationResult(BaseModel):
    """Outcome of one optimization cycle. Always structurally complete."""

    success: bool
    message: str
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    optimizations: list[Recommendation] = Field(default_factory=list)
    summary: OptimizationSummary = Field(default_factory=OptimizationSummary)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
