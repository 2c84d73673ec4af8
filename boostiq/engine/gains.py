from __future__ import annotations

from boostiq.models import Gains, Recommendation
from boostiq.numbers import format_number, round_half_up

# Share of a generic recommendation's impact credited to each resource.
GENERIC_WEIGHTS = {"memory": 0.5, "battery": 0.3, "storage": 0.2}

MEMORY_MB_PER_IMPACT = 3
BATTERY_PCT_PER_IMPACT = 0.25
STORAGE_MB_PER_IMPACT = 10


class GainEstimator:
    """Turns recommendation impacts into memory/battery/storage gain strings."""

    def estimate(self, recommendations: list[Recommendation]) -> Gains:
        buckets = {"memory": 0.0, "battery": 0.0, "storage": 0.0}
        for rec in recommendations:
            kind = rec.type.lower()
            for resource in ("memory", "battery", "storage"):
                if resource in kind:
                    buckets[resource] += rec.impact
                    break
            else:
                for resource, weight in GENERIC_WEIGHTS.items():
                    buckets[resource] += rec.impact * weight

        return Gains(
            memory_gain=f"{_gain(buckets['memory'] * MEMORY_MB_PER_IMPACT)}MB",
            battery_gain=f"{_gain(buckets['battery'] * BATTERY_PCT_PER_IMPACT)}%",
            storage_gain=f"{_gain(buckets['storage'] * STORAGE_MB_PER_IMPACT)}MB",
        )


def _gain(value: float) -> str:
    return format_number(round_half_up(value))
