from .metrics import DEFAULT_TOTAL_STORAGE_BYTES, AppInfo, BatteryState, DeviceMetrics
from .recommendation import Priority, Recommendation, is_valid_recommendation
from .result import MAX_TOTAL_IMPACT, Gains, OptimizationResult, OptimizationSummary

__all__ = [
    "DEFAULT_TOTAL_STORAGE_BYTES",
    "AppInfo",
    "BatteryState",
    "DeviceMetrics",
    "Priority",
    "Recommendation",
    "is_valid_recommendation",
    "MAX_TOTAL_IMPACT",
    "Gains",
    "OptimizationResult",
    "OptimizationSummary",
]
