from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

# 128 GiB, used whenever the storage provider cannot report a capacity
DEFAULT_TOTAL_STORAGE_BYTES = 128 * 1024 * 1024 * 1024


class BatteryState(StrEnum):
    CHARGING = "charging"
    FULL = "full"
    UNPLUGGED = "unplugged"
    UNKNOWN = "unknown"


class AppInfo(BaseModel):
    """Resource footprint of one installed application."""

    name: str
    package_id: str
    memory_usage_mb: float = Field(default=0.0, ge=0)
    battery_drain_pct_per_hour: float = Field(default=0.0, ge=0)
    background_time_minutes: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class DeviceMetrics(BaseModel):
    """Point-in-time snapshot of device health.

    Percentages are clamped into ``[0, 100]`` on construction.
    """

    cpu_usage_pct: float
    memory_usage_pct: float
    battery_level_pct: float
    battery_state: BatteryState = BatteryState.UNKNOWN
    storage_used_pct: float
    total_storage_bytes: int = Field(default=DEFAULT_TOTAL_STORAGE_BYTES, gt=0)
    device_name: str = "Unknown Device"
    os_version: str = "Unknown OS"
    apps: list[AppInfo] = Field(default_factory=list)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @field_validator(
        "cpu_usage_pct",
        "memory_usage_pct",
        "battery_level_pct",
        "storage_used_pct",
    )
    @classmethod
    def _clamp_percent(cls, value: float) -> float:
        return min(max(value, 0.0), 100.0)
