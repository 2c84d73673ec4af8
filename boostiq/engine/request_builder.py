from __future__ import annotations

import json

from pydantic import BaseModel

from boostiq.models import DeviceMetrics

SYSTEM_INSTRUCTION = (
    "As an AI device optimizer, analyze the system state and return ONLY a "
    "JSON array of optimization strategies. Each strategy must be an object "
    'with the keys "type", "description", "impact" (1-30), "priority" '
    '("high", "medium" or "low"), "actions" (array of strings), '
    '"requiresPermission" (boolean) and "isAutomated" (boolean).'
)


class ChatMessage(BaseModel):
    role: str
    content: str


class RecommendationRequest(BaseModel):
    """Prompt sent to the completion endpoint for one optimization cycle."""

    system: str
    user: str

    @property
    def messages(self) -> list[ChatMessage]:
        return [
            ChatMessage(role="system", content=self.system),
            ChatMessage(role="user", content=self.user),
        ]


class RecommendationRequestBuilder:
    def __init__(self, system_instruction: str = SYSTEM_INSTRUCTION) -> None:
        self.system_instruction = system_instruction

    def system_state(self, metrics: DeviceMetrics) -> dict:
        return {
            "device": {
                "cpu": metrics.cpu_usage_pct,
                "ram": metrics.memory_usage_pct,
                "battery": metrics.battery_level_pct,
                "batteryState": metrics.battery_state.value,
                "storage": metrics.storage_used_pct,
                "totalStorage": metrics.total_storage_bytes,
                "deviceName": metrics.device_name,
                "osVersion": metrics.os_version,
            },
            "apps": [
                {
                    "name": app.name,
                    "packageName": app.package_id,
                    "memoryUsage": app.memory_usage_mb,
                    "batteryDrain": app.battery_drain_pct_per_hour,
                    "backgroundTime": app.background_time_minutes,
                }
                for app in metrics.apps
            ],
        }

    def build(self, metrics: DeviceMetrics) -> RecommendationRequest:
        payload = json.dumps(self.system_state(metrics), indent=2)
        return RecommendationRequest(
            system=self.system_instruction,
            user=f"Analyze this system state:\n{payload}",
        )
