from __future__ import annotations

import logging
import random

from boostiq.collectors.app_inventory import AppInventory
from boostiq.collectors.providers import (
    BatteryProvider,
    DeviceInfoProvider,
    HostDeviceInfo,
    PsutilBattery,
    PsutilStorage,
    StorageProvider,
)
from boostiq.collectors.readings import Default, Ok, read_field
from boostiq.errors import CollectionFieldError
from boostiq.models import DEFAULT_TOTAL_STORAGE_BYTES, BatteryState, DeviceMetrics
from boostiq.numbers import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_NAME = "Unknown Device"
DEFAULT_OS_VERSION = "Unknown OS"
DEFAULT_BATTERY_LEVEL = 0.75
DEFAULT_STORAGE_USED_PCT = 50.0


class MetricsCollector:
    """Builds a ``DeviceMetrics`` snapshot. Never raises.

    Each reading degrades to its own default. CPU and memory load are
    simulated.
    """

    name = "metrics_collector"

    def __init__(
        self,
        device: DeviceInfoProvider | None = None,
        battery: BatteryProvider | None = None,
        storage: StorageProvider | None = None,
        inventory: AppInventory | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.device = device or HostDeviceInfo()
        self.battery = battery or PsutilBattery()
        self.storage = storage or PsutilStorage()
        self.inventory = inventory or AppInventory()
        self._rng = rng or random.Random()

    async def collect(self) -> DeviceMetrics:
        try:
            return await self._collect()
        except Exception:
            logger.exception("Collector [%s] failed, returning fallback snapshot", self.name)
            return self.fallback()

    def fallback(self) -> DeviceMetrics:
        return DeviceMetrics(
            cpu_usage_pct=30,
            memory_usage_pct=45,
            battery_level_pct=75,
            battery_state=BatteryState.UNKNOWN,
            storage_used_pct=50,
            total_storage_bytes=DEFAULT_TOTAL_STORAGE_BYTES,
            device_name="Android Device",
            os_version="Android",
            apps=self.inventory.list(),
        )

    # ── internals ───────────────────────────────────────

    async def _collect(self) -> DeviceMetrics:
        device_name = await read_field("device_name", self.device.model_name, DEFAULT_DEVICE_NAME)
        os_version = await read_field("os_version", self.device.os_version, DEFAULT_OS_VERSION)
        level = await read_field("battery_level", self.battery.level, DEFAULT_BATTERY_LEVEL)
        state = await read_field("battery_state", self.battery.state, BatteryState.UNKNOWN)
        total_storage, storage_used = await self._read_storage()

        return DeviceMetrics(
            cpu_usage_pct=self._rng.randrange(20, 60),
            memory_usage_pct=self._rng.randrange(30, 80),
            battery_level_pct=round_half_up(level.value * 100),
            battery_state=state.value,
            storage_used_pct=storage_used,
            total_storage_bytes=total_storage,
            device_name=device_name.value,
            os_version=os_version.value,
            apps=self.inventory.list(),
        )

    async def _read_storage(self) -> tuple[int, float]:
        total = await read_field("total_storage", self.storage.total_bytes, DEFAULT_TOTAL_STORAGE_BYTES)
        if isinstance(total, Ok) and total.value <= 0:
            total = Default(
                DEFAULT_TOTAL_STORAGE_BYTES,
                CollectionFieldError("total_storage", f"non-positive capacity {total.value}"),
            )
        if total.is_default:
            return total.value, DEFAULT_STORAGE_USED_PCT

        free = await read_field("free_storage", self.storage.free_bytes, None)
        if free.is_default:
            return total.value, DEFAULT_STORAGE_USED_PCT
        used = total.value - free.value
        return total.value, round_half_up(used / total.value * 100)
