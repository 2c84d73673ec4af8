"""Host-side readers for device, battery, storage and app identity facts.

Every reader may fail on its own; callers treat each reading as optional.
"""

from __future__ import annotations

import asyncio
import platform
from typing import Protocol

import psutil

from boostiq.errors import CollectionFieldError
from boostiq.models import BatteryState


class DeviceInfoProvider(Protocol):
    def model_name(self) -> str | None: ...

    def os_version(self) -> str | None: ...


class BatteryProvider(Protocol):
    async def level(self) -> float:
        """Charge as a fraction in ``[0, 1]``."""
        ...

    async def state(self) -> BatteryState: ...


class StorageProvider(Protocol):
    async def free_bytes(self) -> int: ...

    async def total_bytes(self) -> int: ...


class AppIdentityProvider(Protocol):
    def application_name(self) -> str | None: ...

    def application_id(self) -> str | None: ...


# ── host implementations ────────────────────────────


class HostDeviceInfo:
    def model_name(self) -> str | None:
        return platform.node() or None

    def os_version(self) -> str | None:
        system = platform.system()
        release = platform.release()
        if release:
            return f"{system} {release}".strip()
        return f"{system} (version unknown)"


class PsutilBattery:
    """Battery readings from ``psutil.sensors_battery``."""

    async def _read(self):
        sensors_battery = getattr(psutil, "sensors_battery", None)
        if sensors_battery is None:
            raise CollectionFieldError("battery", "not supported on this platform")
        battery = await asyncio.to_thread(sensors_battery)
        if battery is None:
            raise CollectionFieldError("battery", "no battery installed")
        return battery

    async def level(self) -> float:
        battery = await self._read()
        return battery.percent / 100.0

    async def state(self) -> BatteryState:
        battery = await self._read()
        if battery.power_plugged is None:
            return BatteryState.UNKNOWN
        if battery.power_plugged:
            return BatteryState.FULL if battery.percent >= 100 else BatteryState.CHARGING
        return BatteryState.UNPLUGGED


class PsutilStorage:
    def __init__(self, path: str = "/") -> None:
        self.path = path

    async def free_bytes(self) -> int:
        usage = await asyncio.to_thread(psutil.disk_usage, self.path)
        return usage.free

    async def total_bytes(self) -> int:
        usage = await asyncio.to_thread(psutil.disk_usage, self.path)
        return usage.total


class StaticAppIdentity:
    """App identity known ahead of time (there is no app registry on a server host)."""

    def __init__(self, name: str | None = None, app_id: str | None = None) -> None:
        self._name = name
        self._app_id = app_id

    def application_name(self) -> str | None:
        return self._name

    def application_id(self) -> str | None:
        return self._app_id
