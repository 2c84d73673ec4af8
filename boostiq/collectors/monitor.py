from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from boostiq.collectors.metrics_collector import MetricsCollector
from boostiq.models import DeviceMetrics

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[DeviceMetrics], Awaitable[None]]


class MetricsMonitor:
    """Refreshes the dashboard's device snapshot on a fixed interval.

    Holds the most recent ``DeviceMetrics`` and optionally pushes each new
    snapshot to ``on_snapshot``. The loop handles interval timing and
    graceful shutdown.
    """

    name: str = "metrics_monitor"
    interval: float = 30.0  # seconds between refreshes

    def __init__(
        self,
        collector: MetricsCollector,
        interval: float | None = None,
        on_snapshot: SnapshotCallback | None = None,
    ) -> None:
        self.collector = collector
        if interval is not None:
            self.interval = interval
        self.on_snapshot = on_snapshot
        self._latest: DeviceMetrics | None = None
        self._running = False
        self._task: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Monitor [%s] started (interval=%.1fs)", self.name, self.interval)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Monitor [%s] stopped", self.name)

    async def refresh(self) -> DeviceMetrics:
        """Collect a fresh snapshot now and remember it."""
        snapshot = await self.collector.collect()
        self._latest = snapshot
        if self.on_snapshot:
            await self.on_snapshot(snapshot)
        return snapshot

    # ── internals ───────────────────────────────────────

    async def _loop(self) -> None:
        while self._running:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Monitor [%s] error during refresh()", self.name)
            await asyncio.sleep(self.interval)

    @property
    def latest(self) -> DeviceMetrics | None:
        return self._latest

    @property
    def running(self) -> bool:
        return self._running
