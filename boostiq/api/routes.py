from __future__ import annotations

import logging

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from boostiq.models import DeviceMetrics

logger = logging.getLogger(__name__)

router = APIRouter()


# ── WebSocket metrics feed ────────────────────────────


class MetricsBroadcaster:
    """Pushes each monitor snapshot to the connected dashboard clients."""

    def __init__(self) -> None:
        self.clients: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        self.clients.discard(websocket)

    async def publish(self, snapshot: DeviceMetrics) -> None:
        """MetricsMonitor callback. Clients whose send fails are dropped."""
        payload = {"type": "metrics", "metrics": snapshot.model_dump(mode="json", by_alias=True)}
        for ws in list(self.clients):
            try:
                await ws.send_json(payload)
            except Exception as exc:
                logger.debug("Dropping metrics client after failed send: %s", exc)
                self.disconnect(ws)


metrics_feed = MetricsBroadcaster()


class ToggleAIRequest(BaseModel):
    enabled: bool


# ── REST routes ───────────────────────────────────────


@router.get("/api/device-stats")
async def get_device_stats(request: Request) -> dict:
    monitor = request.app.state.monitor
    snapshot = monitor.latest or await monitor.refresh()
    return snapshot.model_dump(mode="json", by_alias=True)


@router.get("/api/background-apps")
async def get_background_apps(request: Request) -> list[dict]:
    inventory = request.app.state.inventory
    return [
        app.model_dump(mode="json", by_alias=True)
        for app in inventory.list()
        if app.background_time_minutes > 0
    ]


@router.post("/api/optimize")
async def optimize(request: Request) -> dict:
    service = request.app.state.service
    result = await service.optimize()
    return result.model_dump(mode="json", by_alias=True)


@router.post("/api/toggle-ai-optimization")
async def toggle_ai(body: ToggleAIRequest, request: Request) -> dict:
    service = request.app.state.service
    service.ai_enabled = body.enabled
    logger.info("AI optimization %s", "enabled" if body.enabled else "disabled")
    return {"enabled": service.ai_enabled}


@router.get("/api/status")
async def get_status(request: Request) -> dict:
    state = request.app.state
    monitor = state.monitor
    return {
        "status": "running",
        "ai_enabled": state.service.ai_enabled,
        "monitor_running": monitor.running,
        "has_snapshot": monitor.latest is not None,
        "ws_clients": len(metrics_feed.clients),
    }


# ── WebSocket endpoint ────────────────────────────────


@router.websocket("/ws/metrics")
async def websocket_metrics(websocket: WebSocket) -> None:
    await metrics_feed.connect(websocket)
    try:
        while True:
            # Keep connection alive; client can send pings or messages
            await websocket.receive_text()
    except WebSocketDisconnect:
        metrics_feed.disconnect(websocket)
