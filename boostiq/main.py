from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boostiq.api.routes import metrics_feed, router
from boostiq.collectors import AppInventory, MetricsCollector, MetricsMonitor
from boostiq.config import settings
from boostiq.engine import LLMGateway, OptimizationService, ResultAssembler, RuleRecommender

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    inventory = AppInventory()
    collector = MetricsCollector(inventory=inventory)
    gateway = LLMGateway(settings.llm_client_config())
    service = OptimizationService(
        collector=collector,
        assembler=ResultAssembler(gateway),
        recommender=RuleRecommender(settings.rules_file),
        ai_enabled=settings.ai_enabled,
    )
    monitor = MetricsMonitor(
        collector,
        interval=settings.metrics_interval,
        on_snapshot=metrics_feed.publish,
    )
    await monitor.start()

    # Store on app.state for route access
    app.state.inventory = inventory
    app.state.service = service
    app.state.monitor = monitor

    logger.info("BoostIQ backend started (ai_enabled=%s)", settings.ai_enabled)

    yield

    # ── shutdown ──────────────────────────────────────
    await monitor.stop()
    logger.info("BoostIQ backend shut down")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
