from __future__ import annotations

import logging

from boostiq.collectors.metrics_collector import MetricsCollector
from boostiq.engine.assembler import ResultAssembler
from boostiq.engine.rule_recommender import RuleRecommender
from boostiq.models import DeviceMetrics, OptimizationResult

logger = logging.getLogger(__name__)


class OptimizationService:
    """Entry point for one optimization cycle: collect, then recommend.

    Cycles share no state, so concurrent calls run independently.
    """

    def __init__(
        self,
        collector: MetricsCollector,
        assembler: ResultAssembler,
        recommender: RuleRecommender,
        ai_enabled: bool = True,
    ) -> None:
        self.collector = collector
        self.assembler = assembler
        self.recommender = recommender
        self.ai_enabled = ai_enabled

    async def optimize(self, metrics: DeviceMetrics | None = None) -> OptimizationResult:
        if metrics is None:
            metrics = await self.collector.collect()
        if not self.ai_enabled:
            logger.info("AI optimization disabled, using rule-based recommendations")
            return self.recommender.run(metrics)
        return await self.assembler.run(metrics)
