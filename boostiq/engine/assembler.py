from __future__ import annotations

import logging
from typing import Protocol

from boostiq.engine.gains import GainEstimator
from boostiq.engine.parser import ResponseParser
from boostiq.engine.request_builder import RecommendationRequest, RecommendationRequestBuilder
from boostiq.errors import GatewayError, ParseError
from boostiq.models import (
    DeviceMetrics,
    Gains,
    OptimizationResult,
    OptimizationSummary,
    Priority,
    Recommendation,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "AI optimization completed"


class CompletionGateway(Protocol):
    async def complete(self, request: RecommendationRequest) -> str: ...


def degraded_result(reason: str) -> OptimizationResult:
    """Well-formed failure result carrying a single recovery suggestion."""
    recovery = Recommendation(
        type="Error Recovery",
        description=f"An error occurred: {reason}",
        impact=5,
        priority=Priority.MEDIUM,
        actions=["Try again later", "Check internet connection"],
        requires_permission=False,
        is_automated=False,
    )
    return OptimizationResult(
        success=False,
        message=f"AI response not available: {reason}",
        optimizations=[recovery],
        summary=OptimizationSummary.from_recommendations([recovery], Gains()),
    )


class ResultAssembler:
    """Runs one AI optimization cycle and always returns a usable result.

    build request → gateway → parse → gains. Any failure along the way ends
    the cycle in the degraded state; nothing is retried.
    """

    def __init__(
        self,
        gateway: CompletionGateway,
        builder: RecommendationRequestBuilder | None = None,
        parser: ResponseParser | None = None,
        estimator: GainEstimator | None = None,
    ) -> None:
        self.gateway = gateway
        self.builder = builder or RecommendationRequestBuilder()
        self.parser = parser or ResponseParser()
        self.estimator = estimator or GainEstimator()

    async def run(self, metrics: DeviceMetrics) -> OptimizationResult:
        try:
            request = self.builder.build(metrics)
            raw_text = await self.gateway.complete(request)
        except GatewayError as exc:
            logger.warning("LLM request failed: %s", exc)
            return degraded_result(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while requesting recommendations")
            return degraded_result(str(exc) or type(exc).__name__)

        try:
            recommendations = self.parser.parse(raw_text)
            gains = self.estimator.estimate(recommendations)
        except ParseError as exc:
            logger.warning("%s", exc)
            return degraded_result(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while processing recommendations")
            return degraded_result(str(exc) or type(exc).__name__)

        logger.info(
            "Received %d recommendation(s) from the LLM", len(recommendations)
        )
        return OptimizationResult(
            success=True,
            message=SUCCESS_MESSAGE,
            optimizations=recommendations,
            summary=OptimizationSummary.from_recommendations(recommendations, gains),
        )
