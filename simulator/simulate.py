"""LLM reply simulator for the BoostIQ recommendation pipeline.

Feeds scripted completion replies (clean JSON, chatty or malformed JSON,
prose, slow or failing endpoints) through a real ``ResultAssembler`` and
logs the resulting optimization summary, without calling a live model.

Usage:
    python simulator/simulate.py                 # run all scenarios
    python simulator/simulate.py --scenario malformed_json
    python simulator/simulate.py --timeout 2     # shorter gateway deadline
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import httpx

# Allow running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from boostiq.collectors import MetricsCollector
from boostiq.config import LLMClientConfig
from boostiq.engine import LLMGateway, ResultAssembler

logging.basicConfig(level=logging.INFO, format="%(asctime)s [SIM] %(message)s")
logger = logging.getLogger("simulator")

_MEMORY = {
    "type": "Memory Optimization",
    "description": "Game App and Social Media App hold over 500MB in the background.",
    "impact": 25,
    "priority": "high",
    "actions": ["Close Game App", "Restrict Social Media App background activity"],
    "requiresPermission": False,
    "isAutomated": True,
}
_BATTERY = {
    "type": "Battery Management",
    "description": "Maps Navigation drains 4.2%/hr while idle.",
    "impact": 15,
    "priority": "medium",
    "actions": ["Disable background location for Maps Navigation"],
    "requiresPermission": True,
    "isAutomated": False,
}


def _completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


# ── Scenario handlers ────────────────────────────────


async def clean_json(request: httpx.Request) -> httpx.Response:
    """Well-formed JSON array."""
    return _completion(json.dumps([_MEMORY, _BATTERY]))


async def chatty_json(request: httpx.Request) -> httpx.Response:
    """JSON wrapped in prose and a markdown fence."""
    body = json.dumps([_MEMORY, _BATTERY], indent=2)
    return _completion(f"Sure! Based on your device state:\n```json\n{body}\n```\nGood luck!")


async def malformed_json(request: httpx.Request) -> httpx.Response:
    """Missing separator between objects plus a trailing comma."""
    return _completion("[" + json.dumps(_MEMORY) + "\n" + json.dumps(_BATTERY) + ",]")


async def prose_only(request: httpx.Request) -> httpx.Response:
    """No JSON at all."""
    return _completion("Your device seems healthy. Consider restarting it occasionally.")


async def slow_endpoint(request: httpx.Request) -> httpx.Response:
    """Never answers within the deadline."""
    await asyncio.sleep(3600)
    return _completion("[]")


async def server_error(request: httpx.Request) -> httpx.Response:
    """Endpoint overloaded."""
    return httpx.Response(503, json={"error": {"message": "over capacity"}})


SCENARIOS = {
    "clean_json": clean_json,
    "chatty_json": chatty_json,
    "malformed_json": malformed_json,
    "prose_only": prose_only,
    "slow_endpoint": slow_endpoint,
    "server_error": server_error,
}


# ── Main runner ──────────────────────────────────────


async def run_scenario(name: str, collector: MetricsCollector, timeout: float) -> None:
    gateway = LLMGateway(
        LLMClientConfig(base_url="https://llm.invalid/v1", timeout=timeout),
        transport=httpx.MockTransport(SCENARIOS[name]),
    )
    metrics = await collector.collect()
    result = await ResultAssembler(gateway).run(metrics)
    summary = result.summary
    logger.info(
        "%s: success=%s impact=%.0f high=%d automated=%d gains=%s/%s/%s",
        name,
        result.success,
        summary.total_impact,
        summary.high_priority_count,
        summary.automated_actions_count,
        summary.memory_gain,
        summary.battery_gain,
        summary.storage_gain,
    )
    logger.info("%s: %s", name, result.message)


async def main() -> None:
    parser = argparse.ArgumentParser(description="BoostIQ LLM reply simulator")
    parser.add_argument("--scenario", choices=list(SCENARIOS.keys()), help="Run a single scenario")
    parser.add_argument("--timeout", type=float, default=1.0, help="Gateway deadline in seconds")
    args = parser.parse_args()

    collector = MetricsCollector()
    names = [args.scenario] if args.scenario else list(SCENARIOS)
    for name in names:
        logger.info("=== Starting scenario: %s ===", name)
        await run_scenario(name, collector, args.timeout)
    logger.info("=== All scenarios complete ===")


if __name__ == "__main__":
    asyncio.run(main())
