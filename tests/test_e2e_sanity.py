"""End-to-end runtime sanity check.

Runs full optimization cycles (collector → request builder → gateway →
parser → gain estimator → assembler) against scripted completion
endpoints and checks that every cycle ends in a well-formed result.
"""

from __future__ import annotations

import asyncio
import json
import random

import httpx
import pytest

from boostiq.collectors.metrics_collector import MetricsCollector
from boostiq.config import LLMClientConfig, settings
from boostiq.engine import LLMGateway, OptimizationService, ResultAssembler, RuleRecommender
from boostiq.models import BatteryState


class StubDevice:
    def model_name(self):
        return "Pixel 8"

    def os_version(self):
        return "Android 14"


class StubBattery:
    async def level(self):
        return 0.15

    async def state(self):
        return BatteryState.UNPLUGGED


class StubStorage:
    async def free_bytes(self):
        return 10 * 2**30

    async def total_bytes(self):
        return 100 * 2**30


def _service(handler, timeout: float = 15.0) -> OptimizationService:
    collector = MetricsCollector(
        device=StubDevice(),
        battery=StubBattery(),
        storage=StubStorage(),
        rng=random.Random(7),
    )
    gateway = LLMGateway(
        LLMClientConfig(base_url="https://llm.test/v1", timeout=timeout),
        transport=httpx.MockTransport(handler),
    )
    return OptimizationService(
        collector=collector,
        assembler=ResultAssembler(gateway),
        recommender=RuleRecommender(settings.rules_file),
    )


def _reply(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _assert_well_formed(result) -> None:
    opts = result.optimizations
    assert opts
    assert result.summary.total_impact == min(100, sum(o.impact for o in opts))
    assert result.summary.high_priority_count == sum(1 for o in opts if o.priority == "high")
    assert result.summary.automated_actions_count == sum(1 for o in opts if o.is_automated)


@pytest.mark.asyncio
async def test_full_cycle_with_messy_reply():
    """Prose-wrapped JSON with a missing separator and trailing comma is recovered."""
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return _reply(
            "Here is my analysis:\n"
            '[{"type": "Memory Optimization", "description": "Close Game App", "impact": 20,\n'
            '  "priority": "high", "actions": ["Close Game App"], "requiresPermission": false,\n'
            '  "isAutomated": true}\n'
            '{"type": "Battery Management", "description": "Limit Maps in background",\n'
            '  "impact": 12, "priority": "medium", "actions": [], "requiresPermission": true,\n'
            '  "isAutomated": false},\n'
            "]\nLet me know if you need anything else."
        )

    result = await _service(handler).optimize()

    assert result.success is True
    assert [o.type for o in result.optimizations] == ["Memory Optimization", "Battery Management"]
    assert result.summary.memory_gain == "60MB"
    assert result.summary.battery_gain == "3%"
    assert result.summary.storage_gain == "0MB"
    _assert_well_formed(result)

    state = json.loads(sent[0]["messages"][1]["content"].split("\n", 1)[1])
    assert state["device"]["battery"] == 15
    assert state["device"]["batteryState"] == "unplugged"
    assert state["device"]["storage"] == 90
    assert state["apps"][-1]["packageName"] == "com.boostiq.pro"


@pytest.mark.asyncio
async def test_full_cycle_timeout_is_degraded():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return _reply("[]")

    result = await _service(handler, timeout=0.05).optimize()

    assert result.success is False
    assert len(result.optimizations) == 1
    assert result.optimizations[0].type == "Error Recovery"
    assert "timed out" in result.message
    _assert_well_formed(result)


@pytest.mark.asyncio
async def test_full_cycle_server_error_is_degraded():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="internal error")

    result = await _service(handler).optimize()

    assert result.success is False
    assert "HTTP 500" in result.message
    _assert_well_formed(result)


@pytest.mark.asyncio
async def test_full_cycle_prose_reply_is_degraded():
    def handler(request: httpx.Request) -> httpx.Response:
        return _reply("Your phone looks fine, nothing to optimize.")

    result = await _service(handler).optimize()

    assert result.success is False
    assert "Failed to parse AI response" in result.message
    _assert_well_formed(result)


@pytest.mark.asyncio
async def test_double_tap_runs_two_independent_cycles():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return _reply(
            '{"type": "General", "description": "d", "impact": 10, "priority": "low",'
            ' "actions": [], "requiresPermission": false, "isAutomated": true}'
        )

    service = _service(handler)
    first, second = await asyncio.gather(service.optimize(), service.optimize())

    assert calls == 2
    assert first.success and second.success
    assert first.summary == second.summary
