from __future__ import annotations

import asyncio
import logging

import httpx

from boostiq.config import LLMClientConfig
from boostiq.engine.request_builder import RecommendationRequest
from boostiq.errors import GatewayTimeout, GatewayTransportError

logger = logging.getLogger(__name__)


class LLMGateway:
    """Sends a recommendation request to an OpenAI-compatible chat endpoint.

    The call is bounded by ``config.timeout``. When the deadline passes the
    in-flight request is cancelled, so a late reply is never seen. No retry
    happens here; callers decide whether to run another cycle.
    """

    def __init__(
        self,
        config: LLMClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    async def complete(self, request: RecommendationRequest) -> str:
        try:
            return await asyncio.wait_for(self._post(request), timeout=self.config.timeout)
        except asyncio.TimeoutError as exc:
            raise GatewayTimeout(
                f"API request timed out after {self.config.timeout:g} seconds"
            ) from exc

    def _payload(self, request: RecommendationRequest) -> dict:
        return {
            "model": self.config.model,
            "messages": [m.model_dump() for m in request.messages],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "response_format": {"type": "json_object"},
        }

    async def _post(self, request: RecommendationRequest) -> str:
        headers = {"Accept": "application/json"}
        api_key = self.config.api_key.get_secret_value()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        logger.debug("Sending completion request (model=%s)", self.config.model)
        try:
            async with httpx.AsyncClient(
                base_url=self.config.base_url,
                transport=self._transport,
                timeout=None,  # bounded by complete()
            ) as client:
                response = await client.post(
                    "/chat/completions", json=self._payload(request), headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise GatewayTransportError(
                f"API request failed: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise GatewayTransportError(f"API request failed: {exc}") from exc
        except ValueError as exc:
            raise GatewayTransportError("API request failed: response body is not JSON") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str) or not content:
            raise GatewayTransportError("API request failed: response contained no completion text")
        return content
