from __future__ import annotations


class PipelineError(Exception):
    """Base class for failures inside the recommendation pipeline."""


class CollectionFieldError(PipelineError):
    """A single device reading could not be obtained."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class GatewayError(PipelineError):
    """The LLM endpoint did not produce a completion."""


class GatewayTimeout(GatewayError):
    pass


class GatewayTransportError(GatewayError):
    pass


class ParseError(PipelineError):
    """No usable recommendation could be recovered from the LLM reply."""
