"""Mock provider for tests and keyless local runs."""

from __future__ import annotations

from collections.abc import Sequence

from cogniweave.core.llm.provider import ProviderResponse


class MockProvider:
    """Deterministic stand-in for a real model.

    Replies with ``response_content``, or with ``responses`` in turn when
    a sequence is given (the last one repeats). Setting ``error`` makes
    every call raise it, simulating an outage. Every call is recorded.
    """

    name = "mock"

    def __init__(
        self,
        response_content: str = "Mock LLM response.",
        error: Exception | None = None,
        responses: Sequence[str] | None = None,
        stop_reason: str = "end_turn",
    ) -> None:
        self.response_content = response_content
        self.error = error
        self.responses = list(responses or [])
        self.stop_reason = stop_reason
        self.calls: list[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> dict:
        return self.calls[-1] if self.calls else {}

    @property
    def last_system_message(self) -> str:
        return self.last_call.get("system_message", "")

    @property
    def last_user_message(self) -> str:
        return self.last_call.get("user_message", "")

    @property
    def last_temperature(self) -> float | None:
        return self.last_call.get("temperature")

    def _next_content(self) -> str:
        if not self.responses:
            return self.response_content
        index = min(self.call_count - 1, len(self.responses) - 1)
        return self.responses[index]

    async def generate(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        self.calls.append({
            "system_message": system_message,
            "user_message": user_message,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        content = self._next_content()
        return ProviderResponse(
            content=content,
            input_tokens=len(system_message.split()) + len(user_message.split()),
            output_tokens=len(content.split()),
            model="mock",
            latency_ms=0.0,
            stop_reason=self.stop_reason,
        )
