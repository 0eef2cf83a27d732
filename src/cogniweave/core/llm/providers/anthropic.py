"""Anthropic Claude provider."""

from __future__ import annotations

import time

from cogniweave.core.llm.provider import DEFAULT_MODELS, ProviderResponse


class AnthropicProvider:
    """Claude via the async Anthropic SDK.

    The SDK client retries throttled and transient failures itself
    (``max_retries``); anything it gives up on propagates to the caller.
    """

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS["anthropic"],
        timeout_s: float = 60.0,
        max_retries: int = 2,
    ) -> None:
        import anthropic

        self.client = anthropic.AsyncAnthropic(
            api_key=api_key, timeout=timeout_s, max_retries=max_retries
        )
        self.model = model

    async def generate(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        start = time.monotonic()
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_message,
            messages=[{"role": "user", "content": user_message}],
        )

        # A reply may be split across several text blocks
        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
        return ProviderResponse(
            content=text,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
            model=getattr(message, "model", None) or self.model,
            latency_ms=(time.monotonic() - start) * 1000,
            stop_reason=message.stop_reason or "",
        )
