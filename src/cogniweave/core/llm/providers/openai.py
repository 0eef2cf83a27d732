"""OpenAI chat-completions provider."""

from __future__ import annotations

import time

from cogniweave.core.llm.provider import DEFAULT_MODELS, STOP_MAX_TOKENS, ProviderResponse

# OpenAI finish reasons mapped onto the shared vocabulary
_FINISH_REASONS = {"length": STOP_MAX_TOKENS, "stop": "end_turn"}


class OpenAIProvider:
    """GPT models via the async OpenAI SDK."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS["openai"],
        timeout_s: float = 60.0,
        max_retries: int = 2,
    ) -> None:
        import openai

        self.client = openai.AsyncOpenAI(
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
        completion = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[
                {"role": "system", "content": system_message},
                {"role": "user", "content": user_message},
            ],
        )

        if not completion.choices:
            text, finish = "", ""
        else:
            choice = completion.choices[0]
            text = choice.message.content or ""
            finish = choice.finish_reason or ""
        usage = completion.usage
        return ProviderResponse(
            content=text,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=completion.model or self.model,
            latency_ms=(time.monotonic() - start) * 1000,
            stop_reason=_FINISH_REASONS.get(finish, finish),
        )
