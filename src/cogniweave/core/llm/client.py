"""Generative client: the single bridge between domain services and providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from cogniweave.core.llm.provider import ExternalServiceFailure, LLMProvider, ProviderResponse
from cogniweave.core.llm.response import (
    MalformedResponseError,
    clean_text_response,
    extract_json_object,
)
from cogniweave.core.llm.system_prompt import build_full_system_prompt

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Cleaned output of a generative call."""

    content: str
    model: str
    latency_ms: float = 0.0
    usage: dict[str, int] = field(default_factory=dict)
    truncated: bool = False  # output hit max_tokens


@dataclass
class JSONGenerationResult:
    """Parsed JSON output of a generative call."""

    data: dict[str, Any]
    model: str
    usage: dict[str, int] = field(default_factory=dict)


class GenerativeClient:
    """Invokes the configured provider and normalizes failures.

    Every provider exception, empty response or unparseable payload is
    raised as ``ExternalServiceFailure`` so callers have one thing to
    catch when choosing a fallback.
    """

    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", type(self.provider).__name__)

    async def _call(
        self,
        instructions: str,
        user_message: str,
        max_tokens: int,
        temperature: float,
    ) -> ProviderResponse:
        try:
            response = await self.provider.generate(
                system_message=build_full_system_prompt(instructions),
                user_message=user_message,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except ExternalServiceFailure:
            raise
        except Exception as exc:
            raise ExternalServiceFailure(
                f"{self.provider_name} call failed: {type(exc).__name__}: {exc}"
            ) from exc

        logger.info(
            "Generative call: provider=%s, model=%s, tokens=%d+%d, latency=%.0fms",
            self.provider_name,
            response.model,
            response.input_tokens,
            response.output_tokens,
            response.latency_ms,
        )
        return response

    async def complete_text(
        self,
        instructions: str,
        user_message: str,
        max_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> GenerationResult:
        """Return plain text output with fences and preambles removed."""
        response = await self._call(instructions, user_message, max_tokens, temperature)
        content = clean_text_response(response.content)
        if not content:
            raise ExternalServiceFailure(f"{self.provider_name} returned an empty response")
        if response.truncated:
            logger.warning(
                "Generative output truncated at %d tokens; returning partial text", max_tokens
            )
        return GenerationResult(
            content=content,
            model=response.model,
            latency_ms=response.latency_ms,
            usage={
                "input_tokens": response.input_tokens,
                "output_tokens": response.output_tokens,
            },
            truncated=response.truncated,
        )

    async def complete_json(
        self,
        instructions: str,
        user_message: str,
        max_tokens: int = 1024,
        temperature: float = 0.3,
    ) -> JSONGenerationResult:
        """Return the JSON object contained in the model output."""
        response = await self._call(instructions, user_message, max_tokens, temperature)
        if response.truncated:
            raise ExternalServiceFailure(
                f"{self.provider_name} output was cut off at {max_tokens} tokens"
            )
        try:
            data = extract_json_object(response.content)
        except MalformedResponseError as exc:
            raise ExternalServiceFailure(
                f"{self.provider_name} returned malformed JSON: {exc}"
            ) from exc
        return JSONGenerationResult(
            data=data,
            model=response.model,
            usage={
                "input_tokens": response.input_tokens,
                "output_tokens": response.output_tokens,
            },
        )
