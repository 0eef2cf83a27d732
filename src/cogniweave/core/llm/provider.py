"""Generative model provider protocol and factory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-5-20250929",
    "openai": "gpt-4o",
    "mock": "mock",
}

# Normalized stop reason for output cut off at max_tokens
STOP_MAX_TOKENS = "max_tokens"


class ExternalServiceFailure(Exception):
    """Raised when the generative model cannot produce a usable response.

    Covers network errors, throttling, empty output and responses that do
    not parse into the expected shape. Callers map it to a local fallback.
    """


@dataclass
class ProviderResponse:
    """One completion from a generative model provider."""

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    latency_ms: float
    stop_reason: str = ""

    @property
    def truncated(self) -> bool:
        return self.stop_reason == STOP_MAX_TOKENS


@runtime_checkable
class LLMProvider(Protocol):
    """What the generative client needs from a provider."""

    name: str

    async def generate(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse: ...


def create_provider(
    provider_name: str,
    api_key: str = "",
    model: str = "",
    timeout_s: float = 60.0,
    max_retries: int = 2,
) -> LLMProvider:
    """Build a provider by name.

    Args:
        provider_name: "anthropic", "openai", or "mock".
        api_key: API key for the provider (ignored by mock).
        model: Model identifier; the provider default when empty.
        timeout_s: Per-request timeout passed to the SDK client.
        max_retries: SDK-level retries for throttling and transient errors.
    """
    from cogniweave.core.llm.providers import PROVIDER_CLASSES

    provider_cls = PROVIDER_CLASSES.get(provider_name)
    if provider_cls is None:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
    if provider_name == "mock":
        return provider_cls()
    return provider_cls(
        api_key=api_key,
        model=model or DEFAULT_MODELS[provider_name],
        timeout_s=timeout_s,
        max_retries=max_retries,
    )
