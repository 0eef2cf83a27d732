"""Provider used when no generative backend is configured."""

from __future__ import annotations

from cogniweave.core.llm.provider import ExternalServiceFailure, ProviderResponse


class UnavailableProvider:
    """Fails every call so callers take their local fallback path."""

    name = "unavailable"

    def __init__(self, reason: str = "No generative model configured") -> None:
        self.reason = reason

    async def generate(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ) -> ProviderResponse:
        raise ExternalServiceFailure(self.reason)
