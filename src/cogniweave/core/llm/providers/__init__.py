"""Generative model provider implementations, by configuration name."""

from cogniweave.core.llm.providers.anthropic import AnthropicProvider
from cogniweave.core.llm.providers.mock import MockProvider
from cogniweave.core.llm.providers.openai import OpenAIProvider
from cogniweave.core.llm.providers.unavailable import UnavailableProvider

PROVIDER_CLASSES = {
    AnthropicProvider.name: AnthropicProvider,
    OpenAIProvider.name: OpenAIProvider,
    MockProvider.name: MockProvider,
}

# UnavailableProvider is not selectable by name; the app uses it when no key is set
__all__ = [
    "PROVIDER_CLASSES",
    "AnthropicProvider",
    "MockProvider",
    "OpenAIProvider",
    "UnavailableProvider",
]
