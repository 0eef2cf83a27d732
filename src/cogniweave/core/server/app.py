"""CogniWeave MCP server application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from cogniweave.core.config.settings import Settings, get_settings
from cogniweave.core.llm.client import GenerativeClient
from cogniweave.core.llm.provider import LLMProvider, create_provider
from cogniweave.core.llm.providers.unavailable import UnavailableProvider
from cogniweave.core.storage.database import ProfileDatabase
from cogniweave.core.storage.encryption import DocumentEncryptor, EncryptionError
from cogniweave.core.storage.repository import ProfileRepository
from cogniweave.domains.accessibility.generation.profile_generator import ProfileGenerator
from cogniweave.domains.accessibility.generation.text_simplifier import TextSimplifier
from cogniweave.domains.accessibility.prompts.onboarding_prompts import (
    register_onboarding_prompts,
)
from cogniweave.domains.accessibility.resources.loader import load_samples
from cogniweave.domains.accessibility.resources.samples import register_sample_resources
from cogniweave.domains.accessibility.tools.profile_tools import register_profile_tools
from cogniweave.domains.accessibility.tools.simplification_tools import (
    register_simplification_tools,
)
from cogniweave.domains.accessibility.tools.transformation_tools import (
    register_transformation_tools,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "CogniWeave"
SERVER_VERSION = "0.1.0"


def _build_provider(settings: Settings) -> LLMProvider:
    if settings.llm_provider == "mock":
        return create_provider("mock")

    if settings.llm_provider == "anthropic":
        api_key, model = settings.anthropic_api_key, settings.anthropic_model
    elif settings.llm_provider == "openai":
        api_key, model = settings.openai_api_key, settings.openai_model
    else:  # pragma: no cover
        raise ValueError(f"Unknown LLM provider: {settings.llm_provider!r}")

    if not api_key:
        logger.warning(
            "No API key configured for provider '%s'; generative calls will use "
            "the local fallbacks",
            settings.llm_provider,
        )
        return UnavailableProvider(f"No API key configured for {settings.llm_provider}")
    return create_provider(
        provider_name=settings.llm_provider,
        api_key=api_key,
        model=model,
        timeout_s=settings.llm_timeout_s,
        max_retries=settings.llm_max_retries,
    )


def _build_repository(settings: Settings) -> ProfileRepository:
    if settings.encryption_key:
        try:
            encryptor = DocumentEncryptor(settings.encryption_key)
            database = ProfileDatabase(settings.db_path)
            database.initialize()
            logger.info(
                "Profile store initialized: %s (schema v%d, key %s)",
                settings.db_path,
                database.get_schema_version(),
                encryptor.fingerprint,
            )
            return ProfileRepository(database, encryptor)
        except EncryptionError as exc:
            logger.error("Failed to initialize profile store: %s", exc)
            logger.warning("Continuing with an in-memory profile store")
    else:
        logger.info(
            "No ENCRYPTION_KEY configured; profiles are kept in memory only. "
            "Set ENCRYPTION_KEY to persist them."
        )

    database = ProfileDatabase(":memory:")
    database.initialize()
    return ProfileRepository(database, DocumentEncryptor(DocumentEncryptor.generate_key()))


def create_app(
    *,
    provider_override: LLMProvider | None = None,
    repository_override: ProfileRepository | None = None,
) -> FastMCP:
    """Create and configure the CogniWeave MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Creates the generative client (or uses the override provider)
    3. Initializes the encrypted profile store
    4. Loads the demo sample pack
    5. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "CogniWeave accessibility server. Builds cognitive profiles from "
            "onboarding answers and adapts text, HTML pages and visual "
            "elements to a reader's profile: simpler vocabulary, shorter "
            "paragraphs, analogies and distraction filtering."
        ),
    )

    provider = provider_override if provider_override is not None else _build_provider(settings)
    client = GenerativeClient(provider=provider)

    repository = repository_override if repository_override is not None else _build_repository(settings)
    samples = load_samples()

    generator = ProfileGenerator(client)
    simplifier = TextSimplifier(
        client,
        batch_size=settings.simplify_batch_size,
        batch_delay_s=settings.simplify_batch_delay_s,
    )

    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "llm_provider": client.provider_name,
            "profiles_stored": repository.count_profiles(),
            "profile_store": "memory" if repository.in_memory else "file",
            "sample_content": sorted(samples.content),
        }

    register_profile_tools(server, repository, generator, samples)
    register_transformation_tools(server, repository, samples)
    register_simplification_tools(server, repository, simplifier, samples)
    logger.info("Profile, transformation and simplification tools registered")

    register_sample_resources(server, samples)
    register_onboarding_prompts(server, samples)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
