"""Shared test fixtures for CogniWeave tests."""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "mock")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("ENCRYPTION_KEY", "")
    monkeypatch.setenv("SIMPLIFY_BATCH_DELAY_S", "0")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

_FULL_PROFILE: dict[str, Any] = {
    "text": {
        "chunking": {"strategy": "sentence_limit", "maxLength": 3},
        "vocabulary": {"simplificationLevel": "basic"},
    },
    "simplification": {
        "useAnalogies": True,
        "summarization": {"defaultState": "collapsed", "summaryLength": 15},
    },
    "visuals": {
        "distractionFilter": {"enabled": True, "sensitivity": "high"},
    },
}


def make_profile(
    *,
    strategy: str = "sentence_limit",
    max_length: int | None = 3,
    vocabulary: str = "basic",
    analogies: bool = True,
    filter_enabled: bool = True,
    sensitivity: str = "high",
) -> dict[str, Any]:
    """Build a camelCase profile dict with sensible test defaults."""
    profile = copy.deepcopy(_FULL_PROFILE)
    chunking: dict[str, Any] = {"strategy": strategy}
    if max_length is not None:
        chunking["maxLength"] = max_length
    profile["text"]["chunking"] = chunking
    profile["text"]["vocabulary"]["simplificationLevel"] = vocabulary
    profile["simplification"]["useAnalogies"] = analogies
    profile["visuals"]["distractionFilter"] = {
        "enabled": filter_enabled,
        "sensitivity": sensitivity,
    }
    return profile


@pytest.fixture
def profile_factory():
    """Return ``make_profile`` so tests can build variants."""
    return make_profile


@pytest.fixture
def profile_dict() -> dict[str, Any]:
    """A complete high-support profile (basic vocabulary, 3 sentences, analogies)."""
    return make_profile()


@pytest.fixture
def plain_profile() -> dict[str, Any]:
    """A profile that changes nothing: no vocabulary, chunking, analogies or filter."""
    return make_profile(
        strategy="none",
        max_length=None,
        vocabulary="none",
        analogies=False,
        filter_enabled=False,
    )


# ---------------------------------------------------------------------------
# Generative client fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_provider():
    """A MockProvider returning its default canned text."""
    from cogniweave.core.llm.providers.mock import MockProvider

    return MockProvider()


@pytest.fixture
def failing_provider():
    """A MockProvider that always raises, simulating an outage."""
    from cogniweave.core.llm.providers.mock import MockProvider

    return MockProvider(error=ConnectionError("service unavailable"))


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def profile_db():
    """Create an in-memory ProfileDatabase for testing."""
    from cogniweave.core.storage.database import ProfileDatabase

    db = ProfileDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def document_encryptor():
    """Create a DocumentEncryptor with a test key."""
    from cryptography.fernet import Fernet

    from cogniweave.core.storage.encryption import DocumentEncryptor

    return DocumentEncryptor(Fernet.generate_key().decode())


@pytest.fixture
def profile_repository(profile_db, document_encryptor):
    """Create a ProfileRepository backed by in-memory SQLite."""
    from cogniweave.core.storage.repository import ProfileRepository

    return ProfileRepository(profile_db, document_encryptor)
