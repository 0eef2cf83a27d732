"""Shared helpers for accessibility MCP tools: profile lookup and envelopes."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from cogniweave.core.storage.repository import (
    ProfileExistsError,
    ProfileNotFoundError,
    RepositoryError,
)
from cogniweave.domains.accessibility.domain_logic.profile_models import InvalidConfiguration

if TYPE_CHECKING:
    from cogniweave.core.storage.repository import ProfileRepository
    from cogniweave.domains.accessibility.resources.loader import DemoSamples

ERROR_NOT_FOUND = "not_found"
ERROR_ALREADY_EXISTS = "already_exists"
ERROR_INVALID_CONFIGURATION = "invalid_configuration"
ERROR_INVALID_INPUT = "invalid_input"

DEFAULT_SAMPLE_PROFILE = "alex-chen-2025"


class SampleNotFoundError(LookupError):
    """Unknown sample passage or sample profile id."""

    def __init__(self, message: str, available: Iterable[str]) -> None:
        super().__init__(message)
        self.available = sorted(available)


_ERROR_TYPES: dict[type[Exception], str] = {
    SampleNotFoundError: ERROR_NOT_FOUND,
    ProfileNotFoundError: ERROR_NOT_FOUND,
    ProfileExistsError: ERROR_ALREADY_EXISTS,
    InvalidConfiguration: ERROR_INVALID_CONFIGURATION,
    RepositoryError: ERROR_INVALID_INPUT,
}

# Failures a tool reports to the caller instead of raising
EXPECTED_ERRORS = tuple(_ERROR_TYPES)


def error_envelope(error_type: str, message: str, **extra: Any) -> str:
    return json.dumps({"status": "error", "errorType": error_type, "error": message, **extra})


def envelope_for(exc: Exception) -> str:
    error_type = next(
        (name for cls, name in _ERROR_TYPES.items() if isinstance(exc, cls)),
        ERROR_INVALID_INPUT,
    )
    if isinstance(exc, SampleNotFoundError):
        return error_envelope(error_type, str(exc), available=exc.available)
    return error_envelope(error_type, str(exc))


def lookup_profile(
    repository: ProfileRepository,
    profile: Mapping[str, Any] | None,
    user_id: str,
) -> Mapping[str, Any]:
    """Pick the profile for a request: explicit profile first, then stored.

    Raises:
        ProfileNotFoundError: If ``user_id`` has no stored profile.
        InvalidConfiguration: If neither a profile nor a user id is given.
    """
    if profile is not None:
        return profile
    if user_id:
        stored = repository.get_profile(user_id)
        if stored is None:
            raise ProfileNotFoundError(f"No cognitive profile found for user {user_id}")
        return stored.profile
    raise InvalidConfiguration("Provide either a profile or the user_id of a stored profile")


def lookup_sample(
    samples: DemoSamples,
    repository: ProfileRepository,
    sample_id: str,
    profile_id: str,
    user_id: str,
) -> tuple[str, Mapping[str, Any]]:
    """Return a sample passage and the profile to apply to it.

    A stored profile for ``user_id`` wins over the sample ``profile_id``.

    Raises:
        SampleNotFoundError: If the passage or sample profile is unknown.
        ProfileNotFoundError: If ``user_id`` has no stored profile.
    """
    content = samples.content_text(sample_id)
    if content is None:
        raise SampleNotFoundError(f"Unknown sample content {sample_id!r}", samples.content)
    if user_id:
        return content, lookup_profile(repository, None, user_id)
    profile = samples.profiles.get(profile_id)
    if profile is None:
        raise SampleNotFoundError(f"Unknown sample profile {profile_id!r}", samples.profiles)
    return content, profile
