"""Profile repository: get / create / update for the encrypted profile store.

The repository mediates between profile documents (camelCase JSON) and the
SQLite database, using DocumentEncryptor to encrypt them at rest. Every
document is validated against the cognitive profile schema on the way in.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from cogniweave.core.storage.database import ProfileDatabase
from cogniweave.core.storage.encryption import DocumentEncryptor
from cogniweave.core.storage.models import StoredProfile
from cogniweave.domains.accessibility.domain_logic.profile_models import parse_profile

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Raised when repository operations fail."""


class ProfileNotFoundError(RepositoryError):
    """No profile is stored for the requested user."""


class ProfileExistsError(RepositoryError):
    """A profile is already stored for the user being created."""


def deep_merge(base: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``partial`` onto a copy of ``base``.

    Nested mappings are merged key by key; any other value replaces the
    base value outright.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in partial.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ProfileRepository:
    """Encrypted key/value store of cognitive profiles keyed by user id.

    Usage::

        db = ProfileDatabase(":memory:")
        db.initialize()
        repo = ProfileRepository(db, DocumentEncryptor(key=...))

        repo.create_profile("user-1", profile_dict)
        stored = repo.get_profile("user-1")
    """

    def __init__(self, database: ProfileDatabase, encryptor: DocumentEncryptor) -> None:
        self._db = database
        self._enc = encryptor

    @property
    def in_memory(self) -> bool:
        return self._db.in_memory

    @staticmethod
    def _now_iso() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _normalize(document: Mapping[str, Any]) -> dict[str, Any]:
        """Validate and re-serialize a profile document.

        Raises:
            InvalidConfiguration: If the document violates the schema.
        """
        return parse_profile(document).to_dict()

    def _row(self, user_id: str):
        return self._db.connection.execute(
            "SELECT * FROM cognitive_profiles WHERE user_id = ?", (user_id,)
        ).fetchone()

    def _row_to_profile(self, row) -> StoredProfile:
        return StoredProfile(
            user_id=row["user_id"],
            profile=self._enc.decrypt(row["profile_enc"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_profile(self, user_id: str) -> StoredProfile | None:
        """Return the stored profile for ``user_id``, or None."""
        row = self._row(user_id)
        return None if row is None else self._row_to_profile(row)

    def create_profile(self, user_id: str, profile: Mapping[str, Any]) -> StoredProfile:
        """Store a new profile.

        Raises:
            ProfileExistsError: If a profile is already stored for the user.
            InvalidConfiguration: If the profile is not schema-valid.
        """
        if not user_id:
            raise RepositoryError("user_id must not be empty")
        document = self._normalize(profile)
        if self._row(user_id) is not None:
            raise ProfileExistsError(f"Profile already exists for user {user_id}")

        now = self._now_iso()
        metadata = document.get("metadata", {})
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO cognitive_profiles
                   (user_id, profile_enc, generated_by, version, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    user_id,
                    self._enc.encrypt(document),
                    metadata.get("generatedBy"),
                    metadata.get("version"),
                    now,
                    now,
                ),
            )
        logger.info("Created profile for %s", user_id)
        return StoredProfile(user_id=user_id, profile=document, created_at=now, updated_at=now)

    def update_profile(self, user_id: str, partial: Mapping[str, Any]) -> StoredProfile:
        """Deep-merge ``partial`` onto the stored profile and re-validate.

        Raises:
            ProfileNotFoundError: If no profile is stored for the user.
            InvalidConfiguration: If the merged profile is not schema-valid.
        """
        existing = self.get_profile(user_id)
        if existing is None:
            raise ProfileNotFoundError(f"No profile found for user {user_id}")

        now = self._now_iso()
        merged = deep_merge(existing.profile, partial)
        merged.setdefault("metadata", {})["updatedAt"] = now
        document = self._normalize(merged)

        metadata = document.get("metadata", {})
        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE cognitive_profiles
                   SET profile_enc = ?, generated_by = ?, version = ?, updated_at = ?
                   WHERE user_id = ?""",
                (
                    self._enc.encrypt(document),
                    metadata.get("generatedBy"),
                    metadata.get("version"),
                    now,
                    user_id,
                ),
            )
        logger.info("Updated profile for %s", user_id)
        return StoredProfile(
            user_id=user_id,
            profile=document,
            created_at=existing.created_at,
            updated_at=now,
        )

    def count_profiles(self) -> int:
        row = self._db.connection.execute("SELECT COUNT(*) FROM cognitive_profiles").fetchone()
        return row[0]
