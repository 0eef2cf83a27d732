"""Tests for ProfileRepository: create / get / update with in-memory SQLite."""

from __future__ import annotations

import pytest

from cogniweave.core.storage.repository import (
    ProfileExistsError,
    ProfileNotFoundError,
    RepositoryError,
    deep_merge,
)
from cogniweave.domains.accessibility.domain_logic.profile_models import InvalidConfiguration


class TestCreateAndGet:
    def test_get_missing_returns_none(self, profile_repository):
        assert profile_repository.get_profile("nobody") is None

    def test_round_trip(self, profile_repository, profile_dict):
        created = profile_repository.create_profile("user-1", profile_dict)
        loaded = profile_repository.get_profile("user-1")
        assert loaded is not None
        assert loaded.profile == created.profile
        assert loaded.profile["text"]["chunking"]["maxLength"] == 3
        assert loaded.created_at == loaded.updated_at

    def test_normalizes_and_fills_defaults(self, profile_repository):
        stored = profile_repository.create_profile("user-1", {"text": {"vocabulary": {"simplificationLevel": "basic"}}})
        assert stored.profile["text"]["chunking"] == {"strategy": "sentence_limit", "maxLength": 4}
        assert stored.profile["visuals"]["distractionFilter"]["enabled"] is False

    def test_duplicate_raises(self, profile_repository, profile_dict):
        profile_repository.create_profile("user-1", profile_dict)
        with pytest.raises(ProfileExistsError):
            profile_repository.create_profile("user-1", profile_dict)

    def test_invalid_profile_not_stored(self, profile_repository):
        with pytest.raises(InvalidConfiguration):
            profile_repository.create_profile("user-1", {"text": {"chunking": {"strategy": "bogus"}}})
        assert profile_repository.count_profiles() == 0

    def test_empty_user_id_rejected(self, profile_repository, profile_dict):
        with pytest.raises(RepositoryError):
            profile_repository.create_profile("", profile_dict)

    def test_count(self, profile_repository, profile_dict):
        profile_repository.create_profile("a", profile_dict)
        profile_repository.create_profile("b", profile_dict)
        assert profile_repository.count_profiles() == 2

    def test_encrypted_at_rest(self, profile_repository, profile_db, profile_dict):
        profile_repository.create_profile("user-1", profile_dict)
        row = profile_db.connection.execute(
            "SELECT profile_enc FROM cognitive_profiles WHERE user_id = ?", ("user-1",)
        ).fetchone()
        assert "sentence_limit" not in row["profile_enc"]
        assert "maxLength" not in row["profile_enc"]


class TestUpdate:
    def test_missing_user_raises(self, profile_repository):
        with pytest.raises(ProfileNotFoundError):
            profile_repository.update_profile("ghost", {"text": {}})

    def test_deep_merges_partial(self, profile_repository, profile_dict):
        profile_repository.create_profile("user-1", profile_dict)
        updated = profile_repository.update_profile(
            "user-1", {"visuals": {"distractionFilter": {"sensitivity": "low"}}}
        )
        assert updated.profile["visuals"]["distractionFilter"] == {"enabled": True, "sensitivity": "low"}
        assert updated.profile["text"]["chunking"]["maxLength"] == 3
        assert updated.profile["metadata"]["updatedAt"] == updated.updated_at

        reloaded = profile_repository.get_profile("user-1")
        assert reloaded.profile == updated.profile

    def test_invalid_update_leaves_profile_untouched(self, profile_repository, profile_dict):
        profile_repository.create_profile("user-1", profile_dict)
        with pytest.raises(InvalidConfiguration):
            profile_repository.update_profile("user-1", {"text": {"chunking": {"maxLength": 50}}})
        stored = profile_repository.get_profile("user-1")
        assert stored.profile["text"]["chunking"]["maxLength"] == 3


class TestDeepMerge:
    def test_nested_and_replaced_values(self):
        base = {"a": {"b": 1, "c": [1, 2]}, "d": 1}
        merged = deep_merge(base, {"a": {"c": [3]}, "e": {"f": 2}})
        assert merged == {"a": {"b": 1, "c": [3]}, "d": 1, "e": {"f": 2}}
        assert base == {"a": {"b": 1, "c": [1, 2]}, "d": 1}
