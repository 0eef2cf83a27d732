"""Data models for the profile persistence layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class StoredProfile:
    """A user's cognitive profile document plus its storage timestamps.

    ``profile`` is the camelCase JSON document; it is encrypted at rest.
    """

    user_id: str
    profile: dict[str, Any]
    created_at: str = ""  # ISO 8601
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "profile": self.profile,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
