"""Fernet encryption for profile documents at rest."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Mapping
from typing import Any

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""


class DocumentEncryptor:
    """Seals JSON object documents with Fernet symmetric encryption.

    Only mappings are accepted; a profile row always holds one JSON object.

    Usage::

        encryptor = DocumentEncryptor(key=DocumentEncryptor.generate_key())
        token = encryptor.encrypt({"text": {...}})
        profile = encryptor.decrypt(token)
    """

    def __init__(self, key: str) -> None:
        """
        Raises:
            EncryptionError: If the key is empty or not a valid Fernet key.
        """
        if not key or not key.strip():
            raise EncryptionError("Encryption key must not be empty")
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except ValueError as exc:
            raise EncryptionError(f"Invalid encryption key: {exc}") from exc
        self._fingerprint = hashlib.sha256(key.encode("utf-8")).hexdigest()[:12]

    @property
    def fingerprint(self) -> str:
        """Short non-reversible key identifier, safe to log."""
        return self._fingerprint

    def encrypt(self, document: Mapping[str, Any]) -> str:
        if not isinstance(document, Mapping):
            raise EncryptionError(
                f"Only JSON objects can be encrypted, got {type(document).__name__}"
            )
        try:
            plaintext = json.dumps(dict(document), separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncryptionError(f"Encryption failed: {exc}") from exc
        return self._fernet.encrypt(plaintext).decode("utf-8")

    def decrypt(self, token: str) -> dict[str, Any]:
        if not token:
            raise EncryptionError("Cannot decrypt an empty token")
        try:
            plaintext = self._fernet.decrypt(token.encode("utf-8"))
        except InvalidToken as exc:
            raise EncryptionError("Decryption failed: invalid token or wrong key") from exc
        document = json.loads(plaintext)
        if not isinstance(document, dict):
            raise EncryptionError("Decrypted payload is not a JSON object")
        return document

    @staticmethod
    def generate_key() -> str:
        """Generate a new URL-safe base64 Fernet key."""
        return Fernet.generate_key().decode("utf-8")
