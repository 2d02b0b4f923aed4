"""Storage backends for cached OAuth user tokens."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger


@dataclass
class StoredCredentials:
    """Token data plus the OAuth client it was issued to."""

    token_data: dict[str, Any] = field(default_factory=dict)
    client_id: str | None = None
    client_secret: str | None = None


class CredentialStorage(ABC):
    """Abstract base class for token storage backends."""

    @abstractmethod
    def load(self) -> StoredCredentials | None:
        """Load stored credentials, or None if nothing usable is stored."""

    @abstractmethod
    def save(self, credentials: StoredCredentials) -> bool:
        """Save credentials. Returns True on success."""

    @abstractmethod
    def delete(self) -> bool:
        """Delete stored credentials. Returns True if something was removed."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this storage backend can be used."""


class FileCredentialStorage(CredentialStorage):
    """Token stored as a JSON file on disk."""

    def __init__(self, token_path: Path):
        self.token_path = token_path

    def load(self) -> StoredCredentials | None:
        if not self.token_path.exists():
            return None

        try:
            with open(self.token_path) as f:
                token_data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load token file {self.token_path}: {e}")
            return None

        if not isinstance(token_data, dict):
            logger.warning(f"Ignoring token file {self.token_path}: expected a JSON object")
            return None

        return StoredCredentials(
            token_data=token_data,
            client_id=token_data.get("client_id"),
            client_secret=token_data.get("client_secret"),
        )

    def save(self, credentials: StoredCredentials) -> bool:
        try:
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.token_path, "w") as f:
                json.dump(credentials.token_data, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save token file: {e}")
            return False

    def delete(self) -> bool:
        if not self.token_path.exists():
            return False
        try:
            self.token_path.unlink()
            return True
        except OSError as e:
            logger.error(f"Failed to delete token file: {e}")
            return False

    def is_available(self) -> bool:
        return True


class KeyringCredentialStorage(CredentialStorage):
    """Token stored in the operating system keyring as one JSON entry."""

    DEFAULT_SERVICE_NAME = "google-docs-markdown"
    TOKEN_KEY = "_token"

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME):
        self.service_name = service_name
        self._keyring = None

    @property
    def keyring(self):
        """Lazy import keyring module."""
        if self._keyring is None:
            import keyring

            self._keyring = keyring
        return self._keyring

    def load(self) -> StoredCredentials | None:
        try:
            data = self.keyring.get_password(self.service_name, self.TOKEN_KEY)
            if not data:
                return None
            parsed = json.loads(data)
        except Exception as e:
            logger.warning(f"Failed to load from keyring: {e}")
            return None

        return StoredCredentials(
            token_data=parsed.get("token", {}),
            client_id=parsed.get("client_id"),
            client_secret=parsed.get("client_secret"),
        )

    def save(self, credentials: StoredCredentials) -> bool:
        data = {
            "token": credentials.token_data,
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
        }
        try:
            self.keyring.set_password(self.service_name, self.TOKEN_KEY, json.dumps(data))
            return True
        except Exception as e:
            logger.error(f"Failed to save to keyring: {e}")
            return False

    def delete(self) -> bool:
        try:
            self.keyring.delete_password(self.service_name, self.TOKEN_KEY)
            return True
        except Exception as e:
            logger.debug(f"Failed to delete from keyring: {e}")
            return False

    def is_available(self) -> bool:
        try:
            self.keyring.get_keyring()
            return True
        except Exception:
            return False


def get_credential_storage(
    use_keyring: bool = True,
    fallback_to_file: bool = True,
    service_name: str = KeyringCredentialStorage.DEFAULT_SERVICE_NAME,
    token_path: Path | None = None,
) -> CredentialStorage:
    """Pick a credential storage backend.

    Args:
        use_keyring: Whether to attempt using keyring
        fallback_to_file: Whether to fall back to file storage if keyring is unavailable
        service_name: Service name for keyring
        token_path: Path for file-based token storage

    Returns:
        Keyring storage when requested and functional, file storage otherwise.

    Raises:
        RuntimeError: If keyring is required but unavailable and fallback is disabled
    """
    if use_keyring:
        try:
            storage = KeyringCredentialStorage(service_name)
            if storage.is_available():
                logger.debug("Using keyring for credential storage")
                return storage
            logger.debug("Keyring not available")
        except ImportError:
            logger.debug("Keyring module not installed")

        if not fallback_to_file:
            raise RuntimeError("Keyring unavailable and fallback to file storage disabled")

    if token_path is None:
        token_path = Path("tmp/token_docs.json")

    logger.debug(f"Using file-based credential storage at {token_path}")
    return FileCredentialStorage(token_path)
