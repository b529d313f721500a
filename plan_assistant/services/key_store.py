"""
API Key Store - A single persisted Gemini credential.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from .errors import ApiKeyValidationError

logger = logging.getLogger(__name__)


class ApiKeyStore:
    """
    Key-value slot holding one credential string.

    The key is written to a small JSON file so it survives restarts; with
    no path it is kept in memory only.
    """

    def __init__(self, path: Optional[str] = None, prefix: str = "AIza", initial: str = ""):
        self.path = Path(path) if path else None
        self.prefix = prefix
        self._key: Optional[str] = initial or None

    def validate(self, key: Optional[str]) -> str:
        """Return the key if it carries the required prefix."""
        if not key or not key.startswith(self.prefix):
            raise ApiKeyValidationError(f"API key must start with '{self.prefix}...'.")
        return key

    def save(self, key: str) -> None:
        """Validate and persist a new key."""
        key = self.validate(key.strip())
        self._key = key
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"api_key": key}), encoding="utf-8")
        logger.info("API key saved")

    def load(self) -> Optional[str]:
        """Return the stored key without validating it."""
        if self._key:
            return self._key
        if self.path is None or not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read API key file {self.path}: {e}")
            return None
        self._key = data.get("api_key") or None
        return self._key

    def require(self) -> str:
        """Return a usable key or raise ApiKeyValidationError."""
        return self.validate(self.load())

    @property
    def has_valid_key(self) -> bool:
        try:
            self.require()
        except ApiKeyValidationError:
            return False
        return True


# Global key store
key_store: Optional[ApiKeyStore] = None


def get_key_store() -> ApiKeyStore:
    """Get or create the global key store."""
    global key_store
    if key_store is None:
        from ..config import settings
        key_store = ApiKeyStore(
            path=settings.api_key_file,
            prefix=settings.api_key_prefix,
            initial=settings.gemini_api_key,
        )
    return key_store
