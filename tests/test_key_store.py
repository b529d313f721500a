"""Tests for API key storage."""
import pytest

from plan_assistant.services.errors import ApiKeyValidationError
from plan_assistant.services.key_store import ApiKeyStore


class TestApiKeyStore:
    """Test credential validation and persistence."""

    def test_missing_key_rejected(self):
        store = ApiKeyStore()

        assert store.load() is None
        assert not store.has_valid_key
        with pytest.raises(ApiKeyValidationError):
            store.require()

    def test_wrong_prefix_rejected(self):
        store = ApiKeyStore()

        with pytest.raises(ApiKeyValidationError, match="AIza"):
            store.save("sk-not-a-gemini-key")
        assert store.load() is None

    def test_save_and_reload_from_file(self, tmp_path):
        path = tmp_path / "keys" / "gemini.json"

        ApiKeyStore(path=str(path)).save("AIzaTestKey")
        reloaded = ApiKeyStore(path=str(path))

        assert path.exists()
        assert reloaded.require() == "AIzaTestKey"

    def test_initial_key_is_validated_on_use(self):
        store = ApiKeyStore(initial="bogus")

        assert store.load() == "bogus"
        with pytest.raises(ApiKeyValidationError):
            store.require()

    def test_corrupt_file_treated_as_missing(self, tmp_path):
        path = tmp_path / "gemini.json"
        path.write_text("{not json", encoding="utf-8")

        assert ApiKeyStore(path=str(path)).load() is None
