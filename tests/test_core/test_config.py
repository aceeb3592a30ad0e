"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from execution_os.core.config import Settings, get_settings


class TestDefaults:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EOS_LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url.startswith("sqlite:///")
        assert settings.max_attachment_bytes == 500 * 1024
        assert settings.avoidance_threshold_days == 3
        assert settings.storage_quota_chars == 5_000_000
        assert settings.log_level == "INFO"
        assert settings.log_to_file is False
        assert settings.logs_dir == "logs"


class TestEnvironment:
    def test_env_prefix_override(self, monkeypatch):
        monkeypatch.setenv("EOS_STORAGE_QUOTA_CHARS", "1234")
        monkeypatch.setenv("EOS_DATABASE_URL", "sqlite://")
        settings = Settings(_env_file=None)
        assert settings.storage_quota_chars == 1234
        assert settings.database_url == "sqlite://"

    def test_unprefixed_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://elsewhere")
        assert Settings(_env_file=None).database_url != "postgresql://elsewhere"

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_negative_limits_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_attachment_bytes=-1)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
