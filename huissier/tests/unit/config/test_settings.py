"""
Unit tests for Settings and load_config.

Usage:
    pytest huissier/tests/unit/config/test_settings.py
"""

import pytest
from pydantic import ValidationError

from huissier.config.settings import (
    Settings,
    get_settings,
    load_config,
    override_settings,
    reset_settings,
)


class TestSettings:
    """Unit tests for Settings model."""

    def test_auth_defaults(self):
        """Test 30 minute window and 24 hour session by default."""
        settings = Settings()

        assert settings.auth_timestamp_window_ms == 30 * 60 * 1000
        assert settings.session_max_age_ms == 24 * 60 * 60 * 1000

    def test_log_level_normalized(self):
        """Test log level is upper-cased."""
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log level is rejected."""
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")

    def test_window_must_be_positive(self):
        """Test zero-minute window is rejected."""
        with pytest.raises(ValidationError):
            Settings(AUTH_TIMESTAMP_WINDOW_MINUTES=0)

    def test_network_lowercased(self):
        """Test network name is normalized."""
        assert Settings(SOLANA_NETWORK=" DevNet ").SOLANA_NETWORK == "devnet"


class TestLoadConfig:
    """Unit tests for YAML + environment loading."""

    def test_yaml_layers(self, monkeypatch):
        """Test environment YAML overrides default YAML."""
        for key in ("ENV", "LOG_LEVEL", "SOLANA_NETWORK", "DATABASE_URL"):
            monkeypatch.delenv(key, raising=False)

        settings = load_config(env="test")

        assert settings.ENV == "test"
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.SOLANA_NETWORK == "devnet"
        assert settings.DATABASE_URL.startswith("sqlite+aiosqlite")
        assert settings.AUTH_TIMESTAMP_WINDOW_MINUTES == 30

    def test_environment_wins_over_yaml(self, monkeypatch):
        """Test environment variables beat YAML values."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("AUTH_TIMESTAMP_WINDOW_MINUTES", "5")

        settings = load_config(env="test")

        assert settings.LOG_LEVEL == "ERROR"
        assert settings.auth_timestamp_window_ms == 5 * 60 * 1000

    def test_global_override(self):
        """Test override_settings replaces the singleton."""
        custom = Settings(APP_TITLE="Other CMS")
        override_settings(custom)
        try:
            assert get_settings() is custom
        finally:
            reset_settings()
