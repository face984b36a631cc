"""Test configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from exec_stats.config import Settings, get_settings


# Clear settings cache before each test in this module
def setup_module():
    """Clear settings cache before tests."""
    get_settings.cache_clear()


def teardown_module():
    """Clear settings cache after tests."""
    get_settings.cache_clear()


class TestSettings:
    """Test Settings class."""

    def setup_method(self):
        """Clear settings cache before each test."""
        get_settings.cache_clear()

    def teardown_method(self):
        """Clear settings cache after each test."""
        get_settings.cache_clear()

    def test_default_settings(self):
        """Test default settings values."""
        with patch.dict(os.environ, {"ENVIRONMENT": "test"}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "Exec Stats"
            assert settings.app_version == "0.1.0"
            assert settings.debug is False
            assert settings.environment == "test"
            assert settings.host == "0.0.0.0"
            assert settings.port == 8000
            assert settings.access_token_expire_minutes == 30
            assert settings.max_app_count == 1000
            assert settings.dashboard_week_length == 7
            assert settings.dashboard_month_length == 30

    def test_settings_from_env(self):
        """Test settings from environment variables."""
        env_vars = {
            "DEBUG": "true",
            "ENVIRONMENT": "testing",
            "HOST": "127.0.0.1",
            "PORT": "9000",
            "SECRET_KEY": "test-secret-key-x",
            "MAX_APP_COUNT": "50",
            "DASHBOARD_MONTH_LENGTH": "14",
        }

        with patch.dict(os.environ, env_vars):
            settings = Settings()

            assert settings.debug is True
            assert settings.environment == "testing"
            assert settings.host == "127.0.0.1"
            assert settings.port == 9000
            assert settings.secret_key == "test-secret-key-x"
            assert settings.max_app_count == 50
            assert settings.dashboard_month_length == 14

    def test_empty_secret_key_is_generated(self):
        settings = Settings(_env_file=None, secret_key="")
        assert len(settings.secret_key) >= 32

    @pytest.mark.parametrize(
        "field", ["dashboard_week_length", "dashboard_month_length", "max_app_count"]
    )
    def test_non_positive_lengths_are_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_get_settings_cached(self):
        """Test that get_settings returns cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2


class TestDatabaseUrl:

    @pytest.mark.parametrize(
        "configured, expected",
        [
            ("postgresql://u:p@db:5432/stats", "postgresql+asyncpg://u:p@db:5432/stats"),
            ("sqlite:///./stats.db", "sqlite+aiosqlite:///./stats.db"),
            ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
            ("postgresql+asyncpg://u:p@db/stats", "postgresql+asyncpg://u:p@db/stats"),
        ],
    )
    def test_async_driver_url(self, configured, expected):
        settings = Settings(_env_file=None, database_url=configured)
        assert settings.get_database_url() == expected


class TestCorsOrigins:

    def test_explicit_origins(self):
        settings = Settings(
            _env_file=None, cors_allowed_origins="https://a.example, https://b.example,"
        )
        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]

    def test_wildcard_outside_production(self):
        settings = Settings(_env_file=None, environment="development")
        assert settings.get_cors_origins() == ["*"]

    def test_no_default_origins_in_production(self):
        settings = Settings(_env_file=None, environment="production")
        assert settings.get_cors_origins() == []
