"""
Unit tests for settings and CORS configuration loading.
"""

from libcatalog.api.dependencies import Settings, get_settings
from libcatalog.api.middleware.cors import CORS_CONFIGS, get_cors_config


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "API_PREFIX", "SEED_ON_STARTUP", "LIBCATALOG_ENV", "DEBUG", "PORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.database_url == "sqlite+aiosqlite:///./libcatalog.db"
        assert settings.api_prefix == "/api"
        assert settings.seed_on_startup is True
        assert settings.environment == "development"
        assert settings.port == 8000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://lib:lib@db/catalog")
        monkeypatch.setenv("API_PREFIX", "/api/v1/")
        monkeypatch.setenv("SEED_ON_STARTUP", "false")
        monkeypatch.setenv("LIBCATALOG_ENV", "production")
        monkeypatch.setenv("DEBUG", "false")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings.from_env()

        assert settings.database_url == "postgresql+asyncpg://lib:lib@db/catalog"
        assert settings.api_prefix == "/api/v1"
        assert settings.seed_on_startup is False
        assert settings.environment == "production"
        assert settings.debug is False
        assert settings.port == 9000

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestCORSConfig:
    """Tests for get_cors_config."""

    def test_extra_origins_do_not_leak_into_defaults(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://library.example.org, https://admin.example.org")

        config = get_cors_config("production")

        assert config.allowed_origins == ["https://library.example.org", "https://admin.example.org"]
        assert CORS_CONFIGS["production"].allowed_origins == []

    def test_unknown_environment_falls_back_to_development(self, monkeypatch):
        monkeypatch.delenv("CORS_ALLOWED_ORIGINS", raising=False)

        assert get_cors_config("qa").allow_all_origins is True
