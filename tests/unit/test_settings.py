"""
Tests para la configuración (pydantic-settings).
"""

import pytest
from pydantic import ValidationError

from config.environments import Environment
from config.settings import Settings, get_settings

LONG_SECRET = "x" * 40


def make_settings(**overrides) -> Settings:
    values = {"JWT_SECRET": LONG_SECRET}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestRequiredSecret:

    def test_missing_secret_fails(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_secret_fails(self):
        with pytest.raises(ValidationError):
            make_settings(JWT_SECRET="")

    def test_short_secret_rejected_in_production(self):
        with pytest.raises(ValidationError):
            make_settings(
                ENVIRONMENT="production",
                DATABASE_URL="postgresql://u:p@db/tienda",
                JWT_SECRET="corto",
            )

    def test_short_secret_allowed_in_development(self):
        settings = make_settings(JWT_SECRET="corto")

        assert settings.JWT_SECRET.get_secret_value() == "corto"

    def test_secret_is_not_rendered(self):
        assert LONG_SECRET not in repr(make_settings())


class TestDatabaseUrl:

    def test_sqlite_rejected_in_production(self):
        with pytest.raises(ValidationError):
            make_settings(ENVIRONMENT="production", DATABASE_URL="sqlite:///tienda.db")

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u:p@db:5432/tienda", "postgresql+asyncpg://u:p@db:5432/tienda"),
        ("postgres://u:p@db/tienda", "postgresql+asyncpg://u:p@db/tienda"),
        ("sqlite:///tienda.db", "sqlite+aiosqlite:///tienda.db"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ])
    def test_async_url(self, url, expected):
        assert make_settings(DATABASE_URL=url).get_async_database_url() == expected


class TestDefaults:

    def test_server_defaults(self):
        settings = make_settings()

        assert settings.PORT == 3000
        assert settings.JWT_ALGORITHM == "HS256"
        assert settings.JWT_EXPIRATION_HOURS == 8

    def test_cors_origins(self):
        assert make_settings().get_cors_origins() == ["*"]
        assert make_settings(CORS_ORIGINS="https://a.com, https://b.com").get_cors_origins() == [
            "https://a.com",
            "https://b.com",
        ]

    def test_docs_disabled_in_production(self):
        prod = make_settings(
            ENVIRONMENT="production",
            DATABASE_URL="postgresql://u:p@db/tienda",
        )

        assert prod.is_production()
        assert prod.docs_enabled() is False
        assert make_settings().docs_enabled() is True


class TestGetSettings:

    @pytest.fixture(autouse=True)
    def clear_cache(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_production_profile_applied(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/tienda")
        monkeypatch.setenv("JWT_SECRET", LONG_SECRET)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("DATABASE_POOL_SIZE", raising=False)

        settings = get_settings()

        assert settings.ENVIRONMENT == Environment.PRODUCTION
        assert settings.DATABASE_POOL_SIZE == 20
        assert settings.LOG_LEVEL == "WARNING"

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("DATABASE_POOL_SIZE", "3")

        settings = get_settings()

        assert settings.LOG_LEVEL == "ERROR"
        assert settings.DATABASE_POOL_SIZE == 3

    def test_cached(self):
        assert get_settings() is get_settings()
