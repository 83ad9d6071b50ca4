"""Unit tests для Settings."""

import pytest
from pydantic import ValidationError

from marketplace.config import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.default_currency == "USD"
        assert settings.default_page_size == 20
        assert settings.max_page_size == 100
        assert settings.max_search_radius_km == 500.0
        assert settings.is_development
        assert not settings.is_production

    def test_currency_is_normalized(self):
        assert Settings(_env_file=None, default_currency=" eur ").default_currency == "EUR"

    def test_default_page_size_above_max_fails(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_page_size=50, max_page_size=10)

    def test_auction_duration_bounds_must_be_consistent(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, min_auction_duration_hours=49, max_auction_duration_days=2)

    def test_unknown_environment_fails(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")

    def test_retry_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, concurrency_max_retries=11)

    def test_reads_prefixed_environment(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("MARKETPLACE_ENVIRONMENT", "production")
        monkeypatch.setenv("MARKETPLACE_MAX_SEARCH_RADIUS_KM", "250")
        monkeypatch.setenv("MARKETPLACE_DEFAULT_CURRENCY", "uah")

        # Act
        settings = Settings(_env_file=None)

        # Assert
        assert settings.is_production
        assert settings.max_search_radius_km == 250.0
        assert settings.default_currency == "UAH"


class TestGetSettings:
    def test_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
