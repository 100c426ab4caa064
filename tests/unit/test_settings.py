"""
Unit Tests - Configuration
"""
import pytest
from pydantic import ValidationError

from order_analytics.config.settings import (
    AnalyticsSettings,
    DatabaseSettings,
    MonitoringSettings,
    Settings,
)


class TestSettings:
    """Tests for the settings classes"""

    def test_analytics_defaults(self):
        settings = AnalyticsSettings()

        assert settings.currency_symbol == "€"
        assert settings.default_page_size == 10
        assert settings.max_page_size == 100
        assert settings.low_stock_threshold == 5
        assert settings.trend_window_months == 12

    def test_default_page_size_above_maximum_rejected(self):
        with pytest.raises(ValidationError):
            AnalyticsSettings(default_page_size=200, max_page_size=100)

    def test_environment_normalised(self):
        assert Settings(APP_ENV="Testing").app_env == "testing"

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(APP_ENV="qa")

    def test_database_url_override(self):
        """Test DATABASE_URL takes precedence over the POSTGRES_* parts"""
        url = "sqlite+aiosqlite:///./catalog.db"
        assert DatabaseSettings(DATABASE_URL=url).async_url == url

    def test_postgres_url(self):
        settings = DatabaseSettings(host="db", port=5433)
        assert settings.async_url.startswith("postgresql+asyncpg://")
        assert "@db:5433/" in settings.async_url

    def test_log_format(self):
        assert MonitoringSettings(LOG_FORMAT="TEXT").log_format == "text"
        with pytest.raises(ValidationError):
            MonitoringSettings(LOG_FORMAT="xml")
