"""Tests for application settings."""

import pytest

from api.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENV", raising=False)
        settings = Settings(_env_file=None)
        assert settings.env == "development"
        assert settings.max_issues_per_plan == 500
        assert settings.plan_include_artifacts is True
        assert settings.is_production is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.setenv("MAX_ISSUES_PER_PLAN", "50")
        monkeypatch.setenv("PLAN_INCLUDE_ARTIFACTS", "false")
        settings = Settings(_env_file=None)
        assert settings.is_production is True
        assert settings.max_issues_per_plan == 50
        assert settings.plan_include_artifacts is False

    def test_test_env(self):
        assert Settings(_env_file=None).is_test is True

    def test_invalid_issue_limit(self, monkeypatch):
        monkeypatch.setenv("MAX_ISSUES_PER_PLAN", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
