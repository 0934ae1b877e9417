"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from smartsheet_typed.config import Settings, get_settings
from smartsheet_typed.transport import API_BASE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("API_TOKEN", "BASE_URL", "TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"SMARTSHEET_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.api_token == ""
        assert settings.base_url == API_BASE
        assert settings.timeout == 60
        assert settings.log_level == "INFO"

    def test_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SMARTSHEET_API_TOKEN", "secret")
        monkeypatch.setenv("SMARTSHEET_TIMEOUT", "5")
        monkeypatch.setenv("SMARTSHEET_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.api_token == "secret"
        assert settings.timeout == 5.0
        assert settings.log_level == "DEBUG"

    def test_env_file(self, tmp_path: Path):
        (tmp_path / ".env").write_text("SMARTSHEET_API_TOKEN=from-file\n")
        assert Settings().api_token == "from-file"

    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SMARTSHEET_TIMEOUT", "0")
        with pytest.raises(ValidationError, match="timeout must be positive"):
            Settings()

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="log_level must be one of"):
            Settings(log_level="LOUD")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
