"""Configuration using pydantic-settings.

Settings come from ``SMARTSHEET_*`` environment variables or a ``.env``
file. The API token is the only required value; its absence is reported
when a client is constructed, before any network call.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from smartsheet_typed.transport import API_BASE, DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    Environment variables:
    - SMARTSHEET_API_TOKEN: API access token (required to talk to the API)
    - SMARTSHEET_BASE_URL: API root (default: https://api.smartsheet.com/2.0/)
    - SMARTSHEET_TIMEOUT: Request timeout in seconds (default: 60)
    - SMARTSHEET_LOG_LEVEL: Log level used by the CLI (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_prefix="SMARTSHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars not defined in Settings
    )

    api_token: str = ""
    base_url: str = API_BASE
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known value."""
        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {allowed}")
        return v_upper


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    """
    return Settings()
