"""Environment-driven settings for the Snail client and CLI.

Settings are read from `SNAIL_*` environment variables (or a `.env` file) the
first time `get_settings()` is called, never at import time.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://snailpay.app"


class ClientSettings(BaseSettings):
    """Typed view of client configuration from environment variables."""

    client_name: str = "snailpay"
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    # None means requests never time out.
    timeout_seconds: float | None = None
    log_level: str = "INFO"
    otel_exporter_otlp_endpoint: str | None = None
    model_config = SettingsConfigDict(env_prefix="SNAIL_", env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    return ClientSettings()
