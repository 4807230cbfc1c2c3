"""Startup-time helpers for safe config logging."""

from snailpay.common.config import ClientSettings
from snailpay.common.logging import logger


SECRET_MARKERS = ["key", "secret", "password", "token"]


def _safe_value(name: str, value) -> str:
    """Return a printable value, redacting secret-like setting names."""

    if value is None:
        return "<unset>"
    if any(marker in name.lower() for marker in SECRET_MARKERS):
        return "<redacted>"
    return str(value)


def redacted_config(settings: ClientSettings) -> dict[str, str]:
    return {name: _safe_value(name, value) for name, value in settings.model_dump().items()}


def log_startup_config(settings: ClientSettings) -> None:
    """Log effective client settings for quick troubleshooting."""

    logger.info("startup_config=%s", redacted_config(settings))
