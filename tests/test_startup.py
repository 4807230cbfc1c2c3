"""Secret redaction in startup config logging."""

import logging

from snailpay.common.config import ClientSettings
from snailpay.common.startup import log_startup_config, redacted_config


def test_api_key_is_redacted():
    """Secret-like settings are redacted and unset ones marked."""

    config = redacted_config(ClientSettings(api_key="sk-live-xyz"))

    assert config["api_key"] == "<redacted>"
    assert config["base_url"] == "https://snailpay.app"
    assert config["timeout_seconds"] == "<unset>"


def test_startup_log_does_not_leak_key(caplog):
    """The startup config log line never contains the key."""

    caplog.set_level(logging.INFO, logger="snailpay")

    log_startup_config(ClientSettings(api_key="sk-live-xyz"))

    assert "startup_config" in caplog.text
    assert "sk-live-xyz" not in caplog.text
