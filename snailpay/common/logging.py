"""Structured JSON logging with per-request context fields."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter


client_name_ctx: ContextVar[str] = ContextVar("client_name", default="snailpay")
operation_ctx: ContextVar[str] = ContextVar("operation", default="")
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


class ContextFilter(logging.Filter):
    """Inject client and per-call identifiers into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.client_name = client_name_ctx.get()
        record.operation = operation_ctx.get()
        record.request_id = request_id_ctx.get()
        return True


def configure_logging(level: str = "INFO", stream=None) -> None:
    """Configure the root logger for command-line use.

    Library code never calls this; applications embedding the client keep
    their own logging setup.
    """

    handler = logging.StreamHandler(stream or sys.stdout)
    context_filter = ContextFilter()
    handler.addFilter(context_filter)
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(client_name)s %(operation)s %(request_id)s %(message)s"
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())
    root.addFilter(context_filter)


logger = logging.getLogger("snailpay")
