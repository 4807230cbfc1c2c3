"""Exceptions raised by the Snail client."""


class SnailError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SnailError):
    """The client cannot be built, usually because no API key was given."""


class ValidationError(SnailError):
    """A request was rejected locally before anything was sent."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class RemoteError(SnailError):
    """The server answered with a status other than 200.

    `str(exc)` is the HTTP status text. The response body is kept on `body`
    for diagnostics only.
    """

    def __init__(self, status_text: str, status_code: int, body: str = "") -> None:
        super().__init__(status_text)
        self.status_code = status_code
        self.body = body


class TransportError(SnailError):
    """The HTTP exchange itself failed, or the body was not valid JSON.

    The httpx (or JSON decode) error is kept as `__cause__` and is not
    re-raised as is, so callers catching `httpx.HTTPError` around client
    calls must catch this instead.
    """
