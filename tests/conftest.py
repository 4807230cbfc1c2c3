import httpx
import pytest

from snailpay.common.config import get_settings


class FakeSnailAPI:
    """Records requests and answers every one with the same canned response."""

    def __init__(self, status_code: int = 200, json=None, text: str | None = None):
        self.status_code = status_code
        self.json = json
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json)
        return httpx.Response(self.status_code, text=self.text or "")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_api():
    return FakeSnailAPI


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("SNAIL_API_KEY", "SNAIL_BASE_URL", "SNAIL_TIMEOUT_SECONDS", "SNAIL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
