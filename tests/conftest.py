# File: tests/conftest.py
import pytest

from zipped_proxy.proxy_service.handlers import ProxyRequestHandler
from zipped_proxy.proxy_service.upstream.base_fetcher import UpstreamFetcher
from zipped_proxy.shared.models import UpstreamResponse


class FakeFetcher(UpstreamFetcher):
    """In-memory fetcher recording every requested URL."""

    def __init__(self, response: UpstreamResponse | None = None, error: Exception | None = None):
        self.response = response or UpstreamResponse()
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str) -> UpstreamResponse:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def proxy_handler(fake_fetcher: FakeFetcher) -> ProxyRequestHandler:
    return ProxyRequestHandler(fake_fetcher)


@pytest.fixture()
def html_page() -> UpstreamResponse:
    html = (
        "<html><head>"
        '<meta http-equiv="Content-Security-Policy" content="default-src \'self\'">'
        "<script>alert(1)</script>"
        "</head><body><p>Hello</p></body></html>"
    )
    return UpstreamResponse(content_type="text/html; charset=utf-8", content=html.encode(), charset="utf-8")


class UndecodableResponse(UpstreamResponse):
    """HTML response whose body cannot be turned into text."""

    def text(self) -> str:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


@pytest.fixture()
def undecodable_page() -> UpstreamResponse:
    return UndecodableResponse(content_type="text/html", content=b"\xff")
