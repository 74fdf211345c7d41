# File: tests/test_fetcher.py
from __future__ import annotations

from collections.abc import AsyncIterator

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web

from zipped_proxy.proxy_service.upstream.aiohttp_fetcher import AiohttpFetcher
from zipped_proxy.shared.config import DEFAULT_USER_AGENT

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x01\x02\x03"


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def upstream(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_page(request: web.Request):
        return web.Response(
            text=f"<html><body>{request.headers.get('User-Agent')}</body></html>",
            content_type="text/html",
            charset="utf-8",
        )

    async def handle_image(_):
        return web.Response(body=PNG_BYTES, content_type="image/png")

    async def handle_missing(_):
        return web.Response(text="gone", status=404, content_type="text/plain")

    app.router.add_get("/page", handle_page)
    app.router.add_get("/image.png", handle_image)
    app.router.add_get("/missing", handle_missing)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


@pytest.mark.asyncio
async def test_sends_user_agent_and_reads_html(upstream):
    response = await AiohttpFetcher().fetch(f"{upstream}/page")

    assert response.is_html
    assert response.charset == "utf-8"
    assert response.text() == f"<html><body>{DEFAULT_USER_AGENT}</body></html>"


@pytest.mark.asyncio
async def test_custom_user_agent(upstream):
    response = await AiohttpFetcher(user_agent="TestAgent/1.0").fetch(f"{upstream}/page")

    assert "TestAgent/1.0" in response.text()


@pytest.mark.asyncio
async def test_reads_binary_body(upstream):
    response = await AiohttpFetcher().fetch(f"{upstream}/image.png")

    assert response.content_type == "image/png"
    assert not response.is_html
    assert response.content == PNG_BYTES


@pytest.mark.asyncio
async def test_upstream_status_is_not_an_error(upstream):
    response = await AiohttpFetcher().fetch(f"{upstream}/missing")

    assert response.content == b"gone"


@pytest.mark.asyncio
async def test_connection_failure_raises(unused_tcp_port: int):
    with pytest.raises(aiohttp.ClientError):
        await AiohttpFetcher().fetch(f"http://localhost:{unused_tcp_port}/")
