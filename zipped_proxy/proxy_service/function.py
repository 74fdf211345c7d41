"""Serverless function entry point.

The host passes an event with `queryStringParameters` and expects a mapping
with `statusCode`, `headers`, `body` and `isBase64Encoded` back. Point the
host at `zipped_proxy.proxy_service.function.lambda_handler`.
"""

import asyncio

from zipped_proxy.proxy_service.handlers import ProxyRequestHandler
from zipped_proxy.proxy_service.upstream.aiohttp_fetcher import AiohttpFetcher
from zipped_proxy.shared.config import get_settings


def lambda_handler(event, context=None, *, proxy_handler: ProxyRequestHandler | None = None) -> dict:
    """Run one proxy request to completion and return the host response mapping."""
    if proxy_handler is None:
        proxy_handler = ProxyRequestHandler(AiohttpFetcher(user_agent=get_settings().user_agent))

    params = event.get("queryStringParameters") or {}
    result = asyncio.run(proxy_handler.handle(params))
    return result.to_response().to_event()
