"""Proxy service entry point."""

from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette
from starlette.routing import Route

from zipped_proxy.proxy_service.handlers import ProxyRequestHandler, proxy_request_handler
from zipped_proxy.proxy_service.middleware import RequestContextMiddleware
from zipped_proxy.proxy_service.upstream.aiohttp_fetcher import AiohttpFetcher
from zipped_proxy.proxy_service.upstream.base_fetcher import UpstreamFetcher
from zipped_proxy.shared.config import Settings, get_settings
from zipped_proxy.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, fetcher: UpstreamFetcher | None = None) -> Starlette:
    """Create and configure the proxy application."""
    settings = settings or get_settings()
    fetcher = fetcher or AiohttpFetcher(user_agent=settings.user_agent)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.log_level)
        logger.info("Starting ZIPPED proxy")
        logger.info(f"Upstream user-agent: {settings.user_agent}")

        yield

        logger.info("ZIPPED proxy stopped")

    app = Starlette(
        debug=False,
        routes=[
            Route("/", proxy_request_handler, methods=["GET"]),
            Route("/proxy", proxy_request_handler, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    app.state.proxy_handler = ProxyRequestHandler(fetcher)

    app.add_middleware(RequestContextMiddleware)

    return app


def main() -> None:
    """Entry point for the server."""
    settings = get_settings()
    app = create_app(settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        loop="auto",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
