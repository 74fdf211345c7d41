import base64
from collections.abc import Mapping

from starlette.requests import Request
from starlette.responses import Response

from zipped_proxy.proxy_service.rewrite import rewrite_html
from zipped_proxy.proxy_service.target import resolve_target
from zipped_proxy.proxy_service.upstream.base_fetcher import UpstreamFetcher
from zipped_proxy.shared.logging import get_logger
from zipped_proxy.shared.models import (
    BinaryPayload,
    ClientError,
    HtmlPage,
    ProxyResponse,
    ProxyResult,
    UpstreamError,
)

logger = get_logger(__name__)


class ProxyRequestHandler:
    """
    Turns one set of query parameters into one proxy result: validate the
    target, fetch it once, rewrite HTML or pass bytes through.
    """

    def __init__(self, fetcher: UpstreamFetcher):
        self._fetcher = fetcher

    async def handle(self, params: Mapping[str, str | None]) -> ProxyResult:
        """Public entry point shared by the HTTP app and the function host."""
        target = resolve_target(params.get("url"))
        if isinstance(target, ClientError):
            logger.info(f"Rejected request: {target.message}")
            return target

        try:
            logger.info(f"Proxying {target.href}")
            upstream = await self._fetcher.fetch(target.href)

            if upstream.is_html:
                logger.debug(f"Rewriting HTML from {target.href}")
                return HtmlPage(html=rewrite_html(upstream.text()))

            logger.debug(f"Relaying {upstream.content_type or 'untyped'} body from {target.href}")
            return BinaryPayload(content_type=upstream.content_type, content=upstream.content)

        except Exception as exc:
            logger.exception(f"Proxying {target.href} failed: {exc}")
            return UpstreamError(message=str(exc))


def _build_http_response(proxy_response: ProxyResponse) -> Response:
    """
    Translate ProxyResponse → Starlette Response.

    Base64 bodies are decoded so HTTP callers receive the original bytes.
    """
    if proxy_response.is_base64_encoded:
        content: bytes | str = base64.b64decode(proxy_response.body)
    else:
        content = proxy_response.body

    return Response(
        content=content,
        status_code=proxy_response.status_code,
        headers=proxy_response.headers,
    )


async def proxy_request_handler(request: Request) -> Response:
    """Starlette endpoint wrapping the handler stored on application state."""
    handler: ProxyRequestHandler = request.app.state.proxy_handler
    result = await handler.handle(request.query_params)
    return _build_http_response(result.to_response())
