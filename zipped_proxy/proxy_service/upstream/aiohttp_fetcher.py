"""aiohttp implementation of the upstream fetcher."""

import aiohttp

from zipped_proxy.proxy_service.upstream.base_fetcher import UpstreamFetcher
from zipped_proxy.shared.config import DEFAULT_USER_AGENT
from zipped_proxy.shared.logging import get_logger
from zipped_proxy.shared.models import UpstreamResponse

logger = get_logger(__name__)


class AiohttpFetcher(UpstreamFetcher):
    """Fetches targets with a short-lived aiohttp client session."""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize the fetcher.

        Args:
            user_agent: Value of the user-agent header sent upstream
        """
        self._user_agent = user_agent

    async def fetch(self, url: str) -> UpstreamResponse:
        """Send the GET and collect the response.

        Args:
            url: Absolute http(s) URL

        Returns:
            Content type, charset and raw body of the upstream response

        Raises:
            aiohttp.ClientError: On connection or read failures
        """
        # Session timeout disabled: the proxy enforces none of its own.
        timeout = aiohttp.ClientTimeout(total=None)
        headers = {"user-agent": self._user_agent}

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url, headers=headers) as response:
                logger.debug(f"Upstream {url} answered {response.status}")
                content = await response.read()
                return UpstreamResponse(
                    content_type=response.headers.get("Content-Type", ""),
                    content=content,
                    charset=response.charset,
                )
