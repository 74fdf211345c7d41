"""Abstract base classes for upstream access."""

from abc import ABC, abstractmethod

from zipped_proxy.shared.models import UpstreamResponse


class UpstreamFetcher(ABC):
    """Abstract interface for fetching a target resource."""

    @abstractmethod
    async def fetch(self, url: str) -> UpstreamResponse:
        """
        Issue a single GET to the target and read the whole body.

        Args:
            url: Absolute http(s) URL

        Returns:
            Content type and body of the upstream response

        Raises:
            Exception: For network or body-read failures
        """
        pass
