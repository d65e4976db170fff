from abc import ABC, abstractmethod
from typing import Dict, Optional, Any

import httpx
import logging

from megacloud_extractor.configs import settings
from megacloud_extractor.utils.http_utils import create_httpx_client, DownloadError

logger = logging.getLogger(__name__)


class ExtractorError(Exception):
    """Base exception for all extractors."""
    pass


class SourcesNotFoundError(ExtractorError):
    """The provider answered but returned nothing playable."""
    pass


class ExtractionError(ExtractorError):
    """Wraps any hard failure of a single extraction with the embed URL it concerned."""

    def __init__(self, embed_url: str, reason: str):
        self.embed_url = embed_url
        self.reason = reason
        super().__init__(f"Failed to extract video sources for {embed_url}: {reason}")


class BaseExtractor(ABC):
    """Base class for all URL extractors.

    Requests go through ``client`` when one is injected, otherwise a fresh
    client is opened per request. A request is attempted once; retry and
    backoff belong to the caller.
    """

    def __init__(self, request_headers: dict, client: Optional[httpx.AsyncClient] = None):
        self.base_headers = {
            "user-agent": settings.user_agent,
        }
        self.client = client
        # merge incoming headers (e.g. Accept-Language) with default base headers
        self.base_headers.update(request_headers or {})

    async def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict] = None,
        **kwargs,
    ) -> httpx.Response:
        """
        Make a single HTTP request. Non-2xx responses raise DownloadError (preserves status code).

        Parameters
        ----------
        headers : dict | None
            Per-request headers, merged over the base headers.
        """
        # per-request headers replace base headers regardless of case
        request_headers = httpx.Headers(self.base_headers)
        if headers:
            request_headers.update(headers)

        try:
            if self.client is not None:
                response = await self.client.request(method, url, headers=request_headers, **kwargs)
            else:
                async with create_httpx_client() as client:
                    response = await client.request(method, url, headers=request_headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Transport error while requesting %s: %s", url, e)
            raise ExtractorError(f"Request failed for URL {url}: {str(e)}")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.debug(
                "HTTPStatusError for %s (status=%s) -- body preview: %s",
                url,
                e.response.status_code,
                e.response.text[:500],
            )
            raise DownloadError(e.response.status_code, f"HTTP error {e.response.status_code} while requesting {url}")
        return response

    @abstractmethod
    async def extract(self, url: str, **kwargs) -> Any:
        """Extract stream data for the given embed URL."""
        pass
