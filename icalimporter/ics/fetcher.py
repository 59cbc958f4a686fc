"""HTTP client for downloading ICS calendar files."""

import logging
from typing import Any, Optional

import httpx

from .exceptions import ICSFetchError, ICSNetworkError
from .normalizer import normalize_url_scheme

logger = logging.getLogger(__name__)


class ICSFetcher:
    """Blocking HTTP client for downloading ICS calendar files.

    Timeouts and transport errors are not retried here; they surface as
    ``ICSNetworkError`` and the caller decides what to do with the source.
    """

    def __init__(self, settings: Any, transport: Optional[httpx.BaseTransport] = None):
        """Initialize ICS fetcher.

        Args:
            settings: Application settings
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.settings = settings
        self.client: Optional[httpx.Client] = None
        self._transport = transport

        logger.debug("ICS fetcher initialized")

    def __enter__(self) -> "ICSFetcher":
        """Context manager entry."""
        self._ensure_client()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()

    def _ensure_client(self) -> httpx.Client:
        """Ensure HTTP client exists."""
        if self.client is None or self.client.is_closed:
            timeout = httpx.Timeout(
                connect=10.0, read=self.settings.request_timeout, write=10.0, pool=30.0
            )

            self.client = httpx.Client(
                timeout=timeout,
                follow_redirects=True,
                verify=self.settings.validate_ssl,
                transport=self._transport,
                headers={
                    "User-Agent": f"{self.settings.app_name}/1.0.0 ICS-Client",
                    "Accept": "text/calendar, text/plain, */*",
                    "Accept-Charset": "utf-8",
                    "Cache-Control": "no-cache",
                },
            )
        return self.client

    def close(self) -> None:
        """Close HTTP client."""
        if self.client and not self.client.is_closed:
            self.client.close()

    def fetch(self, url: str) -> str:
        """Download calendar text.

        Args:
            url: Calendar URL; ``webcal:`` is rewritten to ``http:`` first

        Returns:
            Response body as text

        Raises:
            ICSFetchError: If the server answers with an error status
            ICSNetworkError: If the request times out or the connection fails
        """
        url = normalize_url_scheme(url)
        client = self._ensure_client()
        logger.info(f"Fetching ICS content from {url}")

        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout fetching ICS from {url}: {e}")
            raise ICSNetworkError(
                f"Request timeout after {self.settings.request_timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"HTTP error fetching ICS from {url}: {status_code}")
            raise ICSFetchError(
                f"HTTP {status_code}: {e.response.reason_phrase}", status_code
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Network error fetching ICS from {url}: {e}")
            raise ICSNetworkError(f"Network error: {e}") from e

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.text
