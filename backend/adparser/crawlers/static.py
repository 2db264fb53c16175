"""
Static HTML client using httpx.

Used for sites whose result pages are served fully rendered.
"""

import logging
from typing import Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class StaticClient:
    """
    Blocking page client backed by a reusable httpx.Client.

    Usage:
        with StaticClient() as client:
            html = client.fetch(url)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the static client.

        Args:
            timeout: Request timeout in seconds
            headers: Custom HTTP headers
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.headers = headers or {
            'User-Agent': 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'fr-FR,fr;q=0.9,en;q=0.8',
        }
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                follow_redirects=True,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    def fetch(self, url: str) -> str:
        """
        Fetch a URL and return its HTML.

        Raises:
            httpx.HTTPError: On transport failure or an error status
        """
        logger.debug(f"StaticClient fetching: {url}")
        response = self._get_client().get(url)
        response.raise_for_status()
        return response.text

    def close(self):
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self):
        self._get_client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
