"""HTTP document fetcher."""

from __future__ import annotations

import codecs
import logging
from typing import Optional

import httpx

from errors import FetchFailed

logger = logging.getLogger(__name__)


def decode_document(content: bytes, charset: Optional[str]) -> str:
    """Decode with the declared charset, falling back to UTF-8."""
    if charset:
        try:
            codecs.lookup(charset)
            return content.decode(charset)
        except (LookupError, UnicodeDecodeError):
            logger.debug(f"Declared charset {charset!r} failed, trying UTF-8")
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FetchFailed("Could not decode page content") from exc


class HttpDocumentFetcher:
    DEFAULT_HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/17.0 Safari/605.1.15"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }

    DEFAULT_TIMEOUT = httpx.Timeout(
        connect=5.0,
        read=15.0,
        write=10.0,
        pool=5.0,
    )

    def __init__(
        self,
        headers: dict | None = None,
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.headers = {**self.DEFAULT_HEADERS, **(headers or {})}
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._transport = transport

    def fetch_document(self, url: str) -> tuple[bytes, Optional[str]]:
        """GET ``url`` and return its body with the declared charset, if any.

        Raises:
            FetchFailed: transport error, timeout or non-2xx status.
        """
        try:
            with httpx.Client(
                headers=self.headers,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
        except httpx.HTTPError as exc:
            logger.warning(f"Request to {url} failed: {exc}")
            raise FetchFailed(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} from {url}")
            raise FetchFailed("Server returned an error")

        logger.debug(f"Fetched {url} - Status: {response.status_code}, {len(response.content)} bytes")
        return response.content, response.charset_encoding

    def fetch_html(self, url: str) -> str:
        content, charset = self.fetch_document(url)
        return decode_document(content, charset)
