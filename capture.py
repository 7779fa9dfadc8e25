"""Turns "whatever the browser is showing" into an Article."""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from urllib.parse import urlsplit

from errors import DynamicSite, InvalidSource, QuickReadError
from extractor import extract
from interfaces import BrowserBridge, ClipboardReader, DocumentFetcher
from models import CLIPBOARD_SOURCE, Article
from text import tokenize

logger = logging.getLogger(__name__)

JS_HEAVY_HOSTS = ("x.com", "twitter.com", "facebook.com", "instagram.com", "threads.net")
MIN_CLIPBOARD_WORDS = 6


def article_from_text(text: str, source: str = CLIPBOARD_SOURCE, title: str = "From Clipboard") -> Article:
    return Article(source=source, title=title, text=text)


def usable_clipboard_text(text: Optional[str]) -> Optional[str]:
    """Clipboard text long enough to be worth reading, else None."""
    if not text or len(tokenize(text)) < MIN_CLIPBOARD_WORDS:
        return None
    return text


class ArticleCapture:
    def __init__(
        self,
        bridge: BrowserBridge,
        fetcher: DocumentFetcher,
        clipboard: ClipboardReader,
        js_heavy_hosts: Iterable[str] = JS_HEAVY_HOSTS,
    ) -> None:
        self._bridge = bridge
        self._fetcher = fetcher
        self._clipboard = clipboard
        self._js_heavy_hosts = tuple(js_heavy_hosts)

    def capture(self) -> Article:
        """Read the active tab, falling back to copied text on failure.

        Raises:
            QuickReadError: nothing could be read and the clipboard has no
                usable text either.
        """
        try:
            url = self._bridge.current_active_tab_url()
            host = urlsplit(url).hostname or ""
            if self._is_js_heavy(host):
                return self._capture_dynamic_site(url, host)
            return self.capture_url(url)
        except DynamicSite:
            raise
        except QuickReadError as exc:
            logger.warning(f"Capture failed ({exc.code}): {exc}")
            text = usable_clipboard_text(self._clipboard.read_text())
            if text is None:
                raise
            logger.info("Falling back to clipboard text")
            return article_from_text(text)

    def capture_url(self, url: str) -> Article:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise InvalidSource(url)
        logger.info(f"Fetching {url}")
        html = self._fetcher.fetch_html(url)
        content = extract(html, parts.hostname)
        return Article(source=url, title=content.title, text=content.text)

    def _capture_dynamic_site(self, url: str, host: str) -> Article:
        text = usable_clipboard_text(self._clipboard.read_text())
        if text is None:
            raise DynamicSite(host)
        return article_from_text(text, source=url, title=f"From {host}")

    def _is_js_heavy(self, host: str) -> bool:
        return any(host == h or host.endswith("." + h) for h in self._js_heavy_hosts)
