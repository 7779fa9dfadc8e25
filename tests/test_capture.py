from __future__ import annotations

from typing import Optional

import pytest

from capture import ArticleCapture, article_from_text, usable_clipboard_text
from errors import DynamicSite, FetchFailed, InvalidSource, NoBrowserFound, NoContent
from models import CLIPBOARD_SOURCE

ARTICLE_HTML = (
    "<html><head><title>Story</title></head><body><nav>menu</nav>"
    "<article><p>Once upon a time there was a parser.</p></article></body></html>"
)
CLIPBOARD_TEXT = "one two three four five six seven"


class FakeBridge:
    def __init__(self, url: str = "https://example.com/story", error: Exception | None = None) -> None:
        self.url = url
        self.error = error

    def current_active_tab_url(self) -> str:
        if self.error is not None:
            raise self.error
        return self.url


class FakeFetcher:
    def __init__(self, html: str = ARTICLE_HTML, error: Exception | None = None) -> None:
        self.html = html
        self.error = error
        self.calls: list[str] = []

    def fetch_html(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


class FakeClipboard:
    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text

    def read_text(self) -> Optional[str]:
        return self.text


def _capture(
    bridge: FakeBridge | None = None,
    fetcher: FakeFetcher | None = None,
    clipboard: FakeClipboard | None = None,
) -> ArticleCapture:
    return ArticleCapture(
        bridge=bridge or FakeBridge(),
        fetcher=fetcher or FakeFetcher(),
        clipboard=clipboard or FakeClipboard(),
    )


def test_happy_path_builds_article_from_page() -> None:
    fetcher = FakeFetcher()

    article = _capture(fetcher=fetcher).capture()

    assert fetcher.calls == ["https://example.com/story"]
    assert article.source == "https://example.com/story"
    assert article.title == "Story"
    assert article.words[0] == "Once"
    assert article.word_count == 8


def test_fetch_failure_falls_back_to_clipboard() -> None:
    capture = _capture(
        fetcher=FakeFetcher(error=FetchFailed("boom")),
        clipboard=FakeClipboard(CLIPBOARD_TEXT),
    )

    article = capture.capture()

    assert article.source == CLIPBOARD_SOURCE
    assert article.title == "From Clipboard"
    assert article.word_count == 7


def test_bridge_failure_falls_back_to_clipboard() -> None:
    capture = _capture(bridge=FakeBridge(error=NoBrowserFound()), clipboard=FakeClipboard(CLIPBOARD_TEXT))
    assert capture.capture().source == CLIPBOARD_SOURCE


def test_short_clipboard_does_not_hide_error() -> None:
    capture = _capture(
        fetcher=FakeFetcher(html="<script>x()</script>"),
        clipboard=FakeClipboard("only five words right here"),
    )

    with pytest.raises(NoContent):
        capture.capture()


def test_invalid_scheme_raises_invalid_source() -> None:
    fetcher = FakeFetcher()
    capture = _capture(bridge=FakeBridge(url="file:///etc/hosts"), fetcher=fetcher)

    with pytest.raises(InvalidSource):
        capture.capture()
    assert fetcher.calls == []


def test_js_heavy_site_reads_clipboard_with_host_title() -> None:
    fetcher = FakeFetcher()
    capture = _capture(
        bridge=FakeBridge(url="https://x.com/someone/status/1"),
        fetcher=fetcher,
        clipboard=FakeClipboard(CLIPBOARD_TEXT),
    )

    article = capture.capture()

    assert fetcher.calls == []
    assert article.source == "https://x.com/someone/status/1"
    assert article.title == "From x.com"


def test_js_heavy_site_without_clipboard_asks_for_copy() -> None:
    capture = _capture(bridge=FakeBridge(url="https://www.instagram.com/p/abc"))

    with pytest.raises(DynamicSite) as excinfo:
        capture.capture()
    assert excinfo.value.detail == "www.instagram.com"


def test_js_heavy_match_is_by_domain_not_substring() -> None:
    fetcher = FakeFetcher()
    _capture(bridge=FakeBridge(url="https://dropbox.com/post"), fetcher=fetcher).capture()
    assert fetcher.calls == ["https://dropbox.com/post"]


def test_usable_clipboard_text_requires_six_words() -> None:
    assert usable_clipboard_text(None) is None
    assert usable_clipboard_text("one two three four five") is None
    assert usable_clipboard_text(CLIPBOARD_TEXT) == CLIPBOARD_TEXT


def test_article_from_text_uses_tokenizer_path() -> None:
    article = article_from_text("  pasted\ntext here  ")
    assert article.words == ("pasted", "text", "here")
    assert article.source == CLIPBOARD_SOURCE
