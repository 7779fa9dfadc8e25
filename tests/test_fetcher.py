from __future__ import annotations

import httpx
import pytest

from errors import FetchFailed
from fetcher import HttpDocumentFetcher, decode_document


def _fetcher(handler) -> HttpDocumentFetcher:  # noqa: ANN001
    return HttpDocumentFetcher(transport=httpx.MockTransport(handler))


def test_fetch_returns_body_and_declared_charset() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            content="Olá".encode("latin-1"),
            headers={"Content-Type": "text/html; charset=ISO-8859-1"},
        )

    content, charset = _fetcher(handler).fetch_document("https://example.com/a")

    assert content == "Olá".encode("latin-1")
    assert charset is not None and charset.lower() == "iso-8859-1"
    assert "Safari" in seen[0].headers["User-Agent"]


def test_fetch_html_decodes_with_declared_charset() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content="<p>café</p>".encode("latin-1"),
            headers={"Content-Type": "text/html; charset=latin-1"},
        )

    assert _fetcher(handler).fetch_html("https://example.com") == "<p>café</p>"


def test_fetch_follows_redirects() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200, content=b"<p>moved</p>", headers={"Content-Type": "text/html"})

    assert _fetcher(handler).fetch_html("https://example.com/old") == "<p>moved</p>"


def test_fetch_error_status_raises_fetch_failed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    with pytest.raises(FetchFailed, match="Server returned an error"):
        _fetcher(handler).fetch_document("https://example.com/missing")


def test_fetch_transport_error_raises_fetch_failed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(FetchFailed) as excinfo:
        _fetcher(handler).fetch_document("https://example.com")
    assert excinfo.value.detail == "timed out"


def test_decode_falls_back_to_utf8() -> None:
    assert decode_document("naïve".encode("utf-8"), None) == "naïve"
    assert decode_document("naïve".encode("utf-8"), "no-such-charset") == "naïve"
    assert decode_document("naïve".encode("utf-8"), "ascii") == "naïve"


def test_decode_failure_raises_fetch_failed() -> None:
    with pytest.raises(FetchFailed, match="Could not decode page content"):
        decode_document(b"\xff\xfe\xfa", None)
