"""Heuristic article extraction from raw HTML.

There is no DOM here: the document goes through a short, ordered series of
regex rewrite passes. Noise elements are removed first, then the first
structural content container is selected, then every remaining tag is
dropped, entities are decoded and whitespace is collapsed. Each pass is a
plain function so it can be exercised on its own.
"""

from __future__ import annotations

import logging
import re

from errors import NoContent
from models import ExtractedContent

logger = logging.getLogger(__name__)

NAMED_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&#39;", "'"),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
    ("&hellip;", "…"),
    ("&ldquo;", "“"),
    ("&rdquo;", "”"),
    ("&lsquo;", "‘"),
    ("&rsquo;", "’"),
    # last, so "&amp;lt;" only loses one level of escaping
    ("&amp;", "&"),
)

_NUMERIC_ENTITY_RE = re.compile(r"&#(\d+);")

_NOISE_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"<script[^>]*>[\s\S]*?</script>",
        r"<style[^>]*>[\s\S]*?</style>",
        r"<noscript[^>]*>[\s\S]*?</noscript>",
        r"<header[^>]*>[\s\S]*?</header>",
        r"<footer[^>]*>[\s\S]*?</footer>",
        r"<nav[^>]*>[\s\S]*?</nav>",
        r"<aside[^>]*>[\s\S]*?</aside>",
        r"<!--[\s\S]*?-->",
        r"<iframe[^>]*>[\s\S]*?</iframe>",
    )
]

_CONTENT_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"<article[^>]*>([\s\S]*?)</article>",
        r"<main[^>]*>([\s\S]*?)</main>",
        r"<div[^>]*class=[\"'][^\"']*(?:content|article|post|entry)[^\"']*[\"'][^>]*>([\s\S]*?)</div>",
    )
]

_TAG_RE = re.compile(r"<[^>]+>")
_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)


def decode_entities(text: str) -> str:
    for entity, replacement in NAMED_ENTITIES:
        text = text.replace(entity, replacement)

    # Splice from the end so earlier offsets stay valid.
    for match in reversed(list(_NUMERIC_ENTITY_RE.finditer(text))):
        code = int(match.group(1))
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            continue
        text = text[: match.start()] + chr(code) + text[match.end() :]
    return text


def _meta_content(html: str, prop: str) -> str | None:
    name = re.escape(prop)
    patterns = (
        rf"<meta[^>]+(?:property|name)=[\"']{name}[\"'][^>]+content=[\"']([^\"']+)[\"']",
        rf"<meta[^>]+content=[\"']([^\"']+)[\"'][^>]+(?:property|name)=[\"']{name}[\"']",
    )
    for pattern in patterns:
        match = re.search(pattern, html, re.IGNORECASE)
        if match:
            return match.group(1)
    return None


def resolve_title(html: str, source_hint: str = "") -> str:
    """og:title, then <title>, then the source hint, then "Untitled"."""
    og_title = _meta_content(html, "og:title")
    if og_title:
        return og_title

    match = _TITLE_RE.search(html)
    if match:
        title = match.group(1).strip()
        if title:
            return title

    return source_hint or "Untitled"


def strip_noise(html: str) -> str:
    for pattern in _NOISE_PATTERNS:
        html = pattern.sub(" ", html)
    return html


def select_content(html: str) -> str:
    """Narrow to the first article/main/content-div match, if any."""
    for pattern in _CONTENT_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return html


def strip_tags(html: str) -> str:
    return _TAG_RE.sub(" ", html)


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def extract_text(html: str) -> str:
    text = strip_noise(html)
    text = select_content(text)
    text = strip_tags(text)
    text = decode_entities(text)
    return normalize_whitespace(text)


def extract(html: str, source_hint: str = "") -> ExtractedContent:
    """Turn a fetched document into a title and normalized plain text.

    Raises:
        NoContent: nothing readable is left after extraction.
    """
    title = resolve_title(html, source_hint)
    text = extract_text(html)
    if not text:
        raise NoContent()
    logger.debug(f"Extracted {len(text.split())} words from {source_hint or 'document'}")
    return ExtractedContent(title=title, text=text)
