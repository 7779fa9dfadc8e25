"""Shared error codes, exceptions and user-facing messages."""

from __future__ import annotations

FETCH_FAILED = "FETCH_FAILED"
NO_CONTENT = "NO_CONTENT"
INVALID_SOURCE = "INVALID_SOURCE"
DYNAMIC_SITE = "DYNAMIC_SITE"
NO_BROWSER_FOUND = "NO_BROWSER_FOUND"
NO_URL_FOUND = "NO_URL_FOUND"
UNSUPPORTED_BROWSER = "UNSUPPORTED_BROWSER"
SCRIPT_FAILURE = "SCRIPT_FAILURE"
NOTHING_TO_RESUME = "NOTHING_TO_RESUME"

ERROR_MESSAGES = {
    FETCH_FAILED: "Failed to fetch page: {detail}",
    NO_CONTENT: "No readable content found on this page.",
    INVALID_SOURCE: "Invalid URL provided.",
    DYNAMIC_SITE: (
        "{detail} loads content dynamically. Please select and copy the text "
        "you want to read, then trigger QuickRead again."
    ),
    NO_BROWSER_FOUND: (
        "No supported browser is currently active. Please open Safari, Chrome, "
        "Arc, or another supported browser."
    ),
    NO_URL_FOUND: "Could not get the URL from the active browser tab.",
    UNSUPPORTED_BROWSER: (
        "'{detail}' is not supported. Please use Safari, Chrome, Arc, Brave, "
        "Edge, Opera, Vivaldi, Atlas, Dia, or Commet."
    ),
    SCRIPT_FAILURE: "Browser script error: {detail}",
    NOTHING_TO_RESUME: "No unfinished reading session found.",
}


class QuickReadError(Exception):
    code = ""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(ERROR_MESSAGES[self.code].format(detail=detail))


class ExtractionError(QuickReadError):
    pass


class FetchFailed(ExtractionError):
    code = FETCH_FAILED


class NoContent(ExtractionError):
    code = NO_CONTENT


class InvalidSource(ExtractionError):
    code = INVALID_SOURCE


class DynamicSite(ExtractionError):
    """The page renders client-side; only copied text can be read."""

    code = DYNAMIC_SITE


class BridgeError(QuickReadError):
    pass


class NoBrowserFound(BridgeError):
    code = NO_BROWSER_FOUND


class NoURLFound(BridgeError):
    code = NO_URL_FOUND


class UnsupportedBrowser(BridgeError):
    code = UNSUPPORTED_BROWSER


class ScriptFailure(BridgeError):
    code = SCRIPT_FAILURE
