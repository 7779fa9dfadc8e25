"""Active-tab URL lookup through AppleScript (macOS ``osascript``)."""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Optional

from errors import NoBrowserFound, NoURLFound, ScriptFailure, UnsupportedBrowser

logger = logging.getLogger(__name__)

ScriptRunner = Callable[[str], str]

FRONTMOST_APP_SCRIPT = """
tell application "System Events"
    set frontApp to first application process whose frontmost is true
    return (name of frontApp) & linefeed & (bundle identifier of frontApp)
end tell
"""

SUPPORTED_BROWSERS = {
    "com.apple.Safari": "Safari",
    "com.google.Chrome": "Google Chrome",
    "company.thebrowser.Browser": "Arc",
    "com.brave.Browser": "Brave Browser",
    "com.microsoft.edgemac": "Microsoft Edge",
    "com.operasoftware.Opera": "Opera",
    "com.vivaldi.Vivaldi": "Vivaldi",
    "com.openai.chat": "ChatGPT Atlas",
    "com.openai.chatgpt-atlas": "ChatGPT Atlas",
    "build.dia": "Dia",
    "com.commet.browser": "Commet",
}


def tab_url_script(app_name: str) -> str:
    # Safari names its tab "current tab"; Chromium browsers use "active tab".
    tab = "current tab" if app_name == "Safari" else "active tab"
    return f"""
tell application "{app_name}"
    if (count of windows) > 0 then
        return URL of {tab} of front window
    end if
end tell
return ""
"""


def run_osascript(source: str, timeout_s: float = 5.0) -> str:
    try:
        result = subprocess.run(
            ["osascript", "-e", source],
            capture_output=True,
            text=True,
            timeout=timeout_s,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise ScriptFailure(str(exc)) from exc
    if result.returncode != 0:
        raise ScriptFailure(result.stderr.strip() or "Unknown error")
    return result.stdout.strip()


class AppleScriptBrowserBridge:
    def __init__(self, run_script: Optional[ScriptRunner] = None) -> None:
        self._run_script = run_script or run_osascript

    def frontmost_app(self) -> tuple[str, str]:
        """Return ``(name, bundle_id)`` of the frontmost application."""
        try:
            output = self._run_script(FRONTMOST_APP_SCRIPT)
        except ScriptFailure as exc:
            logger.warning(f"Could not read frontmost application: {exc.detail}")
            raise NoBrowserFound() from exc
        lines = output.splitlines()
        if len(lines) < 2 or not lines[1].strip():
            raise NoBrowserFound()
        return lines[0].strip() or "Unknown", lines[1].strip()

    def current_active_tab_url(self) -> str:
        app_name, bundle_id = self.frontmost_app()

        browser = SUPPORTED_BROWSERS.get(bundle_id)
        if browser is not None:
            url = self._run_script(tab_url_script(browser))
            if not url:
                raise NoURLFound()
            return url

        # Unknown app: it may still be a Chromium browser.
        try:
            url = self._run_script(tab_url_script(app_name))
        except ScriptFailure as exc:
            logger.info(f"Generic tab script failed for {app_name}: {exc.detail}")
            raise UnsupportedBrowser(app_name) from exc
        if not url:
            raise UnsupportedBrowser(app_name)
        return url
