"""Clipboard text access."""

from __future__ import annotations

import logging
from typing import Optional

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

logger = logging.getLogger(__name__)


class PyperclipClipboard:
    def read_text(self) -> Optional[str]:
        if pyperclip is None:
            return None
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            logger.warning(f"Clipboard unavailable: {exc}")
            return None
        return text or None
