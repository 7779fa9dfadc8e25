"""Global hotkey adapter based on pynput."""

from __future__ import annotations

from typing import Callable, Optional

try:
    from pynput import keyboard
except Exception:  # pragma: no cover
    keyboard = None  # type: ignore

START_READING_HOTKEY = "<cmd>+<shift>+r"
RESUME_READING_HOTKEY = "<cmd>+<shift>+e"


class GlobalHotkeyAdapter:
    """Fires callbacks on the pynput listener thread.

    Callers must hop to their own thread before touching UI or engine state.
    """

    def __init__(
        self,
        start_hotkey: str = START_READING_HOTKEY,
        resume_hotkey: str = RESUME_READING_HOTKEY,
    ) -> None:
        self._start_hotkey = start_hotkey
        self._resume_hotkey = resume_hotkey
        self._listener: Optional[object] = None

    def start(self, on_start: Callable[[], None], on_resume: Callable[[], None]) -> None:
        if keyboard is None:
            raise RuntimeError("pynput is not installed")
        if self._listener is not None:
            return
        self._listener = keyboard.GlobalHotKeys(
            {
                self._start_hotkey: on_start,
                self._resume_hotkey: on_resume,
            }
        )
        self._listener.start()

    def stop(self) -> None:
        listener = self._listener
        if listener is not None:
            listener.stop()
            self._listener = None
