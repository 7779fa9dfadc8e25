"""One-shot timed callbacks for the playback engine.

The engine only ever asks for "call this after N seconds" and keeps the
returned handle so it can cancel it. ``QtTimerScheduler`` backs that with
single-shot ``QTimer``s on the GUI thread; ``VirtualScheduler`` runs on a
clock that only moves when ``advance()`` is called.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, Optional

try:
    from PySide6.QtCore import QObject, QTimer
except Exception:  # pragma: no cover
    QObject = None  # type: ignore
    QTimer = None  # type: ignore


class VirtualCall:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, VirtualCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> VirtualCall:
        call = VirtualCall(self.now + max(0.0, delay_s), callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every callback that falls due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = due
            call.callback()
        self.now = target


class QtScheduledCall:
    """Handle for one single-shot timer; the timer is released once it fires or is cancelled."""

    def __init__(self, timer: object) -> None:
        self._timer: Optional[object] = timer

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        timer = self.release()
        if timer is not None:
            timer.stop()

    def release(self) -> Optional[object]:
        timer = self._timer
        if timer is not None:
            self._timer = None
            # Deferred so a timer is never destroyed while emitting timeout.
            timer.deleteLater()
        return timer


class QtTimerScheduler:
    """Single-shot ``QTimer`` per call, each parented to one owner object."""

    def __init__(self, parent: Optional[object] = None) -> None:
        if QTimer is None:
            raise RuntimeError("PySide6 is not installed")
        self._owner = QObject(parent)

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> QtScheduledCall:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        call = QtScheduledCall(timer)

        def fire() -> None:
            call.release()
            callback()

        timer.timeout.connect(fire)
        timer.start(max(0, int(round(delay_s * 1000))))
        return call
