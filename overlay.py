"""Full-screen RSVP reader overlay."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from interfaces import ConfigStore, HistoryStore, Scheduler
from models import Article, PlaybackState, ReaderSettings
from playback_engine import PlaybackEngine
from scheduler import QtTimerScheduler

try:
    from PySide6.QtCore import Qt
    from PySide6.QtGui import QColor, QFont, QGuiApplication, QKeyEvent, QPainter
    from PySide6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget
except Exception:  # pragma: no cover
    Qt = None  # type: ignore
    QColor = None  # type: ignore
    QFont = None  # type: ignore
    QGuiApplication = None  # type: ignore
    QKeyEvent = None  # type: ignore
    QPainter = None  # type: ignore
    QHBoxLayout = object  # type: ignore
    QLabel = object  # type: ignore
    QVBoxLayout = object  # type: ignore
    QWidget = object  # type: ignore

logger = logging.getLogger(__name__)

WORD_COLOR = "white"
ORP_COLOR = "#FF4444"
DIM_COLOR = "rgba(255,255,255,120)"
KEY_HINTS = "Space play/pause    ← → skip    ↑ ↓ speed    Esc exit"


class OverlayWindow(QWidget):
    def __init__(self, on_key: Callable[[int], None]) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self._on_key = on_key
        self._darkness = 0.5
        self.setWindowFlags(
            Qt.WindowStaysOnTopHint | Qt.FramelessWindowHint | Qt.Tool
        )
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setFocusPolicy(Qt.StrongFocus)

        self._title = QLabel("")
        self._title.setAlignment(Qt.AlignCenter)
        self._title.setWordWrap(True)

        # Left and right halves share the stretch so the ORP letter sits dead centre.
        self._left = QLabel("")
        self._left.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        self._orp = QLabel("")
        self._orp.setAlignment(Qt.AlignCenter)
        self._right = QLabel("")
        self._right.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)

        word_row = QHBoxLayout()
        word_row.setSpacing(0)
        word_row.addWidget(self._left, 1)
        word_row.addWidget(self._orp, 0)
        word_row.addWidget(self._right, 1)

        self._status = QLabel("")
        self._status.setAlignment(Qt.AlignCenter)
        self._hints = QLabel(KEY_HINTS)
        self._hints.setAlignment(Qt.AlignCenter)

        layout = QVBoxLayout()
        layout.addStretch(1)
        layout.addWidget(self._title)
        layout.addLayout(word_row)
        layout.addStretch(1)
        layout.addWidget(self._status)
        layout.addWidget(self._hints)
        layout.setContentsMargins(40, 40, 40, 40)
        self.setLayout(layout)

    def apply_settings(self, settings: ReaderSettings) -> None:
        self._darkness = settings.overlay_darkness
        word_font = QFont("Menlo", settings.font_points)
        for label in (self._left, self._orp, self._right):
            label.setFont(word_font)
        self._left.setStyleSheet(f"color: {WORD_COLOR};")
        self._right.setStyleSheet(f"color: {WORD_COLOR};")
        self._orp.setStyleSheet(f"color: {ORP_COLOR};")
        self._title.setFont(QFont("Helvetica Neue", max(24, settings.font_points // 2)))
        self._title.setStyleSheet(f"color: {WORD_COLOR};")
        self._status.setStyleSheet(f"color: {DIM_COLOR}; font-size: 16px;")
        self._hints.setStyleSheet(f"color: {DIM_COLOR}; font-size: 14px;")
        self.update()

    def show_ready(self, title: str, is_resume: bool) -> None:
        prompt = "Press Space to continue" if is_resume else "Press Space to start"
        self._title.setText(f"{title}\n\n{prompt}")
        self._title.show()
        self._set_word_parts("", "", "")

    def show_countdown(self, value: int) -> None:
        self._title.hide()
        self._set_word_parts("", "GO" if value == 0 else str(value), "")

    def show_word(self, word: str, orp: int) -> None:
        self._title.hide()
        if not word:
            self._set_word_parts("", "", "")
            return
        self._set_word_parts(word[:orp], word[orp], word[orp + 1 :])

    def set_status(self, text: str) -> None:
        self._status.setText(text)

    def show_full_screen(self) -> None:
        screen = QGuiApplication.primaryScreen()
        if screen is not None:
            self.setGeometry(screen.geometry())
        self.show()
        self.raise_()
        self.activateWindow()
        self.setFocus()

    def _set_word_parts(self, left: str, center: str, right: str) -> None:
        self._left.setText(left)
        self._orp.setText(center)
        self._right.setText(right)

    def paintEvent(self, event: object) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0, int(self._darkness * 255)))
        painter.end()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        self._on_key(event.key())


class ReaderController:
    """Owns the overlay and the engine of the session being read."""

    def __init__(
        self,
        history: HistoryStore,
        config_store: ConfigStore,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self._history = history
        self._config_store = config_store
        self._scheduler = scheduler or QtTimerScheduler()
        self._window: Optional[OverlayWindow] = None
        self._engine: Optional[PlaybackEngine] = None

    @property
    def is_active(self) -> bool:
        return self._engine is not None

    def show(self, article: Article, start_index: int = 0) -> None:
        if self._engine is not None:
            self.dismiss()
        settings = self._config_store.load_settings()
        if self._window is None:
            self._window = OverlayWindow(on_key=self._handle_key)
        window = self._window
        window.apply_settings(settings)

        self._engine = PlaybackEngine(
            article,
            self._scheduler,
            settings=settings,
            start_index=start_index,
            on_state_change=lambda _f, _t: self._refresh_status(),
            on_word=self._on_word,
            on_countdown=window.show_countdown,
            on_wpm_change=self._on_wpm_change,
        )
        logger.info(f"Reading '{article.title}' ({article.word_count} words) from word {self._engine.current_index}")
        window.show_ready(article.title, self._engine.is_resume)
        self._refresh_status()
        window.show_full_screen()

    def dismiss(self) -> None:
        engine = self._engine
        if engine is None:
            return
        engine.close()
        self._engine = None
        self._history.save(engine.to_session())
        if self._window is not None:
            self._window.hide()

    def _handle_key(self, key: int) -> None:
        engine = self._engine
        if engine is None:
            return
        if key == Qt.Key_Escape:
            self.dismiss()
            return
        state = engine.state
        navigable = state not in (PlaybackState.READY, PlaybackState.COUNTING)
        if key == Qt.Key_Space:
            engine.toggle()
        elif key == Qt.Key_Left and navigable:
            engine.skip_backward()
        elif key == Qt.Key_Right and navigable:
            engine.skip_forward()
        elif key == Qt.Key_Up:
            engine.increase_wpm()
        elif key == Qt.Key_Down:
            engine.decrease_wpm()

    def _on_word(self, index: int, word: str, orp: int) -> None:
        engine = self._engine
        if engine is None or self._window is None or engine.state == PlaybackState.READY:
            return
        self._window.show_word(word, orp)
        self._refresh_status()

    def _on_wpm_change(self, wpm: int) -> None:
        self._config_store.set_wpm(wpm)
        self._refresh_status()

    def _refresh_status(self) -> None:
        engine = self._engine
        if engine is None or self._window is None:
            return
        paused = "  ·  paused" if engine.state == PlaybackState.PAUSED else ""
        self._window.set_status(
            f"{int(engine.progress * 100)}%  ·  {engine.time_remaining} left  ·  {engine.wpm} wpm{paused}"
        )
        if engine.state == PlaybackState.PLAYING and engine.countdown_value is None:
            self._window.show_word(engine.current_word, engine.orp_index)
