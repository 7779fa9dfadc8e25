"""Application entrypoint."""

from __future__ import annotations

import logging
import os
import sys
import threading
from dataclasses import replace

from browser_bridge import AppleScriptBrowserBridge
from capture import ArticleCapture
from clipboard import PyperclipClipboard
from config import JsonConfigStore
from errors import ERROR_MESSAGES, NOTHING_TO_RESUME, QuickReadError
from fetcher import HttpDocumentFetcher
from history import JsonHistoryStore
from hotkey import GlobalHotkeyAdapter
from log_setup import setup_logging
from models import HISTORY_DAY_CHOICES, REWIND_CHOICES, WPM_CHOICES, Article, ReadingSession
from overlay import ReaderController

try:
    from PySide6.QtCore import QObject, QSize, Signal
    from PySide6.QtGui import QAction, QActionGroup, QBrush, QColor, QIcon, QPainter, QPixmap
    from PySide6.QtWidgets import QApplication, QMenu, QMessageBox, QSystemTrayIcon
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

logger = logging.getLogger(__name__)


def _create_icon(color: str = "#888888", size: int = 22) -> QIcon:
    """Generate a simple circular tray icon with the given color."""
    pixmap = QPixmap(QSize(size, size))
    pixmap.fill(QColor(0, 0, 0, 0))
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(QColor(color))
    painter.drawEllipse(2, 2, size - 4, size - 4)
    painter.end()
    return QIcon(pixmap)


ICON_IDLE = "#888888"      # grey
ICON_FETCHING = "#4A90E2"  # blue


class UIBridge(QObject):
    article_signal = Signal(object)
    error_signal = Signal(str)
    start_signal = Signal()
    resume_signal = Signal()


class App:
    def __init__(self) -> None:
        self.app = QApplication(sys.argv)
        self.app.setQuitOnLastWindowClosed(False)
        self.config_store = JsonConfigStore()
        settings = self.config_store.load_settings()
        self.history = JsonHistoryStore(retention_days=settings.history_days)
        self.capture = ArticleCapture(
            bridge=AppleScriptBrowserBridge(),
            fetcher=HttpDocumentFetcher(),
            clipboard=PyperclipClipboard(),
        )
        self.reader = ReaderController(history=self.history, config_store=self.config_store)
        self._capturing = threading.Event()

        self.ui = UIBridge()
        self.ui.article_signal.connect(self._on_article_ui)
        self.ui.error_signal.connect(self._on_error_ui)
        self.ui.start_signal.connect(self.start_reading)
        self.ui.resume_signal.connect(self.resume_last_read)
        self.hotkey = GlobalHotkeyAdapter()

        self.tray = QSystemTrayIcon()
        self.tray.setIcon(_create_icon(ICON_IDLE))
        self.tray.setToolTip("QuickRead")
        self.menu = QMenu()
        self.menu.aboutToShow.connect(self._rebuild_menu)
        self._rebuild_menu()
        self.tray.setContextMenu(self.menu)
        self.tray.show()

    # ------------------------------------------------------------------
    # Menu
    # ------------------------------------------------------------------

    def _rebuild_menu(self) -> None:
        menu = self.menu
        menu.clear()
        settings = self.config_store.load_settings()

        start_action = QAction("Start Reading  ⌘⇧R", menu)
        start_action.triggered.connect(self.start_reading)
        menu.addAction(start_action)

        resume_action = QAction("Resume Last Read  ⌘⇧E", menu)
        resume_action.triggered.connect(self.resume_last_read)
        resume_action.setEnabled(self.history.most_recent_unfinished_session() is not None)
        menu.addAction(resume_action)

        recent = menu.addMenu("Recent")
        sessions = self.history.sessions[:10]
        for session in sessions:
            label = f"{session.article.title[:48]}  ({session.progress_percentage}%)"
            action = QAction(label, recent)
            action.triggered.connect(lambda _checked=False, s=session: self.resume_session(s))
            recent.addAction(action)
        if not sessions:
            recent.setEnabled(False)

        menu.addSeparator()
        self._add_choice_menu(
            menu, "Default WPM", WPM_CHOICES, settings.wpm, str, "wpm"
        )
        self._add_choice_menu(
            menu,
            "Rewind on Resume",
            REWIND_CHOICES,
            settings.resume_rewind_sentences,
            lambda n: "None" if n == 0 else f"{n} sentence{'s' if n > 1 else ''}",
            "resume_rewind_sentences",
        )
        self._add_choice_menu(
            menu,
            "Keep History For",
            HISTORY_DAY_CHOICES,
            settings.history_days,
            lambda d: "Forever" if d == 0 else f"{d} days",
            "history_days",
        )
        self._add_toggle(menu, "Show Countdown", settings.show_countdown, "show_countdown")
        countdown_resume = self._add_toggle(
            menu, "Countdown on Resume", settings.countdown_on_resume, "countdown_on_resume"
        )
        countdown_resume.setEnabled(settings.show_countdown)

        clear_action = QAction("Clear History", menu)
        clear_action.triggered.connect(self.history.clear_all)
        menu.addAction(clear_action)

        menu.addSeparator()
        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self.quit)
        menu.addAction(quit_action)

    def _add_choice_menu(self, menu, title, choices, current, label, key) -> None:  # noqa: ANN001
        submenu = menu.addMenu(title)
        group = QActionGroup(submenu)
        for value in choices:
            action = QAction(label(value), submenu)
            action.setCheckable(True)
            action.setChecked(value == current)
            action.triggered.connect(lambda _checked=False, v=value: self._update_setting(key, v))
            group.addAction(action)
            submenu.addAction(action)

    def _add_toggle(self, menu, title, checked, key) -> QAction:  # noqa: ANN001
        action = QAction(title, menu)
        action.setCheckable(True)
        action.setChecked(checked)
        action.toggled.connect(lambda value: self._update_setting(key, value))
        menu.addAction(action)
        return action

    def _update_setting(self, key: str, value: object) -> None:
        settings = self.config_store.load_settings()
        self.config_store.save_settings(replace(settings, **{key: value}))

    # ------------------------------------------------------------------
    # Reading (UI thread)
    # ------------------------------------------------------------------

    def start_reading(self) -> None:
        if self._capturing.is_set():
            return
        self._capturing.set()
        self.tray.setIcon(_create_icon(ICON_FETCHING))
        # Capture blocks on AppleScript and the network; keep it off the Qt thread.
        threading.Thread(target=self._capture_worker, daemon=True).start()

    def resume_last_read(self) -> None:
        session = self.history.most_recent_unfinished_session()
        if session is None:
            QMessageBox.information(None, "Nothing to Resume", ERROR_MESSAGES[NOTHING_TO_RESUME])
            return
        self.resume_session(session)

    def resume_session(self, session: ReadingSession) -> None:
        self.reader.show(session.article, start_index=session.word_index)

    def _capture_worker(self) -> None:
        try:
            article = self.capture.capture()
        except QuickReadError as exc:
            self.ui.error_signal.emit(str(exc))
        except Exception as exc:
            logger.exception("Unexpected capture failure")
            self.ui.error_signal.emit(f"Unexpected error: {exc}")
        else:
            self.ui.article_signal.emit(article)
        finally:
            self._capturing.clear()

    def _on_article_ui(self, article: Article) -> None:
        self.tray.setIcon(_create_icon(ICON_IDLE))
        self.reader.show(article)

    def _on_error_ui(self, message: str) -> None:
        self.tray.setIcon(_create_icon(ICON_IDLE))
        QMessageBox.warning(None, "QuickRead Error", message)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> int:
        try:
            # pynput calls back on its own thread; signals hop to the UI thread.
            self.hotkey.start(
                on_start=self.ui.start_signal.emit,
                on_resume=self.ui.resume_signal.emit,
            )
        except Exception as exc:
            logger.warning(f"Hotkeys disabled: {exc}")
            self.tray.showMessage("QuickRead", f"Hotkeys disabled: {exc}")
        return self.app.exec()

    def quit(self) -> None:
        self.hotkey.stop()
        self.reader.dismiss()
        self.app.quit()


def main() -> int:
    setup_logging(level=os.environ.get("QUICKREAD_LOG_LEVEL", "INFO"))
    app = App()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
