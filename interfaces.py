"""Protocol interfaces for the engine and the capture pipeline."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from models import ReaderSettings, ReadingSession


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ScheduledCall: ...


class BrowserBridge(Protocol):
    def current_active_tab_url(self) -> str: ...


class DocumentFetcher(Protocol):
    def fetch_html(self, url: str) -> str: ...


class ClipboardReader(Protocol):
    def read_text(self) -> Optional[str]: ...


class HistoryStore(Protocol):
    def save(self, session: ReadingSession) -> None: ...

    def remove(self, session_id: str) -> None: ...

    def clear_all(self) -> None: ...

    def most_recent_unfinished_session(self) -> Optional[ReadingSession]: ...


class ConfigStore(Protocol):
    def load_settings(self) -> ReaderSettings: ...

    def save_settings(self, settings: ReaderSettings) -> None: ...

    def set_wpm(self, wpm: int) -> None: ...
