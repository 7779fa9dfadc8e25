"""JSON-file history of reading sessions."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from config import CONFIG_DIR
from models import ReadingSession

logger = logging.getLogger(__name__)

MAX_SESSIONS = 100


class JsonHistoryStore:
    """Newest-first list of sessions, one per source.

    Sessions older than ``retention_days`` are dropped when the file is
    loaded; ``0`` keeps everything.
    """

    def __init__(
        self,
        path: Path | None = None,
        retention_days: int = 30,
        now: Optional[datetime] = None,
    ) -> None:
        self._path = path or CONFIG_DIR / "history.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._retention_days = retention_days
        loaded = self._load()
        self._sessions: list[ReadingSession] = loaded or []
        if loaded is not None:
            self._clean_old_sessions(now or datetime.now(timezone.utc))

    @property
    def sessions(self) -> list[ReadingSession]:
        return list(self._sessions)

    @property
    def last_session(self) -> Optional[ReadingSession]:
        return self._sessions[0] if self._sessions else None

    def most_recent_unfinished_session(self) -> Optional[ReadingSession]:
        """The latest session, provided it has not been read to the end."""
        session = self.last_session
        if session is None or session.is_complete:
            return None
        return session

    def save(self, session: ReadingSession) -> None:
        self._sessions = [s for s in self._sessions if s.article.source != session.article.source]
        self._sessions.insert(0, session)
        del self._sessions[MAX_SESSIONS:]
        self._persist()

    def remove(self, session_id: str) -> None:
        self._sessions = [s for s in self._sessions if s.id != session_id]
        self._persist()

    def clear_all(self) -> None:
        self._sessions = []
        self._persist()

    def _load(self) -> Optional[list[ReadingSession]]:
        """Sessions on disk, or None when the file exists but cannot be read."""
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return [ReadingSession.from_dict(item) for item in raw]
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable history file {self._path}: {exc}")
            return None

    def _clean_old_sessions(self, now: datetime) -> None:
        if self._retention_days <= 0:
            return
        cutoff = now - timedelta(days=self._retention_days)
        kept = [s for s in self._sessions if s.last_read_at >= cutoff]
        if len(kept) == len(self._sessions):
            return
        logger.info(f"Dropped {len(self._sessions) - len(kept)} sessions older than {self._retention_days} days")
        self._sessions = kept
        self._persist()

    def _persist(self) -> None:
        payload = [s.to_dict() for s in self._sessions]
        self._path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
