"""Core data models for the app."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from text import estimate_read_seconds, tokenize

CLIPBOARD_SOURCE = "clipboard://"

WPM_MIN = 200
WPM_MAX = 800
WPM_STEP = 50
WPM_CHOICES = (200, 250, 300, 350, 400, 450, 500, 600, 700, 800)
REWIND_CHOICES = (0, 1, 2, 3, 5)
HISTORY_DAY_CHOICES = (7, 14, 30, 90, 0)

FONT_SIZES = {"medium": 48, "large": 64, "extra_large": 80}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class PlaybackState(str, Enum):
    READY = "READY"
    COUNTING = "COUNTING"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"


@dataclass(frozen=True)
class Article:
    source: str
    title: str
    text: str
    id: str = field(default_factory=_new_id)
    fetched_at: datetime = field(default_factory=_utcnow)
    words: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "words", tuple(tokenize(self.text)))

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def estimated_read_seconds(self) -> int:
        return estimate_read_seconds(self.word_count)

    @property
    def source_host(self) -> str:
        return urlsplit(self.source).hostname or ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "title": self.title,
            "text": self.text,
            "fetched_at": self.fetched_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        return cls(
            source=str(data["source"]),
            title=str(data["title"]),
            text=str(data["text"]),
            id=str(data["id"]),
            fetched_at=datetime.fromisoformat(data["fetched_at"]),
        )


@dataclass
class ReadingSession:
    article: Article
    word_index: int = 0
    id: str = field(default_factory=_new_id)
    last_read_at: datetime = field(default_factory=_utcnow)

    @property
    def progress(self) -> float:
        if self.article.word_count == 0:
            return 0.0
        return self.word_index / self.article.word_count

    @property
    def progress_percentage(self) -> int:
        return int(self.progress * 100)

    @property
    def is_complete(self) -> bool:
        return self.word_index >= self.article.word_count

    def update_position(self, index: int) -> None:
        self.word_index = min(max(0, index), self.article.word_count)
        self.last_read_at = _utcnow()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "article": self.article.to_dict(),
            "word_index": self.word_index,
            "last_read_at": self.last_read_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReadingSession:
        return cls(
            article=Article.from_dict(data["article"]),
            word_index=int(data["word_index"]),
            id=str(data["id"]),
            last_read_at=datetime.fromisoformat(data["last_read_at"]),
        )


@dataclass
class ReaderSettings:
    wpm: int = 400
    show_countdown: bool = True
    countdown_on_resume: bool = False
    resume_rewind_sentences: int = 1
    overlay_darkness: float = 0.5
    font_size: str = "large"
    history_days: int = 30

    @property
    def font_points(self) -> int:
        return FONT_SIZES.get(self.font_size, FONT_SIZES["large"])


@dataclass
class ExtractedContent:
    title: str
    text: str
