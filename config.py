"""Simple JSON-based settings store."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path

from models import FONT_SIZES, WPM_MAX, WPM_MIN, ReaderSettings

CONFIG_DIR = Path.home() / ".config" / "quickread"


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or CONFIG_DIR / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def load_settings(self) -> ReaderSettings:
        data = self._read_all()
        defaults = ReaderSettings()
        values = {}
        for f in fields(ReaderSettings):
            default = getattr(defaults, f.name)
            raw = data.get(f.name, default)
            # bool is an int subclass; keep the types strict
            if type(raw) is not type(default) and not (isinstance(default, float) and type(raw) is int):
                raw = default
            values[f.name] = raw
        return _sanitize(ReaderSettings(**values))

    def save_settings(self, settings: ReaderSettings) -> None:
        data = self._read_all()
        data.update(asdict(_sanitize(settings)))
        self._write_all(data)

    def set_wpm(self, wpm: int) -> None:
        data = self._read_all()
        data["wpm"] = min(max(int(wpm), WPM_MIN), WPM_MAX)
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def _sanitize(settings: ReaderSettings) -> ReaderSettings:
    defaults = ReaderSettings()
    return ReaderSettings(
        wpm=min(max(settings.wpm, WPM_MIN), WPM_MAX),
        show_countdown=settings.show_countdown,
        countdown_on_resume=settings.countdown_on_resume,
        resume_rewind_sentences=max(0, settings.resume_rewind_sentences),
        overlay_darkness=min(max(float(settings.overlay_darkness), 0.3), 0.8),
        font_size=settings.font_size if settings.font_size in FONT_SIZES else defaults.font_size,
        history_days=max(0, settings.history_days),
    )
