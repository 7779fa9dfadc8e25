from __future__ import annotations

import json
from pathlib import Path

from config import JsonConfigStore
from models import ReaderSettings


def test_config_defaults_when_missing(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")
    assert store.load_settings() == ReaderSettings()


def test_config_read_write(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    store = JsonConfigStore(path=path)

    store.save_settings(
        ReaderSettings(wpm=550, show_countdown=False, resume_rewind_sentences=3, history_days=0)
    )
    store.set_wpm(450)

    reloaded = JsonConfigStore(path=path).load_settings()
    assert reloaded.wpm == 450
    assert reloaded.show_countdown is False
    assert reloaded.resume_rewind_sentences == 3
    assert reloaded.history_days == 0


def test_config_invalid_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{invalid", encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.load_settings() == ReaderSettings()


def test_config_bad_values_are_sanitized(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "wpm": 5000,
                "show_countdown": "yes",
                "resume_rewind_sentences": -2,
                "overlay_darkness": 1,
                "font_size": "huge",
            }
        ),
        encoding="utf-8",
    )

    settings = JsonConfigStore(path=path).load_settings()
    assert settings.wpm == 800
    assert settings.show_countdown is True
    assert settings.resume_rewind_sentences == 0
    assert settings.overlay_darkness == 0.8
    assert settings.font_size == "large"


def test_set_wpm_clamps(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")
    store.set_wpm(50)
    assert store.load_settings().wpm == 200
