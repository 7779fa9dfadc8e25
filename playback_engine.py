"""State-machine based RSVP playback."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from interfaces import ScheduledCall, Scheduler
from models import (
    WPM_MAX,
    WPM_MIN,
    WPM_STEP,
    Article,
    PlaybackState,
    ReaderSettings,
    ReadingSession,
)
from text import format_remaining, orp_index, rewind_by_sentences

logger = logging.getLogger(__name__)

COUNTDOWN_START = 3
COUNTDOWN_TICK_S = 0.7
COUNTDOWN_GO_DELAY_S = 0.5
DEFAULT_SKIP = 5

StateCallback = Callable[[PlaybackState, PlaybackState], None]
WordCallback = Callable[[int, str, int], None]
CountdownCallback = Callable[[int], None]
WpmCallback = Callable[[int], None]


class PlaybackEngine:
    """Drives one reading session over a single article.

    All calls are expected on one thread; timing goes through the injected
    scheduler, with at most one advancement tick and one countdown tick
    outstanding at any time.
    """

    def __init__(
        self,
        article: Article,
        scheduler: Scheduler,
        settings: Optional[ReaderSettings] = None,
        start_index: int = 0,
        on_state_change: Optional[StateCallback] = None,
        on_word: Optional[WordCallback] = None,
        on_countdown: Optional[CountdownCallback] = None,
        on_wpm_change: Optional[WpmCallback] = None,
    ) -> None:
        settings = settings or ReaderSettings()
        self._article = article
        self._words = article.words
        self._scheduler = scheduler
        self._show_countdown = settings.show_countdown
        self._countdown_on_resume = settings.countdown_on_resume
        self._on_state_change = on_state_change
        self._on_word = on_word
        self._on_countdown = on_countdown
        self._on_wpm_change = on_wpm_change

        self._state = PlaybackState.READY
        self._wpm = _clamp_wpm(settings.wpm)
        self._tick: Optional[ScheduledCall] = None
        self._countdown_call: Optional[ScheduledCall] = None
        self._countdown_value: Optional[int] = None
        self._closed = False

        self.is_resume = start_index > 0
        index = start_index
        if self.is_resume and settings.resume_rewind_sentences > 0:
            index = rewind_by_sentences(
                self._words, min(start_index, len(self._words)), settings.resume_rewind_sentences
            )
        # A completed session resumes on its last word so it can still be played.
        self._index = min(max(0, index), max(0, len(self._words) - 1))
        self._current_word = ""
        self._orp_index = 0
        self._update_current_word()

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def article(self) -> Article:
        return self._article

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_word(self) -> str:
        return self._current_word

    @property
    def orp_index(self) -> int:
        return self._orp_index

    @property
    def wpm(self) -> int:
        return self._wpm

    @property
    def interval_seconds(self) -> float:
        return 60.0 / self._wpm

    @property
    def countdown_value(self) -> Optional[int]:
        """3, 2, 1 while counting, 0 for "go", None otherwise."""
        return self._countdown_value

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def progress(self) -> float:
        if not self._words:
            return 0.0
        return self._index / len(self._words)

    @property
    def time_remaining(self) -> str:
        return format_remaining(len(self._words) - self._index, self._wpm)

    @property
    def is_finished(self) -> bool:
        return self._state == PlaybackState.PAUSED and self._index >= len(self._words) - 1

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def begin(self) -> None:
        if self._closed or self._state != PlaybackState.READY or not self._words:
            return
        if self._should_count_down():
            self._start_countdown()
        else:
            self._start_playing()

    def play(self) -> None:
        if self._closed or self._state != PlaybackState.PAUSED:
            return
        self._start_playing()

    def pause(self) -> None:
        if self._closed or self._state != PlaybackState.PLAYING:
            return
        self._cancel_tick()
        self._transition(PlaybackState.PAUSED)

    def toggle(self) -> None:
        if self._state == PlaybackState.READY:
            self.begin()
        elif self._state == PlaybackState.PLAYING:
            self.pause()
        elif self._state == PlaybackState.PAUSED:
            self.play()

    def advance(self) -> None:
        if self._closed or self._state != PlaybackState.PLAYING:
            return
        if self._index >= len(self._words) - 1:
            self.pause()
            return
        self._index += 1
        self._update_current_word()

    def close(self) -> None:
        """Cancel everything outstanding; later calls are ignored."""
        if self._closed:
            return
        self._cancel_tick()
        self._cancel_countdown()
        self._countdown_value = None
        self._closed = True
        logger.debug(f"Engine closed at word {self._index}/{len(self._words)}")

    # ------------------------------------------------------------------
    # Rate
    # ------------------------------------------------------------------

    def set_wpm(self, wpm: int) -> None:
        if self._closed:
            return
        wpm = _clamp_wpm(wpm)
        if wpm == self._wpm:
            return
        self._wpm = wpm
        if self._state == PlaybackState.PLAYING:
            self._cancel_tick()
            self._schedule_tick()
        if self._on_wpm_change:
            self._on_wpm_change(wpm)

    def increase_wpm(self) -> None:
        self.set_wpm(self._wpm + WPM_STEP)

    def decrease_wpm(self) -> None:
        self.set_wpm(self._wpm - WPM_STEP)

    # ------------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------------

    def skip_forward(self, count: int = DEFAULT_SKIP) -> None:
        self.seek_to(self._index + count)

    def skip_backward(self, count: int = DEFAULT_SKIP) -> None:
        self.seek_to(self._index - count)

    def seek_to(self, index: int) -> None:
        if self._closed:
            return
        self._index = min(max(0, index), max(0, len(self._words) - 1))
        self._update_current_word()

    def to_session(self) -> ReadingSession:
        # A finished read is stored one past the last word so it counts as complete.
        index = len(self._words) if self.is_finished else self._index
        return ReadingSession(article=self._article, word_index=index)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _should_count_down(self) -> bool:
        if self.is_resume:
            return self._show_countdown and self._countdown_on_resume
        return self._show_countdown

    def _start_countdown(self) -> None:
        self._transition(PlaybackState.COUNTING)
        self._set_countdown(COUNTDOWN_START)
        self._countdown_call = self._scheduler.call_later(COUNTDOWN_TICK_S, self._countdown_tick)

    def _countdown_tick(self) -> None:
        self._countdown_call = None
        if self._closed or self._state != PlaybackState.COUNTING or self._countdown_value is None:
            return
        if self._countdown_value > 1:
            self._set_countdown(self._countdown_value - 1)
            self._countdown_call = self._scheduler.call_later(COUNTDOWN_TICK_S, self._countdown_tick)
        else:
            self._set_countdown(0)
            self._countdown_call = self._scheduler.call_later(COUNTDOWN_GO_DELAY_S, self._finish_countdown)

    def _finish_countdown(self) -> None:
        self._countdown_call = None
        if self._closed or self._state != PlaybackState.COUNTING:
            return
        self._countdown_value = None
        self._start_playing()

    def _set_countdown(self, value: int) -> None:
        self._countdown_value = value
        if self._on_countdown:
            self._on_countdown(value)

    def _start_playing(self) -> None:
        if self._index >= len(self._words):
            return
        self._transition(PlaybackState.PLAYING)
        self._cancel_tick()
        self._schedule_tick()

    def _schedule_tick(self) -> None:
        self._tick = self._scheduler.call_later(self.interval_seconds, self._on_tick)

    def _on_tick(self) -> None:
        self._tick = None
        if self._closed or self._state != PlaybackState.PLAYING:
            return
        self.advance()
        if self._state == PlaybackState.PLAYING:
            self._schedule_tick()

    def _cancel_tick(self) -> None:
        tick = self._tick
        if tick is not None:
            tick.cancel()
            self._tick = None

    def _cancel_countdown(self) -> None:
        call = self._countdown_call
        if call is not None:
            call.cancel()
            self._countdown_call = None

    def _update_current_word(self) -> None:
        if self._index >= len(self._words):
            self._current_word = ""
            self._orp_index = 0
        else:
            self._current_word = self._words[self._index]
            self._orp_index = orp_index(self._current_word)
        if self._on_word:
            self._on_word(self._index, self._current_word, self._orp_index)

    def _transition(self, to_state: PlaybackState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        logger.debug(f"Playback {from_state.value} -> {to_state.value} at word {self._index}")
        if self._on_state_change:
            self._on_state_change(from_state, to_state)


def _clamp_wpm(wpm: int) -> int:
    return min(max(int(wpm), WPM_MIN), WPM_MAX)
