"""Word-level helpers: tokenizing, fixation points and sentence rewind."""

from __future__ import annotations

from typing import Sequence

REFERENCE_WPM = 300
SENTENCE_ENDINGS = (".", "!", "?")


def tokenize(text: str) -> list[str]:
    """Split on any whitespace run; punctuation stays attached to its word."""
    return text.split()


def estimate_read_seconds(word_count: int, wpm: int = REFERENCE_WPM) -> int:
    return (word_count * 60) // wpm


def orp_index(word: str) -> int:
    """Return the index of the character the eye should fixate on.

    Slightly left of centre, banded by word length.
    """
    length = len(word)
    if length <= 1:
        return 0
    if length <= 5:
        return 1
    if length <= 9:
        return 2
    if length <= 13:
        return 3
    return 4


def rewind_by_sentences(words: Sequence[str], from_index: int, sentences: int) -> int:
    """Walk back ``sentences`` sentence endings from ``from_index``.

    Lands on the first word of the sentence reached, so resuming re-reads
    a little context. Any token ending in ``.``, ``!`` or ``?`` counts as a
    sentence end, abbreviations included.
    """
    if sentences <= 0:
        return from_index

    found = 0
    index = from_index
    while index > 0 and found < sentences:
        index -= 1
        if words[index].endswith(SENTENCE_ENDINGS):
            found += 1

    if found > 0 and index < from_index - 1:
        index += 1
    return max(0, index)


def format_remaining(words_left: int, wpm: int) -> str:
    if words_left <= 0 or wpm <= 0:
        return "0:00"
    seconds = (words_left * 60) // wpm
    return f"{seconds // 60}:{seconds % 60:02d}"
