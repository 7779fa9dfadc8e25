from __future__ import annotations

from models import CLIPBOARD_SOURCE, Article, ReadingSession


def test_article_derives_words_from_text() -> None:
    article = Article(source="https://example.com/a", title="A", text="One two\nthree.")

    assert article.words == ("One", "two", "three.")
    assert article.word_count == 3
    assert article.source_host == "example.com"


def test_articles_from_same_text_are_identical_in_derived_fields() -> None:
    text = "Lorem ipsum dolor sit amet. " * 120
    first = Article(source=CLIPBOARD_SOURCE, title="x", text=text)
    second = Article(source=CLIPBOARD_SOURCE, title="y", text=text)

    assert first.id != second.id
    assert first.words == second.words
    assert first.word_count == second.word_count == 600
    assert first.estimated_read_seconds == second.estimated_read_seconds == 120


def test_clipboard_article_has_no_host() -> None:
    assert Article(source=CLIPBOARD_SOURCE, title="t", text="x").source_host == ""


def test_session_progress_and_completion() -> None:
    article = Article(source="https://example.com", title="t", text="a b c d")
    session = ReadingSession(article=article, word_index=1)

    assert session.progress == 0.25
    assert session.progress_percentage == 25
    assert session.is_complete is False

    session.update_position(10)
    assert session.word_index == 4
    assert session.is_complete is True

    session.update_position(-3)
    assert session.word_index == 0


def test_session_dict_round_trip_recomputes_words() -> None:
    article = Article(source="https://example.com", title="Title", text="Hello there world.")
    session = ReadingSession(article=article, word_index=2)

    restored = ReadingSession.from_dict(session.to_dict())

    assert restored.id == session.id
    assert restored.word_index == 2
    assert restored.last_read_at == session.last_read_at
    assert restored.article.id == article.id
    assert restored.article.words == ("Hello", "there", "world.")
    assert restored.article.fetched_at == article.fetched_at
