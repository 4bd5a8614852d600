import gzip

import pytest
from levmatch.corpus import CorpusError, WordList, iter_words, normalize_word, read_words
from loguru import logger


def test_normalize_word():
    assert normalize_word("Badger\n") == "badger"
    assert normalize_word("  ALFA ") == "alfa"
    assert normalize_word("\n") is None
    assert normalize_word("") is None
    with pytest.raises(CorpusError):
        normalize_word("honey badger\n")
    with pytest.raises(ValueError):
        normalize_word("honey\tbadger")


def test_iter_words_skips_bad_lines():
    messages = []
    logger.enable("levmatch")
    handler = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        lines = ["Alfa\n", "\n", "bravo charlie\n", "Delta\n"]
        assert list(iter_words(lines)) == ["alfa", "delta"]
    finally:
        logger.remove(handler)
        logger.disable("levmatch")

    assert len(messages) == 1
    assert "Line 3" in messages[0]


def test_wordlist():
    words = WordList(["echo", "alfa", "delta", "bravo"], presorted=False)
    assert len(words) == 4
    assert list(words) == ["alfa", "bravo", "delta", "echo"]
    assert words[0] == "alfa"
    assert words[-1] == "echo"
    assert "delta" in words
    assert "charlie" not in words
    assert "zulu" not in words
    assert words.first_at_least("") == "alfa"
    assert words.first_at_least("charlie") == "delta"
    assert words.first_at_least("delta") == "delta"
    assert words.first_at_least("foxtrot") is None
    assert repr(words) == "<WordList 4 words>"


def test_empty_wordlist():
    words = WordList([])
    assert len(words) == 0
    assert words.first_at_least("a") is None
    assert "a" not in words


def test_read_words(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("Zebra\nbadger\n\nBadger\nhoney badger\nant\n", encoding="utf8")

    words = read_words(str(path))
    assert isinstance(words, WordList)
    assert list(words) == ["ant", "badger", "zebra"]


def test_read_words_gzip(tmp_path):
    path = tmp_path / "words.txt.gz"
    with gzip.open(path, "wt", encoding="utf8") as f:
        f.write("Éclair\ncafé\n")

    assert list(read_words(str(path))) == ["café", "éclair"]


def test_read_words_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_words(str(tmp_path / "nope.txt"))
