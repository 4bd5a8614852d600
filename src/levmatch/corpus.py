"""
Reading word lists and looking words up in them.

A :class:`WordList` is the dictionary the automata are intersected with: a
sorted, read-only sequence with a "first word not less than X" lookup.
"""

import gzip
from bisect import bisect_left

from loguru import logger


class CorpusError(ValueError):
    """Raised when a corpus line can't be turned into a single word."""


class WordList:
    """
    A sorted, read-only sequence of words.

    Only ordered lookups are done on it, so several lookups may share one
    instance. Supports ``len()``, indexing, iteration and ``in``, which lets
    it stand in for a sorted list anywhere a sequence is expected.

    >>> words = WordList(["cat", "bat", "cats"], presorted=False)
    >>> list(words)
    ['bat', 'cat', 'cats']
    >>> words.first_at_least("car")
    'cat'
    >>> words.first_at_least("dog") is None
    True
    """

    def __init__(self, words, presorted=True):
        """
        Args:
            words (iterable): The words.
            presorted (bool): If True, ``words`` is trusted to already be
                sorted. Otherwise a sorted copy is made.
        """
        if presorted:
            self._words = tuple(words)
        else:
            self._words = tuple(sorted(words))

    def __len__(self):
        return len(self._words)

    def __getitem__(self, index):
        return self._words[index]

    def __iter__(self):
        return iter(self._words)

    def __contains__(self, word):
        return self.first_at_least(word) == word

    def __repr__(self):
        return f"<{self.__class__.__name__} {len(self)} words>"

    def first_at_least(self, word):
        """
        Returns the first word in the list that is greater than or equal to
        ``word``, or None if there is no such word.
        """
        words = self._words
        pos = bisect_left(words, word)
        if pos < len(words):
            return words[pos]
        return None


def normalize_word(line):
    """
    Turns a corpus line into a lowercase word.

    Returns None for a blank line.

    Raises:
        CorpusError: If the line holds more than one token.
    """
    word = line.strip()
    if not word:
        return None
    if len(word.split()) > 1:
        raise CorpusError(f"Line {line!r} contains more than one word")
    return word.lower()


def iter_words(lines):
    """
    Yields the normalized words in ``lines``. Blank lines are skipped, and
    lines with more than one word are logged and skipped.
    """
    for lineno, line in enumerate(lines, 1):
        try:
            word = normalize_word(line)
        except CorpusError:
            logger.warning(
                "Line {} seems to contain more than one word and is ignored: {!r}",
                lineno,
                line.strip(),
            )
            continue
        if word is not None:
            yield word


def read_words(path, encoding="utf8"):
    """
    Reads a corpus file with one word per line.

    Files ending in ``.gz`` are decompressed on the fly.

    Args:
        path (str): The file to read.
        encoding (str): The text encoding of the file.

    Returns:
        WordList: The unique, lowercased words of the file, sorted.
    """
    if str(path).endswith(".gz"):
        f = gzip.open(path, "rt", encoding=encoding)
    else:
        f = open(path, encoding=encoding)
    with f:
        words = WordList(set(iter_words(f)), presorted=False)

    logger.info("Read {} words from {}", len(words), path)
    return words
