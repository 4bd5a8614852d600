"""
High level lookups: all words within a distance, and "did you mean"
suggestions.
"""

from bisect import bisect_left

from loguru import logger

from levmatch.automata.lev import LevenshteinAutomaton


def find_matches(word, words, k, prefix=0, alphabet=None):
    """
    Returns every word in ``words`` within edit distance ``k`` of ``word``.

    Args:
        word (str): The query word.
        words (sequence): The dictionary, sorted.
        k (int): The maximum edit distance.
        prefix (int): The number of leading characters that must match
            exactly.
        alphabet (Alphabet): The symbol order of the dictionary.

    Returns:
        list: The matching words in ascending order. An empty list if there
        are none.
    """
    matches = LevenshteinAutomaton(word, k, prefix, alphabet).matches(words)
    logger.debug("{!r} within distance {}: {} matches", word, k, len(matches))
    return matches


def _contains(words, word):
    pos = bisect_left(words, word)
    return pos < len(words) and words[pos] == word


def suggest(word, words, maxdist=5, prefix=0, alphabet=None):
    """
    Finds the closest dictionary words to a possibly misspelled word.

    If ``word`` is in the dictionary it is its own suggestion. Otherwise the
    distance is widened one edit at a time, from 1 up to ``maxdist``, until
    some dictionary word is found.

    Returns:
        tuple: ``(distance, matches)``. ``(0, [word])`` for a dictionary word,
        ``(None, [])`` if nothing is within ``maxdist``.

    Raises:
        ValueError: If ``maxdist`` is negative.
    """
    if maxdist < 0:
        raise ValueError(f"Maximum distance can't be negative: {maxdist!r}")

    if _contains(words, word):
        return 0, [word]

    for k in range(1, maxdist + 1):
        matches = find_matches(word, words, k, prefix, alphabet)
        if matches:
            return k, matches
        logger.debug("Could not find any words in distance {} of {!r}", k, word)
    return None, []
