"""Approximate dictionary lookup with Levenshtein automata.

Build an automaton for a word and a maximum edit distance, then walk it
against a sorted word list::

    from levmatch import find_matches

    find_matches("badger", ["badge", "badger", "badgers", "badhers"], 1)
    # ['badge', 'badger', 'badgers']
"""

from loguru import logger

from levmatch.version import __version__, versionstring

# Library code is silent until an application enables it
logger.disable("levmatch")

from levmatch.automata.alphabet import (  # noqa: E402
    ByteAlphabet,
    SymbolAlphabet,
    UnicodeAlphabet,
)
from levmatch.automata.fsa import DFA, NFA, all_matches, find_all_matches  # noqa: E402
from levmatch.automata.lev import LevenshteinAutomaton, levenshtein_automaton  # noqa: E402
from levmatch.corpus import CorpusError, WordList, read_words  # noqa: E402
from levmatch.matching import find_matches, suggest  # noqa: E402
