import sys

from cached_property import cached_property

from levmatch.automata.alphabet import get_alphabet
from levmatch.automata.fsa import ANY, EPSILON, NFA, all_matches


def levenshtein_automaton(term, k, prefix=0, alphabet=None):
    """
    Generate a Levenshtein automaton for a given term and maximum edit distance.

    The states are ``(i, e)`` pairs: ``i`` symbols of the term have been
    dealt with and ``e`` edits have been used. A string is accepted iff its
    edit distance to ``term`` is at most ``k``.

    Args:
        term (str): The term to generate the automaton for.
        k (int): The maximum edit distance allowed.
        prefix (int, optional): The length of the prefix to match exactly. Defaults to 0.
        alphabet (Alphabet, optional): The symbol order of the term and of the
            strings to match. Defaults to Unicode code point order.

    Returns:
        NFA: The generated Levenshtein automaton.

    Raises:
        ValueError: If ``k`` or ``prefix`` is negative.

    """
    if k < 0:
        raise ValueError(f"Maximum edit distance can't be negative: {k!r}")
    if prefix < 0:
        raise ValueError(f"Prefix length can't be negative: {prefix!r}")

    alphabet = get_alphabet(alphabet)
    labels = list(alphabet.labels(term))
    size = len(labels)
    prefix = min(prefix, size)

    nfa = NFA((0, 0), alphabet=alphabet)
    for i in range(prefix):
        nfa.add_transition((i, 0), labels[i], (i + 1, 0))

    for i in range(prefix, size):
        c = labels[i]
        for e in range(k + 1):
            # Correct character
            nfa.add_transition((i, e), c, (i + 1, e))
            if e < k:
                # Deletion
                nfa.add_transition((i, e), ANY, (i, e + 1))
                # Insertion
                nfa.add_transition((i, e), EPSILON, (i + 1, e + 1))
                # Substitution
                nfa.add_transition((i, e), ANY, (i + 1, e + 1))
    for e in range(k + 1):
        if e < k:
            nfa.add_transition((size, e), ANY, (size, e + 1))
        nfa.add_final_state((size, e))
    return nfa


class LevenshteinAutomaton:
    """
    The automaton for one (word, k) lookup.

    Holds the NFA built by :func:`levenshtein_automaton` and the DFA derived
    from it. The DFA is built the first time it is needed and then kept.

    >>> lev = LevenshteinAutomaton("badger", 1)
    >>> lev.matches(["badge", "badger", "badgers", "badges", "badhers"])
    ['badge', 'badger', 'badgers', 'badges']
    """

    def __init__(self, word, k, prefix=0, alphabet=None):
        self.word = word
        self.k = k
        self.prefix = prefix
        self.alphabet = get_alphabet(alphabet)
        self.nfa = levenshtein_automaton(word, k, prefix, self.alphabet)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.word!r}, {self.k!r})"

    @cached_property
    def dfa(self):
        return self.nfa.to_dfa()

    def accept(self, string):
        """Returns True if ``string`` is within the edit distance of the word."""
        return self.dfa.accept(string)

    def next_valid_string(self, string):
        return self.dfa.next_valid_string(string)

    def matches(self, words):
        """
        Returns the words within the edit distance, in ascending order.

        Args:
            words (sequence): A sorted sequence of words.
        """
        return all_matches(self.dfa, words)

    def dump(self, stream=sys.stdout):
        self.dfa.dump(stream)

    def to_dot(self, stream=sys.stdout):
        self.dfa.to_dot(stream)
