"""
Ordered symbol sets for the successor search.

:meth:`levmatch.automata.fsa.DFA.next_valid_string` needs to know which
symbol comes right after another one, and which symbol is the smallest. An
:class:`Alphabet` supplies both, together with the empty string of the right
type and a way to split a string into single-symbol labels. The order must be
the same order the dictionary is sorted in.
"""

import sys
from bisect import bisect_right


class Alphabet:
    """
    Base class for symbol orders.

    Attributes:
        empty: The empty string of this alphabet's string type.
        first: The smallest symbol.
    """

    empty = ""
    first = None

    def successor(self, label):
        """
        Returns the symbol immediately after ``label``, or None if ``label``
        is the largest symbol.
        """
        raise NotImplementedError

    def labels(self, string):
        """
        Returns an iterator of single-symbol labels making up ``string``. The
        labels can be concatenated onto :attr:`empty` to rebuild the string.
        """
        return iter(string)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class UnicodeAlphabet(Alphabet):
    """
    Unicode strings in code point order, the order of Python's ``str``
    comparison.
    """

    empty = ""
    first = "\0"

    def successor(self, label):
        code = ord(label) + 1
        if code > sys.maxunicode:
            return None
        return chr(code)


class ByteAlphabet(Alphabet):
    """
    Byte strings in byte order. Labels are ``bytes`` objects of length one,
    so that ``path + label`` works the same as it does for ``str``.
    """

    empty = b""
    first = b"\x00"

    def successor(self, label):
        code = label[0] + 1
        if code > 0xFF:
            return None
        return bytes((code,))

    def labels(self, string):
        return (string[i : i + 1] for i in range(len(string)))


class SymbolAlphabet(Alphabet):
    """
    An explicit, ascending list of single-character symbols.

    The successor search only steps through the listed symbols instead of
    every code point, which keeps it short when the dictionary is known to
    use a small character set. Words containing symbols outside the list may
    be skipped by the search.

    >>> alpha = SymbolAlphabet("abcdefghijklmnopqrstuvwxyz")
    >>> alpha.successor("c")
    'd'
    >>> alpha.successor("z") is None
    True
    """

    empty = ""

    def __init__(self, symbols):
        """
        Args:
            symbols (iterable): Single-character strings in strictly
                ascending code point order.

        Raises:
            ValueError: If ``symbols`` is empty, contains something other than
                a single character, or is not strictly ascending.
        """
        symbols = list(symbols)
        if not symbols:
            raise ValueError("An alphabet needs at least one symbol")
        for symbol in symbols:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise ValueError(f"Not a single character: {symbol!r}")
        for a, b in zip(symbols, symbols[1:]):
            if not a < b:
                raise ValueError(f"Symbols must be strictly ascending: {a!r}, {b!r}")

        self.symbols = symbols
        self.first = symbols[0]

    def successor(self, label):
        # Labels outside the list are allowed; they step to the next listed
        # symbol above them
        pos = bisect_right(self.symbols, label)
        if pos < len(self.symbols):
            return self.symbols[pos]
        return None

    def __repr__(self):
        return f"{self.__class__.__name__}({''.join(self.symbols)!r})"


default_alphabet = UnicodeAlphabet()


def get_alphabet(alphabet=None):
    """Returns ``alphabet``, or the default Unicode alphabet if it is None."""
    if alphabet is None:
        return default_alphabet
    return alphabet
