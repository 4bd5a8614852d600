import itertools
import sys
from bisect import bisect_left

from loguru import logger

from levmatch.automata.alphabet import get_alphabet

# Marker constants


class Marker:
    """
    Represents a marker object.

    Markers are special transition labels. They are never equal to a literal
    symbol, so a dictionary character can't collide with them.

    Attributes:
        name (str): The name of the marker.

    Example:
        >>> marker = Marker("start")
        >>> marker.name
        'start'
        >>> repr(marker)
        '<start>'
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<{self.name}>"


# Move without consuming input
EPSILON = Marker("EPSILON")
# Move on any input symbol
ANY = Marker("ANY")


def _label_key(label):
    # Markers sort after literal labels
    if isinstance(label, Marker):
        return (1, label.name)
    return (0, label)


def _canonical(state):
    """
    Returns a sortable key for a state. Set states are keyed by their members
    in sorted order, so two sets with the same members have the same key.
    """
    if isinstance(state, frozenset):
        return tuple(sorted(state))
    return (state,)


def _state_str(state):
    if isinstance(state, frozenset):
        return "[" + "".join(_state_str(s) for s in sorted(state)) + "]"
    if isinstance(state, tuple):
        return "(" + ",".join(str(x) for x in state) + ")"
    return str(state)


def _label_str(label):
    if label is ANY:
        return "*"
    if label is EPSILON:
        return "eps"
    if isinstance(label, bytes):
        label = label.decode("latin1")
    return label.replace("\\", "\\\\").replace('"', '\\"')


_DOT_HEADER = """digraph FSM {
graph [rankdir=LR, fontsize=14, center=1, orientation=Portrait];
node  [fontname="Arial", shape=circle, style=filled, fontcolor=black, color=lightgray]
edge  [fontname="Arial"]
"""


# Base class
class FSA:
    """
    Finite State Automaton (FSA) class.

    Attributes:
        initial (object): The initial state of the automaton.
        transitions (dict): A dictionary that maps source states to a
            dictionary of labels and destinations.
        final_states (set): A set of final states in the automaton.
        alphabet (Alphabet): The symbol order used to split strings into
            labels and to step through labels.
    """

    def __init__(self, initial, alphabet=None):
        self.initial = initial
        self.transitions = {}
        self.final_states = set()
        self.alphabet = get_alphabet(alphabet)

    def __len__(self):
        """
        Returns the number of states in the finite state automaton.

        :return: The number of states in the automaton.
        :rtype: int
        """
        return len(self.all_states())

    def __eq__(self, other):
        """
        Check if two Finite State Automata (FSAs) are equal.

        Args:
            other (FSA): The other FSA to compare with.

        Returns:
            bool: True if the FSAs are equal, False otherwise.
        """
        if type(self) is not type(other):
            return False
        if self.initial != other.initial:
            return False
        if self.final_states != other.final_states:
            return False
        return self.transitions == other.transitions

    __hash__ = None

    def all_states(self):
        """
        Returns a set of all states in the automaton.

        Returns:
            set: A set of all states in the automaton.
        """
        raise NotImplementedError

    def all_labels(self):
        """
        Returns a set of all labels used in the automaton.

        Example:
            >>> automaton = NFA(0)
            >>> automaton.add_transition(0, 'a', 1)
            >>> automaton.add_transition(1, 'b', 2)
            >>> automaton.add_transition(2, 'a', 3)
            >>> sorted(automaton.all_labels())
            ['a', 'b']

        """
        labels = set()
        for trans in self.transitions.values():
            labels.update(trans)
        return labels

    def get_labels(self, src):
        """
        Returns an iterator of labels for a given source state.
        """
        return iter(self.transitions.get(src, []))

    def start(self):
        """
        Returns the initial state of the automaton.
        """
        return self.initial

    def next_state(self, state, label):
        """
        Returns the next state given the current state and a label, or None
        if there is no move.

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def is_final(self, state):
        """
        Checks if a given state is a final state.

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def add_transition(self, src, label, dest):
        """
        Adds a transition from a source state to a destination state with a
        given label.

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def add_final_state(self, state):
        """
        Adds a final state to the automaton.

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def to_dfa(self):
        """
        Converts the automaton to a deterministic finite automaton (DFA).

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def accept(self, string):
        """
        Checks if a given string is accepted by the automaton.

        Args:
            string (str): The string to check.

        Returns:
            bool: True if the string is accepted, False otherwise.

        Notes:
            The automaton is followed one label at a time. If some label has
            no move the string is rejected; otherwise the string is accepted
            if the state reached at the end is final.
        """
        state = self.start()

        for label in self.alphabet.labels(string):
            state = self.next_state(state, label)
            if state is None:
                return False

        return self.is_final(state)

    def _write_dot(self, stream, sources, edges):
        numbers = {}
        counter = itertools.count()
        for state in sorted(self.all_states(), key=_canonical):
            numbers[state] = next(counter)

        stream.write(_DOT_HEADER)
        stream.write("\n")
        for state, num in numbers.items():
            shape = ", shape=doublecircle" if state in self.final_states else ""
            stream.write(f'{num} [label="{_state_str(state)}"{shape}]\n')
        for src in sorted(sources, key=_canonical):
            for label, dest in edges(src):
                stream.write(
                    f'{numbers[src]} -> {numbers[dest]} [label="{_label_str(label)}"]\n'
                )
        stream.write("}\n")


# Implementations


class NFA(FSA):
    """
    NFA (Non-Deterministic Finite Automaton) class.

    States can be any hashable objects. A transition label is either a
    literal symbol, :data:`ANY` (moves on every symbol) or :data:`EPSILON`
    (moves without consuming input). A set of NFA states, as returned by
    :meth:`start` and :meth:`next_state`, is always a ``frozenset``, so it
    can be used directly as a DFA state.

    Attributes:
        transitions (dict): ``{src: {label: set(dests)}}``. A missing entry
            means there is no move.
        final_states (set): A set of final states.
        initial: The initial state of the NFA.
    """

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the NFA to the specified stream.

        Each source state is printed on its own line (prefixed with ``@`` if
        it is part of the start set), followed by one indented line per
        transition. Final destinations are marked with ``||``.

        Args:
            stream (file): The stream to print the representation to.
                Defaults to sys.stdout.
        """
        starts = self.start()
        for src in sorted(self.transitions, key=_canonical):
            beg = "@" if src in starts else " "
            print(beg, _state_str(src), file=stream)
            xs = self.transitions[src]
            for label in sorted(xs, key=_label_key):
                for dest in sorted(xs[label], key=_canonical):
                    end = " ||" if dest in self.final_states else ""
                    print(f"    {label} -> {_state_str(dest)}{end}", file=stream)

    def to_dot(self, stream=sys.stdout):
        """
        Writes the NFA to ``stream`` in Graphviz DOT format. Final states are
        drawn as double circles; ANY edges are labelled ``*``.
        """

        def edges(src):
            xs = self.transitions[src]
            for label in sorted(xs, key=_label_key):
                for dest in sorted(xs[label], key=_canonical):
                    yield label, dest

        self._write_dot(stream, self.transitions, edges)

    def all_states(self):
        stateset = {self.initial}
        stateset.update(self.transitions)
        stateset.update(self.final_states)
        for trans in self.transitions.values():
            for dests in trans.values():
                stateset.update(dests)
        return stateset

    def start(self):
        """
        Returns the start set of the NFA: the epsilon closure of the initial
        state.

        Returns:
            frozenset: The initial state of the NFA and every state reachable
            from it without consuming input.
        """
        return self.epsilon_closure((self.initial,))

    def add_transition(self, src, label, dest):
        """
        Adds a transition from the source state to the destination state with
        the specified label. Neither state needs to exist beforehand.

        Args:
            src (object): The source state.
            label (object): A literal symbol, ANY or EPSILON.
            dest (object): The destination state.

        Example:
            >>> nfa = NFA(0)
            >>> nfa.add_transition(0, 'a', 1)
            >>> nfa.transitions
            {0: {'a': {1}}}
        """
        self.transitions.setdefault(src, {}).setdefault(label, set()).add(dest)

    def add_final_state(self, state):
        """
        Adds a final state to the NFA.

        Args:
            state (object): The final state to add.
        """
        self.final_states.add(state)

    def triples(self):
        """
        Generates all (source state, label, destination state) triples in the
        NFA.
        """
        for src, trans in self.transitions.items():
            for label, dests in trans.items():
                for dest in dests:
                    yield src, label, dest

    def is_final(self, states):
        """
        Checks if any of the given states is a final state.

        Args:
            states (set): The set of states to check.

        Returns:
            bool: True if any of the states is a final state, False otherwise.
        """
        return not self.final_states.isdisjoint(states)

    def epsilon_closure(self, states):
        """
        Expands the given set of states by following epsilon transitions.

        Args:
            states (iterable): The states to expand.

        Returns:
            frozenset: The smallest superset of ``states`` that is closed
            under EPSILON moves. The argument is not modified.

        Example:
            >>> nfa = NFA(0)
            >>> nfa.add_transition(0, EPSILON, 1)
            >>> nfa.add_transition(1, EPSILON, 2)
            >>> sorted(nfa.epsilon_closure({0}))
            [0, 1, 2]
        """
        transitions = self.transitions
        closure = set(states)
        frontier = list(closure)
        while frontier:
            state = frontier.pop()
            if state in transitions and EPSILON in transitions[state]:
                new_states = transitions[state][EPSILON].difference(closure)
                frontier.extend(new_states)
                closure.update(new_states)
        return frozenset(closure)

    def move(self, states, label):
        """
        Returns the states reachable from any of ``states`` with one move on
        ``label`` or on ANY. The result is not epsilon-closed.

        Args:
            states (set): The set of states to start from.
            label: A literal symbol.

        Returns:
            set: The destination states.
        """
        transitions = self.transitions
        dest_states = set()
        for state in states:
            if state in transitions:
                xs = transitions[state]
                if label in xs:
                    dest_states.update(xs[label])
                if ANY in xs:
                    dest_states.update(xs[ANY])
        return dest_states

    def next_state(self, states, label):
        """
        Returns the epsilon-closed set of states reachable from ``states``
        with ``label``, or None if there is no such state.

        Example:
            >>> automaton = NFA(0)
            >>> automaton.add_transition(0, 'a', 1)
            >>> automaton.add_transition(1, 'b', 2)
            >>> automaton.next_state({0}, 'a')
            frozenset({1})
            >>> automaton.next_state({0}, 'b') is None
            True
        """
        dest_states = self.move(states, label)
        if not dest_states:
            return None
        return self.epsilon_closure(dest_states)

    def get_labels(self, states):
        """
        Returns the set of labels on the outgoing transitions of the given
        states, markers included.
        """
        transitions = self.transitions
        labels = set()
        for state in states:
            if state in transitions:
                labels.update(transitions[state])
        return labels

    def to_dfa(self):
        """
        Converts the NFA to a DFA (Deterministic Finite Automaton) using the
        subset construction.

        Each DFA state is the frozenset of NFA states the NFA can be in. For
        each unprocessed DFA state every outgoing label except EPSILON is
        followed. ANY becomes the state's default transition rather than an
        edge per symbol, so the DFA never depends on the size of the
        alphabet. A DFA state is final if it contains a final NFA state.

        Returns:
            DFA: The converted DFA, using the same alphabet as this NFA.
        """
        start = self.start()
        dfa = DFA(start, alphabet=self.alphabet)
        if self.is_final(start):
            dfa.add_final_state(start)

        frontier = [start]
        seen = {start}
        while frontier:
            current = frontier.pop()
            for label in self.get_labels(current):
                if label is EPSILON:
                    continue
                new_state = self.next_state(current, label)
                if new_state not in seen:
                    frontier.append(new_state)
                    seen.add(new_state)
                    if self.is_final(new_state):
                        dfa.add_final_state(new_state)
                if label is ANY:
                    dfa.set_default_transition(current, new_state)
                else:
                    dfa.add_transition(current, label, new_state)

        logger.debug(
            "Subset construction built {} DFA states ({} final) from {} NFA states",
            len(seen),
            len(dfa.final_states),
            len(self.all_states()),
        )
        return dfa


class DFA(FSA):
    """
    Deterministic Finite Automaton (DFA) class.

    Attributes:
        initial (object): The initial state of the DFA.
        transitions (dict): ``{src: {label: dest}}``.
        defaults (dict): ``{src: dest}``, the transition taken for any label
            that has no entry in ``transitions``.
        final_states (set): A set containing the final states of the DFA.
        outlabels (dict): A dictionary caching the sorted output labels for
            each state.
    """

    def __init__(self, initial, alphabet=None):
        super().__init__(initial, alphabet=alphabet)
        self.defaults = {}
        self.outlabels = {}

    def __eq__(self, other):
        return super().__eq__(other) and self.defaults == other.defaults

    __hash__ = None

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the DFA to the specified stream.

        Example:
            >>> dfa = DFA(0)
            >>> dfa.add_transition(0, 'a', 1)
            >>> dfa.add_transition(1, 'b', 2)
            >>> dfa.add_final_state(2)
            >>> dfa.dump()
            @ 0
                a -> 1
              1
                b -> 2 ||
        """
        for src in sorted(self._sources(), key=_canonical):
            beg = "@" if src == self.initial else " "
            print(beg, _state_str(src), file=stream)
            for label, dest in self._edges(src):
                end = " ||" if self.is_final(dest) else ""
                print(f"    {label} -> {_state_str(dest)}{end}", file=stream)

    def to_dot(self, stream=sys.stdout):
        """
        Writes the DFA to ``stream`` in Graphviz DOT format. Final states are
        drawn as double circles; default transitions are labelled ``*``.
        """
        self._write_dot(stream, self._sources(), self._edges)

    def _sources(self):
        sources = set(self.transitions)
        sources.update(self.defaults)
        return sources

    def _edges(self, src):
        xs = self.transitions.get(src, {})
        for label in sorted(xs):
            yield label, xs[label]
        if src in self.defaults:
            yield ANY, self.defaults[src]

    def all_states(self):
        stateset = {self.initial}
        stateset.update(self.transitions)
        stateset.update(self.final_states)
        for trans in self.transitions.values():
            stateset.update(trans.values())
        stateset.update(self.defaults)
        stateset.update(self.defaults.values())
        return stateset

    def add_transition(self, src, label, dest):
        """
        Adds a transition from the source state to the destination state with
        the given input label. An existing transition for the same source and
        label is replaced.

        Examples:
            >>> dfa = DFA('A')
            >>> dfa.add_transition('A', 'a', 'B')
            >>> dfa.add_transition('B', 'b', 'C')
        """
        self.transitions.setdefault(src, {})[label] = dest
        self.outlabels.pop(src, None)

    def set_default_transition(self, src, dest):
        """
        Sets the default transition for the source state to the specified
        destination state. It is used for every label that has no explicit
        transition from ``src``.
        """
        self.defaults[src] = dest

    def add_final_state(self, state):
        """
        Adds the specified state as a final state of the DFA.
        """
        self.final_states.add(state)

    def is_final(self, state):
        """
        Checks if the specified state is a final state of the DFA.

        Examples:
            >>> dfa = DFA('q0')
            >>> dfa.add_final_state('q1')
            >>> dfa.is_final('q1')
            True
            >>> dfa.is_final('q2')
            False
        """
        return state in self.final_states

    def next_state(self, src, label):
        """
        Returns the next state of the DFA given the current state and the
        input label: the explicit transition if there is one, otherwise the
        default transition, otherwise None.

        Example:
            >>> dfa = DFA('A')
            >>> dfa.add_transition('A', 'a', 'B')
            >>> dfa.set_default_transition('A', 'C')
            >>> dfa.next_state('A', 'a')
            'B'
            >>> dfa.next_state('A', 'z')
            'C'
            >>> dfa.next_state('B', 'b') is None
            True
        """
        trans = self.transitions.get(src, {})
        return trans.get(label, self.defaults.get(src, None))

    def next_valid_string(self, string):
        """
        Returns the lexicographically smallest string accepted by the DFA
        that is greater than or equal to ``string``.

        Args:
            string (str or bytes): The candidate string.

        Returns:
            str or bytes: The smallest accepted string not less than
            ``string``, or None if there is none.

        Examples:
            >>> dfa = DFA(0)
            >>> dfa.add_transition(0, 'a', 1)
            >>> dfa.add_transition(1, 'b', 2)
            >>> dfa.add_transition(2, 'c', 3)
            >>> dfa.add_final_state(3)
            >>> dfa.next_valid_string('ab')
            'abc'
            >>> dfa.next_valid_string('abc')
            'abc'
            >>> dfa.next_valid_string('abcd') is None
            True

        Notes:
            The DFA is followed along ``string`` as far as possible, recording
            (prefix, state, label) at every position. If the whole string was
            consumed and ended in a final state it is returned as is.
            Otherwise the recorded positions are revisited from the last one
            backwards: at each, the smallest enabled label after the one
            already tried extends the prefix, and the search keeps going
            forward from there with the smallest labels until it reaches a
            final state.
        """
        alphabet = self.alphabet
        state = self.start()
        stack = []

        # Follow the DFA as far as possible
        path = alphabet.empty
        for label in alphabet.labels(string):
            stack.append((path, state, label))
            state = self.next_state(state, label)
            if state is None:
                break
            path += label
        else:
            if self.is_final(state):
                # Word is already valid
                return string
            stack.append((path, state, None))

        # Perform a 'wall following' search for the lexicographically smallest
        # accepting state.
        while stack:
            path, src, label = stack.pop()
            label = self.find_next_edge(src, label)
            if label is None:
                continue

            # Come back to the next sibling if nothing below this edge is final
            stack.append((path, src, label))
            path += label
            state = self.next_state(src, label)
            if state is None:
                logger.warning(
                    "Edge {!r} from DFA state {} has no destination",
                    label,
                    _state_str(src),
                )
                return None
            if self.is_final(state):
                return path
            stack.append((path, state, None))
        return None

    def find_next_edge(self, s, label):
        """
        Finds the smallest label enabled at state ``s`` that comes after
        ``label``.

        Args:
            s (object): The current state.
            label (object): The label already tried from ``s``, or None to
                find the smallest enabled label.

        Returns:
            object: The next enabled label, or None if there is none.

        Notes:
            The candidate is the alphabet's successor of ``label`` (or its
            first symbol). A state with a default transition accepts every
            candidate. Otherwise the candidate is looked up in the state's
            sorted explicit labels with a binary search.
        """
        alphabet = self.alphabet
        if label is None:
            label = alphabet.first
        else:
            label = alphabet.successor(label)
            if label is None:
                return None

        trans = self.transitions.get(s, {})
        if label in trans or s in self.defaults:
            return label

        try:
            labels = self.outlabels[s]
        except KeyError:
            self.outlabels[s] = labels = sorted(trans)

        pos = bisect_left(labels, label)
        if pos < len(labels):
            return labels[pos]
        return None

    def to_dfa(self):
        """
        Returns a reference to itself.
        """
        return self


# Useful functions


def find_all_matches(dfa, lookup_func, first=None):
    """
    Finds every dictionary word accepted by a DFA.

    Args:
        dfa (DFA): The automaton, usually a Levenshtein automaton.
        lookup_func (function): A function that takes a word and returns the
            first word in the dictionary that is greater than or equal to it,
            or None if there is no such word.
        first (str): The string to start the search from. Defaults to the
            empty string of the DFA's alphabet.

    Yields:
        str: Every accepted dictionary word, in ascending order, once.

    Notes:
        The DFA and the dictionary take turns: the DFA proposes the smallest
        accepted string not less than the current candidate, the dictionary
        answers with the smallest word not less than that. When they agree
        the word is a match and the search resumes just after it.
    """
    alphabet = dfa.alphabet
    if first is None:
        first = alphabet.empty

    match = dfa.next_valid_string(first)
    while match is not None:
        key = lookup_func(match)
        if key is None:
            return
        if match == key:
            yield match
            key += alphabet.first
        match = dfa.next_valid_string(key)


def all_matches(dfa, words):
    """
    Returns the list of words in ``words`` accepted by ``dfa``.

    Args:
        dfa (DFA): The automaton to intersect with.
        words (sequence): Words sorted in the order of the DFA's alphabet.
            Only ``len()``, indexing and binary search are used, so any
            sorted sequence (such as a :class:`levmatch.corpus.WordList`)
            works.

    Returns:
        list: The matching words in ascending order.
    """

    def lookup(word):
        pos = bisect_left(words, word)
        if pos < len(words):
            return words[pos]
        return None

    matches = list(find_all_matches(dfa, lookup))
    logger.debug("Found {} matches in {} words", len(matches), len(words))
    return matches
