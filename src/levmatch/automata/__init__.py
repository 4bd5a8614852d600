"""Finite state automata used for Levenshtein matching."""
