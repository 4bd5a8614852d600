"""
Command line front end.

    levmatch words.txt badger -k 1
    levmatch words.txt --suggest < misspellings.txt
"""

import argparse
import sys

from loguru import logger

from levmatch.automata.lev import LevenshteinAutomaton
from levmatch.corpus import CorpusError, normalize_word, read_words
from levmatch.matching import suggest
from levmatch.version import versionstring


def _parser():
    parser = argparse.ArgumentParser(
        prog="levmatch",
        description="Find the words of a corpus within a Levenshtein distance of a word.",
    )
    parser.add_argument("corpus", help="Word list file, one word per line (may be gzipped)")
    parser.add_argument(
        "words",
        nargs="*",
        help="Words to look up. If none are given, words are read from standard input",
    )
    parser.add_argument("-k", "--distance", type=int, default=1, help="Maximum edit distance (default: 1)")
    parser.add_argument(
        "--prefix", type=int, default=0, help="Number of leading characters that must match exactly (default: 0)"
    )
    parser.add_argument(
        "--suggest",
        type=int,
        nargs="?",
        const=5,
        default=None,
        metavar="MAX",
        help="'Did you mean' mode: widen the distance from 1 up to MAX (default: 5) until a word is found",
    )
    parser.add_argument("--dot", default=None, metavar="FILE", help="Write the automaton of the word as Graphviz DOT")
    parser.add_argument("--encoding", default="utf8", help="Encoding of the corpus file (default: utf8)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {versionstring()}")
    return parser


def _read_queries(stream, out):
    interactive = stream.isatty()
    while True:
        if interactive:
            out.write("Please type a (misspelled) word: ")
            out.flush()
        line = stream.readline()
        if not line:
            return
        try:
            word = normalize_word(line)
        except CorpusError:
            logger.warning("Ignoring {!r}: type one word at a time", line.strip())
            continue
        if word is not None:
            yield word


def _write_dot(lev, path):
    with open(path, "w", encoding="utf8") as f:
        lev.to_dot(f)
    logger.info("Wrote the automaton for {!r} (k={}) to {}", lev.word, lev.k, path)


def _lookup(word, words, args, out):
    if args.suggest is not None:
        distance, matches = suggest(word, words, args.suggest, args.prefix)
        if distance == 0:
            print("(y) This is a valid word.", file=out)
        elif distance is None:
            print(f"Could not find any words within distance {args.suggest}.", file=out)
        else:
            print("Did you mean to write any of these words?", file=out)
            print("\t".join(matches), file=out)
        if args.dot:
            # The automaton at the distance that settled the search
            k = args.suggest if distance is None else distance
            _write_dot(LevenshteinAutomaton(word, k, args.prefix), args.dot)
        return

    lev = LevenshteinAutomaton(word, args.distance, args.prefix)
    print(f"{word}:", *lev.matches(words), sep="\t", file=out)
    if args.dot:
        _write_dot(lev, args.dot)


def main(argv=None, stdin=None, out=None):
    stdin = sys.stdin if stdin is None else stdin
    out = sys.stdout if out is None else out

    parser = _parser()
    args = parser.parse_args(argv)
    if args.distance < 0:
        parser.error("the distance can't be negative")
    if args.prefix < 0:
        parser.error("the prefix length can't be negative")
    if args.suggest is not None and args.suggest < 0:
        parser.error("the maximum suggestion distance can't be negative")
    if args.dot and len(args.words) != 1:
        parser.error("--dot needs exactly one word")

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO", format="{level}: {message}")
    logger.enable("levmatch")

    try:
        words = read_words(args.corpus, encoding=args.encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read {!r}: {}", args.corpus, e)
        return 1

    if args.words:
        queries = []
        for arg in args.words:
            try:
                word = normalize_word(arg)
            except CorpusError:
                parser.error(f"{arg!r} is more than one word")
            if word is not None:
                queries.append(word)
    else:
        queries = _read_queries(stdin, out)

    for word in queries:
        _lookup(word, words, args, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
