from io import StringIO

import pytest
from levmatch import LevenshteinAutomaton
from levmatch.cli import main
from loguru import logger

CORPUS = "badge\nbadger\nBadgers\nbadges\nbadher\ncrocodile\nduckling\n"


@pytest.fixture
def corpus(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text(CORPUS, encoding="utf8")
    yield str(path)
    logger.disable("levmatch")


def run(args, stdin=""):
    out = StringIO()
    code = main(args, stdin=StringIO(stdin), out=out)
    return code, out.getvalue()


def test_matches(corpus):
    code, output = run([corpus, "badger", "-k", "1"])
    assert code == 0
    assert output == "badger:\tbadge\tbadger\tbadgers\tbadges\tbadher\n"


def test_several_words(corpus):
    code, output = run([corpus, "Badger", "duckling", "-k", "0"])
    assert code == 0
    assert output.splitlines() == ["badger:\tbadger", "duckling:\tduckling"]


def test_no_matches(corpus):
    code, output = run([corpus, "zebra"])
    assert code == 0
    assert output == "zebra:\n"


def test_suggest(corpus):
    code, output = run([corpus, "badger", "badgr", "xyzzyxyzzyxyzzy", "--suggest"])
    assert code == 0
    assert output.splitlines() == [
        "(y) This is a valid word.",
        "Did you mean to write any of these words?",
        "badge\tbadger",
        "Could not find any words within distance 5.",
    ]


def test_stdin(corpus):
    code, output = run([corpus, "--suggest", "2"], stdin="crocodial\n\ntwo words\nbadges\n")
    assert code == 0
    assert output.splitlines() == [
        "Did you mean to write any of these words?",
        "crocodile",
        "(y) This is a valid word.",
    ]


def test_dot(corpus, tmp_path):
    dotfile = tmp_path / "badger.dot"
    code, output = run([corpus, "badger", "--dot", str(dotfile)])
    assert code == 0
    dot = dotfile.read_text(encoding="utf8")
    assert dot.startswith("digraph FSM {")
    assert "doublecircle" in dot


def test_suggest_dot(corpus, tmp_path):
    dotfile = tmp_path / "badgr.dot"
    code, output = run([corpus, "badgr", "--dot", str(dotfile), "--suggest"])
    assert code == 0
    assert output.splitlines()[0] == "Did you mean to write any of these words?"

    # The graph is the automaton at the distance that found the suggestions
    expected = StringIO()
    LevenshteinAutomaton("badgr", 1).to_dot(expected)
    assert dotfile.read_text(encoding="utf8") == expected.getvalue()


def test_undecodable_corpus(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_bytes(b"badger\n\xff\xfe\n")
    code, output = run([str(path), "badger"])
    assert code == 1
    assert output == ""
    logger.disable("levmatch")


def test_missing_corpus(tmp_path):
    code, output = run([str(tmp_path / "missing.txt"), "badger"])
    assert code == 1
    assert output == ""
    logger.disable("levmatch")


def test_usage_errors(corpus):
    with pytest.raises(SystemExit) as exc:
        run([corpus, "badger", "-k", "-1"])
    assert exc.value.code == 2

    with pytest.raises(SystemExit) as exc:
        run([corpus, "badger", "duckling", "--dot", "out.dot"])
    assert exc.value.code == 2

    with pytest.raises(SystemExit) as exc:
        run([corpus, "two words"])
    assert exc.value.code == 2
