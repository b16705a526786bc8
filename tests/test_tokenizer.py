# tests/test_tokenizer.py
from loom.tokenizer import operator_count, tokenize


def test_single_operator_counts_one():
    assert operator_count(">", 0) == (1, 0)


def test_repetitions_add_one_each():
    assert operator_count(">>>", 0) == (3, 2)


def test_digit_run_is_the_count():
    assert operator_count(">5", 0) == (5, 1)
    assert operator_count("+31x", 0) == (31, 2)


def test_alternating_digits_and_repetitions_sum():
    # +3 then +2: same as a single +5
    assert operator_count("+3+2", 0) == (5, 3)
    assert operator_count("++3", 0) == (4, 2)


def test_different_operator_ends_the_run():
    assert operator_count(">3<", 0) == (3, 1)
    assert operator_count("+-", 0) == (1, 0)


def test_zero_count():
    assert operator_count("+0", 0) == (0, 1)


def test_count_starts_at_pc():
    code = "x>>2x"
    # '>' at 1, '>' at 2, digits '2' at 3 -> 1 + 1 + 1
    assert operator_count(code, 1) == (3, 3)


def test_tokenize_listing():
    toks = tokenize("+3+2x[>]?")
    assert [t["type"] for t in toks] == ["REPEAT", "COMMAND", "OPEN", "REPEAT", "CLOSE", "COMMAND"]
    first = toks[0]
    assert first["value"] == "+"
    assert first["text"] == "+3+2"
    assert first["count"] == 5
    assert (first["pos"], first["end"]) == (0, 3)
    assert toks[1]["pos"] == 4


def test_tokenize_marks_unknown_characters():
    toks = tokenize("x5")
    assert toks[-1]["type"] == "UNKNOWN"
    assert toks[-1]["value"] == "5"


def test_tokenize_empty():
    assert tokenize("") == []
