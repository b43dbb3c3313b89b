import math

import pytest

from sysdyn.util import (
    Table,
    canonicalize,
    lookup,
    round_up,
    str_replace,
    str_trim,
    utf8_tolower,
)


def test_str_replace_counts_replacements():
    assert str_replace("a b c", " ", "_") == ("a_b_c", 2)


def test_str_replace_shrinking():
    result, count = str_replace("x\\\\y\\\\z", "\\\\", "\\")
    assert result == "x\\y\\z"
    assert count == 2


def test_str_replace_refuses_growth():
    assert str_replace("a b", " ", "___") == ("a b", 0)


def test_str_replace_empty_orig():
    with pytest.raises(ValueError):
        str_replace("abc", "", "x")


def test_str_trim():
    assert str_trim("  hi there \n\t") == "hi there"
    assert str_trim("") == ""


def test_utf8_tolower():
    assert utf8_tolower("ÀBC") == "àbc"
    assert utf8_tolower("already lower") == "already lower"


def test_round_up_is_multiple_and_not_smaller():
    for i in range(1, 40):
        for n in (1, 3, 8):
            r = round_up(i, n)
            assert r % n == 0
            assert i <= r < i + n


def test_lookup_empty_table():
    assert lookup(Table(), 3.0) == 0


def test_lookup_clamps_and_hits_points():
    table = Table([0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
    assert lookup(table, -5.0) == 0.0
    assert lookup(table, 9.0) == 20.0
    assert lookup(table, 1.0) == 10.0
    assert lookup(table, 2.0) == 20.0


def test_lookup_interpolates_between_points():
    table = Table([0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
    assert math.isclose(lookup(table, 0.5), 5.0)
    value = lookup(table, 1.25)
    assert 10.0 < value < 20.0


def test_table_length_mismatch():
    with pytest.raises(ValueError):
        Table([1.0, 2.0], [1.0])


def test_canonicalize_quoted_name():
    assert canonicalize('"Hello World"') == "hello_world"


def test_canonicalize_escapes_and_newlines():
    assert canonicalize("A\\nB") == "a_b"
    assert canonicalize("a\nb\rc") == "a_b_c"


def test_canonicalize_is_idempotent():
    for name in ('"Birth Rate"', "Stock\\nOne", "plain"):
        once = canonicalize(name)
        assert canonicalize(once) == once