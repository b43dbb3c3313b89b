import string

import pytest

from sysdyn.casemap import (
    is_lower,
    is_title,
    is_upper,
    to_lower,
    to_title,
    to_upper,
)


@pytest.mark.parametrize("upper, lower", zip(string.ascii_uppercase, string.ascii_lowercase))
def test_ascii_case_mapping(upper, lower):
    assert to_lower(ord(upper)) == ord(lower)
    assert to_upper(ord(lower)) == ord(upper)
    assert is_upper(ord(upper)) and not is_lower(ord(upper))
    assert is_lower(ord(lower)) and not is_upper(ord(lower))


@pytest.mark.parametrize("ch", string.digits + string.punctuation + " ")
def test_non_letters_unchanged(ch):
    rune = ord(ch)
    assert to_lower(rune) == rune
    assert to_upper(rune) == rune
    assert to_title(rune) == rune
    assert not is_upper(rune)
    assert not is_lower(rune)


@pytest.mark.parametrize("rune", list(range(0x0410, 0x0430)) + list(range(0x0391, 0x03A2)))
def test_cyrillic_and_greek_ranges_match_str_lower(rune):
    assert chr(to_lower(rune)) == chr(rune).lower()


@pytest.mark.parametrize("rune", list(range(0x0101, 0x0130, 2)) + list(range(0x1E01, 0x1E96, 2)))
def test_singlet_runs_match_str_upper(rune):
    assert chr(to_upper(rune)) == chr(rune).upper()


def test_dotted_capital_i_lowers_to_i():
    assert to_lower(ord("İ")) == ord("i")


def test_long_s_uppers_to_s():
    assert to_upper(ord("ſ")) == ord("S")


def test_title_forms():
    assert to_title(ord("Ǆ")) == ord("ǅ")
    assert to_title(ord("ǆ")) == ord("ǅ")
    assert is_title(ord("ǅ"))
    assert not is_title(ord("Ǆ"))
    assert not is_title(ord("A"))


def test_conversion_changes_exactly_the_classified_runes():
    for rune in range(0x10000):
        assert (to_lower(rune) != rune) == is_upper(rune)
        assert (to_upper(rune) != rune) == is_lower(rune)


def test_upper_lower_round_trip_on_ranges():
    for rune in list(range(0x0430, 0x0450)) + list(range(0xFF41, 0xFF5B)):
        assert to_lower(to_upper(rune)) == rune