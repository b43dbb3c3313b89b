import pytest

from sysdyn.casemap import is_lower, is_upper
from sysdyn.chartype import is_alpha, is_space


@pytest.mark.parametrize("ch", ["a", "z", "A", "Z", "é", "Ø"])
def test_latin_letters_are_alpha(ch):
    assert is_alpha(ord(ch)) is True


@pytest.mark.parametrize("rune", [0x00AA, 0x00B5, 0x4E00, 0x9FFF, 0xAC00, 0x05D0])
def test_table_letters_are_alpha(rune):
    assert is_alpha(rune) is True


@pytest.mark.parametrize("ch", ["0", "9", "_", " ", "+", "\"", "×"])
def test_non_letters_are_not_alpha(ch):
    assert is_alpha(ord(ch)) is False


def test_cased_runes_are_alpha():
    cased = [r for r in range(0x3000) if is_upper(r) or is_lower(r)]
    assert cased
    assert all(is_alpha(r) for r in cased)


@pytest.mark.parametrize("ch", [" ", "\t", "\n", "\u00a0", "\u2003", "\u3000", "\ufeff"])
def test_spaces(ch):
    assert is_space(ord(ch)) is True


@pytest.mark.parametrize("ch", ["\r", "a", "0", "\x0b", "\x0c", "_"])
def test_non_spaces(ch):
    assert is_space(ord(ch)) is False


def test_space_and_alpha_disjoint():
    assert not any(is_space(r) and is_alpha(r) for r in range(0x10000))