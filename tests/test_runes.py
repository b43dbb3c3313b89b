import pytest

from sysdyn.runes import (
    RUNE_ERROR,
    RUNE_MAX,
    UTF_MAX,
    decode_rune,
    encode_rune,
    full_rune,
    rune_len,
)

SAMPLE_RUNES = [0x00, 0x41, 0x7F, 0x80, 0x7FF, 0x800, ord("≥"), ord("≠"), 0xFFFF, 0x10000, RUNE_MAX]


@pytest.mark.parametrize("rune", SAMPLE_RUNES)
def test_encode_matches_standard_utf8(rune):
    assert encode_rune(rune) == chr(rune).encode("utf-8")


@pytest.mark.parametrize("rune", SAMPLE_RUNES)
def test_round_trip(rune):
    encoded = encode_rune(rune)
    assert decode_rune(encoded) == (rune, len(encoded))


@pytest.mark.parametrize("rune", SAMPLE_RUNES)
def test_rune_len_matches_encoding(rune):
    assert rune_len(rune) == len(encode_rune(rune))
    assert 1 <= rune_len(rune) <= UTF_MAX


def test_decode_reads_only_first_rune():
    data = "≤x".encode("utf-8")
    assert decode_rune(data) == (ord("≤"), 3)


def test_decode_ascii():
    assert decode_rune(b"A") == (ord("A"), 1)


def test_decode_empty():
    assert decode_rune(b"") == (0, 0)


@pytest.mark.parametrize(
    "data",
    [
        b"\x80",  # lone continuation byte
        b"\xc0\x80",  # overlong two-byte encoding
        b"\xe0\x80\x80",  # overlong three-byte encoding
        b"\xf0\x80\x80\x80",  # overlong four-byte encoding
        b"\xf4\x90\x80\x80",  # above the maximum rune
        b"\xf8\x88\x80\x80\x80",  # five-byte lead
        "≥".encode("utf-8")[:2],  # truncated sequence
        b"\xc3A",  # bad continuation
    ],
)
def test_decode_bad_sequences(data):
    assert decode_rune(data) == (RUNE_ERROR, 1)


def test_encode_above_max_gives_error_rune():
    assert encode_rune(RUNE_MAX + 1) == encode_rune(RUNE_ERROR)
    assert rune_len(RUNE_MAX + 1) == 3


def test_encode_negative_raises():
    with pytest.raises(ValueError):
        encode_rune(-1)


@pytest.mark.parametrize("rune", SAMPLE_RUNES)
def test_full_rune_whole_and_partial(rune):
    encoded = encode_rune(rune)
    assert full_rune(encoded)
    for cut in range(len(encoded)):
        assert not full_rune(encoded[:cut])


def test_full_rune_empty():
    assert full_rune(b"") is False