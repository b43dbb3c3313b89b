"""UTF-8 encoding and decoding of single runes (Unicode code points)."""

from __future__ import annotations

UTF_MAX = 4
"""Maximum number of bytes needed to encode one rune."""

RUNE_SELF = 0x80
"""Runes below this value encode as themselves in a single byte."""

RUNE_ERROR = 0xFFFD
"""Rune returned for an undecodable sequence."""

RUNE_MAX = 0x10FFFF
"""Largest valid rune."""

_BITX = 6
_TX = 0x80  # 1000 0000
_T2 = 0xC0  # 1100 0000
_T3 = 0xE0  # 1110 0000
_T4 = 0xF0  # 1111 0000
_T5 = 0xF8  # 1111 1000

_RUNE1 = 0x7F
_RUNE2 = 0x7FF
_RUNE3 = 0xFFFF
_RUNE4 = 0x1FFFFF

_MASKX = 0x3F
_TESTX = 0xC0

_BAD = (RUNE_ERROR, 1)


def _continuation(data: bytes, index: int) -> int | None:
    """Return the payload bits of a continuation byte, or None if it is not one."""
    byte = data[index] if index < len(data) else 0
    bits = byte ^ _TX
    if bits & _TESTX:
        return None
    return bits


def decode_rune(data: bytes) -> tuple[int, int]:
    """Decode the first rune of ``data``.

    Returns ``(rune, consumed)``.  Malformed input yields
    ``(RUNE_ERROR, 1)``; empty input yields ``(0, 0)``.
    """
    if not data:
        return 0, 0

    c = data[0]
    if c < _TX:
        return c, 1

    c1 = _continuation(data, 1)
    if c1 is None:
        return _BAD
    if c < _T3:
        if c < _T2:
            return _BAD
        rune = ((c << _BITX) | c1) & _RUNE2
        if rune <= _RUNE1:
            return _BAD
        return rune, 2

    c2 = _continuation(data, 2)
    if c2 is None:
        return _BAD
    if c < _T4:
        rune = ((((c << _BITX) | c1) << _BITX) | c2) & _RUNE3
        if rune <= _RUNE2:
            return _BAD
        return rune, 3

    c3 = _continuation(data, 3)
    if c3 is None:
        return _BAD
    if c < _T5:
        rune = ((((((c << _BITX) | c1) << _BITX) | c2) << _BITX) | c3) & _RUNE4
        if rune <= _RUNE3 or rune > RUNE_MAX:
            return _BAD
        return rune, 4

    return _BAD


def encode_rune(rune: int) -> bytes:
    """Encode ``rune`` as UTF-8; runes above ``RUNE_MAX`` become ``RUNE_ERROR``."""
    if rune < 0:
        raise ValueError(f"negative rune: {rune}")

    if rune <= _RUNE1:
        return bytes((rune,))

    if rune <= _RUNE2:
        return bytes((
            _T2 | (rune >> _BITX),
            _TX | (rune & _MASKX),
        ))

    if rune > RUNE_MAX:
        rune = RUNE_ERROR

    if rune <= _RUNE3:
        return bytes((
            _T3 | (rune >> 2 * _BITX),
            _TX | ((rune >> _BITX) & _MASKX),
            _TX | (rune & _MASKX),
        ))

    return bytes((
        _T4 | (rune >> 3 * _BITX),
        _TX | ((rune >> 2 * _BITX) & _MASKX),
        _TX | ((rune >> _BITX) & _MASKX),
        _TX | (rune & _MASKX),
    ))


def rune_len(rune: int) -> int:
    """Return the number of bytes ``rune`` occupies when encoded."""
    return len(encode_rune(rune))


def full_rune(data: bytes) -> bool:
    """Report whether ``data`` starts with enough bytes to hold a whole rune."""
    n = len(data)
    if n <= 0:
        return False
    c = data[0]
    if c < _TX:
        return True
    if c < _T3:
        return n >= 2
    if c < _T4:
        return n >= 3
    return n >= 4