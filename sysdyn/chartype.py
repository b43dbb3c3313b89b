"""Alphabetic and white-space classification of runes."""

from __future__ import annotations

from bisect import bisect_right

from sysdyn.casemap import is_lower, is_upper


def _range_finder(ranges: list[tuple[int, int]]):
    starts = [first for first, _ in ranges]

    def contains(rune: int) -> bool:
        i = bisect_right(starts, rune) - 1
        return i >= 0 and rune <= ranges[i][1]

    return contains


# Alphabetic ranges not already covered by the upper or lower case tables.
_ALPHA2 = [
    (0x00D8, 0x00F6), (0x00F8, 0x01F5), (0x0250, 0x02A8), (0x038E, 0x03A1),
    (0x03A3, 0x03CE), (0x03D0, 0x03D6), (0x03E2, 0x03F3), (0x0490, 0x04C4),
    (0x0561, 0x0587), (0x05D0, 0x05EA), (0x05F0, 0x05F2), (0x0621, 0x063A),
    (0x0640, 0x064A), (0x0671, 0x06B7), (0x06BA, 0x06BE), (0x06C0, 0x06CE),
    (0x06D0, 0x06D3), (0x0905, 0x0939), (0x0958, 0x0961), (0x0985, 0x098C),
    (0x098F, 0x0990), (0x0993, 0x09A8), (0x09AA, 0x09B0), (0x09B6, 0x09B9),
    (0x09DC, 0x09DD), (0x09DF, 0x09E1), (0x09F0, 0x09F1), (0x0A05, 0x0A0A),
    (0x0A0F, 0x0A10), (0x0A13, 0x0A28), (0x0A2A, 0x0A30), (0x0A32, 0x0A33),
    (0x0A35, 0x0A36), (0x0A38, 0x0A39), (0x0A59, 0x0A5C), (0x0A85, 0x0A8B),
    (0x0A8F, 0x0A91), (0x0A93, 0x0AA8), (0x0AAA, 0x0AB0), (0x0AB2, 0x0AB3),
    (0x0AB5, 0x0AB9), (0x0B05, 0x0B0C), (0x0B0F, 0x0B10), (0x0B13, 0x0B28),
    (0x0B2A, 0x0B30), (0x0B32, 0x0B33), (0x0B36, 0x0B39), (0x0B5C, 0x0B5D),
    (0x0B5F, 0x0B61), (0x0B85, 0x0B8A), (0x0B8E, 0x0B90), (0x0B92, 0x0B95),
    (0x0B99, 0x0B9A), (0x0B9E, 0x0B9F), (0x0BA3, 0x0BA4), (0x0BA8, 0x0BAA),
    (0x0BAE, 0x0BB5), (0x0BB7, 0x0BB9), (0x0C05, 0x0C0C), (0x0C0E, 0x0C10),
    (0x0C12, 0x0C28), (0x0C2A, 0x0C33), (0x0C35, 0x0C39), (0x0C60, 0x0C61),
    (0x0C85, 0x0C8C), (0x0C8E, 0x0C90), (0x0C92, 0x0CA8), (0x0CAA, 0x0CB3),
    (0x0CB5, 0x0CB9), (0x0CE0, 0x0CE1), (0x0D05, 0x0D0C), (0x0D0E, 0x0D10),
    (0x0D12, 0x0D28), (0x0D2A, 0x0D39), (0x0D60, 0x0D61), (0x0E01, 0x0E30),
    (0x0E32, 0x0E33), (0x0E40, 0x0E46), (0x0E5A, 0x0E5B), (0x0E81, 0x0E82),
    (0x0E87, 0x0E88), (0x0E94, 0x0E97), (0x0E99, 0x0E9F), (0x0EA1, 0x0EA3),
    (0x0EAA, 0x0EAB), (0x0EAD, 0x0EAE), (0x0EB2, 0x0EB3), (0x0EC0, 0x0EC4),
    (0x0EDC, 0x0EDD), (0x0F18, 0x0F19), (0x0F40, 0x0F47), (0x0F49, 0x0F69),
    (0x10D0, 0x10F6), (0x1100, 0x1159), (0x115F, 0x11A2), (0x11A8, 0x11F9),
    (0x1E00, 0x1E9B), (0x1F50, 0x1F57), (0x1F80, 0x1FB4), (0x1FB6, 0x1FBC),
    (0x1FC2, 0x1FC4), (0x1FC6, 0x1FCC), (0x1FD0, 0x1FD3), (0x1FD6, 0x1FDB),
    (0x1FE0, 0x1FEC), (0x1FF2, 0x1FF4), (0x1FF6, 0x1FFC), (0x210A, 0x2113),
    (0x2115, 0x211D), (0x2120, 0x2122), (0x212A, 0x2131), (0x2133, 0x2138),
    (0x3041, 0x3094), (0x30A1, 0x30FA), (0x3105, 0x312C), (0x3131, 0x318E),
    (0x3192, 0x319F), (0x3260, 0x327B), (0x328A, 0x32B0), (0x32D0, 0x32FE),
    (0x3300, 0x3357), (0x3371, 0x3376), (0x337B, 0x3394), (0x3399, 0x339E),
    (0x33A9, 0x33AD), (0x33B0, 0x33C1), (0x33C3, 0x33C5), (0x33C7, 0x33D7),
    (0x33D9, 0x33DD), (0x4E00, 0x9FFF), (0xAC00, 0xD7A3), (0xF900, 0xFB06),
    (0xFB13, 0xFB17), (0xFB1F, 0xFB28), (0xFB2A, 0xFB36), (0xFB38, 0xFB3C),
    (0xFB40, 0xFB41), (0xFB43, 0xFB44), (0xFB46, 0xFBB1), (0xFBD3, 0xFD3D),
    (0xFD50, 0xFD8F), (0xFD92, 0xFDC7), (0xFDF0, 0xFDF9), (0xFE70, 0xFE72),
    (0xFE76, 0xFEFC), (0xFF66, 0xFF6F), (0xFF71, 0xFF9D), (0xFFA0, 0xFFBE),
    (0xFFC2, 0xFFC7), (0xFFCA, 0xFFCF), (0xFFD2, 0xFFD7), (0xFFDA, 0xFFDC),
]

# Alphabetic singlets not already covered by the upper or lower case tables.
_ALPHA1 = frozenset({
    0x00AA, 0x00B5, 0x00BA, 0x03DA, 0x03DC, 0x03DE, 0x03E0, 0x06D5,
    0x09B2, 0x0A5E, 0x0A8D, 0x0AE0, 0x0B9C, 0x0CDE, 0x0E4F, 0x0E84,
    0x0E8A, 0x0E8D, 0x0EA5, 0x0EA7, 0x0EB0, 0x0EBD, 0x1FBE, 0x207F,
    0x20A8, 0x2102, 0x2107, 0x2124, 0x2126, 0x2128, 0xFB3E, 0xFE74,
})

_SPACE2 = [
    (0x0009, 0x000A),  # tab and newline
    (0x0020, 0x0020),  # space
    (0x00A0, 0x00A0),  # no-break space
    (0x2000, 0x200B),
    (0x2028, 0x2029),
    (0x3000, 0x3000),
    (0xFEFF, 0xFEFF),
]

_in_alpha2 = _range_finder(_ALPHA2)
_in_space2 = _range_finder(_SPACE2)


def is_alpha(rune: int) -> bool:
    """Report whether ``rune`` is alphabetic."""
    if is_upper(rune) or is_lower(rune):
        return True
    return _in_alpha2(rune) or rune in _ALPHA1


def is_space(rune: int) -> bool:
    """Report whether ``rune`` is white space."""
    return _in_space2(rune)