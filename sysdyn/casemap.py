"""Case mapping and case classification of runes."""

from __future__ import annotations

from bisect import bisect_right

# Every delta in the tables below is stored in "excess 500" form.
_EXCESS = 500


def _runs(first: int, last: int, delta: int, step: int = 2) -> dict[int, int]:
    return {rune: delta for rune in range(first, last + 1, step)}


def _singlets(*parts: dict[int, int] | tuple[int, int]) -> dict[int, int]:
    table: dict[int, int] = {}
    for part in parts:
        if isinstance(part, dict):
            table.update(part)
        else:
            rune, delta = part
            table[rune] = delta
    return table


class _RangeTable:
    """Sorted, non-overlapping ``(first, last, delta)`` ranges."""

    def __init__(self, ranges: list[tuple[int, int, int]]) -> None:
        self._ranges = ranges
        self._starts = [first for first, _, _ in ranges]

    def find(self, rune: int) -> int | None:
        i = bisect_right(self._starts, rune) - 1
        if i < 0:
            return None
        _, last, delta = self._ranges[i]
        if rune <= last:
            return delta
        return None


# Lower-case ranges with their upper-case conversion.
_TOUPPER2 = _RangeTable([
    (0x0061, 0x007A, 468), (0x00E0, 0x00F6, 468), (0x00F8, 0x00FE, 468),
    (0x0256, 0x0257, 295), (0x0258, 0x0259, 298), (0x028A, 0x028B, 283),
    (0x03AD, 0x03AF, 463), (0x03B1, 0x03C1, 468), (0x03C3, 0x03CB, 468),
    (0x03CD, 0x03CE, 437), (0x0430, 0x044F, 468), (0x0451, 0x045C, 420),
    (0x045E, 0x045F, 420), (0x0561, 0x0586, 452), (0x1F00, 0x1F07, 508),
    (0x1F10, 0x1F15, 508), (0x1F20, 0x1F27, 508), (0x1F30, 0x1F37, 508),
    (0x1F40, 0x1F45, 508), (0x1F60, 0x1F67, 508), (0x1F70, 0x1F71, 574),
    (0x1F72, 0x1F75, 586), (0x1F76, 0x1F77, 600), (0x1F78, 0x1F79, 628),
    (0x1F7A, 0x1F7B, 612), (0x1F7C, 0x1F7D, 626), (0x1F80, 0x1F87, 508),
    (0x1F90, 0x1F97, 508), (0x1FA0, 0x1FA7, 508), (0x1FB0, 0x1FB1, 508),
    (0x1FD0, 0x1FD1, 508), (0x1FE0, 0x1FE1, 508), (0x2170, 0x217F, 484),
    (0x24D0, 0x24E9, 474), (0xFF41, 0xFF5A, 468),
])

# Lower-case singlets with their upper-case conversion.
_TOUPPER1 = _singlets(
    (0x00FF, 621),
    _runs(0x0101, 0x012F, 499),
    (0x0131, 268),
    _runs(0x0133, 0x0137, 499),
    _runs(0x013A, 0x0148, 499),
    _runs(0x014B, 0x0177, 499),
    _runs(0x017A, 0x017E, 499),
    (0x017F, 200),
    (0x0183, 499), (0x0185, 499), (0x0188, 499), (0x018C, 499),
    (0x0192, 499), (0x0199, 499),
    (0x01A1, 499), (0x01A3, 499), (0x01A5, 499), (0x01A8, 499),
    (0x01AD, 499), (0x01B0, 499), (0x01B4, 499), (0x01B6, 499),
    (0x01B9, 499), (0x01BD, 499),
    (0x01C5, 499), (0x01C6, 498), (0x01C8, 499), (0x01C9, 498),
    (0x01CB, 499), (0x01CC, 498),
    _runs(0x01CE, 0x01DC, 499),
    _runs(0x01DF, 0x01EF, 499),
    (0x01F2, 499), (0x01F3, 498), (0x01F5, 499),
    _runs(0x01FB, 0x01FF, 499),
    _runs(0x0201, 0x0217, 499),
    (0x0253, 290), (0x0254, 294), (0x025B, 297), (0x0260, 295),
    (0x0263, 293), (0x0268, 291), (0x0269, 289), (0x026F, 289),
    (0x0272, 287), (0x0283, 282), (0x0288, 282), (0x0292, 281),
    (0x03AC, 462), (0x03CC, 436), (0x03D0, 438), (0x03D1, 443),
    (0x03D5, 453), (0x03D6, 446),
    _runs(0x03E3, 0x03EF, 499),
    (0x03F0, 414), (0x03F1, 420),
    _runs(0x0461, 0x0481, 499),
    _runs(0x0491, 0x04BF, 499),
    (0x04C2, 499), (0x04C4, 499), (0x04C8, 499), (0x04CC, 499),
    _runs(0x04D1, 0x04EB, 499),
    _runs(0x04EF, 0x04F5, 499),
    (0x04F9, 499),
    _runs(0x1E01, 0x1E95, 499),
    _runs(0x1EA1, 0x1EF9, 499),
    _runs(0x1F51, 0x1F57, 508),
    (0x1FB3, 509), (0x1FC3, 509), (0x1FE5, 507), (0x1FF3, 509),
)

# Upper-case ranges with their lower-case conversion.
_TOLOWER2 = _RangeTable([
    (0x0041, 0x005A, 532), (0x00C0, 0x00D6, 532), (0x00D8, 0x00DE, 532),
    (0x0189, 0x018A, 705), (0x018E, 0x018F, 702), (0x01B1, 0x01B2, 717),
    (0x0388, 0x038A, 537), (0x038E, 0x038F, 563), (0x0391, 0x03A1, 532),
    (0x03A3, 0x03AB, 532), (0x0401, 0x040C, 580), (0x040E, 0x040F, 580),
    (0x0410, 0x042F, 532), (0x0531, 0x0556, 548), (0x10A0, 0x10C5, 548),
    (0x1F08, 0x1F0F, 492), (0x1F18, 0x1F1D, 492), (0x1F28, 0x1F2F, 492),
    (0x1F38, 0x1F3F, 492), (0x1F48, 0x1F4D, 492), (0x1F68, 0x1F6F, 492),
    (0x1F88, 0x1F8F, 492), (0x1F98, 0x1F9F, 492), (0x1FA8, 0x1FAF, 492),
    (0x1FB8, 0x1FB9, 492), (0x1FBA, 0x1FBB, 426), (0x1FC8, 0x1FCB, 414),
    (0x1FD8, 0x1FD9, 492), (0x1FDA, 0x1FDB, 400), (0x1FE8, 0x1FE9, 492),
    (0x1FEA, 0x1FEB, 388), (0x1FF8, 0x1FF9, 372), (0x1FFA, 0x1FFB, 374),
    (0x2160, 0x216F, 516), (0x24B6, 0x24CF, 526), (0xFF21, 0xFF3A, 532),
])

# Upper-case singlets with their lower-case conversion.
_TOLOWER1 = _singlets(
    _runs(0x0100, 0x012E, 501),
    (0x0130, 301),
    _runs(0x0132, 0x0136, 501),
    _runs(0x0139, 0x0147, 501),
    _runs(0x014A, 0x0176, 501),
    (0x0178, 379),
    _runs(0x0179, 0x017D, 501),
    (0x0181, 710), (0x0182, 501), (0x0184, 501), (0x0186, 706),
    (0x0187, 501), (0x018B, 501), (0x0190, 703), (0x0191, 501),
    (0x0193, 705), (0x0194, 707), (0x0196, 711), (0x0197, 709),
    (0x0198, 501), (0x019C, 711), (0x019D, 713),
    (0x01A0, 501), (0x01A2, 501), (0x01A4, 501), (0x01A7, 501),
    (0x01A9, 718), (0x01AC, 501), (0x01AE, 718), (0x01AF, 501),
    (0x01B3, 501), (0x01B5, 501), (0x01B7, 719), (0x01B8, 501),
    (0x01BC, 501),
    (0x01C4, 502), (0x01C5, 501), (0x01C7, 502), (0x01C8, 501),
    (0x01CA, 502), (0x01CB, 501),
    _runs(0x01CD, 0x01DB, 501),
    _runs(0x01DE, 0x01EE, 501),
    (0x01F1, 502), (0x01F2, 501), (0x01F4, 501),
    _runs(0x01FA, 0x01FE, 501),
    _runs(0x0200, 0x0216, 501),
    (0x0386, 538), (0x038C, 564),
    _runs(0x03E2, 0x03EE, 501),
    _runs(0x0460, 0x0480, 501),
    _runs(0x0490, 0x04BE, 501),
    (0x04C1, 501), (0x04C3, 501), (0x04C7, 501), (0x04CB, 501),
    _runs(0x04D0, 0x04EA, 501),
    _runs(0x04EE, 0x04F4, 501),
    (0x04F8, 501),
    _runs(0x1E00, 0x1E94, 501),
    _runs(0x1EA0, 0x1EF8, 501),
    _runs(0x1F59, 0x1F5F, 492),
    (0x1FBC, 491), (0x1FCC, 491), (0x1FEC, 493), (0x1FFC, 491),
)

# Title-case conversions (between upper and lower, e.g. DZ Dz dz).
_TOTITLE1 = _singlets(
    (0x01C4, 501), (0x01C6, 499), (0x01C7, 501), (0x01C9, 499),
    (0x01CA, 501), (0x01CC, 499), (0x01F1, 501), (0x01F3, 499),
)


def _convert(rune: int, ranges: _RangeTable | None, singlets: dict[int, int]) -> int:
    if ranges is not None:
        delta = ranges.find(rune)
        if delta is not None:
            return rune + delta - _EXCESS
    delta = singlets.get(rune)
    if delta is not None:
        return rune + delta - _EXCESS
    return rune


def to_lower(rune: int) -> int:
    """Return the lower-case form of ``rune``, or ``rune`` itself."""
    return _convert(rune, _TOLOWER2, _TOLOWER1)


def to_upper(rune: int) -> int:
    """Return the upper-case form of ``rune``, or ``rune`` itself."""
    return _convert(rune, _TOUPPER2, _TOUPPER1)


def to_title(rune: int) -> int:
    """Return the title-case form of ``rune``, or ``rune`` itself."""
    return _convert(rune, None, _TOTITLE1)


def is_lower(rune: int) -> bool:
    """Report whether ``rune`` is a lower-case letter."""
    return _TOUPPER2.find(rune) is not None or rune in _TOUPPER1


def is_upper(rune: int) -> bool:
    """Report whether ``rune`` is an upper-case letter."""
    return _TOLOWER2.find(rune) is not None or rune in _TOLOWER1


def is_title(rune: int) -> bool:
    """Report whether ``rune`` is a title-case letter (both upper and lower)."""
    return is_upper(rune) and is_lower(rune)