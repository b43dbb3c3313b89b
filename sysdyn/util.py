"""String helpers and graphical-function table lookup."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Sequence

from sysdyn.casemap import to_lower

_C_SPACE = " \t\n\v\f\r"


@dataclass
class Table:
    """A piecewise-linear function given by sorted ``x`` points and ``y`` values."""

    x: Sequence[float] = field(default_factory=list)
    y: Sequence[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.x) != len(self.y):
            raise ValueError("table x and y must have the same length")

    def __len__(self) -> int:
        return len(self.x)


def str_replace(s: str, orig: str, new: str) -> tuple[str, int]:
    """Replace every ``orig`` in ``s`` by ``new``; return the result and the count.

    Replacements that would lengthen the string are refused: ``s`` is
    returned unchanged with a count of zero.
    """
    if not orig:
        raise ValueError("cannot replace an empty string")
    if len(new.encode("utf-8")) > len(orig.encode("utf-8")):
        return s, 0
    return s.replace(orig, new), s.count(orig)


def str_trim(s: str) -> str:
    """Strip ASCII white space from both ends of ``s``."""
    return s.strip(_C_SPACE)


def utf8_tolower(s: str) -> str:
    """Lower-case ``s`` rune by rune with the library's case tables."""
    return "".join(chr(to_lower(ord(c))) for c in s)


def round_up(i: int, n: int) -> int:
    """Round ``i`` up to the next multiple of ``n``."""
    return n * ((i - 1) // n + 1)


def lookup(table: Table, index: float) -> float:
    """Interpolate ``table`` at ``index``, clamping outside its range."""
    x, y = table.x, table.y
    if not x:
        return 0.0
    if index < x[0]:
        return y[0]
    if index > x[-1]:
        return y[-1]

    i = bisect_left(x, index)
    if x[i] == index:
        return y[i]
    slope = (y[i] - y[i - 1]) / (x[i] - x[i - 1])
    return (index - x[i - 1]) * slope + y[i - 1]


def canonicalize(name: str) -> str:
    """Return the canonical identifier for a variable name."""
    if name and name[0] == '"' and name[-1] == '"':
        name = name[1:-1]
    result = utf8_tolower(name)
    for orig, new in (
        ("\\\\", "\\"),
        ("\\n", "_"),
        ("\\r", "_"),
        ("\n", "_"),
        ("\r", "_"),
        (" ", "_"),
    ):
        result, _ = str_replace(result, orig, new)
    return result