"""Parse, compile and simulate system dynamics models built in code."""

__version__ = "0.1.0"

__all__ = [
    "casemap",
    "chartype",
    "hashtable",
    "parse",
    "project",
    "runes",
    "sim",
    "siphash",
    "util",
]