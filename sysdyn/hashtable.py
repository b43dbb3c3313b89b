"""Open-addressing hash table keyed by signed 64-bit integers."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any, Callable, Iterator

_LOAD_FACTOR = 0.6
_KEY_SIZE = 16
_INIT_SIZE = 8

_FNV_OFFSET_BASIS = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK = 0xFFFFFFFFFFFFFFFF


class KeyType(enum.IntEnum):
    """Kinds of key a table can be built for."""

    LONG = 1 << 1
    STRING = 1 << 2
    POINTER = 1 << 3


@dataclass
class _Entry:
    key: int
    value: Any


class HashTable:
    """Linear-probing hash table whose hash is keyed with random bytes."""

    def __init__(
        self,
        key_type: KeyType | int = KeyType.LONG,
        key_removed: Callable[[int], None] | None = None,
        value_removed: Callable[[Any], None] | None = None,
    ) -> None:
        key_type = KeyType(key_type)
        if key_type is not KeyType.LONG:
            raise ValueError(f"unsupported key type: {key_type.name}")
        self.key_type = key_type
        self._key_removed = key_removed
        self._value_removed = value_removed
        self._hash_key = os.urandom(_KEY_SIZE)
        self._table: list[_Entry | None] = [None] * _INIT_SIZE
        self._size = 0

    def _hash(self, key: int) -> int:
        h = _FNV_OFFSET_BASIS
        for byte in key.to_bytes(8, "little", signed=True) + self._hash_key:
            h ^= byte
            h = (h * _FNV_PRIME) & _MASK
        return h

    def _index(self, key: int) -> int:
        if not isinstance(key, int):
            raise TypeError(f"key must be an int, not {type(key).__name__}")
        table = self._table
        n = len(table)
        h = self._hash(key)
        for i in range(n * 16):
            slot = (h + i) % n
            entry = table[slot]
            if entry is None or entry.key == key:
                return slot
        raise RuntimeError("no free slot found in hash table")

    def _grow(self) -> None:
        old_size = self._size
        old_table = self._table
        self._table = [None] * (len(old_table) * 2)
        self._size = 0
        for entry in old_table:
            if entry is not None:
                self.insert(entry.key, entry.value)
        if self._size != old_size:
            raise RuntimeError("size changed while growing hash table")

    def insert(self, key: int, value: Any) -> None:
        """Set ``key`` to ``value``, replacing any previous value."""
        slot = self._index(key)
        entry = self._table[slot]
        if entry is not None:
            entry.value = value
            return
        self._table[slot] = _Entry(key, value)
        self._size += 1
        if (self._size + 1) / len(self._table) > _LOAD_FACTOR:
            self._grow()

    def lookup(self, key: int) -> Any:
        """Return the value stored under ``key``; raise KeyError if absent."""
        entry = self._table[self._index(key)]
        if entry is None:
            raise KeyError(key)
        return entry.value

    def remove(self, key: int) -> None:
        """Remove ``key`` if present, notifying the removal callbacks."""
        slot = self._index(key)
        entry = self._table[slot]
        if entry is None:
            return
        self._table[slot] = None
        self._size -= 1
        if self._key_removed is not None:
            self._key_removed(entry.key)
        if self._value_removed is not None:
            self._value_removed(entry.value)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, int):
            return False
        return self._table[self._index(key)] is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        for key, _ in self.items():
            yield key

    def items(self) -> Iterator[tuple[int, Any]]:
        """Yield ``(key, value)`` pairs; the table must not change meanwhile."""
        size = self._size
        table = self._table
        for entry in table:
            if self._size != size or self._table is not table:
                raise RuntimeError("hash table modified during iteration")
            if entry is not None:
                yield entry.key, entry.value