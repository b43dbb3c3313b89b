"""SipHash-2-4 keyed hash with 64- or 128-bit output."""

from __future__ import annotations

_MASK = 0xFFFFFFFFFFFFFFFF
_C_ROUNDS = 2
_D_ROUNDS = 4


def _rotl(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & _MASK


def _sipround(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & _MASK
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _MASK
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _MASK
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def siphash(data: bytes, key: bytes, outlen: int = 8) -> bytes:
    """Hash ``data`` with the 16-byte ``key``; ``outlen`` is 8 or 16 bytes."""
    if outlen not in (8, 16):
        raise ValueError(f"outlen must be 8 or 16, not {outlen}")
    if len(key) != 16:
        raise ValueError(f"key must be 16 bytes, not {len(key)}")

    k0 = int.from_bytes(key[:8], "little")
    k1 = int.from_bytes(key[8:], "little")
    v0 = 0x736F6D6570736575 ^ k0
    v1 = 0x646F72616E646F6D ^ k1
    v2 = 0x6C7967656E657261 ^ k0
    v3 = 0x7465646279746573 ^ k1
    if outlen == 16:
        v1 ^= 0xEE

    inlen = len(data)
    full = inlen - inlen % 8
    for offset in range(0, full, 8):
        m = int.from_bytes(data[offset:offset + 8], "little")
        v3 ^= m
        for _ in range(_C_ROUNDS):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= m

    b = ((inlen & 0xFF) << 56) | int.from_bytes(data[full:], "little")
    v3 ^= b
    for _ in range(_C_ROUNDS):
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
    v0 ^= b

    v2 ^= 0xEE if outlen == 16 else 0xFF
    for _ in range(_D_ROUNDS):
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
    out = (v0 ^ v1 ^ v2 ^ v3).to_bytes(8, "little")
    if outlen == 8:
        return out

    v1 ^= 0xDD
    for _ in range(_D_ROUNDS):
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
    return out + (v0 ^ v1 ^ v2 ^ v3).to_bytes(8, "little")