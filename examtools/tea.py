"""The Tiny Encryption Algorithm on 64-bit blocks with a 128-bit key."""

from __future__ import annotations

from collections.abc import Sequence

_MASK32 = 0xFFFFFFFF
_DELTA = 0x9E3779B9
_ROUNDS = 32
_DECRYPT_SUM = (_DELTA * _ROUNDS) & _MASK32


def _check(block: Sequence[int], key: Sequence[int]) -> None:
    if len(block) != 2:
        raise ValueError("a block is two 32-bit words")
    if len(key) != 4:
        raise ValueError("a key is four 32-bit words")


def encipher(block: Sequence[int], key: Sequence[int]) -> tuple[int, int]:
    """Encrypt a block of two 32-bit words with a key of four 32-bit words."""
    _check(block, key)
    y, z = (word & _MASK32 for word in block)
    a, b, c, d = (word & _MASK32 for word in key)
    total = 0
    for _ in range(_ROUNDS):
        total = (total + _DELTA) & _MASK32
        y = (y + ((((z << 4) + a) ^ (z + total) ^ ((z >> 5) + b)) & _MASK32)) & _MASK32
        z = (z + ((((y << 4) + c) ^ (y + total) ^ ((y >> 5) + d)) & _MASK32)) & _MASK32
    return y, z


def decipher(block: Sequence[int], key: Sequence[int]) -> tuple[int, int]:
    """Decrypt a block produced by :func:`encipher` with the same key."""
    _check(block, key)
    y, z = (word & _MASK32 for word in block)
    a, b, c, d = (word & _MASK32 for word in key)
    total = _DECRYPT_SUM
    for _ in range(_ROUNDS):
        z = (z - ((((y << 4) + c) ^ (y + total) ^ ((y >> 5) + d)) & _MASK32)) & _MASK32
        y = (y - ((((z << 4) + a) ^ (z + total) ^ ((z >> 5) + b)) & _MASK32)) & _MASK32
        total = (total - _DELTA) & _MASK32
    return y, z