"""Seeded string hashing used to make corpus generation reproducible."""

from __future__ import annotations

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 16777619
_MASK_32 = 0xFFFFFFFF


def _code_units(value: str) -> list[int]:
    data = value.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def fnv1a_32(value: str) -> int:
    """Return the 32-bit FNV-1a hash of ``value`` over its UTF-16 code units."""
    accumulator = FNV_OFFSET_BASIS
    for unit in _code_units(value):
        accumulator ^= unit
        accumulator = (accumulator * FNV_PRIME) & _MASK_32
    return accumulator
