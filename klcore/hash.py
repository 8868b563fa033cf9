"""Non-cryptographic string hashes: FNV-1a and Paul Hsieh's SuperFastHash."""

from __future__ import annotations

from typing import Union

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619

Data = Union[str, bytes, bytearray, memoryview]


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _signed(byte: int) -> int:
    """Interpret an unsigned byte as a signed char."""
    return byte - 256 if byte >= 0x80 else byte


def _get16bits(data: bytes, offset: int) -> int:
    lo = _signed(data[offset])
    hi = _signed(data[offset + 1])
    return (lo | (hi << 8)) & 0xFFFF


def fnv1a(data: Data) -> int:
    """Return the 32-bit FNV-1a hash of ``data``.

    Bytes are treated as signed chars, so values of 0x80 and above are
    sign-extended before being mixed in.
    """
    result = _FNV_OFFSET
    for byte in _as_bytes(data):
        result = ((result ^ (_signed(byte) & _MASK32)) * _FNV_PRIME) & _MASK32
    return result


def hsieh(data: Data | None) -> int:
    """Return the 32-bit Hsieh SuperFastHash of ``data`` (0 for empty or None)."""
    if data is None:
        return 0
    raw = _as_bytes(data)
    length = len(raw)
    if length == 0:
        return 0

    result = length
    rem = length & 3
    pos = 0

    for _ in range(length >> 2):
        result = (result + _get16bits(raw, pos)) & _MASK32
        tmp = ((_get16bits(raw, pos + 2) << 11) ^ result) & _MASK32
        result = ((result << 16) ^ tmp) & _MASK32
        pos += 4
        result = (result + (result >> 11)) & _MASK32

    if rem == 3:
        result = (result + _get16bits(raw, pos)) & _MASK32
        result ^= (result << 16) & _MASK32
        result ^= (_signed(raw[pos + 2]) << 18) & _MASK32
        result = (result + (result >> 11)) & _MASK32
    elif rem == 2:
        result = (result + _get16bits(raw, pos)) & _MASK32
        result ^= (result << 11) & _MASK32
        result = (result + (result >> 17)) & _MASK32
    elif rem == 1:
        result = (result + _signed(raw[pos])) & _MASK32
        result ^= (result << 10) & _MASK32
        result = (result + (result >> 1)) & _MASK32

    result ^= (result << 3) & _MASK32
    result = (result + (result >> 5)) & _MASK32
    result ^= (result << 4) & _MASK32
    result = (result + (result >> 17)) & _MASK32
    result ^= (result << 25) & _MASK32
    result = (result + (result >> 6)) & _MASK32
    return result