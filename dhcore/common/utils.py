"""Byte-order helpers: be_to_uint32, uint32_to_be, uint64_to_le, rotl32, check_range."""

import hmac
from typing import Union

from .errors import OutOfRangeError

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

Buffer = Union[bytes, bytearray, memoryview]


def be_to_uint32(data: Buffer, offset: int) -> int:
    """Read four bytes at offset as a big-endian unsigned 32-bit word."""
    return (
        (data[offset] << 24)
        | (data[offset + 1] << 16)
        | (data[offset + 2] << 8)
        | data[offset + 3]
    )


def uint32_to_be(value: int, out: bytearray, offset: int) -> None:
    """Write value into out[offset:offset + 4] in big-endian order."""
    out[offset] = (value >> 24) & 0xFF
    out[offset + 1] = (value >> 16) & 0xFF
    out[offset + 2] = (value >> 8) & 0xFF
    out[offset + 3] = value & 0xFF


def uint64_to_le(value: int) -> bytes:
    """Encode value as 8 little-endian bytes (two's complement for negatives)."""
    return (value & MASK64).to_bytes(8, byteorder='little')


def rotl32(x: int, n: int) -> int:
    """Rotate a 32-bit word left by n bits."""
    return ((x << n) | (x >> (32 - n))) & MASK32


def check_range(size: int, offset: int, length: int, what: str = "buffer") -> None:
    """
    Ensure [offset, offset + length) lies inside a buffer of the given size.

    Raises:
        OutOfRangeError if the window is negative or extends past the end
    """
    if offset < 0:
        raise OutOfRangeError(f"{what} offset cannot be negative: {offset}")
    if length < 0:
        raise OutOfRangeError(f"{what} length cannot be negative: {length}")
    if offset + length > size:
        raise OutOfRangeError(
            f"{what} too short: offset {offset} + length {length} > size {size}"
        )


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """Constant-time comparison of two digests."""
    return hmac.compare_digest(bytes(a), bytes(b))
