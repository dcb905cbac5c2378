"""Common utilities, settings and error types."""

from .errors import (
    CryptoError,
    NullArgumentError,
    InvalidParameterError,
    OutOfRangeError,
)
from .utils import (
    MASK32,
    MASK64,
    be_to_uint32,
    uint32_to_be,
    uint64_to_le,
    rotl32,
    check_range,
    constant_time_compare,
)

__all__ = [
    "CryptoError",
    "NullArgumentError",
    "InvalidParameterError",
    "OutOfRangeError",
    "MASK32",
    "MASK64",
    "be_to_uint32",
    "uint32_to_be",
    "uint64_to_le",
    "rotl32",
    "check_range",
    "constant_time_compare",
]
