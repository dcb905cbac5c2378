"""Cryptographic primitives: digest engine, SHA-1, secure randomness, DH parameters."""

from .digest import Digest, BlockCompressor, GeneralDigest
from .sha1 import SHA1Compressor, new_sha1, sha1
from .hashdigest import HashDigest, create_digest
from .securerandom import (
    OsRandomGenerator,
    DigestRandomGenerator,
    SecureRandom,
    get_default_random,
)
from .dh import DHParameters, DHValidationParameters
from .params import ParametersWithRandom
from .generators import (
    DHParametersGenerator,
    generate_safe_primes,
    select_generator,
    oakley_group2,
    rfc3526_group14,
)

__all__ = [
    "Digest",
    "BlockCompressor",
    "GeneralDigest",
    "SHA1Compressor",
    "new_sha1",
    "sha1",
    "HashDigest",
    "create_digest",
    "OsRandomGenerator",
    "DigestRandomGenerator",
    "SecureRandom",
    "get_default_random",
    "DHParameters",
    "DHValidationParameters",
    "ParametersWithRandom",
    "DHParametersGenerator",
    "generate_safe_primes",
    "select_generator",
    "oakley_group2",
    "rfc3526_group14",
]
