"""Number-theoretic helpers over Python ints: primality, random ranges, NAF weight."""

import random as _random
from typing import List

from dhcore.common.errors import InvalidParameterError


def _sieve(limit: int) -> List[int]:
    marks = bytearray([1]) * limit
    marks[0:2] = b"\x00\x00"
    for i in range(2, int(limit ** 0.5) + 1):
        if marks[i]:
            marks[i * i::i] = bytearray(len(marks[i * i::i]))
    return [i for i, flag in enumerate(marks) if flag]


SMALL_PRIMES = _sieve(1000)


def bit_at(n: int, index: int) -> bool:
    """True if bit `index` of n is set."""
    return (n >> index) & 1 == 1


def random_bits(bits: int, rng: _random.Random) -> int:
    """Uniform random integer in [0, 2**bits)."""
    if bits < 0:
        raise InvalidParameterError("bits", "bit count cannot be negative")
    return rng.getrandbits(bits) if bits else 0


def random_in_range(low: int, high: int, rng: _random.Random) -> int:
    """Uniform random integer in [low, high] (inclusive)."""
    if low > high:
        raise InvalidParameterError("high", f"empty range [{low}, {high}]")
    return low + rng.randrange(high - low + 1)


def naf_weight(n: int) -> int:
    """Number of non-zero digits in the non-adjacent form of n."""
    if n == 0:
        return 0
    n = abs(n)
    return bin(((n << 1) + n) ^ n).count("1")


def is_probable_prime(n: int, certainty: int, rng: _random.Random) -> bool:
    """
    Miller-Rabin probable-prime test.

    Args:
        n: candidate
        certainty: error probability is at most 2**-certainty
        rng: source for the random bases

    Returns:
        True if n is (probably) prime
    """
    if n < 2:
        return False
    for prime in SMALL_PRIMES:
        if n == prime:
            return True
        if n % prime == 0:
            return False
    if certainty < 1:
        return True

    r = 0
    s = n - 1
    while s % 2 == 0:
        r += 1
        s //= 2

    # each round wrongly passes a composite with probability <= 1/4
    rounds = (certainty + 1) // 2
    for _ in range(rounds):
        a = random_in_range(2, n - 2, rng)
        x = pow(a, s, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def random_prime(bits: int, certainty: int, rng: _random.Random) -> int:
    """Random probable prime of exactly `bits` bits."""
    if bits < 2:
        raise InvalidParameterError("bits", "a prime needs at least 2 bits")
    if bits == 2:
        return random_in_range(2, 3, rng)

    top = 1 << (bits - 1)
    while True:
        candidate = random_bits(bits, rng) | top | 1
        if is_probable_prime(candidate, certainty, rng):
            return candidate
