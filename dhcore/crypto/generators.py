"""Safe-prime DH parameter generation and well-known MODP groups."""

import logging
import random as _random
from typing import Optional, Tuple

from dhcore.common import config
from dhcore.common.errors import InvalidParameterError
from .bignum import (
    SMALL_PRIMES,
    is_probable_prime,
    naf_weight,
    random_bits,
    random_in_range,
    random_prime,
)
from .dh import DHParameters
from .securerandom import get_default_random

logger = logging.getLogger(__name__)

# RFC 2409 section 6.2, Oakley group 2 (1024-bit MODP)
OAKLEY_GROUP2_P = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381FFFFFFFFFFFFFFFF", 16
)

# RFC 3526 section 3, group 14 (2048-bit MODP)
MODP_GROUP14_P = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718"
    "3995497CEA956AE515D2261898FA051015728E5A8AACAA68FFFFFFFFFFFFFFFF", 16
)

MODP_GENERATOR = 2


def oakley_group2() -> DHParameters:
    """1024-bit Oakley group 2 (g = 2, q = (p - 1) / 2)."""
    return DHParameters(OAKLEY_GROUP2_P, MODP_GENERATOR, (OAKLEY_GROUP2_P - 1) // 2, j=2)


def rfc3526_group14() -> DHParameters:
    """2048-bit RFC 3526 group 14 (g = 2, q = (p - 1) / 2)."""
    return DHParameters(MODP_GROUP14_P, MODP_GENERATOR, (MODP_GROUP14_P - 1) // 2, j=2)


def _sieved_candidate(q_length: int, rng: _random.Random) -> int:
    """
    Random q_length-bit q with q = 2 mod 3 such that neither q nor 2q + 1
    has a factor among SMALL_PRIMES.
    """
    q = random_bits(q_length, rng) | (1 << (q_length - 1)) | 1

    rem3 = q % 3
    if rem3 != 2:
        q += 2 * rem3 + 2

    while True:
        for prime in SMALL_PRIMES[2:]:
            rem = q % prime
            # rem == prime >> 1 means prime divides 2q + 1
            if rem == 0 or rem == prime >> 1:
                break
        else:
            return q
        q += 6


def generate_safe_primes(size: int, certainty: int, rng: _random.Random) -> Tuple[int, int]:
    """
    Find a safe prime p = 2q + 1 of exactly `size` bits.

    Args:
        size: bit length of p (>= 4)
        certainty: primality error bound exponent for p
        rng: randomness source

    Returns:
        (p, q) tuple, both probable primes
    """
    if size < 4:
        raise InvalidParameterError("size", "safe primes need at least 4 bits")

    q_length = size - 1
    min_weight = size >> 2

    if size <= 32:
        while True:
            q = random_prime(q_length, 2, rng)
            p = (q << 1) + 1

            if not is_probable_prime(p, certainty, rng):
                continue
            if certainty > 2 and not is_probable_prime(q, certainty, rng):
                continue

            return p, q

    attempts = 0
    while True:
        attempts += 1
        q = _sieved_candidate(q_length, rng)

        if q.bit_length() != q_length:
            continue
        if not is_probable_prime(q, 2, rng):
            continue

        p = (q << 1) + 1
        if not is_probable_prime(p, certainty, rng):
            continue
        if certainty > 2 and not is_probable_prime(q, certainty - 2, rng):
            continue

        # low-weight primes may be weak against a special number field sieve
        if naf_weight(p) < min_weight:
            continue

        logger.debug(f"Found {size}-bit safe prime after {attempts} candidates")
        return p, q


def select_generator(p: int, q: int, rng: _random.Random) -> int:
    """
    Pick g generating the order-q subgroup of a safe-prime group.

    RFC 2631 2.2.1.2 (and Handbook of Applied Cryptography 4.81):
    g = h^2 mod p for random h, retried while g == 1.
    """
    p_minus_two = p - 2
    while True:
        h = random_in_range(2, p_minus_two, rng)
        g = pow(h, 2, p)
        if g != 1:
            return g


class DHParametersGenerator:
    """Generates fresh safe-prime DHParameters (cofactor j = 2)."""

    def __init__(
        self,
        size: Optional[int] = None,
        certainty: Optional[int] = None,
        random: Optional[_random.Random] = None,
    ):
        """
        Args:
            size: bit length of p (default DHCORE_DH_DEFAULT_BITS)
            certainty: primality certainty (default DHCORE_DH_CERTAINTY)
            random: randomness source (default process SecureRandom)
        """
        self.size = size if size is not None else config.DH_DEFAULT_BITS
        self.certainty = certainty if certainty is not None else config.DH_CERTAINTY
        self.random = random if random is not None else get_default_random()

    def generate(self) -> DHParameters:
        logger.debug(f"Generating {self.size}-bit DH parameters (certainty {self.certainty})")

        # find a safe prime p where p = 2*q + 1, where p and q are prime
        p, q = generate_safe_primes(self.size, self.certainty, self.random)
        g = select_generator(p, q, self.random)

        return DHParameters(p, g, q, j=2)
