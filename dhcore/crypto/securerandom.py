"""
Secure randomness: OS-entropy and digest-based generators behind SecureRandom.

The process-wide default instance is created lazily on first use, seeded
exactly once from OS entropy, and never re-seeded implicitly afterwards.
"""

import itertools
import logging
import os
import random
import threading
import time
from typing import Optional, Protocol, Union

from dhcore.common import config
from dhcore.common.errors import InvalidParameterError, NullArgumentError
from dhcore.common.utils import check_range, uint64_to_le
from .digest import Digest
from .hashdigest import create_digest

logger = logging.getLogger(__name__)

SeedMaterial = Union[bytes, bytearray, int]

_RECIP_BPF = 2 ** -53

# seeded from the clock; next() on itertools.count is atomic under the GIL
_counter = itertools.count(time.time_ns())

_default_random: Optional["SecureRandom"] = None
_default_lock = threading.Lock()


class RandomGenerator(Protocol):
    def add_seed_material(self, seed: SeedMaterial) -> None: ...

    def next_bytes(self, buf: bytearray, start: int = 0, length: Optional[int] = None) -> None: ...


class OsRandomGenerator:
    """Generator reading straight from the operating system's CSPRNG."""

    def add_seed_material(self, seed: SeedMaterial) -> None:
        # the OS pool does not take caller seed material
        pass

    def next_bytes(self, buf: bytearray, start: int = 0, length: Optional[int] = None) -> None:
        if length is None:
            length = len(buf) - start
        check_range(len(buf), start, length)
        buf[start:start + length] = os.urandom(length)


class DigestRandomGenerator:
    """
    Hash-DRBG style generator built on any Digest.

    Keeps a seed and a state buffer, each digest_size bytes long. Every
    request regenerates the state from (state counter, state, seed), and
    the seed itself is cycled every CYCLE_COUNT state generations.
    """

    CYCLE_COUNT = 10

    def __init__(self, digest: Digest):
        if digest is None:
            raise NullArgumentError("digest")

        self._digest = digest
        self._lock = threading.Lock()

        self._seed = bytearray(digest.digest_size)
        self._seed_counter = 1

        self._state = bytearray(digest.digest_size)
        self._state_counter = 1

    @property
    def algorithm_name(self) -> str:
        return self._digest.algorithm_name

    def add_seed_material(self, seed: SeedMaterial) -> None:
        """Mix bytes or a 64-bit integer into the seed."""
        with self._lock:
            if isinstance(seed, int):
                self._digest_add_counter(seed)
            else:
                self._digest_update(seed)
            self._digest_update(self._seed)
            self._digest.do_final(self._seed, 0)

    def next_bytes(self, buf: bytearray, start: int = 0, length: Optional[int] = None) -> None:
        if length is None:
            length = len(buf) - start
        check_range(len(buf), start, length)

        with self._lock:
            self._generate_state()

            pos = start
            end = start + length
            state_len = len(self._state)
            while pos < end:
                take = min(state_len, end - pos)
                buf[pos:pos + take] = self._state[:take]
                pos += take
                if pos < end:
                    self._generate_state()

    def _cycle_seed(self) -> None:
        self._digest_update(self._seed)
        self._digest_add_counter(self._seed_counter)
        self._seed_counter += 1
        self._digest.do_final(self._seed, 0)

    def _generate_state(self) -> None:
        self._digest_add_counter(self._state_counter)
        self._state_counter += 1
        self._digest_update(self._state)
        self._digest_update(self._seed)
        self._digest.do_final(self._state, 0)

        if self._state_counter % self.CYCLE_COUNT == 0:
            self._cycle_seed()

    def _digest_add_counter(self, value: int) -> None:
        self._digest.block_update(uint64_to_le(value))

    def _digest_update(self, data: Union[bytes, bytearray]) -> None:
        self._digest.block_update(data, 0, len(data))


def _create_prng(algorithm_name: str) -> DigestRandomGenerator:
    digest = create_digest(algorithm_name)
    prng = DigestRandomGenerator(digest)
    prng.add_seed_material(next(_counter))
    prng.add_seed_material(os.urandom(digest.digest_size))
    logger.debug(f"Seeded {algorithm_name} digest PRNG from OS entropy")
    return prng


class SecureRandom(random.Random):
    """
    random.Random front-end over a RandomGenerator.

    Inherits randrange/randint/choice/shuffle from random.Random, all of
    them driven by getrandbits() on the underlying generator. State
    save/restore is not supported.
    """

    def __init__(self, generator: Optional[RandomGenerator] = None):
        """
        Args:
            generator: byte source; defaults to a digest PRNG over the
                configured DHCORE_PRNG_DIGEST, auto-seeded from OS entropy
        """
        if generator is None:
            generator = _create_prng(config.PRNG_DIGEST)
        self._generator = generator
        super().__init__()

    @property
    def generator(self) -> RandomGenerator:
        return self._generator

    def seed(self, a=None, version=2):
        """Mix a into the generator; seed(None) is a no-op."""
        if a is None:
            return
        self.set_seed(a)

    def set_seed(self, seed: SeedMaterial) -> None:
        if isinstance(seed, str):
            seed = seed.encode('utf-8')
        self._generator.add_seed_material(seed)

    def getstate(self):
        raise NotImplementedError("SecureRandom state cannot be saved")

    def setstate(self, state):
        raise NotImplementedError("SecureRandom state cannot be restored")

    def generate_seed(self, length: int) -> bytes:
        """Fresh seed bytes straight from OS entropy."""
        return os.urandom(length)

    def next_bytes(self, length: int) -> bytes:
        buf = bytearray(length)
        self._generator.next_bytes(buf, 0, length)
        return bytes(buf)

    def fill(self, buf: bytearray, offset: int = 0, length: Optional[int] = None) -> None:
        """Overwrite buf[offset:offset + length] with random bytes."""
        self._generator.next_bytes(buf, offset, length)

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        if k == 0:
            return 0
        num_bytes = (k + 7) // 8
        x = int.from_bytes(self.next_bytes(num_bytes), 'big')
        return x >> (num_bytes * 8 - k)

    def random(self) -> float:
        return self.getrandbits(53) * _RECIP_BPF

    def next_int(self) -> int:
        """Signed 32-bit integer."""
        value = self.getrandbits(32)
        return value - (1 << 32) if value & 0x80000000 else value

    def next_long(self) -> int:
        """Signed 64-bit integer."""
        value = self.getrandbits(64)
        return value - (1 << 64) if value >> 63 else value

    def next_below(self, bound: int) -> int:
        """Uniform integer in [0, bound); 0 when bound < 2."""
        if bound < 0:
            raise InvalidParameterError("bound", "cannot be negative")
        if bound < 2:
            return 0
        return self.randrange(bound)


def get_default_random() -> SecureRandom:
    """Process-wide SecureRandom, created and seeded on first call."""
    global _default_random
    if _default_random is None:
        with _default_lock:
            if _default_random is None:
                _default_random = SecureRandom()
                logger.debug("Initialized process-default SecureRandom")
    return _default_random
