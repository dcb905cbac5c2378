"""SHA-1 (FIPS 180-1) compression step for the GeneralDigest engine."""

from typing import List, Optional

from dhcore.common.utils import MASK32, Buffer, rotl32, uint32_to_be
from .digest import GeneralDigest

DIGEST_LENGTH = 20

INITIAL_STATE = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476, 0xc3d2e1f0)

# Additive constants
Y1 = 0x5a827999
Y2 = 0x6ed9eba1
Y3 = 0x8f1bbcdc
Y4 = 0xca62c1d6


def _f(u: int, v: int, w: int) -> int:
    return (u & v) | (~u & w)


def _h(u: int, v: int, w: int) -> int:
    return u ^ v ^ w


def _g(u: int, v: int, w: int) -> int:
    return (u & v) | (u & w) | (v & w)


ROUNDS = ((_f, Y1), (_h, Y2), (_g, Y3), (_h, Y4))


class SHA1Compressor:
    """
    Holds the five SHA-1 chaining words and compresses 16-word blocks.

    The 80-word message schedule is scratch space reused between blocks.
    """

    algorithm_name = "SHA-1"
    digest_size = DIGEST_LENGTH

    def __init__(self):
        self._x = [0] * 80
        self._state = list(INITIAL_STATE)

    def reset(self) -> None:
        self._state = list(INITIAL_STATE)
        self._x = [0] * 80

    def copy(self) -> "SHA1Compressor":
        clone = SHA1Compressor()
        clone._state = list(self._state)
        return clone

    @property
    def state(self) -> tuple:
        """Current chaining words H1..H5."""
        return tuple(self._state)

    def process_block(self, words: List[int]) -> None:
        x = self._x
        x[:16] = words

        # expand 16 word block into 80 word block
        for i in range(16, 80):
            t = x[i - 3] ^ x[i - 8] ^ x[i - 14] ^ x[i - 16]
            x[i] = ((t << 1) | (t >> 31)) & MASK32

        a, b, c, d, e = self._state

        idx = 0
        for mix, k in ROUNDS:
            for _ in range(4):
                # e = rotl(a, 5) + mix(b, c, d) + e + x[idx] + k; b = rotl(b, 30)
                e = (e + rotl32(a, 5) + mix(b, c, d) + x[idx] + k) & MASK32
                b = rotl32(b, 30)

                d = (d + rotl32(e, 5) + mix(a, b, c) + x[idx + 1] + k) & MASK32
                a = rotl32(a, 30)

                c = (c + rotl32(d, 5) + mix(e, a, b) + x[idx + 2] + k) & MASK32
                e = rotl32(e, 30)

                b = (b + rotl32(c, 5) + mix(d, e, a) + x[idx + 3] + k) & MASK32
                d = rotl32(d, 30)

                a = (a + rotl32(b, 5) + mix(c, d, e) + x[idx + 4] + k) & MASK32
                c = rotl32(c, 30)

                idx += 5

        h = self._state
        h[0] = (h[0] + a) & MASK32
        h[1] = (h[1] + b) & MASK32
        h[2] = (h[2] + c) & MASK32
        h[3] = (h[3] + d) & MASK32
        h[4] = (h[4] + e) & MASK32

    def output(self, out: bytearray, offset: int) -> None:
        for i, word in enumerate(self._state):
            uint32_to_be(word, out, offset + 4 * i)


def new_sha1(data: Optional[Buffer] = None) -> GeneralDigest:
    """
    Create a SHA-1 digest engine, optionally primed with data.

    Args:
        data: initial input to feed

    Returns:
        GeneralDigest driving a fresh SHA1Compressor
    """
    digest = GeneralDigest(SHA1Compressor())
    if data is not None:
        digest.block_update(data)
    return digest


def sha1(data: Buffer) -> bytes:
    """One-shot SHA-1 of data."""
    return new_sha1(data).digest()
