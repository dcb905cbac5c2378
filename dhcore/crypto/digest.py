"""
Incremental Merkle-Damgard digest engine.

GeneralDigest owns the byte-to-word buffering, the 16-word block and the
final padding/length encoding. The algorithm-specific work is delegated
to a BlockCompressor, which only ever sees complete 16-word blocks.

The engine is not thread-safe; concurrent update() calls corrupt the
word/byte bookkeeping without any detection.
"""

from typing import List, Optional, Protocol

from dhcore.common.utils import (
    MASK32,
    MASK64,
    Buffer,
    be_to_uint32,
    check_range,
)

BLOCK_WORDS = 16
LENGTH_WORD = 14


class Digest(Protocol):
    """Surface shared by every digest implementation in dhcore."""

    @property
    def algorithm_name(self) -> str: ...

    @property
    def digest_size(self) -> int: ...

    def update(self, byte: int) -> None: ...

    def block_update(self, data: Buffer, offset: int = 0, length: Optional[int] = None) -> None: ...

    def do_final(self, output: bytearray, offset: int = 0) -> int: ...

    def reset(self) -> None: ...


class BlockCompressor(Protocol):
    """Compression step plugged into GeneralDigest."""

    algorithm_name: str
    digest_size: int

    def reset(self) -> None: ...

    def process_block(self, words: List[int]) -> None: ...

    def output(self, out: bytearray, offset: int) -> None: ...

    def copy(self) -> "BlockCompressor": ...


class GeneralDigest:
    """
    MD4-family style digest engine (Handbook of Applied Cryptography, 344-347).

    Bytes are assembled into big-endian 32-bit words, words into 16-word
    blocks, and each full block is handed to the compressor.
    """

    BYTE_LENGTH = 64

    def __init__(self, compressor: BlockCompressor):
        """
        Args:
            compressor: algorithm-specific block compression step
        """
        self._compressor = compressor
        self._buf = bytearray(4)
        self._buf_off = 0
        self._words = [0] * BLOCK_WORDS
        self._word_off = 0
        self._byte_count = 0
        compressor.reset()

    @property
    def algorithm_name(self) -> str:
        return self._compressor.algorithm_name

    @property
    def digest_size(self) -> int:
        return self._compressor.digest_size

    @property
    def byte_length(self) -> int:
        """Internal block size in bytes."""
        return self.BYTE_LENGTH

    @property
    def byte_count(self) -> int:
        """Number of input bytes processed since the last reset."""
        return self._byte_count

    def update(self, byte: int) -> None:
        """Feed a single byte into the digest."""
        self._buf[self._buf_off] = byte & 0xFF
        self._buf_off += 1

        if self._buf_off == 4:
            self._process_word(self._buf, 0)
            self._buf_off = 0

        self._byte_count += 1

    def block_update(self, data: Buffer, offset: int = 0, length: Optional[int] = None) -> None:
        """
        Feed data[offset:offset + length] into the digest.

        Whole words are read straight from data once the pending word
        buffer has been drained; only leading and trailing fragments go
        through the byte buffer.

        Raises:
            OutOfRangeError if the window does not fit inside data
        """
        if length is None:
            length = len(data) - offset
        check_range(len(data), offset, length, "input")

        # fill the current word
        i = 0
        if self._buf_off != 0:
            while i < length:
                self._buf[self._buf_off] = data[offset + i]
                self._buf_off += 1
                i += 1
                if self._buf_off == 4:
                    self._process_word(self._buf, 0)
                    self._buf_off = 0
                    break

        # process whole words
        limit = ((length - i) & ~3) + i
        while i < limit:
            self._process_word(data, offset + i)
            i += 4

        # load in the remainder
        while i < length:
            self._buf[self._buf_off] = data[offset + i]
            self._buf_off += 1
            i += 1

        self._byte_count += length

    def finish(self) -> None:
        """
        Apply Merkle-Damgard padding and compress the final block(s).

        A 0x80 sentinel and zero bytes complete the current word; when
        fewer than two words remain free in the block an extra zero-filled
        block is compressed before the one carrying the bit length.
        """
        bit_length = (self._byte_count << 3) & MASK64

        # add the pad bytes
        self.update(0x80)
        while self._buf_off != 0:
            self.update(0)

        if self._word_off > LENGTH_WORD:
            self._process_block()

        self._words[LENGTH_WORD] = bit_length >> 32
        self._words[LENGTH_WORD + 1] = bit_length & MASK32
        self._process_block()

    def do_final(self, output: bytearray, offset: int = 0) -> int:
        """
        Finalize, write digest_size bytes into output at offset and reset.

        Returns:
            number of bytes written

        Raises:
            OutOfRangeError if output cannot hold the digest at offset
        """
        size = self.digest_size
        check_range(len(output), offset, size, "output")

        self.finish()
        self._compressor.output(output, offset)
        self.reset()

        return size

    def digest(self) -> bytes:
        """Finalize and return the digest; the engine is reset afterwards."""
        out = bytearray(self.digest_size)
        self.do_final(out, 0)
        return bytes(out)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def reset(self) -> None:
        """Restore the engine to its freshly-constructed state."""
        self._byte_count = 0
        self._buf_off = 0
        self._buf[:] = bytes(4)
        self._words = [0] * BLOCK_WORDS
        self._word_off = 0
        self._compressor.reset()

    def copy(self) -> "GeneralDigest":
        """Return an independent copy of this in-progress digest."""
        clone = GeneralDigest.__new__(GeneralDigest)
        clone._compressor = self._compressor.copy()
        clone._buf = bytearray(self._buf)
        clone._buf_off = self._buf_off
        clone._words = list(self._words)
        clone._word_off = self._word_off
        clone._byte_count = self._byte_count
        return clone

    def _process_word(self, data: Buffer, offset: int) -> None:
        self._words[self._word_off] = be_to_uint32(data, offset)
        self._word_off += 1

        if self._word_off == BLOCK_WORDS:
            self._process_block()

    def _process_block(self) -> None:
        self._compressor.process_block(self._words)

        # reset start of the block
        self._word_off = 0
        self._words = [0] * BLOCK_WORDS

    def __repr__(self) -> str:
        return f"<GeneralDigest {self.algorithm_name} bytes={self._byte_count}>"
