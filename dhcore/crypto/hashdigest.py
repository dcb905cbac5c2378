"""Digest adapter over the cryptography library's hash primitives."""

from typing import Optional

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes

from dhcore.common.errors import InvalidParameterError
from dhcore.common.utils import Buffer, check_range
from .sha1 import new_sha1

_ALGORITHMS = {
    "SHA-1": hashes.SHA1,
    "SHA-224": hashes.SHA224,
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
}


class HashDigest:
    """
    Exposes a cryptography hash through the update/block_update/do_final surface.

    Used wherever a digest consumer (e.g. DigestRandomGenerator) needs an
    algorithm that dhcore does not implement itself.
    """

    def __init__(self, algorithm_name: str = "SHA-256"):
        """
        Args:
            algorithm_name: one of SHA-1, SHA-224, SHA-256, SHA-384, SHA-512

        Raises:
            InvalidParameterError if the algorithm is unknown
        """
        try:
            self._algorithm = _ALGORITHMS[algorithm_name]()
        except KeyError:
            raise InvalidParameterError(
                "algorithm_name", f"unsupported digest algorithm: {algorithm_name}"
            )
        self._name = algorithm_name
        self._hash = self._new_hash()

    def _new_hash(self) -> hashes.Hash:
        return hashes.Hash(self._algorithm, backend=default_backend())

    @property
    def algorithm_name(self) -> str:
        return self._name

    @property
    def digest_size(self) -> int:
        return self._algorithm.digest_size

    @property
    def byte_length(self) -> int:
        return self._algorithm.block_size

    def update(self, byte: int) -> None:
        self._hash.update(bytes((byte & 0xFF,)))

    def block_update(self, data: Buffer, offset: int = 0, length: Optional[int] = None) -> None:
        if length is None:
            length = len(data) - offset
        check_range(len(data), offset, length, "input")
        self._hash.update(bytes(data[offset:offset + length]))

    def do_final(self, output: bytearray, offset: int = 0) -> int:
        size = self.digest_size
        check_range(len(output), offset, size, "output")

        output[offset:offset + size] = self._hash.finalize()
        self.reset()

        return size

    def digest(self) -> bytes:
        out = bytearray(self.digest_size)
        self.do_final(out, 0)
        return bytes(out)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def reset(self) -> None:
        self._hash = self._new_hash()

    def copy(self) -> "HashDigest":
        clone = HashDigest.__new__(HashDigest)
        clone._algorithm = self._algorithm
        clone._name = self._name
        clone._hash = self._hash.copy()
        return clone

    def __repr__(self) -> str:
        return f"<HashDigest {self._name}>"


def create_digest(algorithm_name: str):
    """
    Build a digest engine by name.

    SHA-1 resolves to dhcore's own engine; everything else is backed by
    the cryptography library.
    """
    if algorithm_name == "SHA-1":
        return new_sha1()
    return HashDigest(algorithm_name)
