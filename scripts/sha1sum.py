"""Stream files through the dhcore SHA-1 engine and print their digests."""

import os
import sys
import argparse
import logging

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dhcore.common import config
from dhcore.common.errors import CryptoError
from dhcore.common.utils import constant_time_compare
from dhcore.crypto.sha1 import new_sha1

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def sha1_file(path: str) -> str:
    """
    Compute the SHA-1 of a file without loading it into memory.

    Args:
        path: file to hash ("-" reads stdin)

    Returns:
        hex digest
    """
    digest = new_sha1()
    stream = sys.stdin.buffer if path == "-" else open(path, "rb")
    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            digest.block_update(chunk, 0, len(chunk))
    finally:
        if stream is not sys.stdin.buffer:
            stream.close()

    logger.debug(f"Hashed {digest.byte_count} bytes from {path}")
    return digest.hexdigest()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Print SHA-1 digests computed by the dhcore digest engine"
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Files to hash (use - for stdin)"
    )
    parser.add_argument(
        "--expect",
        default=None,
        help="Expected hex digest; exit 1 if any file differs"
    )
    args = parser.parse_args(argv)

    expected = None
    if args.expect is not None:
        try:
            expected = bytes.fromhex(args.expect)
        except ValueError:
            parser.error(f"--expect is not a hex digest: {args.expect}")

    config.configure_logging()

    ok = True
    for path in args.files:
        try:
            hexdigest = sha1_file(path)
        except (OSError, CryptoError) as e:
            logger.error(f"{path}: {e}")
            ok = False
            continue

        print(f"{hexdigest}  {path}")
        if expected is not None:
            if not constant_time_compare(bytes.fromhex(hexdigest), expected):
                print(f"[-] {path}: digest mismatch", file=sys.stderr)
                ok = False

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
