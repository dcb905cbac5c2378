"""Generate (or print well-known) Diffie-Hellman domain parameters."""

import os
import sys
import time
import argparse
import logging

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dhcore.common import config
from dhcore.common.errors import CryptoError
from dhcore.crypto.dh import DHParameters
from dhcore.crypto.generators import (
    DHParametersGenerator,
    oakley_group2,
    rfc3526_group14,
)

logger = logging.getLogger(__name__)

WELL_KNOWN = {
    "oakley2": oakley_group2,
    "group14": rfc3526_group14,
}


def describe(params: DHParameters) -> str:
    """Human-readable hex dump of p, q, g."""
    lines = [
        f"p ({params.p.bit_length()} bits):",
        f"    {params.p:x}",
        f"g: {params.g:x}",
    ]
    if params.q is not None:
        lines.append(f"q ({params.q.bit_length()} bits):")
        lines.append(f"    {params.q:x}")
    if params.j is not None:
        lines.append(f"j: {params.j}")
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate safe-prime Diffie-Hellman parameters"
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=config.DH_DEFAULT_BITS,
        help=f"Bit length of the modulus (default: {config.DH_DEFAULT_BITS})"
    )
    parser.add_argument(
        "--certainty",
        type=int,
        default=config.DH_CERTAINTY,
        help=f"Primality certainty (default: {config.DH_CERTAINTY})"
    )
    parser.add_argument(
        "--well-known",
        choices=sorted(WELL_KNOWN),
        default=None,
        help="Print a standard group instead of generating one"
    )
    args = parser.parse_args(argv)

    config.configure_logging()

    try:
        if args.well_known:
            params = WELL_KNOWN[args.well_known]()
        else:
            print(f"[*] Generating {args.bits}-bit safe-prime group...")
            started = time.monotonic()
            params = DHParametersGenerator(args.bits, args.certainty).generate()
            print(f"[+] Done in {time.monotonic() - started:.1f}s")
    except CryptoError as e:
        logger.error(f"Parameter generation failed: {e}")
        return 1

    print(describe(params))
    return 0


if __name__ == "__main__":
    sys.exit(main())
