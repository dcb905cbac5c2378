"""Environment-driven settings (.env supported through python-dotenv)."""

import os
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

LOG_LEVEL = os.getenv("DHCORE_LOG_LEVEL", "INFO").upper()
PRNG_DIGEST = os.getenv("DHCORE_PRNG_DIGEST", "SHA-256")
DH_CERTAINTY = int(os.getenv("DHCORE_DH_CERTAINTY", "80"))
DH_DEFAULT_BITS = int(os.getenv("DHCORE_DH_DEFAULT_BITS", "2048"))

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def configure_logging(level: str = None):
    """Configure root logging for command-line entry points."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT
    )
