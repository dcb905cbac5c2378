"""dhcore: SHA-1 digest engine and validated Diffie-Hellman domain parameters."""

__version__ = "1.0.0"
