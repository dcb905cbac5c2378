"""Exception taxonomy shared by the digest engine and the DH parameter model."""

from typing import Optional


class CryptoError(Exception):
    """Base class for every error raised by dhcore."""
    pass


class NullArgumentError(CryptoError, ValueError):
    """Raised when a required argument is None."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} must not be None")


class InvalidParameterError(CryptoError, ValueError):
    """Raised when a value fails a range or structural check."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class OutOfRangeError(CryptoError, IndexError):
    """Raised when buffer offsets or lengths exceed the buffer bounds."""
    pass
