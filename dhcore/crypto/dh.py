"""Diffie-Hellman domain parameters: validated, immutable (p, g, q, j, m, l)."""

import logging
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import dh
from pydantic import BaseModel, ConfigDict, ValidationError

from dhcore.common.errors import InvalidParameterError, NullArgumentError
from .bignum import bit_at

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_LENGTH = 160

# smallest modulus cryptography's DHParameterNumbers accepts
MIN_INTEROP_MODULUS_BITS = 512


class DHValidationParameters(BaseModel):
    """Seed and counter proving p and g were generated verifiably."""
    model_config = ConfigDict(frozen=True)

    seed: bytes
    counter: int

    def __init__(self, **data):
        """
        Raises:
            NullArgumentError if seed is None
            InvalidParameterError if a field has the wrong type
        """
        if data.get("seed") is None:
            raise NullArgumentError("seed")
        try:
            super().__init__(**data)
        except ValidationError as e:
            error = e.errors()[0]
            loc = error.get("loc") or ("validation",)
            raise InvalidParameterError(str(loc[0]), error["msg"]) from e


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_integer(field: str, value) -> int:
    if not _is_integer(value):
        raise InvalidParameterError(field, f"expected an integer, got {type(value).__name__}")
    return value


def _default_m(l: int, p_bits: int) -> int:
    m = DEFAULT_MINIMUM_LENGTH if l == 0 else min(l, DEFAULT_MINIMUM_LENGTH)
    # small groups cannot hold a 160-bit exponent; cap the default below |p|
    return max(0, min(m, p_bits - 1))


class DHParameters:
    """
    Immutable description of a Diffie-Hellman group.

    All range checks run once, at construction; afterwards the object can
    neither change nor become invalid, so it is safe to share between
    threads. Equality and hashing use (p, g, q) only.

    Note: when both q and j are given, p = j*q + 1 is NOT verified.
    """

    __slots__ = ("_p", "_g", "_q", "_j", "_m", "_l", "_validation")

    def __init__(
        self,
        p: int,
        g: int,
        q: Optional[int] = None,
        m: Optional[int] = None,
        l: int = 0,
        j: Optional[int] = None,
        validation: Optional[DHValidationParameters] = None,
    ):
        """
        Args:
            p: odd prime modulus
            g: generator, 2 <= g <= p - 2
            q: order of the subgroup generated by g, if known
            m: minimum private exponent bit length; None selects the
                default (160, or l when l is smaller)
            l: exact private exponent bit length, 0 when unspecified
            j: subgroup cofactor, if known
            validation: generation seed/counter, if any

        Raises:
            NullArgumentError if p or g is None
            InvalidParameterError naming the first field that fails
        """
        if p is None:
            raise NullArgumentError("p")
        if g is None:
            raise NullArgumentError("g")

        # each field is type-checked right before its range check, so the
        # first broken rule in p, g, q, m, l, j order is the one reported
        p = _check_integer("p", p)
        if not bit_at(p, 0):
            raise InvalidParameterError("p", "field must be an odd prime")
        p_bits = p.bit_length()

        g = _check_integer("g", g)
        if g < 2 or g > p - 2:
            raise InvalidParameterError("g", "generator must be in the range [2, p - 2]")

        if q is not None:
            q = _check_integer("q", q)
            if q.bit_length() >= p_bits:
                raise InvalidParameterError("q", "q too big to be a factor of (p - 1)")

        if m is None:
            m = _default_m(l if _is_integer(l) else 0, p_bits)
        m = _check_integer("m", m)
        if m >= p_bits:
            raise InvalidParameterError("m", "m value must be < bitlength of p")

        l = _check_integer("l", l)
        if l != 0:
            if l >= p_bits:
                raise InvalidParameterError("l", "when l value specified, it must be < bitlength of p")
            if l < m:
                raise InvalidParameterError("l", "when l value specified, it may not be less than m value")
        if j is not None:
            j = _check_integer("j", j)
            if j < 2:
                raise InvalidParameterError("j", "subgroup factor must be >= 2")

        object.__setattr__(self, "_p", p)
        object.__setattr__(self, "_g", g)
        object.__setattr__(self, "_q", q)
        object.__setattr__(self, "_j", j)
        object.__setattr__(self, "_m", m)
        object.__setattr__(self, "_l", l)
        object.__setattr__(self, "_validation", validation)

        logger.debug(f"DH parameters accepted: {p_bits}-bit p, q={'set' if q is not None else 'unset'}, m={m}, l={l}")

    @property
    def p(self) -> int:
        return self._p

    @property
    def g(self) -> int:
        return self._g

    @property
    def q(self) -> Optional[int]:
        return self._q

    @property
    def j(self) -> Optional[int]:
        return self._j

    @property
    def m(self) -> int:
        return self._m

    @property
    def l(self) -> int:  # noqa: E743
        return self._l

    @property
    def validation(self) -> Optional[DHValidationParameters]:
        return self._validation

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if other is self:
            return True
        if not isinstance(other, DHParameters):
            return NotImplemented
        return (self._p, self._g, self._q) == (other._p, other._g, other._q)

    def __hash__(self):
        return hash((self._p, self._g, self._q))

    def __repr__(self) -> str:
        q_desc = f"{self._q.bit_length()}-bit" if self._q is not None else "None"
        return f"DHParameters(p=<{self._p.bit_length()}-bit>, g={self._g}, q={q_desc})"

    def to_parameter_numbers(self) -> dh.DHParameterNumbers:
        """
        Equivalent cryptography DHParameterNumbers (p, g, q).

        Raises:
            InvalidParameterError if p is shorter than cryptography accepts
        """
        if self._p.bit_length() < MIN_INTEROP_MODULUS_BITS:
            raise InvalidParameterError(
                "p", f"cryptography interop needs p of at least {MIN_INTEROP_MODULUS_BITS} bits"
            )
        return dh.DHParameterNumbers(self._p, self._g, self._q)

    @classmethod
    def from_parameter_numbers(cls, numbers: dh.DHParameterNumbers) -> "DHParameters":
        """Build (and fully validate) parameters from cryptography numbers."""
        if numbers is None:
            raise NullArgumentError("numbers")
        return cls(numbers.p, numbers.g, numbers.q)
