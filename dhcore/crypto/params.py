"""Pairing of a parameter object with the randomness source that goes with it."""

from dhcore.common.errors import NullArgumentError
from .securerandom import SecureRandom, get_default_random

_DEFAULT = object()


class ParametersWithRandom:
    """
    Binds parameters (e.g. DHParameters) to a SecureRandom.

    Neither object is copied: the accessors hand back exactly the
    instances given to the constructor.
    """

    __slots__ = ("_parameters", "_random")

    def __init__(self, parameters, random=_DEFAULT):
        """
        Args:
            parameters: the parameter object to carry
            random: SecureRandom to bind; omitted means the process default

        Raises:
            NullArgumentError if parameters or an explicit random is None
        """
        if parameters is None:
            raise NullArgumentError("parameters")
        if random is _DEFAULT:
            random = get_default_random()
        if random is None:
            raise NullArgumentError("random")

        self._parameters = parameters
        self._random: SecureRandom = random

    @property
    def parameters(self):
        return self._parameters

    @property
    def random(self) -> SecureRandom:
        return self._random

    def __repr__(self) -> str:
        return f"ParametersWithRandom({self._parameters!r}, {type(self._random).__name__})"
