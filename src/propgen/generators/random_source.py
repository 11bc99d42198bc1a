"""Random sources consumed by generators."""

import math
import random
from typing import Protocol, runtime_checkable

from propgen.errors import InvalidArgumentError


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce a uniform double in [0, 1)."""

    def next_double(self) -> float:
        ...


class Random:
    """Seedable RandomSource backed by the standard library generator."""

    def __init__(self, seed: int | None = None):
        """Initialize the source.

        Args:
            seed: Optional random seed for deterministic generation
        """
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    @seed.setter
    def seed(self, value: int | None) -> None:
        self._seed = value
        self._rng = random.Random(value)

    def next_double(self) -> float:
        return self._rng.random()

    def __repr__(self) -> str:
        return f"Random(seed={self._seed!r})"


def rand_range(rng: RandomSource, lower: int, upper: int) -> int:
    """Uniform integer in [lower, upper].

    Raises:
        InvalidArgumentError: If lower > upper
    """
    if lower > upper:
        raise InvalidArgumentError(f"lower bound {lower} exceeds upper bound {upper}")
    factor = rng.next_double()
    value = math.floor(lower + (factor * (1.0 + upper) - factor * lower))
    return max(lower, min(int(value), upper))
