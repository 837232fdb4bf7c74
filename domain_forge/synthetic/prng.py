"""
SeededPRNG: deterministic, reseedable pseudo-random source.

Mulberry32 over a single unsigned 32-bit state. Identical seeds give identical
sequences for the lifetime of the process. String seeds are folded to 32 bits
with a djb2-xor hash over UTF-16 code units.
"""

import math
import time
from typing import Mapping, Union

from ..errors import InvalidParameterError
from . import categorical, statistical

Seed = Union[int, str]

MASK32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0
MULBERRY_INCREMENT = 0x6D2B79F5
DJB2_INIT = 5381


def _imul32(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & MASK32


def hash_string(s: str) -> int:
    """
    Fold a string to an unsigned 32-bit integer.

    Order- and content-sensitive, not cryptographic. Iterates UTF-16 code
    units so characters outside the BMP hash as their surrogate pairs.
    """
    h = DJB2_INIT
    data = s.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _imul32(h, 33) ^ unit
    return h & MASK32


def seed_to_state(seed: Seed) -> int:
    """Reduce an integer or string seed to the 32-bit generator state."""
    if isinstance(seed, bool) or not isinstance(seed, (int, str)):
        raise InvalidParameterError(
            f"Seed must be an int or str, got {type(seed).__name__}"
        )
    if isinstance(seed, str):
        return hash_string(seed)
    return seed & MASK32


def default_seed() -> int:
    """Current wall-clock time in milliseconds, reduced to 32 bits."""
    return (time.time_ns() // 1_000_000) & MASK32


class SeededPRNG:
    """
    Single-stream seeded generator.

    Every draw advances the state by one step; each draw is O(1).
    """

    def __init__(self, seed: Seed):
        """
        Initialize generator.

        Args:
            seed: Integer (reduced modulo 2**32) or string (hashed)
        """
        self._seed = seed_to_state(seed)
        self._state = self._seed

    @property
    def seed(self) -> int:
        """The 32-bit integer the current stream was started from."""
        return self._seed

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        self._state = (self._state + MULBERRY_INCREMENT) & MASK32
        z = self._state
        z = _imul32(z ^ (z >> 15), z | 1)
        z ^= (z + _imul32(z ^ (z >> 7), z | 61)) & MASK32
        return ((z ^ (z >> 14)) & MASK32) / TWO_POW_32

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value] inclusive."""
        if min_value > max_value:
            raise InvalidParameterError(
                f"min ({min_value}) must not exceed max ({max_value})"
            )
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def uniform(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        return statistical.uniform(self, {"min": min_value, "max": max_value})

    def gaussian(self, mean: float, std_dev: float) -> float:
        """Return a sample from N(mean, std_dev^2) via Box-Muller."""
        return statistical.gaussian(self, {"mean": mean, "std_dev": std_dev})

    def weighted(self, weights: Mapping[str, float]) -> str:
        """Return a key of weights chosen in proportion to its weight."""
        return categorical.sample(self, weights)

    def reseed(self, seed: Seed) -> None:
        """Replace the state; the new stream does not depend on prior draws."""
        self._seed = seed_to_state(seed)
        self._state = self._seed

    def __repr__(self) -> str:
        return f"SeededPRNG(seed={self._seed}, state={self._state})"
