"""
Categorical sampling over a weighted map.

Weights need not sum to 1; they are normalized by the running total.
"""

import math
from typing import TYPE_CHECKING, Mapping

from ..errors import EmptyInputError, InvalidParameterError, ZeroWeightError

if TYPE_CHECKING:
    from .prng import SeededPRNG


def sample(generator: "SeededPRNG", weights: Mapping[str, float]) -> str:
    """
    Select a key of weights with probability proportional to its weight.

    Consumes exactly one draw.

    Args:
        generator: Seeded generator
        weights: Category -> non-negative weight; insertion order is the
            walk order

    Returns:
        The selected category

    Raises:
        EmptyInputError: If weights is empty
        InvalidParameterError: If any weight is negative or not finite
        ZeroWeightError: If the total weight is not positive
    """
    entries = list(weights.items())
    if not entries:
        raise EmptyInputError("Weights map must not be empty.")

    for category, weight in entries:
        if not math.isfinite(weight) or weight < 0:
            raise InvalidParameterError(
                f"Weight for {category!r} must be finite and non-negative, got {weight}"
            )

    total = sum(weight for _, weight in entries)
    if total <= 0:
        raise ZeroWeightError("Total weight must be greater than zero.")

    r = generator.next() * total
    cumulative = 0.0
    for category, weight in entries:
        cumulative += weight
        if r < cumulative:
            return category

    # floating-point boundary: r reached the final cumulative sum
    return entries[-1][0]
