"""
Statistical sampling: Gaussian, Uniform and Poisson draws.

All functions are stateless and take the generator explicitly, so the caller
controls draw order and count. Parameters may be passed as the matching
parameter model or as a plain mapping of its fields.
"""

import math
from typing import TYPE_CHECKING, Any, Mapping, Union

from .models import GaussianParams, PoissonParams, UniformParams, coerce_params

if TYPE_CHECKING:
    from .prng import SeededPRNG


def gaussian(
    generator: "SeededPRNG",
    params: Union[GaussianParams, Mapping[str, Any]],
) -> float:
    """
    Sample N(mean, std_dev^2) with the Box-Muller transform.

    Consumes two draws, plus one more for each zero first draw (rejected so
    the logarithm stays defined).
    """
    params = coerce_params(GaussianParams, params)

    u1 = generator.next()
    while u1 == 0.0:
        u1 = generator.next()
    u2 = generator.next()

    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return params.mean + z0 * params.std_dev


def uniform(
    generator: "SeededPRNG",
    params: Union[UniformParams, Mapping[str, Any]],
) -> float:
    """Sample uniformly from [min, max) using one draw."""
    params = coerce_params(UniformParams, params)
    return params.min + generator.next() * (params.max - params.min)


def poisson(
    generator: "SeededPRNG",
    params: Union[PoissonParams, Mapping[str, Any]],
) -> int:
    """
    Sample a Poisson-distributed count with Knuth's algorithm.

    The number of draws consumed varies per call (on average lam + 1).
    """
    params = coerce_params(PoissonParams, params)

    limit = math.exp(-params.lam)
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= generator.next()
        if p <= limit:
            break
    return k - 1
