"""Tests for weighted categorical sampling."""

from collections import Counter

import pytest

from domain_forge.errors import (
    EmptyInputError,
    InputError,
    InvalidParameterError,
    ZeroWeightError,
)
from domain_forge.synthetic import categorical
from domain_forge.synthetic.prng import SeededPRNG


class _FixedGenerator:
    """Always returns the same value from next()."""

    def __init__(self, value):
        self.value = value
        self.draws = 0

    def next(self):
        self.draws += 1
        return self.value


def test_single_category_always_selected():
    prng = SeededPRNG(1)
    assert all(categorical.sample(prng, {"a": 1}) == "a" for _ in range(100))


def test_results_are_provided_categories():
    prng = SeededPRNG(42)
    results = {categorical.sample(prng, {"rain": 0.7, "sunny": 0.3}) for _ in range(200)}
    assert results <= {"rain", "sunny"}


def test_respects_weights():
    prng = SeededPRNG(5)
    counts = Counter(categorical.sample(prng, {"rain": 0.9, "sunny": 0.1}) for _ in range(5000))
    rain_freq = counts["rain"] / 5000
    assert 0.8 < rain_freq < 1.0


def test_unnormalized_weights():
    prng = SeededPRNG(77)
    counts = Counter(categorical.sample(prng, {"low": 1, "high": 9}) for _ in range(2000))
    assert counts["high"] / 2000 > 0.8


def test_deterministic_for_same_seed():
    a, b = SeededPRNG(100), SeededPRNG(100)
    weights = {"a": 1, "b": 2, "c": 3}
    for _ in range(50):
        assert categorical.sample(a, weights) == categorical.sample(b, weights)


def test_empty_weights_raise():
    with pytest.raises(EmptyInputError, match="must not be empty"):
        categorical.sample(SeededPRNG(1), {})


def test_zero_total_weight_raises():
    with pytest.raises(ZeroWeightError, match="greater than zero"):
        categorical.sample(SeededPRNG(1), {"a": 0, "b": 0})


def test_negative_weight_raises():
    with pytest.raises(InvalidParameterError):
        categorical.sample(SeededPRNG(1), {"a": 2, "b": -1})


def test_input_errors_share_base_class():
    for weights in ({}, {"a": 0}):
        with pytest.raises(InputError):
            categorical.sample(SeededPRNG(1), weights)


def test_consumes_exactly_one_draw():
    gen = _FixedGenerator(0.3)
    categorical.sample(gen, {"a": 1, "b": 2, "c": 3})
    assert gen.draws == 1


def test_walks_entries_in_insertion_order():
    # r = 0.5 * 2 = 1.0; the first entry's cumulative sum (1.0) does not exceed r
    assert categorical.sample(_FixedGenerator(0.5), {"x": 1, "y": 1}) == "y"
    assert categorical.sample(_FixedGenerator(0.5), {"y": 1, "x": 1}) == "x"


def test_zero_weight_category_is_skipped():
    assert categorical.sample(_FixedGenerator(0.0), {"a": 0, "b": 1}) == "b"


def test_boundary_draw_falls_back_to_last_key():
    # next() at the upper boundary makes r equal to the total, so no running
    # sum exceeds it and the last key is returned
    gen = _FixedGenerator(1.0)
    assert categorical.sample(gen, {"a": 1, "b": 2}) == "b"
    assert categorical.sample(gen, {"b": 2, "a": 1}) == "a"
    assert categorical.sample(gen, {"only": 0.3}) == "only"


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_weight_raises(bad):
    with pytest.raises(InvalidParameterError, match="finite"):
        categorical.sample(SeededPRNG(1), {"a": bad, "b": 1})
