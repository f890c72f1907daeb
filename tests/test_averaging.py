"""
Tests for generalized f-means.
"""
import statistics

import numpy as np
import pytest

from L4_perception import (
    Bijection,
    RECIPROCAL,
    IDENTITY,
    LOGARITHM,
    generalized_average
)


def test_reciprocal_is_harmonic_mean():
    values = [0.5, 1.0, 2.0, 4.0, 3.3]
    assert generalized_average(values, RECIPROCAL) == pytest.approx(
        statistics.harmonic_mean(values))


def test_harmonic_mean_weights_near_values():
    values = [0.5, 3.0]
    assert generalized_average(values, RECIPROCAL) < np.mean(values)


@pytest.mark.parametrize("transform", [RECIPROCAL, IDENTITY, LOGARITHM])
def test_equal_values_average_to_that_value(transform):
    assert generalized_average([1.7] * 9, transform) == pytest.approx(1.7)


def test_identity_is_arithmetic_mean():
    assert generalized_average([1.0, 2.0, 6.0], IDENTITY) == pytest.approx(3.0)


def test_logarithm_is_geometric_mean():
    assert generalized_average([1.0, 4.0], LOGARITHM) == pytest.approx(2.0)


def test_custom_bijection():
    square = Bijection(forward=lambda x: np.square(x), inverse=np.sqrt, name="rms")
    assert generalized_average([3.0, 4.0], square) == pytest.approx(np.sqrt(12.5))


def test_accepts_numpy_arrays():
    assert generalized_average(np.array([[2.0, 2.0], [2.0, 2.0]])) == pytest.approx(2.0)


def test_empty_input_raises():
    with pytest.raises(ValueError):
        generalized_average([], RECIPROCAL)


def test_zero_value_drives_harmonic_mean_to_zero():
    assert generalized_average([0.0, 1.0], RECIPROCAL) == 0.0
