import math

import numpy as np
import pytest

from numlab.vectors import (
    dot,
    inf_norm,
    linear_combination,
    one_norm,
    rms_norm,
    vector_difference,
    vector_pow,
    vector_product,
    vector_scale,
    vector_sum,
)


@pytest.fixture
def pair():
    rng = np.random.default_rng(7)
    return rng.standard_normal((4, 5, 3)), rng.standard_normal((4, 5, 3))


def test_sum_and_difference_recover_operands(pair):
    u, v = pair
    total = vector_sum(u, v)
    diff = vector_difference(u, v)
    np.testing.assert_allclose((total + diff) / 2, u)
    np.testing.assert_allclose((total - diff) / 2, v)


def test_product_is_commutative(pair):
    u, v = pair
    np.testing.assert_allclose(vector_product(u, v), vector_product(v, u))


def test_linear_combination_matches_sum_and_scale(pair):
    x, y = pair
    np.testing.assert_allclose(linear_combination(1.0, x, 1.0, y), vector_sum(x, y))
    np.testing.assert_allclose(linear_combination(2.5, x, 0.0, y), vector_scale(2.5, x))


def test_vector_pow_identity_and_square(pair):
    x, _ = pair
    np.testing.assert_allclose(vector_pow(x, 1.0), x)
    np.testing.assert_allclose(vector_pow(x, 2.0), vector_product(x, x))


def test_vector_pow_rejects_negative_exponent():
    with pytest.raises(ValueError):
        vector_pow([1.0, 2.0], -0.5)


def test_rms_norm_of_constant_vector():
    assert rms_norm(np.full((3, 4), -2.5)) == pytest.approx(2.5)


def test_rms_norm_relates_to_dot(pair):
    x, _ = pair
    assert rms_norm(x) ** 2 * x.size == pytest.approx(dot(x, x))


def test_rms_norm_empty_raises():
    with pytest.raises(ValueError):
        rms_norm([])


def test_inf_norm_picks_largest_magnitude():
    assert inf_norm([1.0, -7.5, 3.0]) == 7.5
    assert inf_norm([]) == 0.0


def test_one_norm_matches_dot_with_abs(pair):
    x, _ = pair
    assert one_norm(x) == pytest.approx(dot(np.abs(x), np.ones_like(x)))


def test_dot_cauchy_schwarz(pair):
    x, y = pair
    assert abs(dot(x, y)) <= math.sqrt(dot(x, x) * dot(y, y)) + 1e-12


def test_shape_mismatch_raises():
    with pytest.raises(ValueError):
        vector_sum([1.0, 2.0], [1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        dot(np.zeros((2, 3)), np.zeros((3, 2)))