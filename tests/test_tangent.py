import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from elastica_so3 import (
    SERIES_ANGLE2_THRESHOLD,
    WRAP_ANGLE,
    dexp_inv_so3,
    dexp_so3,
    tan_so3,
)

from conftest import ROTATION_VECTORS, spatial_variation


@pytest.mark.parametrize("vec", ROTATION_VECTORS)
def test_dexp_matches_central_difference_of_exp(vec):
    assert_allclose(dexp_so3(vec), spatial_variation(vec), atol=1e-8)


def test_dexp_of_zero_is_identity():
    assert_allclose(dexp_so3(np.zeros(3)), np.eye(3), atol=0.0)


@pytest.mark.parametrize("vec", ROTATION_VECTORS + [np.array([3.0, -4.0, 2.0])])
def test_tan_agrees_with_dexp_on_both_branches(vec):
    assert_allclose(tan_so3(vec), dexp_so3(vec), rtol=0.0, atol=1e-12)


def test_dexp_of_negated_vector_is_transpose(rng):
    vec = rng.standard_normal(3)
    assert_allclose(dexp_so3(-vec), dexp_so3(vec).T, atol=1e-15)


@pytest.mark.parametrize("vec", ROTATION_VECTORS)
def test_dexp_inv_is_inverse_of_dexp(vec):
    assert_allclose(dexp_inv_so3(vec) @ dexp_so3(vec), np.eye(3), atol=1e-10)
    assert_allclose(dexp_so3(vec) @ dexp_inv_so3(vec), np.eye(3), atol=1e-10)


def test_dexp_inv_is_inverse_of_dexp_for_random_vectors(random_rotation_vectors):
    for vec in random_rotation_vectors:
        if np.linalg.norm(vec) < WRAP_ANGLE:
            assert_allclose(dexp_inv_so3(vec) @ dexp_so3(vec), np.eye(3), atol=1e-10)


def test_dexp_inv_of_zero_is_identity():
    assert_allclose(dexp_inv_so3(np.zeros(3)), np.eye(3), atol=0.0)


def test_dexp_inv_is_continuous_across_series_threshold():
    boundary = np.sqrt(SERIES_ANGLE2_THRESHOLD)
    direction = np.array([2.0, -1.0, 2.0]) / 3.0
    below = dexp_inv_so3(direction * boundary * (1.0 - 1e-13))
    above = dexp_inv_so3(direction * boundary * (1.0 + 1e-13))
    assert_allclose(below, above, atol=1e-12)


def test_dexp_inv_wraps_large_angles():
    direction = np.array([1.0, 2.0, 2.0]) / 3.0
    angle = 1.5 * np.pi
    wrapped = direction * (angle - 2.0 * np.pi)
    assert_allclose(
        dexp_inv_so3(direction * angle), dexp_inv_so3(wrapped), atol=1e-13
    )
    assert_allclose(
        dexp_inv_so3(direction * angle) @ dexp_so3(wrapped), np.eye(3), atol=1e-10
    )


@pytest.mark.parametrize("turns", [1, 2, 3])
def test_dexp_inv_is_periodic(turns):
    direction = np.array([0.0, 0.6, -0.8])
    angle = 1.0
    assert_allclose(
        dexp_inv_so3(direction * (angle + 2.0 * np.pi * turns)),
        dexp_inv_so3(direction * angle),
        atol=1e-12,
    )


def test_dexp_inv_does_not_modify_its_argument():
    vec = np.array([0.0, 0.0, 5.0])
    original = vec.copy()
    dexp_inv_so3(vec)
    assert_array_equal(vec, original)


@pytest.mark.parametrize("vec", [[0, 0, 5], [3, -4, 2], [1, 0, 0]])
def test_dexp_inv_of_integer_vector_matches_float(vec):
    assert_allclose(
        dexp_inv_so3(np.array(vec)),
        dexp_inv_so3(np.array(vec, dtype=np.float64)),
        rtol=1e-14,
        atol=1e-15,
    )
