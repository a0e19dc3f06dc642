import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from elastica_so3 import exp_so3, matrix_to_versor, versor_to_matrix, versor_to_vector

# Each entry selects a different branch of Shepperd's method: the trace, then
# the x, y and z diagonal entries as the largest candidate.
SHEPPERD_CASES = [
    np.array([0.1, -0.2, 0.3]),
    np.array([3.0, 0.1, -0.05]),
    np.array([0.05, -3.0, 0.1]),
    np.array([-0.1, 0.05, 3.0]),
]


def _same_rotation(q, expected):
    # q and -q are the same rotation
    sign = 1.0 if np.dot(q, expected) >= 0.0 else -1.0
    assert_allclose(sign * q, expected, rtol=1e-12, atol=1e-14)


@pytest.mark.parametrize("vec", SHEPPERD_CASES)
def test_matrix_to_versor_matches_scipy(vec):
    R = Rotation.from_rotvec(vec).as_matrix()
    q = matrix_to_versor(R)
    assert_allclose(np.linalg.norm(q), 1.0, rtol=1e-14)
    _same_rotation(q, Rotation.from_rotvec(vec).as_quat())


@pytest.mark.parametrize("vec", SHEPPERD_CASES)
def test_versor_to_matrix_inverts_matrix_to_versor(vec):
    R = exp_so3(vec)
    assert_allclose(versor_to_matrix(matrix_to_versor(R)), R, atol=1e-14)


def test_versor_to_matrix_matches_scipy(rng):
    q = rng.standard_normal(4)
    q /= np.linalg.norm(q)
    assert_allclose(
        versor_to_matrix(q), Rotation.from_quat(q).as_matrix(), rtol=1e-12, atol=1e-14
    )


def test_versor_to_vector_of_identity():
    assert_allclose(versor_to_vector(np.array([0.0, 0.0, 0.0, 1.0])), np.zeros(3))


def test_versor_to_vector_uses_positive_hemisphere():
    half = 0.25 * np.pi
    # rotation by pi/2 about x, stored with a negative scalar part
    q = -np.array([np.sin(half), 0.0, 0.0, np.cos(half)])
    assert_allclose(versor_to_vector(q), [0.5 * np.pi, 0.0, 0.0], rtol=1e-14)


def test_versor_to_vector_angle_in_range(rng):
    for q in rng.standard_normal((32, 4)):
        q /= np.linalg.norm(q)
        vec = versor_to_vector(q)
        assert 0.0 <= np.linalg.norm(vec) <= np.pi + 1e-14
        assert_allclose(exp_so3(vec), versor_to_matrix(q), atol=1e-13)


def test_versor_to_vector_at_half_turn():
    vec = versor_to_vector(np.array([0.0, 1.0, 0.0, 0.0]))
    assert_allclose(vec, [0.0, np.pi, 0.0], rtol=1e-15)
