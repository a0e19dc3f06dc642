import numpy as np
import pytest

from elastica_so3 import axial, exp_so3

# Rotation vectors covering the series branch, the closed-form branch and
# angles close to (but away from) pi.
ROTATION_VECTORS = [
    np.array([0.0, 0.0, 1e-9]),
    np.array([1e-5, -2e-5, 3e-6]),
    np.array([0.3, -0.2, 0.1]),
    np.array([0.6, 0.5, -0.4]),
    np.array([1.2, -0.8, 1.5]),
    np.array([-2.0, 1.0, 1.5]),
]


@pytest.fixture
def rng():
    """Seeded generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def random_rotation_vectors(rng):
    """Rotation vectors with random axes and angles in [0, 3)."""
    axes = rng.standard_normal((16, 3))
    axes /= np.linalg.norm(axes, axis=1)[:, None]
    angles = rng.uniform(0.0, 3.0, size=16)
    return axes * angles[:, None]


def central_difference(function, vec, step=1e-6):
    """
    Columns of the central difference of an array valued function of a
    3-vector, stacked along the last axis.
    """
    columns = []
    for j in range(3):
        perturbation = np.zeros(3)
        perturbation[j] = step
        columns.append(
            (function(vec + perturbation) - function(vec - perturbation)) / (2 * step)
        )
    return np.stack(columns, axis=-1)


def spatial_variation(vec, step=1e-6):
    """Axial vectors of dR/dv_j R^T for R = exp_so3(vec), as columns."""
    R = exp_so3(vec)
    dR = central_difference(exp_so3, vec, step)
    return np.stack([axial(dR[:, :, j] @ R.T) for j in range(3)], axis=-1)
