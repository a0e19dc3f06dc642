__doc__ = """Checks applied at the Python boundary of the SO(3) kernels."""

import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

REPRESENTATIONS: dict[str, float] = {"L": 1.0, "R": -1.0}


def representation_sign(repr: str) -> float:
    """
    Sign of the spin term for the left ('L') or right ('R') representation of
    the tangent space.
    """
    try:
        return REPRESENTATIONS[repr]
    except KeyError:
        raise ValueError(
            f"Unknown tangent space representation {repr!r}; expected 'L' or 'R'."
        ) from None


def check_matrix_shape(R: NDArray[np.float64]) -> None:
    if R.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 matrix, got shape {R.shape}")


def is_rotation_matrix(R: NDArray[np.float64], atol: float = 1e-8) -> bool:
    """
    Check that R is orthogonal with unit determinant.

    A matrix that fails the check is reported through the module logger and
    False is returned; the caller decides what to do with it.

    Parameters
    ----------
    R : numpy.ndarray
        Candidate rotation matrix, of shape (3, 3).
    atol : float, optional
        Absolute tolerance on the entries of R^T R - I and on det(R) - 1.
        Default is 1e-8.

    Returns
    -------
    bool
    """
    R = np.asarray(R, dtype=np.float64)
    check_matrix_shape(R)

    orthogonality_defect = np.abs(R.T @ R - np.eye(3)).max()
    determinant = np.linalg.det(R)
    if orthogonality_defect > atol or abs(determinant - 1.0) > atol:
        logger.warning(
            "Matrix is not a rotation: max|R^T R - I| = %.3e, det(R) = %.12f",
            orthogonality_defect,
            determinant,
        )
        return False
    return True
