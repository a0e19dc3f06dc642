__doc__ = """Exponential and logarithm maps on SO(3) and their first differentials."""
__all__ = [
    "spin",
    "axial",
    "exp_so3",
    "log_so3",
    "dexp_so3",
    "tan_so3",
    "dexp_inv_so3",
    "WRAP_ANGLE",
]

import numpy as np
from numpy.typing import NDArray
from numba import njit

from ._checks import check_matrix_shape, is_rotation_matrix
from ._gib import SERIES_ANGLE2_THRESHOLD, _A_SERIES, _eta_mu, _gib_coefficients, _horner
from ._linalg import _add_diagonal, _add_spin, _add_tensor_product, _dot, _norm
from ._rotations import matrix_to_versor, versor_to_vector

# Angle above which the inverse tangent maps first move the rotation vector to
# the equivalent one with angle in [-pi, pi). cot(angle/2) is singular at 2*pi.
WRAP_ANGLE: float = np.pi / 1.01


@njit(cache=True)
def spin(u):
    """Skew-symmetric matrix"""
    S = np.zeros((3, 3))
    _add_spin(S, u, 1.0)
    return S


@njit(cache=True)
def axial(X):
    """Axial vector (X[2,1], X[0,2], X[1,0]); the symmetry of X is not checked"""
    u = np.empty(3)
    u[0] = X[2, 1]
    u[1] = X[0, 2]
    u[2] = X[1, 0]
    return u


@njit(cache=True)
def exp_so3(vec):
    """
    Exponential map for SO(3)

    R = I + a1 spin(v) + a2 spin(v)^2, assembled as a0 I + a1 spin(v) + a2 v⊗v.
    """
    a, _, _ = _gib_coefficients(vec, True, False, False)

    R = np.zeros((3, 3))
    _add_diagonal(R, a[0])
    _add_spin(R, vec, a[1])
    _add_tensor_product(R, vec, vec, a[2])
    return R


@njit(cache=True)  # type: ignore
def _log_so3(R: NDArray[np.float64]) -> NDArray[np.float64]:
    return versor_to_vector(matrix_to_versor(R))


def log_so3(R: NDArray[np.float64], check: bool = False) -> NDArray[np.float64]:
    """
    Inverse of the exponential map on SO(3).

    Returns the rotation vector v of R with angle in [0, pi], such that

        log_so3(exp_so3(v)) == v    for |v| < pi.

    The conversion goes through a versor, which avoids the singularity of the
    trace formula at pi. For an angle of exactly pi the sign of the axis is
    decided by the versor conversion.

    Parameters
    ----------
    R : numpy.ndarray
        Rotation matrix, of shape (3, 3).
    check : bool, optional
        Log a warning if R is not a rotation. The logarithm is returned either
        way. Default is False.

    Returns
    -------
    vec : numpy.ndarray
        Rotation vector, of shape (3,).

    Raises
    ------
    ValueError
        If R is not of shape (3, 3).

    References
    ----------
    Nurlanov Z (2021) Exploring SO(3) logarithmic map: degeneracies and
    derivatives.
    """
    R = np.asarray(R, dtype=np.float64)
    check_matrix_shape(R)
    if check:
        is_rotation_matrix(R)
    return _log_so3(np.ascontiguousarray(R))


@njit(cache=True)  # type: ignore
def dexp_so3(vec: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Differential of the exponential map, T = a1 I + a2 spin(v) + a3 v⊗v.

    A variation of the rotation vector maps to a variation of the rotation as
    dR R^T = spin(T dv).
    """
    a, _, _ = _gib_coefficients(vec, True, False, False)

    T = np.zeros((3, 3))
    _add_diagonal(T, a[1])
    _add_spin(T, vec, a[2])
    _add_tensor_product(T, vec, vec, a[3])
    return T


@njit(cache=True)  # type: ignore
def tan_so3(vec: NDArray[np.float64]) -> NDArray[np.float64]:
    """Compute differential of the exponential, entry by entry. Same as dexp_so3."""
    angle2 = _dot(vec, vec)

    if angle2 <= SERIES_ANGLE2_THRESHOLD:
        a1 = _horner(_A_SERIES[1], angle2)
        a2 = _horner(_A_SERIES[2], angle2)
        a3 = _horner(_A_SERIES[3], angle2)
    else:
        angle = np.sqrt(angle2)
        a1 = np.sin(angle) / angle
        a2 = (1.0 - np.cos(angle)) / angle2
        a3 = (1.0 - a1) / angle2

    T = np.empty((3, 3))
    T[0, 0] = a1 + a3 * vec[0] * vec[0]
    T[0, 1] = -vec[2] * a2 + a3 * vec[0] * vec[1]
    T[0, 2] = vec[1] * a2 + a3 * vec[0] * vec[2]
    T[1, 0] = vec[2] * a2 + a3 * vec[1] * vec[0]
    T[1, 1] = a1 + a3 * vec[1] * vec[1]
    T[1, 2] = -vec[0] * a2 + a3 * vec[1] * vec[2]
    T[2, 0] = -vec[1] * a2 + a3 * vec[2] * vec[0]
    T[2, 1] = vec[0] * a2 + a3 * vec[2] * vec[1]
    T[2, 2] = a1 + a3 * vec[2] * vec[2]
    return T


@njit(cache=True)  # type: ignore
def _wrap_rotation_vector(vec: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Copy of vec, moved to the equivalent rotation vector with angle in
    [-pi, pi) when its angle exceeds WRAP_ANGLE.
    """
    wrapped = np.empty(3)
    scale = 1.0
    angle = _norm(vec)
    if angle > WRAP_ANGLE:
        turns = np.floor((angle + np.pi) / (2.0 * np.pi))
        scale = 1.0 - 2.0 * np.pi * turns / angle
    for i in range(3):
        wrapped[i] = scale * vec[i]
    return wrapped


@njit(cache=True)  # type: ignore
def _dexp_inv_wrapped(vec: NDArray[np.float64]) -> NDArray[np.float64]:
    # vec is already wrapped; spin(v)^2 = v⊗v - |v|^2 I
    angle2 = _dot(vec, vec)
    eta, _ = _eta_mu(angle2)

    H = np.zeros((3, 3))
    _add_diagonal(H, 1.0 - eta * angle2)
    _add_spin(H, vec, -0.5)
    _add_tensor_product(H, vec, vec, eta)
    return H


@njit(cache=True)  # type: ignore
def dexp_inv_so3(vec: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Inverse of the differential of the exponential map,
    H = I - 1/2 spin(v) + eta spin(v)^2 with eta = (1 - v/2 cot(v/2)) / v^2.

    Rotation vectors with an angle above WRAP_ANGLE are first replaced by the
    equivalent vector with angle in [-pi, pi); vec itself is left untouched.
    """
    return _dexp_inv_wrapped(_wrap_rotation_vector(vec))
