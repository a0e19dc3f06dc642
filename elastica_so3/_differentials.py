__doc__ = """Second-order differentials of the exponential map on SO(3), used for the
consistent linearization of incremental rotation updates.

References
----------
Perez, C. M., and Filippou F. C. (2024) "On Nonlinear Geometric
Transformations of Finite Elements", Int. J. Numer. Meth. Engrg.
"""
__all__ = ["dtan_so3", "ddtan_so3", "ddexp_inv_so3"]

import numpy as np
from numpy.typing import NDArray
from numba import njit

from ._checks import representation_sign
from ._gib import _eta_mu, _gib_coefficients
from ._linalg import (
    _add_diagonal,
    _add_spin,
    _add_tensor_product,
    _cross,
    _dot,
    _matmul,
)
from ._so3 import _dexp_inv_wrapped, _wrap_rotation_vector


@njit(cache=True)  # type: ignore
def _dtan_so3(
    vec: NDArray[np.float64], p: NDArray[np.float64], sign: float
) -> NDArray[np.float64]:
    a, b, _ = _gib_coefficients(vec, True, True, False)

    vdotp = _dot(vec, p)
    vxp = _cross(vec, p)

    Xi = np.zeros((3, 3))
    _add_spin(Xi, p, sign * a[2])
    _add_diagonal(Xi, a[3] * vdotp)
    _add_tensor_product(Xi, vec, p, a[3])
    _add_tensor_product(Xi, p, vec, b[1])
    _add_tensor_product(Xi, vxp, vec, -sign * b[2])
    _add_tensor_product(Xi, vec, vec, b[3] * vdotp)
    return Xi


def dtan_so3(
    vec: NDArray[np.float64], p: NDArray[np.float64], repr: str = "L"
) -> NDArray[np.float64]:
    """
    Directional derivative of the tangent operator T = dexp_so3(vec).

    Parameters
    ----------
    vec : numpy.ndarray
        Rotation vector, of shape (3,).
    p : numpy.ndarray
        Vector the tangent operator is applied to, of shape (3,).
    repr : str, optional
        'L' or 'R' indicating left or right representation, respectively, for
        the tangent space of SO(3). Default is 'L'.

    Returns
    -------
    Xi : numpy.ndarray
        d(T^T p)/dv for 'L', d(T p)/dv for 'R', of shape (3, 3).
    """
    sign = representation_sign(repr)
    return _dtan_so3(
        np.asarray(vec, dtype=np.float64), np.asarray(p, dtype=np.float64), sign
    )


@njit(cache=True)  # type: ignore
def ddtan_so3(
    vec: NDArray[np.float64], p: NDArray[np.float64], q: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Second derivative of the tangent operator: the Hessian with respect to the
    rotation vector of q^T T(v) p.

    The result is symmetric. Swapping p and q is the same as negating the
    rotation vector, since p^T T(v) q = q^T T(-v) p.
    """
    a, b, c = _gib_coefficients(vec, True, True, True)

    pxq = _cross(p, q)
    vxp = _cross(vec, p)
    pdotq = _dot(p, q)
    vdotp = _dot(vec, p)
    vdotq = _dot(vec, q)
    vxpdotq = _dot(vxp, q)

    dT = np.zeros((3, 3))
    _add_tensor_product(dT, p, q, a[3])
    _add_tensor_product(dT, q, p, a[3])
    _add_diagonal(dT, b[1] * pdotq)
    _add_tensor_product(dT, pxq, vec, b[2])
    _add_tensor_product(dT, vec, pxq, b[2])
    _add_diagonal(dT, b[2] * vxpdotq)

    _add_tensor_product(dT, q, vec, b[3] * vdotp)
    _add_tensor_product(dT, vec, q, b[3] * vdotp)
    _add_tensor_product(dT, p, vec, b[3] * vdotq)
    _add_tensor_product(dT, vec, p, b[3] * vdotq)
    _add_diagonal(dT, b[3] * vdotp * vdotq)

    _add_tensor_product(
        dT, vec, vec, c[1] * pdotq + c[2] * vxpdotq + c[3] * vdotp * vdotq
    )
    return dT


@njit(cache=True)  # type: ignore
def ddexp_inv_so3(
    th: NDArray[np.float64], vec: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Derivative of H(th) vec, H = dexp_inv_so3, with respect to an incremental
    rotation of th.

    The derivative with respect to th itself,

        J = 1/2 spin(v) + eta ((th.v) I + th⊗v - 2 v⊗th) + mu (spin(th)^2 v)⊗th,

    is pulled back through the differential of the logarithm, H(th), so that
    the result is J H(th). mu = eta'(|th|) / |th|. th is wrapped like in
    dexp_inv_so3; neither argument is modified.
    """
    wrapped = _wrap_rotation_vector(th)
    angle2 = _dot(wrapped, wrapped)
    eta, mu = _eta_mu(angle2)

    thdotv = _dot(wrapped, vec)
    # spin(th)^2 v = (th.v) th - |th|^2 v
    St2v = np.empty(3)
    for i in range(3):
        St2v[i] = thdotv * wrapped[i] - angle2 * vec[i]

    dH = np.zeros((3, 3))
    _add_spin(dH, vec, 0.5)
    _add_diagonal(dH, eta * thdotv)
    _add_tensor_product(dH, wrapped, vec, eta)
    _add_tensor_product(dH, vec, wrapped, -2.0 * eta)
    _add_tensor_product(dH, St2v, wrapped, mu)

    return _matmul(dH, _dexp_inv_wrapped(wrapped))
