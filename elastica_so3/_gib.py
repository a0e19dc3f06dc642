__doc__ = """Coefficients of the Rodrigues formula and their angle derivatives."""
__all__ = ["GibCoefficients", "gib_so3", "SERIES_ANGLE2_THRESHOLD", "SERIES_TERMS"]

import math
from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray
from numba import njit
from scipy.special import bernoulli

from ._linalg import _dot

# Squared angle at or below which every coefficient is evaluated from its
# Maclaurin series instead of the closed trigonometric form. The closed forms
# of the higher families cancel catastrophically for small angles; c[3] loses
# about 15 - 6*log10(1/angle) digits.
SERIES_ANGLE2_THRESHOLD: float = 1.0

# Number of terms kept in each series. Twelve terms are below machine epsilon
# for every coefficient up to SERIES_ANGLE2_THRESHOLD.
SERIES_TERMS: int = 12


def _maclaurin_table(order: int, num_terms: int = SERIES_TERMS) -> NDArray[np.float64]:
    """
    Series coefficients, in powers of angle**2, of the four coefficients of one
    family.

    Family ``order=0`` holds ``a[m] = sum_k (-1)^k angle^(2k) / (2k+m)!``.
    Each following family is the angle derivative of the previous one divided
    by the angle, which shifts the series by one term and multiplies it by the
    exponent being differentiated.

    Returns
    -------
    table : numpy.ndarray
        Coefficients of shape (4, num_terms), table[m, k] multiplies angle**(2k).
    """
    table = np.empty((4, num_terms))
    for m in range(4):
        for k in range(num_terms):
            n = 2 * (k + order)
            weight = 1.0
            for j in range(order):
                weight *= n - 2 * j
            table[m, k] = (-1) ** (k + order) * weight / math.factorial(n + m)
    return table


def _inverse_tangent_series(num_terms: int = SERIES_TERMS) -> NDArray[np.float64]:
    """
    Series coefficients of eta = (1 - angle/2 cot(angle/2)) / angle**2 and of
    mu = eta'(angle) / angle, stacked as rows 0 and 1.
    """
    bernoulli_numbers = bernoulli(2 * (num_terms + 1))
    eta = np.empty(num_terms + 1)
    for k in range(num_terms + 1):
        n = k + 1
        eta[k] = -((-1) ** n) * bernoulli_numbers[2 * n] / math.factorial(2 * n)
    table = np.empty((2, num_terms))
    for k in range(num_terms):
        table[0, k] = eta[k]
        table[1, k] = (2 * k + 2) * eta[k + 1]
    return table


_A_SERIES = _maclaurin_table(0)
_B_SERIES = _maclaurin_table(1)
_C_SERIES = _maclaurin_table(2)
_ETA_MU_SERIES = _inverse_tangent_series()


@njit(cache=True)  # type: ignore
def _horner(coefficients: NDArray[np.float64], x: float) -> float:
    n = coefficients.shape[0]
    acc = coefficients[n - 1]
    for k in range(n - 2, -1, -1):
        acc = acc * x + coefficients[k]
    return acc


@njit(cache=True)  # type: ignore
def _gib_coefficients(vec, with_a, with_b, with_c):
    """
    Compute coefficients of the Rodrigues formula and their derivatives.

    Only the requested families are filled; the others are returned as empty
    arrays. The trigonometric functions are evaluated at most once.

        a = [cos, sin/t, (1-cos)/t^2, (t-sin)/t^3]
        b[i] = a[i]' / t
        c[i] = b[i]' / t

    References
    ----------
    Ritto-Correa, M. and Camotim, D. (2002) "On the differentiation of the
    Rodrigues formula and its significance for the vector-like parameterization
    of Reissner-Simo beam theory", Int. J. Numer. Meth. Engrg., 55(9).
    """
    a = np.empty(4 if with_a else 0)
    b = np.empty(4 if with_b else 0)
    c = np.empty(4 if with_c else 0)

    angle2 = _dot(vec, vec)

    if angle2 <= SERIES_ANGLE2_THRESHOLD:
        for i in range(4):
            if with_a:
                a[i] = _horner(_A_SERIES[i], angle2)
            if with_b:
                b[i] = _horner(_B_SERIES[i], angle2)
            if with_c:
                c[i] = _horner(_C_SERIES[i], angle2)
        return a, b, c

    angle = np.sqrt(angle2)
    sn = np.sin(angle)
    cs = np.cos(angle)
    angle3 = angle * angle2
    angle4 = angle * angle3
    angle5 = angle * angle4
    angle6 = angle * angle5
    angle7 = angle * angle6

    if with_a:
        a[0] = cs
        a[1] = sn / angle
        a[2] = (1.0 - cs) / angle2
        a[3] = (angle - sn) / angle3

    if with_b:
        b[0] = -sn / angle
        b[1] = (angle * cs - sn) / angle3
        b[2] = (angle * sn - 2.0 + 2.0 * cs) / angle4
        b[3] = (3.0 * sn - 2.0 * angle - angle * cs) / angle5

    if with_c:
        c[0] = (sn - angle * cs) / angle3
        c[1] = (3.0 * sn - angle2 * sn - 3.0 * angle * cs) / angle5
        c[2] = (8.0 - 8.0 * cs - 5.0 * angle * sn + angle2 * cs) / angle6
        c[3] = (8.0 * angle + 7.0 * angle * cs + angle2 * sn - 15.0 * sn) / angle7

    return a, b, c


@njit(cache=True)  # type: ignore
def _eta_mu(angle2: float):
    """Coefficients of the inverse tangent map and of its angle derivative."""
    if angle2 <= SERIES_ANGLE2_THRESHOLD:
        return _horner(_ETA_MU_SERIES[0], angle2), _horner(_ETA_MU_SERIES[1], angle2)

    angle = np.sqrt(angle2)
    sn = np.sin(0.5 * angle)
    cs = np.cos(0.5 * angle)
    eta = (2.0 * sn - angle * cs) / (2.0 * angle2 * sn)
    mu = (angle * (angle + 2.0 * sn * cs) - 8.0 * sn * sn) / (
        4.0 * angle2 * angle2 * sn * sn
    )
    return eta, mu


class GibCoefficients(NamedTuple):
    """Rodrigues coefficient families; a family is None when not requested."""

    a: Optional[NDArray[np.float64]]
    b: Optional[NDArray[np.float64]]
    c: Optional[NDArray[np.float64]]


def gib_so3(
    vec: NDArray[np.float64],
    a: bool = True,
    b: bool = False,
    c: bool = False,
) -> GibCoefficients:
    """
    Rodrigues coefficients of a rotation vector.

    Parameters
    ----------
    vec : numpy.ndarray
        Rotation vector, of shape (3,).
    a, b, c : bool, optional
        Which coefficient families to compute. Families that are not requested
        are not evaluated.

    Returns
    -------
    coefficients : GibCoefficients
        Arrays of shape (4,) for the requested families, None otherwise.
    """
    vec = np.asarray(vec, dtype=np.float64)
    a_, b_, c_ = _gib_coefficients(vec, a, b, c)
    return GibCoefficients(a_ if a else None, b_ if b else None, c_ if c else None)
