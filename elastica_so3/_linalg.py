__doc__ = """Small 3-vector and 3x3 matrix kernels shared by the SO(3) maps."""

import numpy as np
from numpy.typing import NDArray
from numba import njit


@njit(cache=True)  # type: ignore
def _dot(u: NDArray[np.float64], w: NDArray[np.float64]) -> float:
    return u[0] * w[0] + u[1] * w[1] + u[2] * w[2]


@njit(cache=True)  # type: ignore
def _norm(u: NDArray[np.float64]) -> float:
    return np.sqrt(u[0] * u[0] + u[1] * u[1] + u[2] * u[2])


@njit(cache=True)  # type: ignore
def _cross(u: NDArray[np.float64], w: NDArray[np.float64]) -> NDArray[np.float64]:
    out = np.empty(3)
    out[0] = u[1] * w[2] - u[2] * w[1]
    out[1] = u[2] * w[0] - u[0] * w[2]
    out[2] = u[0] * w[1] - u[1] * w[0]
    return out


@njit(cache=True)  # type: ignore
def _matmul(A: NDArray[np.float64], B: NDArray[np.float64]) -> NDArray[np.float64]:
    """3x3 matrix product without BLAS dispatch."""
    out = np.zeros((3, 3))
    for i in range(3):
        for j in range(3):
            for k in range(3):
                out[i, j] += A[i, k] * B[k, j]
    return out


# Accumulation builders. Each one adds a scaled term to `out` in place so the
# tangent operators are assembled without intermediate temporaries.


@njit(cache=True)  # type: ignore
def _add_diagonal(out: NDArray[np.float64], scale: float) -> None:
    """out += scale * I"""
    out[0, 0] += scale
    out[1, 1] += scale
    out[2, 2] += scale


@njit(cache=True)  # type: ignore
def _add_tensor_product(
    out: NDArray[np.float64],
    u: NDArray[np.float64],
    w: NDArray[np.float64],
    scale: float,
) -> None:
    """out += scale * (u ⊗ w)"""
    for i in range(3):
        for j in range(3):
            out[i, j] += scale * u[i] * w[j]


@njit(cache=True)  # type: ignore
def _add_spin(out: NDArray[np.float64], u: NDArray[np.float64], scale: float) -> None:
    """out += scale * spin(u)"""
    out[0, 1] -= scale * u[2]
    out[0, 2] += scale * u[1]
    out[1, 0] += scale * u[2]
    out[1, 2] -= scale * u[0]
    out[2, 0] -= scale * u[1]
    out[2, 1] += scale * u[0]
