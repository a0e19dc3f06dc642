__doc__ = """Versor (unit quaternion) conversions used by the logarithm on SO(3).

Versors are stored scalar-last, ``(x, y, z, w)``.
"""
__all__ = ["matrix_to_versor", "versor_to_vector", "versor_to_matrix"]

import numpy as np
from numpy.typing import NDArray
from numba import njit


@njit(cache=True)  # type: ignore
def matrix_to_versor(R: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert a rotation matrix to a versor with Shepperd's method.

    The component computed from the square root is the one with the largest
    magnitude, which keeps the divisions well conditioned for every angle,
    including rotations by pi.

    Parameters
    ----------
    R : numpy.ndarray
        Rotation matrix, of shape (3, 3). Not checked for orthogonality.

    Returns
    -------
    q : numpy.ndarray
        Versor (x, y, z, w), of shape (4,).
    """
    q = np.empty(4)
    trace = R[0, 0] + R[1, 1] + R[2, 2]

    if trace >= R[0, 0] and trace >= R[1, 1] and trace >= R[2, 2]:
        w = 0.5 * np.sqrt(1.0 + trace)
        s = 0.25 / w
        q[0] = (R[2, 1] - R[1, 2]) * s
        q[1] = (R[0, 2] - R[2, 0]) * s
        q[2] = (R[1, 0] - R[0, 1]) * s
        q[3] = w
    elif R[0, 0] >= R[1, 1] and R[0, 0] >= R[2, 2]:
        x = 0.5 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        s = 0.25 / x
        q[0] = x
        q[1] = (R[0, 1] + R[1, 0]) * s
        q[2] = (R[0, 2] + R[2, 0]) * s
        q[3] = (R[2, 1] - R[1, 2]) * s
    elif R[1, 1] >= R[2, 2]:
        y = 0.5 * np.sqrt(1.0 - R[0, 0] + R[1, 1] - R[2, 2])
        s = 0.25 / y
        q[0] = (R[0, 1] + R[1, 0]) * s
        q[1] = y
        q[2] = (R[1, 2] + R[2, 1]) * s
        q[3] = (R[0, 2] - R[2, 0]) * s
    else:
        z = 0.5 * np.sqrt(1.0 - R[0, 0] - R[1, 1] + R[2, 2])
        s = 0.25 / z
        q[0] = (R[0, 2] + R[2, 0]) * s
        q[1] = (R[1, 2] + R[2, 1]) * s
        q[2] = z
        q[3] = (R[1, 0] - R[0, 1]) * s

    return q


@njit(cache=True)  # type: ignore
def versor_to_vector(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Rotation vector of a versor, with angle in [0, pi].

    The versor is first moved to the hemisphere w >= 0; q and -q are the same
    rotation. At exactly pi (w == 0) the returned axis keeps the sign of the
    vector part.
    """
    x, y, z, w = q[0], q[1], q[2], q[3]
    if w < 0.0:
        x, y, z, w = -x, -y, -z, -w

    sin_half = np.sqrt(x * x + y * y + z * z)
    if sin_half > 0.0:
        scale = 2.0 * np.arctan2(sin_half, w) / sin_half
    else:
        # limit of 2 atan2(s, w) / s as s -> 0
        scale = 2.0 / w

    vec = np.empty(3)
    vec[0] = scale * x
    vec[1] = scale * y
    vec[2] = scale * z
    return vec


@njit(cache=True)  # type: ignore
def versor_to_matrix(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotation matrix of a versor (x, y, z, w)."""
    x, y, z, w = q[0], q[1], q[2], q[3]
    R = np.empty((3, 3))
    R[0, 0] = 1.0 - 2.0 * (y * y + z * z)
    R[0, 1] = 2.0 * (x * y - z * w)
    R[0, 2] = 2.0 * (x * z + y * w)
    R[1, 0] = 2.0 * (x * y + z * w)
    R[1, 1] = 1.0 - 2.0 * (x * x + z * z)
    R[1, 2] = 2.0 * (y * z - x * w)
    R[2, 0] = 2.0 * (x * z - y * w)
    R[2, 1] = 2.0 * (y * z + x * w)
    R[2, 2] = 1.0 - 2.0 * (x * x + y * y)
    return R
