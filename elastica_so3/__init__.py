__doc__ = """Rotational kinematics on SO(3) for geometrically exact rods and beams."""

from ._checks import is_rotation_matrix
from ._differentials import ddexp_inv_so3, ddtan_so3, dtan_so3
from ._gib import SERIES_ANGLE2_THRESHOLD, GibCoefficients, gib_so3
from ._rotations import matrix_to_versor, versor_to_matrix, versor_to_vector
from ._so3 import (
    WRAP_ANGLE,
    axial,
    dexp_inv_so3,
    dexp_so3,
    exp_so3,
    log_so3,
    spin,
    tan_so3,
)
from .version import VERSION
