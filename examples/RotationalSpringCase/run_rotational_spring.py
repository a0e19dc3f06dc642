"""
Rigid body held by a linear rotational spring and loaded by dead forces.

The rotation vector psi minimizes

    Pi(psi) = 1/2 psi^T K psi - sum_i F_i . R(psi) X_i

Equilibrium is found by load stepping with a Newton iteration in every step.
The residual is K psi - T^T m, with T = dexp_so3(psi) and m = sum_i R X_i x F_i
the moment of the loads. Its consistent linearization needs the derivative of
T^T m, which is dtan_so3(psi, m, 'L').
"""

import numpy as np
from collections import defaultdict
from tqdm import tqdm
import elastica_so3 as eso3

from rotational_spring_postprocessing import plot_convergence, plot_load_path

# setting up test params
stiffness = np.diag([2.0, 2.0, 1.0])
arms = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
forces = np.array([[0.0, 0.0, 3.0], [1.5, 0.0, 0.0]])

n_load_steps = 20
max_newton_iterations = 25
newton_tolerance = 1e-12
SAVE_FIGURE = False


def residual_and_tangent(psi, load_factor):
    R = eso3.exp_so3(psi)
    T = eso3.dexp_so3(psi)

    moment = np.zeros(3)
    load_stiffness = np.zeros((3, 3))
    for arm, force in zip(arms, forces):
        position = R @ arm
        force = load_factor * force
        moment += np.cross(position, force)
        # d(R X x F)/dpsi = spin(F) spin(R X) T
        load_stiffness += eso3.spin(force) @ eso3.spin(position)

    residual = stiffness @ psi - T.T @ moment
    tangent = stiffness - eso3.dtan_so3(psi, moment, "L") - T.T @ load_stiffness @ T
    return residual, tangent


recorded_history: dict[str, list] = defaultdict(list)
psi = np.zeros(3)
for step in tqdm(range(1, n_load_steps + 1)):
    load_factor = step / n_load_steps
    residual_norms = []
    for _ in range(max_newton_iterations):
        residual, tangent = residual_and_tangent(psi, load_factor)
        residual_norms.append(np.linalg.norm(residual))
        if residual_norms[-1] < newton_tolerance:
            break
        psi = psi - np.linalg.solve(tangent, residual)
    else:
        print(f"Newton did not converge at load factor {load_factor:.3f}")

    recorded_history["load_factor"].append(load_factor)
    recorded_history["rotation_vector"].append(eso3.log_so3(eso3.exp_so3(psi)))
    recorded_history["residual_norms"].append(residual_norms)

print(f"rotation vector: {psi}")
print(f"rotation angle: {np.linalg.norm(psi):.6f} rad")
print(f"Newton iterations in last step: {len(recorded_history['residual_norms'][-1])}")

plot_convergence(recorded_history, SAVE_FIGURE)
plot_load_path(recorded_history, SAVE_FIGURE)
