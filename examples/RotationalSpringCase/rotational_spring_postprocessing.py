import numpy as np
from matplotlib import pyplot as plt
from matplotlib.colors import to_rgb


def plot_convergence(recorded_history, SAVE_FIGURE):
    load_factors = recorded_history["load_factor"]
    residual_norms = recorded_history["residual_norms"]
    n_samples = len(residual_norms)

    fig = plt.figure(figsize=(10, 6), frameon=True, dpi=150)
    ax = fig.add_subplot(111)
    ax.grid(which="minor", color="k", linestyle="--")
    ax.grid(which="major", color="k", linestyle="-")
    for i, (load_factor, norms) in enumerate(zip(load_factors, residual_norms)):
        alpha = 0.3 + 0.7 * (i + 1) / max(n_samples, 1)
        # an exactly converged step reports a zero residual
        norms = np.maximum(np.asarray(norms, dtype=float), 1e-17)
        ax.semilogy(
            np.arange(len(norms)),
            norms,
            "o-",
            c=to_rgb("xkcd:bluish"),
            alpha=alpha,
            lw=1.2,
            label=f"load factor={load_factor:.2f}" if i == n_samples - 1 else None,
        )
    ax.set_xlabel("Newton iteration")
    ax.set_ylabel("residual norm")
    ax.set_title("Newton Convergence per Load Step")
    ax.legend()
    plt.show()
    if SAVE_FIGURE:
        fig.savefig("Rotational_spring_convergence.png")


def plot_load_path(recorded_history, SAVE_FIGURE):
    load_factors = np.asarray(recorded_history["load_factor"], dtype=float)
    rotation_vectors = np.asarray(recorded_history["rotation_vector"], dtype=float)

    fig = plt.figure(figsize=(10, 6), frameon=True, dpi=150)
    ax = fig.add_subplot(111)
    ax.grid(which="minor", color="k", linestyle="--")
    ax.grid(which="major", color="k", linestyle="-")
    ax.plot(
        load_factors,
        np.linalg.norm(rotation_vectors, axis=1),
        "k-",
        label="angle",
    )
    for component, color in zip(range(3), ["xkcd:bluish", "xkcd:orange", "xkcd:green"]):
        ax.plot(
            load_factors,
            rotation_vectors[:, component],
            "--",
            c=to_rgb(color),
            label="xyz"[component],
        )
    ax.set_xlabel("load factor")
    ax.set_ylabel("rotation vector [rad]")
    ax.set_title("Rotation Along the Load Path")
    ax.legend()
    plt.show()
    if SAVE_FIGURE:
        fig.savefig("Rotational_spring_load_path.png")
