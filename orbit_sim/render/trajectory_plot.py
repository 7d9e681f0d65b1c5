"""Orbit plots using matplotlib."""

from pathlib import Path
from typing import List, Sequence

import numpy as np
from matplotlib.figure import Figure

from orbit_sim.physics.simulator import Sample

PLANES = {"xy": (0, 1), "xz": (0, 2), "yz": (1, 2)}


class TrajectoryRecorder:
    """Collects sampled positions for plotting."""

    def __init__(self):
        self.names: List[str] = []
        self._frames: List[np.ndarray] = []
        self.times: List[float] = []

    def __call__(self, sample: Sample):
        self.record(sample)

    def record(self, sample: Sample):
        if not self.names:
            self.names = [name for name, _ in sample.bodies]
        self._frames.append(np.array([position for _, position in sample.bodies], dtype=np.float64))
        self.times.append(sample.time)

    @property
    def trajectories(self) -> np.ndarray:
        """Array of shape (n_bodies, n_samples, 3)."""
        if not self._frames:
            return np.zeros((0, 0, 3))
        return np.stack(self._frames, axis=1)


def plot_trajectories(
    names: Sequence[str],
    trajectories: np.ndarray,
    output_path,
    plane: str = "xy",
    figsize=(8, 8),
    dpi: int = 100
) -> Path:
    """Save a plot of every body's path projected onto a coordinate plane.

    Args:
        names: Body names, one per trajectory
        trajectories: Array of shape (n_bodies, n_samples, 3)
        output_path: Image path (format from the suffix, e.g. .png)
        plane: 'xy', 'xz' or 'yz'

    Returns:
        Path of the written image
    """
    if plane not in PLANES:
        raise ValueError(f"Unknown plane '{plane}'. Available: {list(PLANES)}")
    trajectories = np.asarray(trajectories, dtype=np.float64)
    if trajectories.ndim != 3 or trajectories.shape[0] != len(names):
        raise ValueError("trajectories must have shape (len(names), n_samples, 3)")

    a, b = PLANES[plane]
    fig = Figure(figsize=figsize, dpi=dpi)
    ax = fig.add_subplot(1, 1, 1)
    for name, path in zip(names, trajectories):
        line, = ax.plot(path[:, a], path[:, b], linewidth=1.0, label=name)
        if len(path):
            ax.plot(path[-1, a], path[-1, b], 'o', color=line.get_color(), markersize=4)
    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel(f'{plane[0]} [m]')
    ax.set_ylabel(f'{plane[1]} [m]')
    ax.set_title('Orbits')
    ax.grid(True, alpha=0.3)
    if len(names):
        ax.legend(loc='upper right')

    output_path = Path(output_path)
    fig.savefig(output_path)
    return output_path
