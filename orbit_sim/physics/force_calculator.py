"""Pairwise gravitational acceleration kernels.

Masses are gravitational parameters (G*m), so the acceleration on body i is

    a_i = sum_{j != i} M_j * (r_j - r_i) / |r_j - r_i|^3

A pair whose separation is within machine epsilon of zero is skipped.
"""

import sys
from typing import Literal, Sequence

import numpy as np

from orbit_sim.physics.body import Body
from orbit_sim.physics.vector import Vector3, add, sub, scale, magnitude

# DBL_EPSILON
SEPARATION_EPSILON = sys.float_info.epsilon

METHODS = ("direct", "vectorized")


def pair_contributes(rmod: float) -> bool:
    """Return True unless the separation is numerically zero (or NaN)."""
    return rmod > SEPARATION_EPSILON or rmod < -SEPARATION_EPSILON


def direct_acceleration(bodies: Sequence[Body], i: int) -> Vector3:
    """Net acceleration on bodies[i] from every other body."""
    a = Vector3.zero()
    ri = bodies[i].position
    for j, other in enumerate(bodies):
        if j == i:
            continue
        r = sub(other.position, ri)
        rmod = magnitude(r)
        if pair_contributes(rmod):
            a = add(a, scale(r, other.mass / (rmod * rmod * rmod)))
    return a


def vectorized_accelerations(positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
    """Accelerations for all bodies at once.

    Vectorized across the receiving body i. The sum over j is accumulated
    in index order with the same float64 operations as the direct kernel,
    so both produce identical results.

    Args:
        positions: (n, 3) float64 array
        masses: (n,) float64 array

    Returns:
        (n, 3) float64 array of accelerations
    """
    positions = np.asarray(positions, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64)
    n = positions.shape[0]
    acc = np.zeros((n, 3), dtype=np.float64)
    not_self = ~np.eye(n, dtype=bool)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore", under="ignore"):
        for j in range(n):
            r = positions[j] - positions
            rmod = np.sqrt(r[:, 0] * r[:, 0] + r[:, 1] * r[:, 1] + r[:, 2] * r[:, 2])
            mask = not_self[:, j] & ((rmod > SEPARATION_EPSILON) | (rmod < -SEPARATION_EPSILON))
            if not np.any(mask):
                continue
            k = masses[j] / (rmod[mask] * rmod[mask] * rmod[mask])
            acc[mask] = acc[mask] + r[mask] * k[:, np.newaxis]

    return acc


class ForceCalculator:
    """Computes the acceleration of every body from one consistent snapshot."""

    def __init__(self, method: Literal["direct", "vectorized"] = "direct"):
        if method not in METHODS:
            raise ValueError(f"Unknown force method '{method}'. Available: {list(METHODS)}")
        self.method = method

    def compute_accelerations(self, bodies: Sequence[Body]) -> list:
        """Return one Vector3 acceleration per body, in body order."""
        if self.method == "direct":
            return [direct_acceleration(bodies, i) for i in range(len(bodies))]

        positions = np.array([b.position for b in bodies], dtype=np.float64)
        masses = np.array([b.mass for b in bodies], dtype=np.float64)
        acc = vectorized_accelerations(positions, masses)
        return [Vector3(float(ax), float(ay), float(az)) for ax, ay, az in acc]
