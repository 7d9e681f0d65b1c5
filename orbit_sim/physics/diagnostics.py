"""Diagnostics for N-body simulations.

Masses are gravitational parameters (G*m), so every quantity here is
expressed in G-scaled units: momentum is G*p, energy is G*E.
"""

import numpy as np
from typing import Tuple

from orbit_sim.physics.force_calculator import SEPARATION_EPSILON


def compute_momentum(velocities, masses) -> np.ndarray:
    """Total momentum sum(M_i * v_i)."""
    velocities = np.asarray(velocities, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64).flatten()
    return np.sum(masses[:, np.newaxis] * velocities, axis=0)


def compute_center_of_mass(positions, masses) -> np.ndarray:
    """Mass-weighted mean position; plain mean if the total mass is zero."""
    positions = np.asarray(positions, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64).flatten()
    total_mass = np.sum(masses)
    if total_mass == 0.0:
        return np.mean(positions, axis=0)
    return np.sum(masses[:, np.newaxis] * positions, axis=0) / total_mass


def compute_energies(positions, velocities, masses) -> Tuple[float, float, float]:
    """Compute kinetic, potential, and total energy.

    K = 0.5 * sum(M_i * v_i^2)
    U = -sum_{i<j} M_i * M_j / r_ij, skipping coincident pairs like the force law

    Returns:
        Tuple of (kinetic_energy, potential_energy, total_energy)
    """
    positions = np.asarray(positions, dtype=np.float64)
    velocities = np.asarray(velocities, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64).flatten()
    n = len(masses)

    v_sq = np.sum(velocities ** 2, axis=1)
    K = 0.5 * np.sum(masses * v_sq)

    U = 0.0
    if n > 1:
        r_diff = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        r = np.sqrt(np.sum(r_diff ** 2, axis=2))
        i_idx, j_idx = np.triu_indices(n, k=1)
        r_pairs = r[i_idx, j_idx]
        valid = r_pairs > SEPARATION_EPSILON
        U = -np.sum(masses[i_idx][valid] * masses[j_idx][valid] / r_pairs[valid])

    return float(K), float(U), float(K + U)


class Diagnostics:
    """Energy and momentum bookkeeping for an NBodySystem."""

    def __init__(self, system):
        self.system = system
        self.initial_energy = self.energies()[2]

    def energies(self) -> Tuple[float, float, float]:
        pos, vel, mass = self.system.get_state()
        return compute_energies(pos, vel, mass)

    def momentum(self) -> np.ndarray:
        _, vel, mass = self.system.get_state()
        return compute_momentum(vel, mass)

    def center_of_mass(self) -> np.ndarray:
        pos, _, mass = self.system.get_state()
        return compute_center_of_mass(pos, mass)

    def relative_energy_drift(self) -> float:
        """(E - E0) / |E0|, or 0 when E0 is zero."""
        E = self.energies()[2]
        if self.initial_energy == 0.0:
            return 0.0
        return (E - self.initial_energy) / abs(self.initial_energy)
