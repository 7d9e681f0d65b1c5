"""Tests for energy and momentum diagnostics."""

import numpy as np
from orbit_sim.physics.body import Body
from orbit_sim.physics.diagnostics import Diagnostics, compute_center_of_mass, compute_energies
from orbit_sim.physics.nbody import NBodySystem
from orbit_sim.physics.vector import Vector3


def two_bodies():
    return [
        Body("a", Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 2.0),
        Body("b", Vector3(3.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0), 3.0),
    ]


def test_energies():
    """K = 0.5 * sum(M v^2), U = -sum(M_i M_j / r)."""
    system = NBodySystem(two_bodies())
    K, U, E = compute_energies(*system.get_state())

    assert np.isclose(K, 1.0)
    assert np.isclose(U, -2.0)
    assert np.isclose(E, -1.0)


def test_coincident_pairs_excluded_from_potential():
    """Coincident pairs add no potential energy, matching the force law."""
    positions = np.zeros((2, 3))
    velocities = np.zeros((2, 3))
    K, U, E = compute_energies(positions, velocities, np.array([1.0, 1.0]))
    assert U == 0.0


def test_center_of_mass():
    """Mass-weighted mean, falling back to the plain mean for zero mass."""
    positions = np.array([[0.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
    assert np.allclose(compute_center_of_mass(positions, [2.0, 3.0]), [1.8, 0.0, 0.0])
    assert np.allclose(compute_center_of_mass(positions, [0.0, 0.0]), [1.5, 0.0, 0.0])


def test_energy_drift_small_for_short_run():
    """Euler drift over a few small steps stays small."""
    system = NBodySystem([
        Body("star", Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0), 1.0),
        Body("planet", Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 1e-6),
    ])
    diagnostics = Diagnostics(system)
    assert diagnostics.relative_energy_drift() == 0.0

    for _ in range(100):
        system.step(0.001)

    assert abs(diagnostics.relative_energy_drift()) < 1e-3
