"""Explicit (forward) Euler integrator, O(h) accuracy."""

from typing import Tuple

from orbit_sim.physics.integrators.base import Integrator
from orbit_sim.physics.vector import Vector3, add, scale


class EulerIntegrator(Integrator):
    """Forward Euler: both updates use only the current state.

    Accumulates energy error over long runs; orbits slowly spiral outward.
    """

    @property
    def name(self) -> str:
        return "euler"

    @property
    def order(self) -> int:
        return 1

    def advance(self, position: Vector3, velocity: Vector3, acceleration: Vector3, dt: float) -> Tuple[Vector3, Vector3]:
        """Euler step: r_new = r + v*dt, v_new = v + a*dt."""
        new_position = add(position, scale(velocity, dt))
        new_velocity = add(velocity, scale(acceleration, dt))
        return new_position, new_velocity
