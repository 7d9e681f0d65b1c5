"""Core N-body engine: pairwise gravity and synchronous time stepping."""

import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from orbit_sim.physics.body import Body
from orbit_sim.physics.force_calculator import ForceCalculator, direct_acceleration
from orbit_sim.physics.integrators.base import Integrator
from orbit_sim.physics.integrators.euler import EulerIntegrator
from orbit_sim.physics.vector import Vector3


class NBodySystem:
    """Gravitational system of a fixed set of point masses.

    Holds two equally sized body collections: the current state and a
    scratch buffer the next state is staged into. A step computes every
    acceleration against the current state, stages all results, and only
    then copies them back, so no body sees a partially updated system.
    """

    def __init__(
        self,
        bodies: Iterable[Body],
        integrator: Optional[Integrator] = None,
        method: str = "direct"
    ):
        """Initialize the system.

        Args:
            bodies: Initial bodies, in reporting order. They are copied.
            integrator: Per-body integration scheme (default: explicit Euler)
            method: Acceleration kernel, 'direct' or 'vectorized'

        Raises:
            ValueError: If there are no bodies, a mass is negative, or the
                method is unknown
        """
        self._bodies: List[Body] = [body.copy() for body in bodies]
        if not self._bodies:
            raise ValueError("NBodySystem requires at least one body")
        for body in self._bodies:
            if not body.mass >= 0.0:
                raise ValueError(f"Body '{body.name}' has invalid mass {body.mass!r}; must be >= 0")

        self._next: List[Body] = [body.copy() for body in self._bodies]
        self.integrator = integrator or EulerIntegrator()
        self.force_calculator = ForceCalculator(method=method)

    @property
    def n_bodies(self) -> int:
        return len(self._bodies)

    @property
    def names(self) -> List[str]:
        return [body.name for body in self._bodies]

    @property
    def bodies(self) -> Tuple[Body, ...]:
        """Copies of the current bodies; mutating them does not affect the system."""
        return tuple(body.copy() for body in self._bodies)

    def acceleration_of(self, i: int) -> Vector3:
        """Net gravitational acceleration on body i from all other bodies."""
        return direct_acceleration(self._bodies, i)

    def step(self, dt: float):
        """Advance every body by one step of dt seconds."""
        accelerations = self.force_calculator.compute_accelerations(self._bodies)

        for current, staged, acceleration in zip(self._bodies, self._next, accelerations):
            staged.position, staged.velocity = self.integrator.advance(
                current.position, current.velocity, acceleration, dt
            )

        for current, staged in zip(self._bodies, self._next):
            current.position = staged.position
            current.velocity = staged.velocity

    def positions(self) -> List[Tuple[str, Vector3]]:
        """Current (name, position) pairs in body order."""
        return [(body.name, body.position) for body in self._bodies]

    def get_state(self):
        """Get current state (positions, velocities, masses).

        Returns:
            Tuple of (positions (n, 3), velocities (n, 3), masses (n,)) as numpy arrays
        """
        return (
            np.array([body.position for body in self._bodies], dtype=np.float64),
            np.array([body.velocity for body in self._bodies], dtype=np.float64),
            np.array([body.mass for body in self._bodies], dtype=np.float64),
        )

    def is_finite(self) -> bool:
        """True while every position and velocity component is finite."""
        return all(
            math.isfinite(c)
            for body in self._bodies
            for c in (*body.position, *body.velocity)
        )
