"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Tuple

from orbit_sim.physics.vector import Vector3


class Integrator(ABC):
    """Abstract interface for per-body integration schemes.

    The engine stages every body's result before committing any of them,
    so an integrator only ever sees the pre-step state.
    """

    @abstractmethod
    def advance(
        self,
        position: Vector3,
        velocity: Vector3,
        acceleration: Vector3,
        dt: float
    ) -> Tuple[Vector3, Vector3]:
        """Compute one body's next state.

        Args:
            position: Current position
            velocity: Current velocity
            acceleration: Acceleration at the current position
            dt: Time step in seconds

        Returns:
            Tuple of (new_position, new_velocity)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy."""
        pass
