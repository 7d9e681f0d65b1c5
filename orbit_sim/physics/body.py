"""Point-mass body state."""

from dataclasses import dataclass, replace
from orbit_sim.physics.vector import Vector3


@dataclass
class Body:
    """A gravitating point mass.

    Attributes:
        name: Identifier used only for reporting
        position: Position in metres
        velocity: Velocity in metres per second
        mass: Gravitational parameter G*m (m^3/s^2). Masses are supplied
            pre-scaled; the engine never multiplies by G.
    """
    name: str
    position: Vector3
    velocity: Vector3
    mass: float

    def copy(self) -> "Body":
        return replace(self)
