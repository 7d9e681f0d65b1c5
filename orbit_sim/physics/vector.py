"""Three-component vector arithmetic used by the physics engine."""

import math
from typing import NamedTuple


class Vector3(NamedTuple):
    """Immutable 3D vector of double-precision components."""
    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)


def add(a: Vector3, b: Vector3) -> Vector3:
    """Component-wise sum a + b."""
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def sub(a: Vector3, b: Vector3) -> Vector3:
    """Component-wise difference a - b."""
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def scale(a: Vector3, k: float) -> Vector3:
    """Multiply every component of a by k."""
    return Vector3(a.x * k, a.y * k, a.z * k)


def magnitude(a: Vector3) -> float:
    """Euclidean norm sqrt(x^2 + y^2 + z^2)."""
    return math.sqrt(a.x * a.x + a.y * a.y + a.z * a.z)
