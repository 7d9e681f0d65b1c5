"""Numerical integrators for N-body simulations."""

from orbit_sim.physics.integrators.base import Integrator
from orbit_sim.physics.integrators.euler import EulerIntegrator

__all__ = ["Integrator", "EulerIntegrator"]
