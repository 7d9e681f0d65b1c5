"""Physics engine for N-body simulations."""

from orbit_sim.physics.body import Body
from orbit_sim.physics.nbody import NBodySystem
from orbit_sim.physics.simulator import Sample, SimulationParameters, Simulator
from orbit_sim.physics.vector import Vector3

__all__ = ["Body", "NBodySystem", "Sample", "SimulationParameters", "Simulator", "Vector3"]
