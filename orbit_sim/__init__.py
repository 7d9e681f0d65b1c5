"""
Orbit Simulator - brute-force N-body orbital mechanics.

Features:
- Pairwise O(N^2) gravity with pre-scaled masses (G*m)
- Synchronous explicit Euler stepping over a double-buffered state
- INI, YAML and JSON body configurations
- Text, binary trajectory and plot output
- CLI interface
"""

__version__ = "0.1.0"

from orbit_sim.physics.body import Body
from orbit_sim.physics.nbody import NBodySystem
from orbit_sim.physics.simulator import Sample, SimulationParameters, Simulator
from orbit_sim.physics.vector import Vector3

__all__ = [
    "Body",
    "NBodySystem",
    "Sample",
    "SimulationParameters",
    "Simulator",
    "Vector3",
]
