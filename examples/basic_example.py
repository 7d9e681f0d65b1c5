"""Basic example of using the orbit simulator."""

from orbit_sim import Body, NBodySystem, SimulationParameters, Simulator, Vector3
from orbit_sim.physics.diagnostics import Diagnostics


def main():
    """Run one simulated year of the Sun-Earth system with hourly steps."""
    bodies = [
        Body("Sun", Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0), 1.32712440018e20),
        Body("Earth", Vector3(1.496e11, 0.0, 0.0), Vector3(0.0, 29722.0, 0.0), 3.986004418e14),
    ]

    system = NBodySystem(bodies)
    diagnostics = Diagnostics(system)
    sim = Simulator(system, SimulationParameters(duration=60 * 60 * 24 * 365, delta=3600.0,
                                                 sample_rate=60 * 60 * 24 * 30))

    print("Running simulation...")
    for sample in sim.samples():
        name, earth = sample.bodies[1]
        print(f"Sample {sample.index}: t={sample.time / 86400:.0f} d, {name} at ({earth.x:.4e}, {earth.y:.4e})")

    print(f"Relative energy drift: {diagnostics.relative_energy_drift():.3e}")
    print("Simulation complete!")


if __name__ == "__main__":
    main()
