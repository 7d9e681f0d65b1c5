"""Tests for the simulation driver and sampling."""

import math

import numpy as np
import pytest
from orbit_sim.physics.body import Body
from orbit_sim.physics.nbody import NBodySystem
from orbit_sim.physics.simulator import SimulationParameters, Simulator
from orbit_sim.physics.vector import Vector3, magnitude

SUN_GM = 1.32712440018e20
EARTH_GM = 3.986004418e14
AU = 1.496e11
DAY = 60 * 60 * 24


def sun_earth():
    return [
        Body("Sun", Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0), SUN_GM),
        Body("Earth", Vector3(AU, 0.0, 0.0), Vector3(0.0, 29722.0, 0.0), EARTH_GM),
    ]


def lone_body():
    return [Body("rock", Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), 1.0)]


def test_default_parameters():
    """Defaults are one Julian year, one second steps, daily samples."""
    params = SimulationParameters()
    assert params.duration == 60 * 60 * 24 * 365.256
    assert params.delta == 1.0
    assert params.sample_rate == 86400


@pytest.mark.parametrize("kwargs", [
    {"delta": 0.0},
    {"delta": -1.0},
    {"sample_rate": 0.0},
    {"duration": -5.0},
    {"duration": float('inf')},
])
def test_invalid_parameters(kwargs):
    """Non-positive step or sample rate and negative duration are rejected."""
    with pytest.raises(ValueError):
        SimulationParameters(**kwargs)


def test_step_count():
    """A run covers every step starting before the duration ends."""
    assert SimulationParameters(duration=10.0, delta=1.0).n_steps == 10
    assert SimulationParameters(duration=10.5, delta=1.0).n_steps == 11
    assert SimulationParameters(duration=0.0, delta=1.0).n_steps == 0

    sim = Simulator(NBodySystem(lone_body()), SimulationParameters(duration=10.5, delta=1.0))
    sim.run()
    assert sim.step_count == 11
    assert sim.time == 11.0


def test_one_sample_per_day():
    """With 1 s steps, exactly one sample per 86400 steps with consecutive indices."""
    params = SimulationParameters(duration=3 * DAY, delta=1.0, sample_rate=DAY)
    samples = list(Simulator(NBodySystem(lone_body()), params).samples())

    assert [s.index for s in samples] == [0, 1, 2]
    assert [s.time for s in samples] == [1.0, DAY + 1.0, 2 * DAY + 1.0]
    assert samples[0].bodies[0][0] == "rock"
    assert samples[1].bodies[0][1] == Vector3(DAY + 1.0, 0.0, 0.0)


def test_sample_index_is_floor_of_elapsed():
    """Indices follow floor(elapsed / sample_rate) when steps do not divide the rate."""
    params = SimulationParameters(duration=10.0, delta=0.75, sample_rate=2.0)
    samples = list(Simulator(NBodySystem(lone_body()), params).samples())

    # elapsed at emission: 0, 2.25, 4.5, 6.0, 8.25
    assert [s.index for s in samples] == [0, 1, 2, 3, 4]
    assert [s.time for s in samples] == [0.75, 3.0, 5.25, 6.75, 9.0]


def test_run_invokes_callback():
    """run() hands every sample to the callback and returns the count."""
    received = []
    sim = Simulator(NBodySystem(lone_body()), SimulationParameters(duration=100.0, delta=1.0, sample_rate=10.0))
    sim.on_sample_callback = received.append

    assert sim.run() == 10
    assert len(received) == 10
    assert sim.step_count == 100


def test_runs_are_reproducible():
    """The same configuration yields identical samples."""
    params = SimulationParameters(duration=30 * DAY, delta=3600.0, sample_rate=DAY)
    first = list(Simulator(NBodySystem(sun_earth()), params).samples())
    second = list(Simulator(NBodySystem(sun_earth()), params).samples())
    assert first == second


def test_sun_earth_year():
    """Earth completes roughly one orbit while the Sun barely moves."""
    params = SimulationParameters(duration=365 * DAY, delta=3600.0, sample_rate=DAY)
    samples = list(Simulator(NBodySystem(sun_earth()), params).samples())

    assert len(samples) == 365
    assert [s.index for s in samples] == list(range(365))

    earth = np.array([s.bodies[1][1] for s in samples])
    sun = np.array([s.bodies[0][1] for s in samples])
    radii = np.linalg.norm(earth - sun, axis=1)

    assert np.all(np.abs(radii - AU) / AU < 0.03)
    assert earth[:, 0].min() < -0.95 * AU
    assert abs(earth[-1, 0] - AU) / AU < 0.05
    assert np.max(np.linalg.norm(sun, axis=1)) < 1e-4 * AU

    final_earth = samples[-1].bodies[1][1]
    assert math.isfinite(magnitude(final_earth))
