"""Main simulator controller: fixed-step loop with periodic sampling."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

from orbit_sim.physics.nbody import NBodySystem
from orbit_sim.physics.vector import Vector3

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24
SECONDS_PER_JULIAN_YEAR = 60 * 60 * 24 * 365.256


@dataclass
class SimulationParameters:
    """Run parameters, all in seconds.

    Attributes:
        duration: Total simulated time (default: one Julian year)
        delta: Integration step size (default: 1 s)
        sample_rate: Interval between reported samples (default: one day)
    """
    duration: float = SECONDS_PER_JULIAN_YEAR
    delta: float = 1.0
    sample_rate: float = float(SECONDS_PER_DAY)

    def __post_init__(self):
        if not (self.delta > 0 and math.isfinite(self.delta)):
            raise ValueError(f"delta must be positive, got {self.delta}")
        if not (self.sample_rate > 0 and math.isfinite(self.sample_rate)):
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if not (self.duration >= 0 and math.isfinite(self.duration)):
            raise ValueError(f"duration must be non-negative, got {self.duration}")

    @property
    def n_steps(self) -> int:
        """Number of steps i >= 0 with i * delta < duration."""
        n = math.ceil(self.duration / self.delta)
        # Guard the boundary against rounding in the division
        while n > 0 and (n - 1) * self.delta >= self.duration:
            n -= 1
        while n * self.delta < self.duration:
            n += 1
        return n


@dataclass(frozen=True)
class Sample:
    """Snapshot emitted at a sampling boundary.

    Attributes:
        index: floor(elapsed / sample_rate), elapsed being the time at the
            start of the step that produced this state
        time: Simulation time of the reported state
        bodies: (name, position) pairs in body order
    """
    index: int
    time: float
    bodies: Tuple[Tuple[str, Vector3], ...]


class Simulator:
    """Drives an NBodySystem for a fixed duration and emits samples."""

    def __init__(self, system: NBodySystem, params: Optional[SimulationParameters] = None):
        self.system = system
        self.params = params or SimulationParameters()
        self.time = 0.0
        self.step_count = 0
        self.on_sample_callback: Optional[Callable[[Sample], None]] = None

    def samples(self) -> Iterator[Sample]:
        """Step through the whole run, yielding one Sample per boundary."""
        delta = self.params.delta
        sample_rate = self.params.sample_rate
        n_steps = self.params.n_steps
        last_index = None

        logger.info(
            "Running %d steps of %g s over %d bodies (sample every %g s)",
            n_steps, delta, self.system.n_bodies, sample_rate
        )

        for i in range(n_steps):
            elapsed = i * delta
            self.system.step(delta)
            self.step_count = i + 1
            self.time = self.step_count * delta

            index = math.floor(elapsed / sample_rate)
            if index == last_index:
                continue
            last_index = index
            logger.debug("Sample %d at t=%g s", index, self.time)
            yield Sample(index=index, time=self.time, bodies=tuple(self.system.positions()))

    def run(self, on_sample: Optional[Callable[[Sample], None]] = None) -> int:
        """Run the simulation to completion.

        Args:
            on_sample: Called with every Sample (falls back to on_sample_callback)

        Returns:
            Number of samples emitted
        """
        callback = on_sample or self.on_sample_callback
        count = 0
        for sample in self.samples():
            if callback:
                callback(sample)
            count += 1
        return count
