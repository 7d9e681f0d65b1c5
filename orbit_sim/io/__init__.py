"""I/O utilities for sample output and state management."""

from orbit_sim.io.reporter import TextReporter, BinaryTrajectoryWriter, read_frame, frame_count
from orbit_sim.io.state_io import save_state, load_state

__all__ = ["TextReporter", "BinaryTrajectoryWriter", "read_frame", "frame_count", "save_state", "load_state"]
