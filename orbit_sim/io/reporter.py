"""Sample output: formatted text and raw binary trajectories."""

import sys
from pathlib import Path
from typing import Optional, TextIO

import numpy as np

from orbit_sim.physics.simulator import Sample

# Record layout read by the web viewer: x, y, z per body, little-endian float64
RECORD_DTYPE = np.dtype("<f8")


class TextReporter:
    """Writes samples as text, one line per body followed by a blank line.

        0: Sun 0.000000/0.000000/0.000000
        0: Earth 149600000000.000000/29722.000000/0.000000
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def __call__(self, sample: Sample):
        self.report(sample)

    def report(self, sample: Sample):
        for name, position in sample.bodies:
            self.stream.write(f"{sample.index}: {name} {position.x:f}/{position.y:f}/{position.z:f}\n")
        self.stream.write("\n")


class BinaryTrajectoryWriter:
    """Appends every sample as one record of n*3 little-endian float64 values."""

    def __init__(self, output_path):
        self.output_path = Path(output_path)
        self._file = open(self.output_path, 'wb')
        self.records_written = 0

    def __call__(self, sample: Sample):
        self.write(sample)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def write(self, sample: Sample):
        record = np.array([position for _, position in sample.bodies], dtype=RECORD_DTYPE)
        self._file.write(record.tobytes())
        self.records_written += 1

    def close(self):
        if not self._file.closed:
            self._file.close()


def frame_count(input_path, n_bodies: int) -> int:
    """Number of complete records in a trajectory file."""
    record_size = n_bodies * 3 * RECORD_DTYPE.itemsize
    return Path(input_path).stat().st_size // record_size


def read_frame(input_path, n_bodies: int, index: int) -> np.ndarray:
    """Read the positions of all bodies at one sample index.

    Args:
        input_path: Trajectory file written by BinaryTrajectoryWriter
        n_bodies: Number of bodies per record
        index: Zero-based record index

    Returns:
        Array of shape (n_bodies, 3)

    Raises:
        ValueError: If index is outside the file
    """
    if n_bodies <= 0:
        raise ValueError(f"n_bodies must be positive, got {n_bodies}")
    n_frames = frame_count(input_path, n_bodies)
    if not 0 <= index < n_frames:
        raise ValueError(f"Incorrect time index {index}; file holds {n_frames} records")

    count = n_bodies * 3
    with open(input_path, 'rb') as f:
        f.seek(index * count * RECORD_DTYPE.itemsize)
        data = np.fromfile(f, dtype=RECORD_DTYPE, count=count)
    return data.reshape(n_bodies, 3)
