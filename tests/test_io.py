"""Tests for I/O functionality."""

import io

import numpy as np
import pytest
from orbit_sim.io.reporter import BinaryTrajectoryWriter, TextReporter, frame_count, read_frame
from orbit_sim.io.state_io import load_state, save_state
from orbit_sim.physics.body import Body
from orbit_sim.physics.simulator import Sample
from orbit_sim.physics.vector import Vector3


def make_sample(index, offset=0.0):
    return Sample(index=index, time=float(index), bodies=(
        ("Sun", Vector3(offset, 0.0, 0.0)),
        ("Earth", Vector3(1.5 + offset, -2.25, 0.0)),
    ))


def make_bodies():
    return [
        Body("Sun", Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0), 1.32712440018e20),
        Body("Earth", Vector3(1.496e11, 0.0, 0.0), Vector3(0.0, 29722.0, 0.0), 3.986004418e14),
    ]


def test_text_reporter_format():
    """Each body is printed as 'index: name x/y/z', samples separated by a blank line."""
    stream = io.StringIO()
    reporter = TextReporter(stream)
    reporter(make_sample(0))
    reporter(make_sample(1, offset=1.0))

    assert stream.getvalue() == (
        "0: Sun 0.000000/0.000000/0.000000\n"
        "0: Earth 1.500000/-2.250000/0.000000\n"
        "\n"
        "1: Sun 1.000000/0.000000/0.000000\n"
        "1: Earth 2.500000/-2.250000/0.000000\n"
        "\n"
    )


def test_binary_trajectory(tmp_path):
    """Records are fixed-size float64 blocks readable by index."""
    path = tmp_path / "data.dat"
    with BinaryTrajectoryWriter(path) as writer:
        for i in range(3):
            writer(make_sample(i, offset=float(i)))
        assert writer.records_written == 3

    assert path.stat().st_size == 3 * 2 * 3 * 8
    assert frame_count(path, 2) == 3
    frame = read_frame(path, 2, 1)
    assert frame.shape == (2, 3)
    assert np.array_equal(frame, [[1.0, 0.0, 0.0], [2.5, -2.25, 0.0]])

    with pytest.raises(ValueError):
        read_frame(path, 2, 3)
    with pytest.raises(ValueError):
        read_frame(path, 2, -1)


def test_save_load_npz(tmp_path):
    """Test saving and loading NPZ format."""
    path = tmp_path / "state.npz"
    save_state(make_bodies(), path, metadata={"time": 10.0, "steps": 100})

    bodies, metadata = load_state(path)

    assert bodies == make_bodies()
    assert metadata.get("time") == 10.0
    assert metadata.get("steps") == 100


def test_save_load_json(tmp_path):
    """Test saving and loading JSON format."""
    path = tmp_path / "state.json"
    save_state(make_bodies(), path, metadata={"time": 10.0, "steps": 100})

    bodies, metadata = load_state(path)

    assert bodies == make_bodies()
    assert metadata.get("time") == 10.0


def test_unsupported_state_format(tmp_path):
    """Only .npz and .json snapshots are supported."""
    with pytest.raises(ValueError):
        save_state(make_bodies(), tmp_path / "state.txt")
    with pytest.raises(ValueError):
        load_state(tmp_path / "state.txt")
