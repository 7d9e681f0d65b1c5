"""State I/O for saving and loading simulation snapshots."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from orbit_sim.physics.body import Body
from orbit_sim.physics.vector import Vector3


def save_state(
    bodies,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Save a body snapshot to file.

    Args:
        bodies: Sequence of Body
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata dictionary
    """
    output_path = Path(output_path)
    names = [body.name for body in bodies]
    positions = np.array([body.position for body in bodies], dtype=np.float64)
    velocities = np.array([body.velocity for body in bodies], dtype=np.float64)
    masses = np.array([body.mass for body in bodies], dtype=np.float64)

    if output_path.suffix == '.npz':
        save_dict = {
            'names': np.array(names, dtype=str),
            'positions': positions,
            'velocities': velocities,
            'masses': masses
        }
        if metadata:
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)

    elif output_path.suffix == '.json':
        state_dict = {
            'names': names,
            'positions': positions.tolist(),
            'velocities': velocities.tolist(),
            'masses': masses.tolist(),
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(state_dict, f, indent=2)

    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_state(input_path: str) -> Tuple[List[Body], Dict[str, Any]]:
    """Load a body snapshot from file.

    Returns:
        Tuple of (bodies, metadata)
    """
    input_path = Path(input_path)

    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            names = [str(name) for name in data['names']]
            positions = data['positions']
            velocities = data['velocities']
            masses = data['masses']
            metadata = {}
            for key in data.keys():
                if key.startswith('metadata_'):
                    metadata[key[9:]] = data[key].item()

    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            state_dict = json.load(f)
        names = state_dict['names']
        positions = np.array(state_dict['positions'], dtype=np.float64)
        velocities = np.array(state_dict['velocities'], dtype=np.float64)
        masses = np.array(state_dict['masses'], dtype=np.float64)
        metadata = state_dict.get('metadata', {})

    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")

    bodies = [
        Body(name, Vector3(*map(float, pos)), Vector3(*map(float, vel)), float(mass))
        for name, pos, vel, mass in zip(names, positions, velocities, masses)
    ]
    return bodies, metadata
