"""Loading and saving body configurations.

A configuration lists bodies by name. Each body supplies initial position
(cx, cy, cz), initial velocity (vx, vy, vz) and pre-scaled mass M = G*m.
Missing fields default to 0.0. INI is the native format:

    [Sun]
    M = 1.32712440018e20

    [Earth]
    cx = 1.496e11
    vy = 29722
    M  = 3.986004418e14

YAML and JSON files hold the same data as a mapping of name to fields.
"""

import configparser
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from orbit_sim.physics.body import Body
from orbit_sim.physics.vector import Vector3

logger = logging.getLogger(__name__)

POSITION_KEYS = ("cx", "cy", "cz")
VELOCITY_KEYS = ("vx", "vy", "vz")
MASS_KEY = "m"
BODY_KEYS = POSITION_KEYS + VELOCITY_KEYS + (MASS_KEY,)

YAML_SUFFIXES = (".yaml", ".yml")


class ConfigError(ValueError):
    """Raised when a configuration file cannot be turned into bodies."""


def _parse_field(body: str, key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"[{body}] {key}: expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"[{body}] {key}: cannot parse {value!r} as a number") from None
    if not math.isfinite(number):
        raise ConfigError(f"[{body}] {key}: value must be finite, got {value!r}")
    return number


def body_from_fields(name: str, fields: Mapping[str, Any]) -> Body:
    """Build a Body from a mapping of field names (case-insensitive) to values.

    Raises:
        ConfigError: On unparseable values or negative mass
    """
    values = {key: 0.0 for key in BODY_KEYS}
    for key, value in fields.items():
        key_lower = str(key).strip().lower()
        if key_lower not in values:
            logger.warning("Ignoring unknown key '%s' in body '%s'", key, name)
            continue
        values[key_lower] = _parse_field(name, key, value)

    if values[MASS_KEY] < 0.0:
        raise ConfigError(f"[{name}] M: mass must be >= 0, got {values[MASS_KEY]}")

    return Body(
        name=name,
        position=Vector3(*(values[k] for k in POSITION_KEYS)),
        velocity=Vector3(*(values[k] for k in VELOCITY_KEYS)),
        mass=values[MASS_KEY],
    )


# Section headers need at least one character, so no section can be named ""
NO_DEFAULT_SECTION = ""


def _read_ini(text: str, source: str) -> Dict[str, Dict[str, str]]:
    # strict=False merges repeated sections, later keys overwriting earlier ones.
    # Every section is a body; [DEFAULT] gets no special meaning.
    parser = configparser.ConfigParser(
        strict=False,
        interpolation=None,
        inline_comment_prefixes=(";", "#"),
        default_section=NO_DEFAULT_SECTION,
    )
    try:
        parser.read_string(text, source=source)
    except configparser.Error as e:
        raise ConfigError(f"Malformed INI file {source}: {e}") from None
    return {section: dict(parser.items(section)) for section in parser.sections()}


def _merge_pairs(pairs) -> Dict[Any, Any]:
    """Build a mapping where a repeated key holding a mapping updates the earlier one."""
    merged = {}
    for key, value in pairs:
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


class _MergingLoader(yaml.SafeLoader):
    """SafeLoader that merges repeated body names instead of replacing them."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
        # deep construction so nested mappings are complete before merging
        return _merge_pairs(
            (self.construct_object(key_node, deep=True), self.construct_object(value_node, deep=True))
            for key_node, value_node in node.value
        )


def _read_mapping(data: Any, source: str) -> Dict[str, Dict[str, Any]]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping of body name to fields")
    sections = {}
    for name, fields in data.items():
        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            raise ConfigError(f"{source}: body '{name}' must be a mapping of fields")
        sections[str(name)] = fields
    return sections


def load_bodies(config_path) -> List[Body]:
    """Load bodies from a configuration file.

    Args:
        config_path: Path to config file (.ini/.cfg, .yaml/.yml or .json)

    Returns:
        Bodies in file order (at least one)

    Raises:
        ConfigError: If the file is missing, malformed or defines no bodies
    """
    config_path = Path(config_path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e.strerror or e}") from None

    suffix = config_path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        try:
            data = yaml.load(text, Loader=_MergingLoader)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML file {config_path}: {e}") from None
        sections = _read_mapping(data, str(config_path))
    elif suffix == ".json":
        try:
            data = json.loads(text, object_pairs_hook=_merge_pairs)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Malformed JSON file {config_path}: {e}") from None
        sections = _read_mapping(data, str(config_path))
    else:
        sections = _read_ini(text, str(config_path))

    bodies = [body_from_fields(name, fields) for name, fields in sections.items()]
    if not bodies:
        raise ConfigError(f"No bodies defined in {config_path}")

    logger.info("Loaded %d bodies from %s", len(bodies), config_path)
    return bodies


def _body_fields(body: Body) -> Dict[str, float]:
    return {
        "cx": body.position.x, "cy": body.position.y, "cz": body.position.z,
        "vx": body.velocity.x, "vy": body.velocity.y, "vz": body.velocity.z,
        "M": body.mass,
    }


def save_bodies(bodies, output_path):
    """Save bodies as a configuration file that load_bodies can read back.

    Args:
        bodies: Iterable of Body
        output_path: Output file path (.ini/.cfg, .yaml/.yml or .json)

    Raises:
        ValueError: If any body has a non-finite field
    """
    bodies = list(bodies)
    for body in bodies:
        if not all(math.isfinite(v) for v in _body_fields(body).values()):
            raise ValueError(f"Body '{body.name}' has non-finite state; refusing to export it")

    output_path = Path(output_path)
    data = {body.name: _body_fields(body) for body in bodies}
    suffix = output_path.suffix.lower()

    with open(output_path, 'w') as f:
        if suffix in YAML_SUFFIXES:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        elif suffix == ".json":
            json.dump(data, f, indent=2)
        else:
            for name, fields in data.items():
                f.write(f"[{name}]\n")
                for key, value in fields.items():
                    f.write(f"{key} = {value!r}\n")
                f.write("\n")
