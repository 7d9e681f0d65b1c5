"""Configuration utilities."""

from orbit_sim.utils.config import ConfigError, load_bodies, save_bodies

__all__ = ["ConfigError", "load_bodies", "save_bodies"]
