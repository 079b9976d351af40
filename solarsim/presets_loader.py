#!/usr/bin/env python3
"""
Preset scenes and JSON template loading.

This module provides:
- The built-in solar system (Sun through Neptune) built from real km/kg data.
- The default configuration used when a body is added interactively.
- A loader for scene templates (templates/*.json).

Schemas
=======
Template JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_step": 3600.0,               # optional, seconds per tick
  "bodies": [
    {
      "name": "Sun",
      "mass_kg": 1.9884e30,
      "radius_km": 695700,
      "distance_km": 0,
      "color": "#ffff00"
    },
    {
      "name": "Probe",
      "mass": 0.001,                  # sim units may be given directly instead
      "radius": 1.0,
      "position": [120.0, 0.0, 0.0],
      "velocity": [0.0, 3.3e-5, 0.0],
      "color": [255, 255, 255]
    }
  ]
}

Physical entries are placed on the +x axis at distance_km and given the
circular orbit velocity around the first body along +y. The first body of the
file is the central body.

Users can add their own JSON files into the templates folder and they'll be
picked up by the loader.
"""
import json
import logging
import os
import random
from typing import Dict, List, Optional, Tuple

from .data_models import BodyConfig
from .errors import InvalidConfiguration
from .units import calc_orbital_velocity, scale_distance, scale_mass, scale_radius
from .utils import coerce_color

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

# Real data: radius [km], mass [kg], orbital distance [km], color
REAL_DATA: Dict[str, dict] = {
    "Sun":     {"radius_km": 695700,  "mass_kg": 1.9884e30,  "distance_km": 0,          "color": "#ffff00"},
    "Mercury": {"radius_km": 2439.7,  "mass_kg": 3.301e23,   "distance_km": 5.7909e7,   "color": "#bfbfbf"},
    "Venus":   {"radius_km": 6051.8,  "mass_kg": 4.8673e24,  "distance_km": 1.0821e8,   "color": "#ffcc99"},
    "Earth":   {"radius_km": 6371.0,  "mass_kg": 5.9722e24,  "distance_km": 1.49598e8,  "color": "#4444ff"},
    "Mars":    {"radius_km": 3389.5,  "mass_kg": 6.4169e23,  "distance_km": 2.27956e8,  "color": "#ff4444"},
    "Jupiter": {"radius_km": 69911,   "mass_kg": 1.89813e27, "distance_km": 7.78479e8,  "color": "#ffaa88"},
    "Saturn":  {"radius_km": 58232,   "mass_kg": 5.6832e26,  "distance_km": 1.432041e9, "color": "#ffdd77"},
    "Uranus":  {"radius_km": 25362,   "mass_kg": 8.6811e25,  "distance_km": 2.867043e9, "color": "#66ccff"},
    "Neptune": {"radius_km": 24622,   "mass_kg": 1.02409e26, "distance_km": 4.514953e9, "color": "#4477ff"},
}


def body_config_from_physical(name: str, mass_kg: float, radius_km: float, distance_km: float,
                              color, central_mass_kg: float) -> BodyConfig:
    """
    Scale a physical body description into a BodyConfig.

    The body sits on +x at its orbital distance and moves along +y at the
    circular velocity around ``central_mass_kg``. A zero distance gives a body
    at rest at the origin.
    """
    return BodyConfig(
        name=name,
        mass=scale_mass(mass_kg),
        radius=scale_radius(radius_km),
        x=scale_distance(distance_km),
        vy=calc_orbital_velocity(central_mass_kg, distance_km),
        color=coerce_color(color),
    )


def solar_system_configs(names: Optional[List[str]] = None) -> List[BodyConfig]:
    """The Sun and the requested planets (all eight by default), Sun first."""
    sun = REAL_DATA["Sun"]
    wanted = ["Sun"] + [n for n in (names or list(REAL_DATA)) if n != "Sun"]
    configs = []
    for name in wanted:
        data = REAL_DATA[name]
        configs.append(body_config_from_physical(
            name, data["mass_kg"], data["radius_km"], data["distance_km"],
            data["color"], sun["mass_kg"]))
    return configs


def default_new_body_config(index: int, rng: Optional[random.Random] = None) -> BodyConfig:
    """Config for a body added without explicit values."""
    rng = rng or random
    return BodyConfig(
        name=f"Planet {index}",
        mass=10.0,
        radius=5.0,
        x=200.0,
        vy=2.0,
        color=(rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255)),
    )


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None


def _vec3(v) -> Tuple[float, float, float]:
    return (float(v[0]), float(v[1]), float(v[2]) if len(v) > 2 else 0.0)


def _config_from_entry(entry: dict, central_mass_kg: Optional[float]) -> BodyConfig:
    name = entry.get("name", "Body")
    if "mass_kg" in entry:
        return body_config_from_physical(
            name,
            float(entry["mass_kg"]),
            float(entry.get("radius_km", 0.0)),
            float(entry.get("distance_km", 0.0)),
            entry.get("color", [200, 200, 255]),
            central_mass_kg if central_mass_kg is not None else float(entry["mass_kg"]),
        )
    x, y, z = _vec3(entry.get("position", [0.0, 0.0, 0.0]))
    vx, vy, vz = _vec3(entry.get("velocity", [0.0, 0.0, 0.0]))
    return BodyConfig(
        name=name,
        mass=float(entry["mass"]),
        radius=float(entry.get("radius", 1.0)),
        x=x, y=y, z=z, vx=vx, vy=vy, vz=vz,
        color=coerce_color(entry.get("color", [200, 200, 255])),
    )


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(templates_dir):
        return items
    for fn in sorted(os.listdir(templates_dir)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(templates_dir, fn)) or {}
        display = data.get("name") or os.path.splitext(fn)[0]
        items.append((fn, display))
    return items


def load_template(file_name: str,
                  templates_dir: str = TEMPLATES_DIR) -> Tuple[List[BodyConfig], Optional[float], str]:
    """
    Load a template JSON by file name (or path).
    Returns (configs, time_step, display_name).

    Malformed body entries are skipped with a warning. A file that cannot be
    read, whose bodies is not a list, whose central body has an unusable
    mass_kg, or that yields no usable body raises InvalidConfiguration.
    """
    path = file_name if os.path.isabs(file_name) else os.path.join(templates_dir, file_name)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"template {file_name!r} is missing or not a JSON object")

    display_name = data.get("name") or os.path.splitext(os.path.basename(file_name))[0]
    time_step = data.get("time_step")
    entries = data.get("bodies", [])
    if not isinstance(entries, list):
        raise InvalidConfiguration(f"template {file_name!r}: 'bodies' must be a list")
    central_mass_kg = None
    if entries and isinstance(entries[0], dict) and "mass_kg" in entries[0]:
        try:
            central_mass_kg = float(entries[0]["mass_kg"])
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"template {file_name!r}: bad central mass_kg: {exc}") from exc

    configs: List[BodyConfig] = []
    for i, entry in enumerate(entries):
        try:
            configs.append(_config_from_entry(entry, central_mass_kg).validate())
        except (KeyError, TypeError, ValueError, IndexError, AttributeError) as exc:
            logger.warning("Skipping body %d in %s: %s", i, file_name, exc)
            continue

    if not configs:
        raise InvalidConfiguration(f"template {file_name!r} defines no usable bodies")
    logger.info("Loaded template %r with %d bodies", display_name, len(configs))
    return configs, time_step, display_name
