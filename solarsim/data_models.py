#!/usr/bin/env python3
"""
Data models for the solar orbit simulator.

This module defines the dataclasses shared between the registry, physics,
orbit detection and rendering.

Units and usage
- All spatial values are sim units (1e6 km), masses are sim mass units (1e24 kg),
  velocities are sim units per second.
- BodyConfig is the configured initial state a Body is (re)built from.
- trail stores past positions for rendering motion paths; it is appended once
  per tick by the simulation controller.
"""
import math
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Deque, Tuple

from .constants import DEFAULT_BODY_COLOR, TRAIL_CAPACITY
from .errors import InvalidConfiguration
from .vector_utils import Vec3

Color = Tuple[int, int, int]

PENDING = "pending"
CONFIRMED = "confirmed"

NUMERIC_FIELDS = ("mass", "radius", "x", "y", "z", "vx", "vy", "vz")
CONFIG_FIELDS = NUMERIC_FIELDS + ("color",)


@dataclass
class BodyConfig:
    """
    Configured initial state of a body.

    Fields:
    - name: Identifier for the body
    - mass: Mass in sim mass units (must be > 0)
    - radius: Display radius in sim units
    - x, y, z: Initial position in sim units
    - vx, vy, vz: Initial velocity in sim units per second
    - color: RGB tuple used for rendering
    """
    name: str
    mass: float
    radius: float
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    color: Color = DEFAULT_BODY_COLOR

    @property
    def position(self) -> Vec3:
        return (self.x, self.y, self.z)

    @property
    def velocity(self) -> Vec3:
        return (self.vx, self.vy, self.vz)

    def validate(self) -> "BodyConfig":
        """Raise InvalidConfiguration unless mass > 0 and every number is finite."""
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidConfiguration(f"{self.name}: {name} must be a finite number, got {value!r}")
        if self.mass <= 0:
            raise InvalidConfiguration(f"{self.name}: mass must be > 0, got {self.mass!r}")
        return self

    def copy(self) -> "BodyConfig":
        return replace(self)


@dataclass
class Body:
    """
    A simulated body, mutated every tick by the integrator.

    Fields:
    - name: Identifier for the body
    - mass: Mass in sim mass units
    - radius: Visual radius in sim units
    - position: 3D position in sim units
    - velocity: 3D velocity in sim units per second
    - color: RGB tuple used for rendering
    - trail: Deque of past positions, oldest evicted first
    """
    name: str
    mass: float
    radius: float
    position: Vec3
    velocity: Vec3
    color: Color = DEFAULT_BODY_COLOR
    trail: Deque[Vec3] = field(default_factory=lambda: deque(maxlen=TRAIL_CAPACITY))

    @classmethod
    def from_config(cls, config: BodyConfig) -> "Body":
        return cls(
            name=config.name,
            mass=config.mass,
            radius=config.radius,
            position=config.position,
            velocity=config.velocity,
            color=config.color,
        )

    def add_trail_point(self) -> None:
        """Append the current position to the trail."""
        self.trail.append(self.position)


@dataclass(frozen=True)
class OrbitEvent:
    """A revolution notice for the body at ``body_index``; status is PENDING or CONFIRMED."""
    body_index: int
    orbit_count: int
    status: str
    sim_time: float

    @property
    def is_confirmed(self) -> bool:
        return self.status == CONFIRMED
