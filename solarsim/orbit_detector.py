#!/usr/bin/env python3
"""
Revolution detection for orbiting bodies.

Each non-central body owns an OrbitTracker. Every tick the tracker accumulates
the signed angle swept around a fixed center and watches the distance back to
the body's starting point:

- Idle: no revolution pending. Once the swept angle reaches 2*pi a revolution
  becomes pending.
- Pending: the closest approach to the starting point is tracked while the body
  is inside the entry threshold (10% of the initial radius).
- Once the body moves farther than twice the entry threshold the revolution is
  confirmed, reported at the time of closest approach, and 2*pi is subtracted
  from the swept angle so the remainder carries into the next cycle.

The two thresholds form a hysteresis band: wobbling in and out of the entry
threshold alone can never confirm a revolution twice.

Circular orbits are the primary contract. Highly eccentric orbits are detected
on a best-effort basis.
"""
import logging
import math
from dataclasses import dataclass
from typing import List

from .constants import FRAME_RATE, ORBIT_EXIT_FACTOR, ORBIT_THRESHOLD_RATIO
from .data_models import CONFIRMED, PENDING, OrbitEvent
from .vector_utils import ZERO, Vec3, vec_cross, vec_dist, vec_dot, vec_len, vec_norm, vec_sub

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def signed_angle(prev: Vec3, current: Vec3, reference: Vec3) -> float:
    """
    Angle swept from ``prev`` to ``current``, negative when turning against ``reference``.

    atan2(|a x b|, a . b) stays accurate for both tiny and near-pi angles.
    """
    cross = vec_cross(prev, current)
    delta = math.atan2(vec_len(cross), vec_dot(prev, current))
    if vec_dot(cross, reference) < 0:
        delta = -delta
    return delta


@dataclass
class OrbitTracker:
    """Per-body detector state. Build instances with OrbitTracker.create()."""
    body_index: int
    center_position: Vec3
    prev_rel_position: Vec3
    angular_momentum_direction: Vec3
    initial_position: Vec3
    initial_radius: float
    angle_accumulated: float = 0.0
    orbit_count: int = 0
    pending_orbit_count: int = 0
    last_detection_distance: float = math.inf
    last_detection_frame: int = 0

    @classmethod
    def create(cls, body_index: int, position: Vec3, velocity: Vec3,
               center: Vec3 = ZERO) -> "OrbitTracker":
        """
        Start tracking a body from its current position and velocity.

        The angular momentum direction normalize(rel0 x v0) is fixed here and only
        used as a sign reference. A purely radial velocity yields the zero vector,
        in which case every swept angle counts as positive.
        """
        rel0 = vec_sub(position, center)
        return cls(
            body_index=body_index,
            center_position=center,
            prev_rel_position=rel0,
            angular_momentum_direction=vec_norm(vec_cross(rel0, velocity)),
            initial_position=rel0,
            initial_radius=vec_len(rel0),
        )

    @property
    def is_pending(self) -> bool:
        return self.pending_orbit_count > 0

    @property
    def threshold(self) -> float:
        return self.initial_radius * ORBIT_THRESHOLD_RATIO

    def update(self, position: Vec3, sim_time: float) -> List[OrbitEvent]:
        """
        Feed the body's position for this tick.

        Args:
            position: Body position after integration.
            sim_time: Simulation clock at the start of the tick.

        Returns:
            Events emitted this tick, in order (possibly empty).
        """
        events: List[OrbitEvent] = []

        rel = vec_sub(position, self.center_position)
        self.angle_accumulated += signed_angle(
            self.prev_rel_position, rel, self.angular_momentum_direction)
        self.prev_rel_position = rel

        dist0 = vec_dist(rel, self.initial_position)
        threshold = self.threshold
        current_frame = math.floor(sim_time * FRAME_RATE)

        if self.angle_accumulated >= TWO_PI and not self.is_pending:
            self.pending_orbit_count = self.orbit_count + 1
            self.last_detection_distance = math.inf
            self.last_detection_frame = current_frame
            logger.debug("Orbit pending: body %d, count %d at t=%.1f",
                         self.body_index, self.pending_orbit_count, sim_time)
            events.append(OrbitEvent(self.body_index, self.pending_orbit_count, PENDING, sim_time))

        if self.is_pending and dist0 < threshold and dist0 < self.last_detection_distance:
            self.last_detection_distance = dist0
            self.last_detection_frame = current_frame
            logger.debug("Closest approach updated: body %d, distance %.4f",
                         self.body_index, dist0)
            events.append(OrbitEvent(self.body_index, self.pending_orbit_count, PENDING,
                                     self.last_detection_frame / FRAME_RATE))

        if self.is_pending and dist0 > threshold * ORBIT_EXIT_FACTOR:
            self.orbit_count = self.pending_orbit_count
            self.pending_orbit_count = 0
            self.angle_accumulated -= TWO_PI
            completion_time = self.last_detection_frame / FRAME_RATE
            logger.info("Orbit confirmed: body %d, count %d at t=%.1f",
                        self.body_index, self.orbit_count, completion_time)
            events.append(OrbitEvent(self.body_index, self.orbit_count, CONFIRMED, completion_time))

        return events
