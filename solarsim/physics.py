#!/usr/bin/env python3
"""
Core Physics Engine for the solar orbit simulator

Responsibilities
- Compute pairwise Newtonian gravitational forces in simulation units.
- Advance body states with a semi-implicit (symplectic) Euler step.

Units and conventions
- Positions are in sim units (1e6 km), velocities in sim units per second.
- Masses are in sim mass units (1e24 kg).
- Time steps are in seconds.
- The gravitational constant is G_SIM from constants (G_SI rescaled analytically).

Numerical notes
- No softening: a pair of bodies at exactly the same position contributes zero
  force instead of dividing by zero. Collisions are otherwise ignored.
- Complexity: force computation is O(N^2) per step (direct summation).
- Update order matters: velocity is advanced first and the new velocity moves
  the position. This keeps orbital energy bounded over long runs, unlike a
  pure forward Euler step.
- All forces for a step are computed from one snapshot of positions, so every
  pair of bodies feels equal and opposite forces.

Threading
- This module is pure compute and stateless besides G. It is used by a
  controller that serializes access with a lock.
"""

import math
from typing import List, Sequence

from .constants import G_SIM
from .data_models import Body
from .vector_utils import Vec3, ZERO, vec_add, vec_scale


class NBodyPhysics:
    """
    N-body gravitational physics engine.

    The force on body i from body j is
    F = G * m_i * m_j / |r_j - r_i|^2 * r_hat
    where r_hat is the unit vector from i towards j.
    """

    def __init__(self, gravitational_constant: float = G_SIM):
        """
        Initialize the physics engine.

        Args:
            gravitational_constant: G expressed in simulation units
        """
        self.G = float(gravitational_constant)

    def compute_forces(self, bodies: Sequence[Body], positions: Sequence[Vec3]) -> List[Vec3]:
        """
        Compute the net gravitational force on every body.

        For each body i:

            F_i = sum_j G * m_i * m_j * r_ij / |r_ij|^3

        where r_ij = r_j - r_i. Self-interaction and coincident pairs are skipped.

        Args:
            bodies: Body objects (only .mass is used here).
            positions: Positions corresponding to each body.

        Returns:
            List of force vectors, same order as inputs.
        """
        n = len(bodies)
        forces: List[Vec3] = [ZERO] * n

        for i in range(n):
            fx_total, fy_total, fz_total = 0.0, 0.0, 0.0
            xi, yi, zi = positions[i]
            mi = bodies[i].mass

            for j in range(n):
                if i == j:
                    continue

                xj, yj, zj = positions[j]
                dx = xj - xi
                dy = yj - yi
                dz = zj - zi

                r_squared = dx * dx + dy * dy + dz * dz
                if r_squared == 0.0:
                    continue  # coincident bodies, treated as zero force

                distance = math.sqrt(r_squared)
                force_magnitude = self.G * mi * bodies[j].mass / r_squared

                # normalize(r_ij) * |F|
                scale = force_magnitude / distance
                fx_total += dx * scale
                fy_total += dy * scale
                fz_total += dz * scale

            forces[i] = (fx_total, fy_total, fz_total)

        return forces

    def compute_accelerations(self, bodies: Sequence[Body], positions: Sequence[Vec3]) -> List[Vec3]:
        """Net acceleration of every body, F_i / m_i."""
        forces = self.compute_forces(bodies, positions)
        return [vec_scale(f, 1.0 / b.mass) for f, b in zip(forces, bodies)]

    def euler_step(self, bodies: List[Body], timestep: float) -> None:
        """
        Perform one semi-implicit Euler integration step.

        Workflow:
        1) Snapshot every position.
        2) Accelerations from the snapshot.
        3) velocity += a * dt
        4) position += velocity * dt (with the updated velocity)

        Args:
            bodies: List of Body objects to integrate (modified in place).
            timestep: Time step size in seconds.
        """
        positions = [body.position for body in bodies]
        accelerations = self.compute_accelerations(bodies, positions)

        for body, acceleration in zip(bodies, accelerations):
            body.velocity = vec_add(body.velocity, vec_scale(acceleration, timestep))
            body.position = vec_add(body.position, vec_scale(body.velocity, timestep))


def total_energy(bodies: Sequence[Body], gravitational_constant: float = G_SIM) -> float:
    """
    Kinetic plus potential energy of the system in simulation units.

    Useful to watch integrator drift over long runs.
    """
    kinetic = 0.0
    for b in bodies:
        vx, vy, vz = b.velocity
        kinetic += 0.5 * b.mass * (vx * vx + vy * vy + vz * vz)

    potential = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            dx = bodies[j].position[0] - bodies[i].position[0]
            dy = bodies[j].position[1] - bodies[i].position[1]
            dz = bodies[j].position[2] - bodies[i].position[2]
            r = math.sqrt(dx * dx + dy * dy + dz * dz)
            if r == 0.0:
                continue
            potential -= gravitational_constant * bodies[i].mass * bodies[j].mass / r
    return kinetic + potential
