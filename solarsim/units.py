#!/usr/bin/env python3
"""
Unit scaling between physical quantities and simulation units.

Physical inputs are kilometres, kilograms and km/s. Simulation units are
1e6 km for distance and 1e24 kg for mass; time stays in seconds so that a
body seeded with a real circular velocity completes its orbit in its real
period.

All functions are pure.
"""
import math

from .constants import DIST_SCALE, G_SI, MASS_SCALE, MIN_RADIUS, RADIUS_SCALE


def scale_distance(distance_km: float) -> float:
    """Convert a distance in km to sim units."""
    return distance_km / DIST_SCALE


def scale_mass(mass_kg: float) -> float:
    """Convert a mass in kg to sim mass units."""
    return mass_kg / MASS_SCALE


def scale_radius(radius_km: float, min_radius: float = MIN_RADIUS) -> float:
    """
    Convert a body radius in km to sim units for display.

    The result is floored at ``min_radius`` so that planets remain visible next
    to the star. It never feeds into mass or gravity.
    """
    return max(radius_km / RADIUS_SCALE, min_radius)


def scaled_gravitational_constant(g_si: float = G_SI,
                                  dist_scale: float = DIST_SCALE,
                                  mass_scale: float = MASS_SCALE) -> float:
    """
    Express G in sim units: G_sim = G_SI * dist_scale^-3 * mass_scale.

    Args:
        g_si: Gravitational constant in km^3 kg^-1 s^-2
        dist_scale: km per sim distance unit
        mass_scale: kg per sim mass unit

    Returns:
        G in sim_unit^3 sim_mass^-1 s^-2
    """
    return g_si * dist_scale ** -3 * mass_scale


def calc_orbital_velocity(central_mass_kg: float, orbital_radius_km: float) -> float:
    """
    Speed of a circular orbit, in sim units per second.

    For a circular orbit gravity supplies exactly the centripetal force:
    G * M / r = v^2 / r, so v = sqrt(G * M / r) [km/s], then divided by the
    distance scale.

    Args:
        central_mass_kg: Mass of the central body in kg
        orbital_radius_km: Orbital radius in km

    Returns:
        Orbital velocity in sim units per second (0.0 for a non-positive radius)
    """
    if orbital_radius_km <= 0:
        return 0.0
    v_kms = math.sqrt(G_SI * central_mass_kg / orbital_radius_km)
    return v_kms / DIST_SCALE
