import math

import pytest

from solarsim.constants import DIST_SCALE, G_SI, G_SIM, MASS_SCALE, MIN_RADIUS
from solarsim.units import (
    calc_orbital_velocity,
    scale_distance,
    scale_mass,
    scale_radius,
    scaled_gravitational_constant,
)


def test_scaled_gravitational_constant():
    assert G_SIM == pytest.approx(6.67430e-14)
    assert scaled_gravitational_constant() == pytest.approx(G_SIM)
    assert scaled_gravitational_constant(G_SI, DIST_SCALE, MASS_SCALE) == pytest.approx(
        G_SI * DIST_SCALE ** -3 * MASS_SCALE)


def test_scale_distance_and_mass():
    assert scale_distance(1.49598e8) == pytest.approx(149.598)
    assert scale_mass(1.9884e30) == pytest.approx(1.9884e6)


def test_scale_radius_is_floored_for_display():
    assert scale_radius(6371.0) == MIN_RADIUS
    assert scale_radius(695700) == pytest.approx(0.6957)
    assert scale_radius(1.0, min_radius=0.0) == pytest.approx(1e-6)


def test_calc_orbital_velocity_earth():
    v = calc_orbital_velocity(1.9884e30, 1.49598e8)
    # about 29.78 km/s
    assert v * DIST_SCALE == pytest.approx(29.78, rel=1e-3)
    assert v == pytest.approx(math.sqrt(G_SI * 1.9884e30 / 1.49598e8) / DIST_SCALE)


@pytest.mark.parametrize("radius", [0.0, -5.0])
def test_calc_orbital_velocity_non_positive_radius(radius):
    assert calc_orbital_velocity(1.9884e30, radius) == 0.0
