import math

import pytest

from solarsim.constants import G_SIM
from solarsim.data_models import Body, BodyConfig
from solarsim.physics import NBodyPhysics, total_energy
from solarsim.vector_utils import vec_len


def _body(mass, position, velocity=(0.0, 0.0, 0.0)):
    return Body(name="b", mass=mass, radius=1.0, position=position, velocity=velocity)


def test_pairwise_forces_are_equal_and_opposite():
    physics = NBodyPhysics()
    bodies = [_body(5.0, (0.0, 0.0, 0.0)), _body(2.0, (3.0, 4.0, 0.0))]
    f0, f1 = physics.compute_forces(bodies, [b.position for b in bodies])

    expected = G_SIM * 5.0 * 2.0 / 25.0
    assert vec_len(f0) == pytest.approx(expected)
    assert f0[0] == pytest.approx(expected * 0.6)
    assert f0[1] == pytest.approx(expected * 0.8)
    for a, b in zip(f0, f1):
        assert a == pytest.approx(-b)


def test_coincident_bodies_contribute_no_force():
    physics = NBodyPhysics(gravitational_constant=1.0)
    bodies = [_body(1.0, (1.0, 1.0, 1.0)), _body(1.0, (1.0, 1.0, 1.0)), _body(1.0, (2.0, 1.0, 1.0))]
    forces = physics.compute_forces(bodies, [b.position for b in bodies])
    # Bodies 0 and 1 only feel body 2
    assert forces[0] == pytest.approx((1.0, 0.0, 0.0))
    assert forces[1] == pytest.approx((1.0, 0.0, 0.0))
    assert forces[2] == pytest.approx((-2.0, 0.0, 0.0))
    assert all(math.isfinite(c) for f in forces for c in f)


def test_euler_step_moves_position_with_updated_velocity():
    physics = NBodyPhysics(gravitational_constant=1.0)
    a = _body(1.0, (0.0, 0.0, 0.0))
    b = _body(1.0, (1.0, 0.0, 0.0))
    physics.euler_step([a, b], 0.1)

    # a = +-1, v = a*dt = +-0.1, x += v*dt = +-0.01 (a pure forward step would not move at all)
    assert a.velocity == pytest.approx((0.1, 0.0, 0.0))
    assert a.position == pytest.approx((0.01, 0.0, 0.0))
    # b must see a's position from before the step, so the motion is symmetric
    assert b.velocity == pytest.approx((-0.1, 0.0, 0.0))
    assert b.position == pytest.approx((0.99, 0.0, 0.0))


def test_euler_step_keeps_momentum(three_body_configs):
    physics = NBodyPhysics()
    bodies = [Body.from_config(c) for c in three_body_configs]

    def momentum():
        return tuple(sum(b.mass * b.velocity[k] for b in bodies) for k in range(3))

    before = momentum()
    for _ in range(200):
        physics.euler_step(bodies, 10.0)
    after = momentum()
    for p0, p1 in zip(before, after):
        assert p1 == pytest.approx(p0, abs=1e-12)


def test_circular_orbit_radius_stays_in_band(sun_earth_configs):
    physics = NBodyPhysics()
    bodies = [Body.from_config(c) for c in sun_earth_configs]
    r0 = vec_len(bodies[1].position)
    e0 = total_energy(bodies)

    # one full revolution at one hour per tick
    for _ in range(8800):
        physics.euler_step(bodies, 3600.0)
        assert vec_len(bodies[1].position) == pytest.approx(r0, rel=0.01)

    assert total_energy(bodies) == pytest.approx(e0, rel=0.01)


def test_total_energy_of_bound_pair_is_negative():
    config = BodyConfig(name="moon", mass=1.0, radius=1.0, x=10.0, vy=1e-8)
    bodies = [_body(100.0, (0.0, 0.0, 0.0)), Body.from_config(config)]
    assert total_energy(bodies) < 0
