"""
Pytest configuration and shared fixtures.
"""
import pytest

from solarsim.data_models import BodyConfig
from solarsim.presets_loader import solar_system_configs
from solarsim.simulation import SimulationController


@pytest.fixture
def sun_earth_configs():
    """Sun at the origin and Earth on a circular orbit along +y."""
    return solar_system_configs(["Earth"])


@pytest.fixture
def sun_earth_sim(sun_earth_configs):
    """Sun/Earth controller stepping one hour per tick."""
    return SimulationController(sun_earth_configs, time_step=3600.0)


@pytest.fixture
def three_body_configs():
    return [
        BodyConfig(name="Star", mass=1000.0, radius=2.0),
        BodyConfig(name="A", mass=1.0, radius=1.0, x=50.0, vy=1.0e-3),
        BodyConfig(name="B", mass=2.0, radius=1.0, x=-80.0, vy=-1.0e-3),
        BodyConfig(name="C", mass=3.0, radius=1.0, y=120.0, vx=1.0e-3),
    ]
