import random
from datetime import datetime
from pathlib import Path

import pytest

from homesim.devices.registry import make_light, make_thermostat
from homesim.environment.home import HomeEnvironment
from homesim.simulation.clock import SimulationClock
from homesim.simulation.engine import SimulationEngine

REPO_ROOT = Path(__file__).resolve().parents[1]
SCENARIOS_YAML = REPO_ROOT / "config" / "scenarios.yaml"

START = datetime(2024, 1, 15, 5, 59)


@pytest.fixture
def thermostat():
    return make_thermostat("T1", "Main Thermostat")


@pytest.fixture
def light():
    """Dimmable, color-capable light."""
    return make_light("L1", "Kitchen Light", dimmable=True, color_changeable=True)


@pytest.fixture
def plain_light():
    """Neither dimmable nor color-capable."""
    return make_light("L9", "Hall Light")


@pytest.fixture
def clock():
    return SimulationClock(START)


@pytest.fixture
def environment(clock):
    return HomeEnvironment(clock=clock, rng=random.Random(42))


@pytest.fixture
def engine(environment):
    return SimulationEngine(environment, step_minutes=1, pace_seconds=0)
