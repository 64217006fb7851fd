# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from boilersim.config import reset_config
from boilersim.determinism import DeterministicClock
from boilersim.models import Air, ControlSettings, Fuel, Water


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Fresh settings and a running clock for every test."""
    for name in (
        "BOILERSIM_LOG_LEVEL",
        "BOILERSIM_STRICT_OPERATING_POINT",
        "BOILERSIM_ENABLE_PROVENANCE",
        "BOILERSIM_MAX_WORKERS",
        "BOILERSIM_ACTIVITY_LOG_SIZE",
        "BOILERSIM_DISPLAY_PRECISION",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    DeterministicClock.unfreeze()
    yield
    reset_config()
    DeterministicClock.unfreeze()


@pytest.fixture
def wood_fuel():
    return Fuel(type="wood", quantity=1000, heat_content=8000)


@pytest.fixture
def feedwater():
    return Water(quantity=34500, temperature=20)


@pytest.fixture
def combustion_air():
    return Air(quantity=12000, temperature=20)


@pytest.fixture
def control_200psig():
    return ControlSettings(pressure=200, temperature=382)


@pytest.fixture
def scenario_a_inputs(wood_fuel, feedwater, combustion_air, control_200psig):
    """Dashboard defaults: wood 1000 lb/hr at 8000 BTU/lb, 200 PSIG."""
    return {
        "fuel": wood_fuel,
        "water": feedwater,
        "air": combustion_air,
        "electricity": 50,
        "control_settings": control_200psig,
    }
