"""Shared fixtures for the Chemical Release Hazard Assessment test suite."""

import sys
import os
import pytest
import numpy as np

# Ensure project root is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture
def repository():
    """The built-in ten-chemical repository."""
    from data.interfaces import StaticChemicalRepository
    return StaticChemicalRepository()


@pytest.fixture
def default_scenario():
    """Ammonia at 10 kg/min, 3 m/s wind, plume heading east, class D, 20 degC."""
    from models.scenario import ReleaseScenario
    return ReleaseScenario(
        chemical="ammonia",
        release_rate=10.0,
        wind_speed=3.0,
        wind_direction=90.0,
        stability_class="D",
        temperature=20.0,
        source_lat=40.0,
        source_lng=-75.0,
    )


@pytest.fixture
def default_observation():
    """Partly cloudy daytime observation with a 3 m/s west wind."""
    from data.weather import WeatherObservation
    return WeatherObservation(
        temperature=20.0,
        humidity=50.0,
        wind_speed=3.0,
        wind_direction=270.0,
        cloud_cover=50.0,
        precipitation=0.0,
        pressure=1013.25,
        weather_code=2,
        is_day=1,
    )


@pytest.fixture
def rng():
    """Seeded random generator for reproducible jitter and draws."""
    return np.random.default_rng(42)
