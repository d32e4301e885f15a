"""Tests for the release scenario model."""

import sys
import os
import pytest
from dataclasses import replace, FrozenInstanceError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.scenario import ReleaseScenario, plume_bearing
from models.weather_impact import WeatherImpact


class TestReleaseScenario:
    def test_defaults(self):
        sc = ReleaseScenario(chemical="chlorine", release_rate=5.0)
        assert sc.duration == 60.0
        assert sc.pressure == 1.0
        assert sc.sensor_threshold == 0.5
        assert sc.sensor_count == 5
        assert sc.monitoring_mode == "continuous"
        assert sc.weather_impact is None

    def test_stability_uppercased(self):
        sc = ReleaseScenario(chemical="chlorine", release_rate=5.0, stability_class="f")
        assert sc.stability_class == "F"

    def test_terrain_lowercased(self):
        sc = ReleaseScenario(chemical="chlorine", release_rate=5.0, terrain="Urban")
        assert sc.terrain == "urban"

    def test_frozen(self, default_scenario):
        with pytest.raises(FrozenInstanceError):
            default_scenario.release_rate = 1.0

    @pytest.mark.parametrize("field, value, match", [
        ("release_rate", -1.0, "release_rate"),
        ("duration", -5.0, "duration"),
        ("wind_speed", -0.1, "wind_speed"),
        ("pressure", 0.0, "pressure"),
        ("stability_class", "G", "stability class"),
        ("stability_class", "AB", "stability class"),
        ("terrain", "desert", "terrain"),
        ("monitoring_mode", "hourly", "monitoring mode"),
        ("source_lat", 95.0, "source_lat"),
    ])
    def test_invalid_inputs(self, default_scenario, field, value, match):
        with pytest.raises(ValueError, match=match):
            replace(default_scenario, **{field: value})

    def test_effective_stability_without_override(self, default_scenario):
        assert default_scenario.effective_stability_class == "D"

    def test_effective_stability_with_override(self, default_scenario):
        sc = replace(default_scenario, weather_impact=WeatherImpact(0.8, "F", 0.48))
        assert sc.stability_class == "D"
        assert sc.effective_stability_class == "F"


class TestFromWeather:
    def test_fields_from_observation(self, default_observation):
        sc = ReleaseScenario.from_weather("ammonia", 10.0, default_observation)
        assert sc.temperature == 20.0
        assert sc.humidity == 50.0
        assert sc.wind_speed == 3.0
        assert sc.ambient_pressure_hpa == 1013.25
        assert sc.stability_class == "C"
        assert sc.weather_impact.stability_class == "C"

    def test_kwargs_override(self, default_observation):
        sc = ReleaseScenario.from_weather(
            "ammonia", 10.0, default_observation, temperature=35.0, terrain="rural"
        )
        assert sc.temperature == 35.0
        assert sc.terrain == "rural"

    def test_observed_wind_becomes_plume_bearing(self, default_observation):
        sc = ReleaseScenario.from_weather("ammonia", 10.0, default_observation)
        assert sc.wind_direction == 90.0

    def test_explicit_bearing_not_converted(self, default_observation):
        sc = ReleaseScenario.from_weather(
            "ammonia", 10.0, default_observation, wind_direction=45.0
        )
        assert sc.wind_direction == 45.0


class TestPlumeBearing:
    @pytest.mark.parametrize("wind_from, bearing", [
        (270.0, 90.0), (0.0, 180.0), (200.0, 20.0), (180.0, 0.0),
    ])
    def test_reverses_meteorological_direction(self, wind_from, bearing):
        assert plume_bearing(wind_from) == bearing
