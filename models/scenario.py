"""
Release scenario data model.

Bundles every input of one hazard calculation: the chemical, the release
term, ambient conditions and the monitoring setup.  Scenarios are immutable;
use ``dataclasses.replace`` to derive variants (e.g. for sensitivity sweeps).
"""

from dataclasses import dataclass
from typing import Optional

from config import (
    DEFAULT_DURATION_MIN,
    DEFAULT_PRESSURE_ATM,
    DEFAULT_WIND_SPEED,
    DEFAULT_WIND_DIRECTION,
    DEFAULT_STABILITY_CLASS,
    DEFAULT_SENSOR_THRESHOLD,
    DEFAULT_SENSOR_COUNT,
    STABILITY_CLASSES,
    TERRAIN_TYPES,
    MONITORING_MODES,
)
from data.weather import WeatherObservation
from models.weather_impact import WeatherImpact, compute_weather_impact


def plume_bearing(wind_from: float) -> float:
    """Bearing the plume travels toward for a wind blowing FROM ``wind_from``."""
    return (wind_from + 180.0) % 360.0


@dataclass(frozen=True)
class ReleaseScenario:
    """A continuous chemical release under fixed ambient conditions.

    Args:
        chemical: Chemical name (case-insensitive repository key).
        release_rate: Release rate (kg/min).
        wind_speed: 10 m wind speed (m/s).
        wind_direction: Compass bearing the plume travels toward, in
            degrees (0 = N, 90 = E).  Observed meteorological directions
            (wind FROM) are converted by ``from_weather``.
        stability_class: Pasquill-Gifford class A-F.
        temperature: Ambient / release temperature (degC).
        duration: Release duration (minutes).
        pressure: Storage / ambient pressure (atm).
        source_lat, source_lng: Release location (decimal degrees).
        source_height: Release height above ground (m).
        ambient_pressure_hpa: Barometric pressure (hPa), if observed.
        humidity: Relative humidity (%), if observed.
        terrain: One of urban, suburban, rural, forest, water, flat.
        is_indoor: Release inside a building.
        container_volume: Container volume (m^3), optional.
        initial_mass: Initial inventory (kg), optional.
        weather_impact: Weather-derived override of wind factor, stability
            class and dispersion multiplier.
        sensor_threshold: Sensor alarm threshold (mg/m^3).
        sensor_count: Number of deployed sensors.
        monitoring_mode: ``"continuous"`` or ``"batch"``.
    """

    chemical: str
    release_rate: float
    wind_speed: float = DEFAULT_WIND_SPEED
    wind_direction: float = DEFAULT_WIND_DIRECTION
    stability_class: str = DEFAULT_STABILITY_CLASS
    temperature: float = 20.0
    duration: float = DEFAULT_DURATION_MIN
    pressure: float = DEFAULT_PRESSURE_ATM
    source_lat: float = 0.0
    source_lng: float = 0.0
    source_height: float = 0.0
    ambient_pressure_hpa: Optional[float] = None
    humidity: Optional[float] = None
    terrain: Optional[str] = None
    is_indoor: bool = False
    container_volume: Optional[float] = None
    initial_mass: Optional[float] = None
    weather_impact: Optional[WeatherImpact] = None
    sensor_threshold: float = DEFAULT_SENSOR_THRESHOLD
    sensor_count: int = DEFAULT_SENSOR_COUNT
    monitoring_mode: str = "continuous"

    def __post_init__(self):
        if self.release_rate < 0:
            raise ValueError("release_rate must be >= 0")
        if self.duration < 0:
            raise ValueError("duration must be >= 0")
        if self.wind_speed < 0:
            raise ValueError("wind_speed must be >= 0")
        if self.pressure <= 0:
            raise ValueError("pressure must be > 0")
        if self.sensor_threshold < 0:
            raise ValueError("sensor_threshold must be >= 0")
        if self.sensor_count < 0:
            raise ValueError("sensor_count must be >= 0")
        if not -90.0 <= self.source_lat <= 90.0:
            raise ValueError("source_lat must be within [-90, 90]")

        stability = self.stability_class.upper()
        if len(stability) != 1 or stability not in STABILITY_CLASSES:
            raise ValueError(f"Invalid stability class: {self.stability_class}")
        object.__setattr__(self, "stability_class", stability)

        if self.terrain is not None:
            terrain = self.terrain.lower()
            if terrain not in TERRAIN_TYPES:
                raise ValueError(f"Invalid terrain: {self.terrain}")
            object.__setattr__(self, "terrain", terrain)
        if self.monitoring_mode not in MONITORING_MODES:
            raise ValueError(f"Invalid monitoring mode: {self.monitoring_mode}")

    @property
    def effective_stability_class(self) -> str:
        """Stability class after any weather override."""
        if self.weather_impact is not None:
            return self.weather_impact.stability_class
        return self.stability_class

    @classmethod
    def from_weather(
        cls,
        chemical: str,
        release_rate: float,
        observation: WeatherObservation,
        **kwargs,
    ) -> "ReleaseScenario":
        """Build a scenario whose ambient fields come from a weather observation.

        Observed temperature, humidity, wind and barometric pressure fill the
        corresponding fields (explicit ``kwargs`` win) and the derived
        ``WeatherImpact`` is attached as the override.  The observed wind
        direction (FROM) becomes the plume bearing.
        """
        impact = compute_weather_impact(observation)
        fields = {
            "stability_class": impact.stability_class,
            "weather_impact": impact,
        }
        if observation.temperature is not None:
            fields["temperature"] = observation.temperature
        if observation.humidity is not None:
            fields["humidity"] = observation.humidity
        if observation.wind_speed is not None:
            fields["wind_speed"] = observation.wind_speed
        if observation.wind_direction is not None:
            fields["wind_direction"] = plume_bearing(observation.wind_direction)
        if observation.pressure is not None:
            fields["ambient_pressure_hpa"] = observation.pressure
        fields.update(kwargs)
        return cls(chemical=chemical, release_rate=release_rate, **fields)
