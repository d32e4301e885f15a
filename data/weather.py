"""
Weather observation types and provider abstraction.

The engine only consumes weather values; retrieval lives outside it.  A
``WeatherProvider`` implementation can wrap any live feed, and
``parse_open_meteo_current`` maps an already-downloaded Open-Meteo
``current`` payload onto a ``WeatherObservation``.  The
``StubWeatherProvider`` returns configurable hardcoded values for
development and testing.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import List, Optional

from config import (
    WEATHER_CODE_DESCRIPTIONS,
    PRECIP_HOUR_THRESHOLD_MM,
    HEAVY_PRECIP_HOUR_THRESHOLD_MM,
)


@dataclass(frozen=True)
class WeatherObservation:
    """A single surface weather observation.  Every field may be missing."""

    temperature: Optional[float] = None       # degC
    humidity: Optional[float] = None          # % relative humidity
    wind_speed: Optional[float] = None        # m/s
    wind_direction: Optional[float] = None    # Meteorological degrees (0-360)
    cloud_cover: Optional[float] = None       # %
    precipitation: Optional[float] = None     # mm
    pressure: Optional[float] = None          # hPa (mean sea level)
    weather_code: Optional[int] = None        # WMO interpretation code
    is_day: Optional[int] = None              # 1 = day, 0 = night
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.wind_speed is not None and self.wind_speed < 0:
            raise ValueError("Wind speed must be >= 0")
        if self.cloud_cover is not None and not 0 <= self.cloud_cover <= 100:
            raise ValueError("Cloud cover must be within 0-100 %")
        if self.humidity is not None and not 0 <= self.humidity <= 100:
            raise ValueError("Humidity must be within 0-100 %")
        if self.precipitation is not None and self.precipitation < 0:
            raise ValueError("Precipitation must be >= 0")
        if self.is_day is not None and self.is_day not in (0, 1):
            raise ValueError("is_day must be 0 or 1")

    @property
    def description(self) -> str:
        return describe_weather_code(self.weather_code)


def describe_weather_code(code: Optional[int]) -> str:
    """Return the WMO description for ``code`` or ``"Unknown"``."""
    if code is None:
        return "Unknown"
    return WEATHER_CODE_DESCRIPTIONS.get(int(code), "Unknown")


def parse_open_meteo_current(payload: dict) -> WeatherObservation:
    """Map an Open-Meteo forecast response (``current`` block) to an observation.

    Args:
        payload: Decoded JSON of an Open-Meteo ``/v1/forecast`` response
            requested with ``current=...`` variables.

    Raises:
        ValueError: If the payload has no ``current`` block.
    """
    current = payload.get("current")
    if not isinstance(current, dict):
        raise ValueError("Open-Meteo payload has no 'current' block")

    timestamp = None
    if current.get("time"):
        timestamp = datetime.fromisoformat(current["time"])

    return WeatherObservation(
        temperature=current.get("temperature_2m"),
        humidity=current.get("relative_humidity_2m"),
        wind_speed=current.get("wind_speed_10m"),
        wind_direction=current.get("wind_direction_10m"),
        cloud_cover=current.get("cloud_cover"),
        precipitation=current.get("precipitation"),
        pressure=current.get("pressure_msl"),
        weather_code=current.get("weather_code"),
        is_day=current.get("is_day"),
        timestamp=timestamp,
    )


def summarize_forecast(forecast: List[WeatherObservation]) -> str:
    """Build a one-paragraph human-readable forecast summary."""
    if not forecast:
        return "No forecast data available"

    temps = [obs.temperature or 0.0 for obs in forecast]
    winds = [obs.wind_speed or 0.0 for obs in forecast]
    precip = [obs.precipitation or 0.0 for obs in forecast]

    avg_temp = sum(temps) / len(temps)
    precip_hours = sum(1 for p in precip if p > PRECIP_HOUR_THRESHOLD_MM)
    heavy_hours = sum(1 for p in precip if p > HEAVY_PRECIP_HOUR_THRESHOLD_MM)

    summary = (
        f"Temperature range: {min(temps):.1f}°C to {max(temps):.1f}°C, "
        f"average {avg_temp:.1f}°C. "
    )
    if precip_hours > 0:
        summary += f"Precipitation expected for {precip_hours} hours"
        if heavy_hours > 0:
            summary += f" (heavy precipitation for {heavy_hours} hours). "
        else:
            summary += ". "
    else:
        summary += "No significant precipitation expected. "

    summary += (
        f"Wind speeds up to {max(winds):.1f} m/s, "
        f"average {sum(winds) / len(winds):.1f} m/s."
    )
    return summary


def dominant_weather_condition(forecast: List[WeatherObservation]) -> str:
    """Return the description of the most frequent weather code in a forecast.

    Ties go to the code seen first.
    """
    codes = [obs.weather_code for obs in forecast if obs.weather_code is not None]
    if not codes:
        return "Unknown"
    code, _ = Counter(codes).most_common(1)[0]
    return describe_weather_code(code)


class WeatherProvider(ABC):
    """Abstract base class for weather data sources."""

    @abstractmethod
    def get_current(self) -> WeatherObservation:
        """Return the most recent observation."""
        ...

    @abstractmethod
    def get_forecast(self, hours_ahead: int = 24) -> List[WeatherObservation]:
        """Return an hourly forecast for the next N hours.

        Args:
            hours_ahead: Number of hours to forecast.

        Returns:
            List of WeatherObservation, one per hour.
        """
        ...


class StubWeatherProvider(WeatherProvider):
    """Configurable stub that returns hardcoded observations.

    Args:
        observation: Observation to return for every hour.  Defaults to a
            mild, partly cloudy daytime observation with a 3 m/s west wind.
        start: Timestamp of the first forecast hour (defaults to now).
    """

    def __init__(
        self,
        observation: Optional[WeatherObservation] = None,
        start: Optional[datetime] = None,
    ):
        self.observation = observation or WeatherObservation(
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
        self.start = start

    def get_current(self) -> WeatherObservation:
        return replace(self.observation, timestamp=self.start or datetime.now())

    def get_forecast(self, hours_ahead: int = 24) -> List[WeatherObservation]:
        base_time = self.start or datetime.now()
        return [
            replace(self.observation, timestamp=base_time + timedelta(hours=h))
            for h in range(hours_ahead)
        ]
