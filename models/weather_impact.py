"""
Weather Impact on Dispersion.

Condenses a weather observation into the three numbers the dispersion engine
needs: a wind factor, the effective Pasquill-Gifford class and an overall
dispersion multiplier:

    multiplier = wind_factor * stability_factor * precipitation_factor

Wet deposition (rain) reduces airborne mass, so precipitation lowers the
multiplier down to a floor of 0.7.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from config import (
    WEATHER_LOW_WIND_MS,
    WEATHER_HIGH_WIND_MS,
    WEATHER_LOW_WIND_FACTOR,
    WEATHER_HIGH_WIND_FACTOR,
    WEATHER_WIND_SLOPE,
    WEATHER_STABILITY_FACTORS,
    PRECIP_FACTOR_PER_MM,
    PRECIP_FACTOR_FLOOR,
    FORECAST_LOOKAHEAD_HOURS,
    WIND_SHIFT_THRESHOLD_DEG,
    WIND_SPEED_CHANGE_THRESHOLD_MS,
)
from data.weather import WeatherObservation
from models.stability import classify_stability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherImpact:
    """Weather-derived overrides for a dispersion calculation."""

    wind_factor: float = 1.0
    stability_class: str = "D"
    dispersion_multiplier: float = 1.0

    def __post_init__(self):
        if self.stability_class not in WEATHER_STABILITY_FACTORS:
            raise ValueError(f"Invalid stability class: {self.stability_class}")


NEUTRAL_IMPACT = WeatherImpact()


def wind_impact_factor(wind_speed: float) -> float:
    """Piecewise-linear wind factor: 0.8 below 5 m/s, 1.3 above 15 m/s."""
    if wind_speed < WEATHER_LOW_WIND_MS:
        return WEATHER_LOW_WIND_FACTOR
    if wind_speed > WEATHER_HIGH_WIND_MS:
        return WEATHER_HIGH_WIND_FACTOR
    return 1.0 + (wind_speed - WEATHER_LOW_WIND_MS) * WEATHER_WIND_SLOPE


def precipitation_factor(precipitation: Optional[float]) -> float:
    if precipitation and precipitation > 0:
        return max(PRECIP_FACTOR_FLOOR, 1.0 - precipitation * PRECIP_FACTOR_PER_MM)
    return 1.0


def compute_weather_impact(observation: Optional[WeatherObservation]) -> WeatherImpact:
    """
    Derive dispersion adjustments from a weather observation.

    Args:
        observation: Current weather.  May be ``None`` or partially filled.

    Returns:
        ``WeatherImpact``.  When wind speed is missing or zero, or cloud cover
        or the day/night flag is missing, the neutral impact
        ``(1.0, "D", 1.0)`` is returned.
    """
    if (
        observation is None
        or not observation.wind_speed
        or observation.cloud_cover is None
        or observation.is_day is None
    ):
        return NEUTRAL_IMPACT

    stability_class = classify_stability(
        observation.wind_speed, observation.cloud_cover, observation.is_day
    )
    wind_factor = wind_impact_factor(observation.wind_speed)
    stability_factor = WEATHER_STABILITY_FACTORS[stability_class]
    precip_factor = precipitation_factor(observation.precipitation)

    multiplier = wind_factor * stability_factor * precip_factor
    logger.debug(
        "Weather impact: class=%s wind=%.3f stability=%.2f precip=%.2f",
        stability_class, wind_factor, stability_factor, precip_factor,
    )
    return WeatherImpact(
        wind_factor=wind_factor,
        stability_class=stability_class,
        dispersion_multiplier=multiplier,
    )


def _angular_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two bearings (degrees)."""
    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)


def has_weather_changes(
    forecast: List[WeatherObservation],
    wind_direction: float,
    wind_speed: float,
    lookahead_hours: int = FORECAST_LOOKAHEAD_HOURS,
) -> bool:
    """Flag a significant wind shift in the next few forecast hours.

    A change is significant when the direction differs by more than 45
    degrees or the speed by more than 5 m/s from the current values.
    Requires at least ``lookahead_hours`` forecast entries.
    """
    if len(forecast) < lookahead_hours:
        return False

    upcoming = forecast[:lookahead_hours]
    direction_change = max(
        _angular_difference(obs.wind_direction, wind_direction)
        if obs.wind_direction is not None else 0.0
        for obs in upcoming
    )
    speed_change = max(
        abs(obs.wind_speed - wind_speed) if obs.wind_speed is not None else 0.0
        for obs in upcoming
    )
    return (
        direction_change > WIND_SHIFT_THRESHOLD_DEG
        or speed_change > WIND_SPEED_CHANGE_THRESHOLD_MS
    )
