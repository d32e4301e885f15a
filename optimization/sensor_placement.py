"""
Sensor Placement Planner.

Lays out a monitoring network around a release in four priority rings:

    1. One fixed sensor at the source.
    2. Fixed sensors along the plume axis, out to the orange zone edge.
    3. Crosswind sensors alternating right/left of the plume axis, out to
       half the yellow zone distance.
    4. Mobile perimeter sensors at 0.9 x the yellow zone distance, swept
       clockwise from the plume axis over a half circle.

The plume axis is ``scenario.wind_direction``, the bearing the plume
travels toward.  Offsets in km are mapped to lat/lng with the
equirectangular approximation (111.32 km per degree of latitude).
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from scipy.spatial.distance import cdist, pdist

from config import (
    DEFAULT_PLACEMENT_COUNT,
    KM_PER_DEGREE_LAT,
    DOWNWIND_SENSOR_FRACTION,
    CROSSWIND_SENSOR_FRACTION,
    MAX_SENSORS_PER_RING,
    CROSSWIND_RADIUS_FRACTION,
    PERIMETER_RADIUS_FRACTION,
)
from models.scenario import ReleaseScenario
from models.zones import ZoneResult


@dataclass(frozen=True)
class SensorLocation:
    lat: float
    lng: float
    type: str        # "fixed" or "mobile"
    priority: int    # 1 = highest


def offset_position(
    lat: float,
    lng: float,
    distance_km: float,
    bearing_deg: float,
) -> Tuple[float, float]:
    """
    Move ``distance_km`` from (lat, lng) along a compass bearing.

        dlat = d * cos(theta) / 111.32
        dlng = d * sin(theta) / (111.32 * cos(lat))
    """
    theta = math.radians(bearing_deg)
    new_lat = lat + distance_km * math.cos(theta) / KM_PER_DEGREE_LAT
    new_lng = lng + distance_km * math.sin(theta) / (
        KM_PER_DEGREE_LAT * math.cos(math.radians(lat))
    )
    return new_lat, new_lng


def ring_sizes(count: int) -> Tuple[int, int, int]:
    """Number of (downwind, crosswind, perimeter) sensors for a total count."""
    downwind = min(MAX_SENSORS_PER_RING, math.ceil(count * DOWNWIND_SENSOR_FRACTION))
    crosswind = min(MAX_SENSORS_PER_RING, math.ceil(count * CROSSWIND_SENSOR_FRACTION))
    perimeter = max(1, count - downwind - crosswind - 1)
    return downwind, crosswind, perimeter


def recommend_sensors(
    scenario: ReleaseScenario,
    zones: ZoneResult,
    count: int = DEFAULT_PLACEMENT_COUNT,
) -> List[SensorLocation]:
    """
    Recommend sensor locations for a release, highest priority first.

    Args:
        scenario: Release scenario (source location and plume bearing).
        zones: Hazard zones of the release.
        count: Requested network size.  The perimeter ring always holds at
               least one sensor, so small requests may return more sensors.

    Returns:
        List of SensorLocation ordered by priority.
    """
    lat0, lng0 = scenario.source_lat, scenario.source_lng
    axis = scenario.wind_direction
    n_down, n_cross, n_perim = ring_sizes(count)

    sensors = [SensorLocation(lat0, lng0, "fixed", 1)]

    for i in range(n_down):
        distance = zones.orange.distance * (i + 1) / n_down
        lat, lng = offset_position(lat0, lng0, distance, axis)
        sensors.append(SensorLocation(lat, lng, "fixed", 2))

    for i in range(n_cross):
        side = 1.0 if i % 2 == 0 else -1.0
        distance = zones.yellow.distance * CROSSWIND_RADIUS_FRACTION * (i + 1) / n_cross
        lat, lng = offset_position(lat0, lng0, distance, axis + side * 90.0)
        sensors.append(SensorLocation(lat, lng, "fixed" if i == 0 else "mobile", 3))

    radius = zones.yellow.distance * PERIMETER_RADIUS_FRACTION
    for i in range(n_perim):
        bearing = axis + 180.0 * (i + 1) / (n_perim + 1)
        lat, lng = offset_position(lat0, lng0, radius, bearing)
        sensors.append(SensorLocation(lat, lng, "mobile", 4))

    return sensors


def _local_km(
    sensors: List[SensorLocation],
    origin_lat: float,
    origin_lng: float,
) -> np.ndarray:
    """(N, 2) array of east/north offsets in km from the origin."""
    coslat = math.cos(math.radians(origin_lat))
    return np.array([
        [
            (s.lng - origin_lng) * KM_PER_DEGREE_LAT * coslat,
            (s.lat - origin_lat) * KM_PER_DEGREE_LAT,
        ]
        for s in sensors
    ])


def summarize_sensor_layout(
    sensors: List[SensorLocation],
    source_lat: float,
    source_lng: float,
) -> Dict[str, float]:
    """
    Spacing statistics of a sensor layout.

    Returns:
        Dict with keys:
            num_sensors: Number of sensors.
            num_fixed: Number of fixed sensors.
            min_spacing_km: Smallest pairwise distance (0 for < 2 sensors).
            max_range_km: Largest distance from the source.
    """
    if not sensors:
        return {"num_sensors": 0, "num_fixed": 0, "min_spacing_km": 0.0, "max_range_km": 0.0}

    points = _local_km(sensors, source_lat, source_lng)
    pairwise = pdist(points) if len(sensors) > 1 else np.zeros(1)
    from_source = cdist(points, np.zeros((1, 2)))

    return {
        "num_sensors": len(sensors),
        "num_fixed": sum(1 for s in sensors if s.type == "fixed"),
        "min_spacing_km": float(pairwise.min()),
        "max_range_km": float(from_source.max()),
    }
