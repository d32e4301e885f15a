"""
Screening-Level Dispersion Model.

Estimates hazard zone distances for a continuous release and derives the
quantities an emergency planner needs from them: Pasquill-Gifford
dispersion coefficients, peak centerline concentration, sector areas,
population at risk and a downwind concentration profile.

Zone distances scale with the square root of the adjusted release rate:

    base_distance = sqrt(Q_adj) * f_stability * f_wind
    d_zone        = clamp(base_distance * f_chemical * fraction_zone * jitter)

where Q_adj folds ambient temperature, humidity, pressure, terrain,
containment and weather into the nominal rate.

Convention:
  - Wind direction is the bearing the plume travels toward.
  - Distances in km for zones, meters for dispersion coefficients.
  - Concentrations in mg/m^3.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from config import (
    REFERENCE_TEMPERATURE_C,
    HUMIDITY_DIVISOR,
    STANDARD_PRESSURE_HPA,
    TERRAIN_RELEASE_FACTORS,
    INDOOR_RELEASE_FACTOR,
    ZONE_STABILITY_FACTORS,
    CHEMICAL_FACTOR_BOUNDS,
    FALLBACK_CHEMICAL_FACTORS,
    FALLBACK_CHEMICAL_FACTOR,
    ZONE_FRACTIONS,
    ZONE_DISTANCE_BOUNDS_KM,
    ZONE_JITTER_FRACTION,
    DEFAULT_ZONE_CONCENTRATIONS,
    GUIDELINE_TIER_RATIO,
    LETHAL_DISTANCE_FRACTION,
    PLUME_SECTOR_FRACTION,
    POPULATION_DENSITY,
    DEFAULT_POPULATION_DENSITY,
    DISPERSION_COEFFICIENTS,
    PROFILE_DECAY_PARAMS,
    PROFILE_INTERVALS,
    PROFILE_EXTENT_FACTOR,
    PROFILE_WIND_BOUNDS_MS,
)
from data.chemical_database import ChemicalRecord
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.scenario import ReleaseScenario
from models.units import ppm_to_mg_m3
from models.zones import ZoneBand, ZoneExposure, ZoneResult
from optimization.monitoring import MonitoringPerformance, compute_monitoring_performance
from optimization.sensor_placement import SensorLocation, recommend_sensors

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Dispersion coefficients
# ---------------------------------------------------------------------------

def _get_dispersion_coeffs(stability_class: str) -> dict:
    """Return (a, b) coefficients for sigma_y and sigma_z."""
    sc = stability_class.upper()
    if sc not in DISPERSION_COEFFICIENTS:
        raise ValueError(f"Unknown stability class '{sc}'. Use A-F.")
    return DISPERSION_COEFFICIENTS[sc]


def compute_sigma(distance_downwind, stability_class: str):
    """
    Compute lateral (sigma_y) and vertical (sigma_z) dispersion parameters.

    Uses the Briggs-style form sigma = a * x * (1 + b * x)^-0.5.

    Args:
        distance_downwind: Downwind distance(s) in meters, scalar or array.
            Negative distances (upwind) are clamped to zero.
        stability_class: Pasquill-Gifford class A-F.

    Returns:
        (sigma_y, sigma_z) in meters, same shape as the input.
    """
    coeffs = _get_dispersion_coeffs(stability_class)
    a_y, b_y = coeffs["sigma_y"]
    a_z, b_z = coeffs["sigma_z"]

    x = np.maximum(np.asarray(distance_downwind, dtype=float), 0.0)

    sigma_y = a_y * x * np.power(1.0 + b_y * x, -0.5)
    sigma_z = a_z * x * np.power(1.0 + b_z * x, -0.5)

    return sigma_y, sigma_z


# ---------------------------------------------------------------------------
# Zone distances
# ---------------------------------------------------------------------------

def adjusted_release_rate(scenario: ReleaseScenario) -> float:
    """
    Scale the nominal release rate (kg/min) for ambient conditions.

    Q_adj = Q * f_temp * f_humidity * f_pressure * f_terrain * f_indoor * f_weather
    """
    temperature_factor = 1.0 + (scenario.temperature - REFERENCE_TEMPERATURE_C) / 100.0
    humidity_factor = (
        1.0 - scenario.humidity / HUMIDITY_DIVISOR if scenario.humidity else 1.0
    )
    pressure_factor = (
        scenario.ambient_pressure_hpa / STANDARD_PRESSURE_HPA
        if scenario.ambient_pressure_hpa
        else 1.0
    )
    terrain_factor = TERRAIN_RELEASE_FACTORS.get(scenario.terrain, 1.0)
    containment_factor = INDOOR_RELEASE_FACTOR if scenario.is_indoor else 1.0
    weather_factor = (
        scenario.weather_impact.dispersion_multiplier
        if scenario.weather_impact is not None
        else 1.0
    )

    rate = (
        scenario.release_rate
        * temperature_factor
        * humidity_factor
        * pressure_factor
        * terrain_factor
        * containment_factor
        * weather_factor
    )
    # Temperatures below -80 degC would otherwise flip the sign
    return max(rate, 0.0)


def chemical_factor(chemical: str, record: Optional[ChemicalRecord]) -> float:
    """
    Hazard-reach factor from molecular weight and volatility.

        f = clamp(sqrt(MW) / 10 * log10(max(1, VP)) / 3, 0.8, 2.0)

    Unknown chemicals fall back to a fixed per-name value.
    """
    if record is None:
        return FALLBACK_CHEMICAL_FACTORS.get(chemical.lower(), FALLBACK_CHEMICAL_FACTOR)

    mw_factor = np.sqrt(record.molecular_weight) / 10.0
    vp_factor = np.log10(max(1.0, record.vapor_pressure)) / 3.0
    lo, hi = CHEMICAL_FACTOR_BOUNDS
    return float(np.clip(mw_factor * vp_factor, lo, hi))


def guideline_concentrations(record: Optional[ChemicalRecord]) -> Tuple[float, float, float]:
    """
    Red/orange/yellow zone concentrations in mg/m^3.

    Each tier uses its AEGL (ppm), else the same-tier ERPG.  A missing
    middle tier is the geometric mean of its neighbours; a missing outer
    tier is its neighbour scaled by 3.  Tiers that are not strictly
    decreasing after filling are stepped down by the same ratio.  With no
    guideline at all, 5/3/1 mg/m^3 (not converted).
    """
    default = (
        DEFAULT_ZONE_CONCENTRATIONS["red"],
        DEFAULT_ZONE_CONCENTRATIONS["orange"],
        DEFAULT_ZONE_CONCENTRATIONS["yellow"],
    )
    if record is None:
        return default

    def tier(aegl, erpg):
        if aegl > 0:
            return aegl
        if erpg:
            return erpg
        return None

    red = tier(record.aegl3, record.erpg3)
    orange = tier(record.aegl2, record.erpg2)
    yellow = tier(record.aegl1, record.erpg1)
    if red is None and orange is None and yellow is None:
        return default

    ratio = GUIDELINE_TIER_RATIO
    if orange is None:
        if red is not None and yellow is not None:
            orange = float(np.sqrt(red * yellow))
        elif red is not None:
            orange = red / ratio
        else:
            orange = yellow * ratio
    if red is None:
        red = orange * ratio
    if yellow is None:
        yellow = orange / ratio

    # Equal or inverted tiers step down so the zones stay strictly ordered
    if orange >= red:
        orange = red / ratio
    if yellow >= orange:
        yellow = orange / ratio

    mw = record.molecular_weight
    return (ppm_to_mg_m3(red, mw), ppm_to_mg_m3(orange, mw), ppm_to_mg_m3(yellow, mw))


def compute_zones(
    scenario: ReleaseScenario,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
    rng: Optional[np.random.Generator] = None,
) -> ZoneResult:
    """
    Estimate red/orange/yellow hazard zone distances for a release.

    Args:
        scenario: Release scenario.
        repository: Chemical property source.
        rng: Optional generator for the +/-5 % distance jitter.  Without one
             the jitter factor is exactly 1.0 and the result is deterministic.

    Returns:
        ``ZoneResult`` with distances in km (clamped to red [0.5, 5],
        orange [1, 8], yellow [1.5, 15]) and concentrations in mg/m^3.
    """
    record = repository.lookup(scenario.chemical)
    if record is None:
        logger.warning(
            "Chemical '%s' not found; using fallback zone parameters", scenario.chemical
        )

    stability_factor = ZONE_STABILITY_FACTORS.get(scenario.effective_stability_class, 1.0)
    rate = adjusted_release_rate(scenario)

    if scenario.weather_impact is not None:
        wind_factor = scenario.weather_impact.wind_factor
    else:
        wind_factor = np.sqrt(scenario.wind_speed) / 2.0

    base_distance = np.sqrt(rate) * stability_factor * wind_factor
    reach = base_distance * chemical_factor(scenario.chemical, record)

    jitter = 1.0
    if rng is not None:
        jitter = 1.0 - ZONE_JITTER_FRACTION + rng.random() * 2.0 * ZONE_JITTER_FRACTION

    logger.debug(
        "Zones for %s: Q_adj=%.3f base=%.3f reach=%.3f jitter=%.4f",
        scenario.chemical, rate, base_distance, reach, jitter,
    )

    concentrations = dict(zip(("red", "orange", "yellow"), guideline_concentrations(record)))
    bands = {}
    for name, fraction in ZONE_FRACTIONS.items():
        lo, hi = ZONE_DISTANCE_BOUNDS_KM[name]
        distance = float(np.clip(reach * fraction * jitter, lo, hi))
        bands[name] = ZoneBand(distance=distance, concentration=concentrations[name])

    return ZoneResult(**bands)


# ---------------------------------------------------------------------------
# Detailed results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DetailedDispersionResult:
    """Full set of derived dispersion quantities for one scenario."""

    red_zone: ZoneExposure
    orange_zone: ZoneExposure
    yellow_zone: ZoneExposure
    mass_released: float                        # kg
    evaporation_rate: float                     # kg/s
    sigma_y: float                              # m, at the yellow zone edge
    sigma_z: float                              # m, at the yellow zone edge
    maximum_concentration: Optional[float]      # None when wind speed is zero
    lethal_distance: float                      # km
    concentration_profile: List[Tuple[float, float]]  # (km, mg/m^3)
    monitoring: MonitoringPerformance
    recommended_sensor_locations: List[SensorLocation] = field(default_factory=list)
    weather_impact_factor: float = 1.0
    effective_stability_class: str = "D"

    @property
    def zones(self) -> ZoneResult:
        return ZoneResult(
            red=ZoneBand(self.red_zone.distance, self.red_zone.concentration),
            orange=ZoneBand(self.orange_zone.distance, self.orange_zone.concentration),
            yellow=ZoneBand(self.yellow_zone.distance, self.yellow_zone.concentration),
        )

    @property
    def total_population_at_risk(self) -> int:
        return (
            self.red_zone.population_at_risk
            + self.orange_zone.population_at_risk
            + self.yellow_zone.population_at_risk
        )


def population_density(terrain: Optional[str]) -> int:
    """People per km^2 for a terrain type (500 when unspecified)."""
    return POPULATION_DENSITY.get(terrain, DEFAULT_POPULATION_DENSITY)


def sector_areas(zones: ZoneResult) -> Tuple[float, float, float]:
    """
    Plume footprint areas (km^2) of each zone ring.

    The plume is approximated as one third of a full circle; the orange and
    yellow areas exclude the inner zones.
    """
    def sector(radius):
        return np.pi * radius ** 2 * PLUME_SECTOR_FRACTION

    red = sector(zones.red.distance)
    orange = max(sector(zones.orange.distance) - red, 0.0)
    yellow = max(sector(zones.yellow.distance) - red - orange, 0.0)
    return float(red), float(orange), float(yellow)


def maximum_concentration(
    release_rate: float,
    wind_speed: float,
    sigma_y: float,
    sigma_z: float,
) -> Optional[float]:
    """Peak centerline concentration Q * 1000 / (pi * u * sigma_y * sigma_z).

    Returns ``None`` when the denominator vanishes (calm wind or zero spread).
    """
    denominator = np.pi * wind_speed * sigma_y * sigma_z
    if denominator <= 0:
        return None
    return float(release_rate * 1000.0 / denominator)


def concentration_profile(
    stability_class: str,
    wind_speed: float,
    peak_concentration: float,
    max_distance: float,
    intervals: int = PROFILE_INTERVALS,
) -> List[Tuple[float, float]]:
    """
    Downwind concentration decay curve.

        C(x) = C0 * exp(-k * (x / x_max)^n)

    with (k, n) per stability class and k scaled by
    0.7 + 0.3 * clamp(u, 1, 10) / 5.

    Args:
        stability_class: Pasquill-Gifford class (unknown letters use D).
        wind_speed: Wind speed (m/s).
        peak_concentration: C0 at the source (mg/m^3).
        max_distance: Profile extent x_max (km).
        intervals: Number of intervals (samples = intervals + 1).

    Returns:
        List of (distance km rounded to 2 dp, concentration rounded to 3 dp).
    """
    k, n = PROFILE_DECAY_PARAMS.get(stability_class, PROFILE_DECAY_PARAMS["D"])
    lo, hi = PROFILE_WIND_BOUNDS_MS
    k = k * (0.7 + 0.3 * np.clip(wind_speed, lo, hi) / 5.0)

    distances = np.linspace(0.0, max_distance, intervals + 1)
    if max_distance > 0:
        normalized = distances / max_distance
    else:
        normalized = np.zeros_like(distances)
    concentrations = peak_concentration * np.exp(-k * np.power(normalized, n))

    return [
        (round(float(d), 2), round(float(c), 3))
        for d, c in zip(distances, concentrations)
    ]


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def compute_detailed_dispersion(
    scenario: ReleaseScenario,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
    rng: Optional[np.random.Generator] = None,
) -> DetailedDispersionResult:
    """
    Compute zones plus every derived dispersion quantity for a scenario.

    Args:
        scenario: Release scenario.
        repository: Chemical property source.
        rng: Optional generator for the zone distance jitter.

    Returns:
        ``DetailedDispersionResult``.
    """
    zones = compute_zones(scenario, repository=repository, rng=rng)
    stability_class = scenario.effective_stability_class

    mass_released = scenario.release_rate * scenario.duration
    evaporation_rate = scenario.release_rate / 60.0

    sigma_y, sigma_z = compute_sigma(zones.yellow.distance * 1000.0, stability_class)
    sigma_y, sigma_z = float(sigma_y), float(sigma_z)
    peak = maximum_concentration(scenario.release_rate, scenario.wind_speed, sigma_y, sigma_z)

    density = population_density(scenario.terrain)
    areas = sector_areas(zones)
    exposures = [
        ZoneExposure(
            distance=band.distance,
            concentration=band.concentration,
            area=area,
            population_at_risk=_round_half_up(area * density),
        )
        for (_, band), area in zip(zones, areas)
    ]

    profile = concentration_profile(
        stability_class,
        scenario.wind_speed,
        zones.red.concentration,
        zones.yellow.distance * PROFILE_EXTENT_FACTOR,
    )

    weather_factor = (
        scenario.weather_impact.dispersion_multiplier
        if scenario.weather_impact is not None
        else 1.0
    )

    return DetailedDispersionResult(
        red_zone=exposures[0],
        orange_zone=exposures[1],
        yellow_zone=exposures[2],
        mass_released=mass_released,
        evaporation_rate=evaporation_rate,
        sigma_y=sigma_y,
        sigma_z=sigma_z,
        maximum_concentration=peak,
        lethal_distance=zones.red.distance * LETHAL_DISTANCE_FRACTION,
        concentration_profile=profile,
        monitoring=compute_monitoring_performance(scenario, zones),
        recommended_sensor_locations=recommend_sensors(
            scenario, zones, count=scenario.sensor_count
        ),
        weather_impact_factor=weather_factor,
        effective_stability_class=stability_class,
    )
