"""
Mass Balance for Two-Phase Releases.

Splits a release into flashed vapor and a liquid pool, then estimates how
much of the pool evaporates during the release:

    vapor_fraction = 1                                        if T_b < T
                   = clamp(0.2 + 0.8 * (VP / 760) * f_T, 0.1, 1)   otherwise
    f_T            = exp(0.0555 * (T - 20))

    pool_rate      = min(0.005 * (VP / 100) * sqrt(18 / MW) * f_T * sqrt(M_pool),
                         M_pool / 10)                         [kg/min]

Airborne release is the flashed vapor plus pool evaporation.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from config import (
    REFERENCE_TEMPERATURE_C,
    EVAPORATION_TEMP_COEFF,
    ATMOSPHERIC_MMHG,
    VAPOR_FRACTION_BASE,
    VAPOR_FRACTION_SLOPE,
    VAPOR_FRACTION_BOUNDS,
    POOL_EVAPORATION_COEFF,
    POOL_VAPOR_PRESSURE_NORM,
    WATER_MOLAR_MASS,
    MAX_POOL_EVAPORATION_FRACTION,
    POOL_DEPTH_FACTOR,
)
from data.chemical_database import ChemicalRecord
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MassBalanceResult:
    """Mass split of a release.  Masses in kg, rates in kg/min, times in min."""

    total_released: float = 0.0
    mass_release_rate: float = 0.0
    vapor_generated: float = 0.0
    vapor_generation_rate: float = 0.0
    pool_formation: float = 0.0
    pool_evaporation: float = 0.0
    pool_evaporation_rate: float = 0.0
    airborne_release: float = 0.0
    vapor_fraction: float = 0.0
    breakdown: Dict[str, float] = field(default_factory=dict)
    time_to_empty: Optional[float] = None
    pool_duration: Optional[float] = None
    pool_area: Optional[float] = None     # m^2

    @property
    def remaining_in_pool(self) -> float:
        return self.pool_formation - self.pool_evaporation


def temperature_factor(temperature: float) -> float:
    """Exponential evaporation gain relative to 20 degC."""
    return float(np.exp(EVAPORATION_TEMP_COEFF * (temperature - REFERENCE_TEMPERATURE_C)))


def vapor_fraction(record: ChemicalRecord, temperature: float) -> float:
    """Fraction of the released mass that enters the air immediately."""
    if record.boiling_point < temperature:
        return 1.0
    fraction = (
        VAPOR_FRACTION_BASE
        + VAPOR_FRACTION_SLOPE
        * (record.vapor_pressure / ATMOSPHERIC_MMHG)
        * temperature_factor(temperature)
    )
    lo, hi = VAPOR_FRACTION_BOUNDS
    return float(np.clip(fraction, lo, hi))


def pool_evaporation_rate(
    record: ChemicalRecord,
    pool_mass: float,
    temperature: float,
) -> float:
    """Pool evaporation rate (kg/min), capped at 10 % of the pool per minute."""
    if pool_mass <= 0:
        return 0.0
    rate = (
        POOL_EVAPORATION_COEFF
        * (record.vapor_pressure / POOL_VAPOR_PRESSURE_NORM)
        * np.sqrt(WATER_MOLAR_MASS / record.molecular_weight)
        * temperature_factor(temperature)
        * np.sqrt(pool_mass)
    )
    return float(min(rate, pool_mass * MAX_POOL_EVAPORATION_FRACTION))


def calculate_mass_balance(
    chemical: str,
    rate: float,
    duration: float,
    temperature: float,
    pressure: float = 1.0,
    container_volume: Optional[float] = None,
    initial_mass: Optional[float] = None,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> MassBalanceResult:
    """
    Compute the vapor / pool mass balance of a release.

    Args:
        chemical: Chemical name (case-insensitive).
        rate: Release rate (kg/min).
        duration: Release duration (minutes).
        temperature: Release temperature (degC).
        pressure: Storage pressure (atm).  Accepted for interface symmetry
            with the blast assessment; the split does not depend on it.
        container_volume: Container volume (m^3), optional.
        initial_mass: Initial inventory (kg), optional.
        repository: Chemical property source.

    Returns:
        ``MassBalanceResult``.  An unknown chemical yields an all-zero result
        with an empty breakdown.
    """
    record = repository.lookup(chemical)
    if record is None:
        logger.warning("Chemical '%s' not found; returning empty mass balance", chemical)
        return MassBalanceResult()

    total_released = rate * duration
    is_gas = record.boiling_point < temperature
    fraction = vapor_fraction(record, temperature)

    vapor_generated = total_released * fraction
    pool_formation = 0.0 if is_gas else total_released * (1.0 - fraction)

    evaporation_rate = pool_evaporation_rate(record, pool_formation, temperature)
    pool_evaporation = min(pool_formation, evaporation_rate * duration)
    airborne = vapor_generated + pool_evaporation

    time_to_empty = None
    if container_volume and initial_mass and rate > 0:
        time_to_empty = initial_mass / rate

    pool_area = None
    pool_duration = None
    if pool_formation > 0:
        liquid_density = record.specific_gravity * 1000.0   # kg/m^3
        pool_area = pool_formation / liquid_density * POOL_DEPTH_FACTOR
        if evaporation_rate > 0:
            pool_duration = pool_formation / evaporation_rate

    logger.debug(
        "Mass balance for %s: vapor_fraction=%.4f pool=%.3f kg evap_rate=%.4f kg/min",
        record.name, fraction, pool_formation, evaporation_rate,
    )

    breakdown = {
        "Initial vapor": vapor_generated,
        "Pool formation": pool_formation,
        "Pool evaporation": pool_evaporation,
        "Remaining in pool": pool_formation - pool_evaporation,
        "Total airborne": airborne,
    }

    return MassBalanceResult(
        total_released=total_released,
        mass_release_rate=rate,
        vapor_generated=vapor_generated,
        vapor_generation_rate=rate * fraction,
        pool_formation=pool_formation,
        pool_evaporation=pool_evaporation,
        pool_evaporation_rate=evaporation_rate,
        airborne_release=airborne,
        vapor_fraction=fraction,
        breakdown=breakdown,
        time_to_empty=time_to_empty,
        pool_duration=pool_duration,
        pool_area=pool_area,
    )
