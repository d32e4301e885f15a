"""
Blast and Flammability Risk Assessment.

Screens a vapor concentration against the chemical's flammable band
(LEL..UEL, percent by volume) and estimates the consequences of ignition:

    overpressure  = P_ref[explosion risk] * f_T * (P / 1 atm) * E / 300   [psi]
    radiation     = Q_ref[flammability risk] * f_T * E / 300              [kW/m^2]
    safe distance = D_ref[explosion risk] * sqrt(overpressure / P_ref)    [m]

with f_T = 1 + (T - 20) / 100 and E the explosion energy (300 when absent).
"""

import logging
from dataclasses import dataclass

import numpy as np

from config import (
    REFERENCE_TEMPERATURE_C,
    DEFAULT_EXPLOSION_ENERGY,
    HIGH_REACTIVITY_HAZARD,
    HIGH_BLAST_POTENTIAL,
    ELEVATED_TEMPERATURE_C,
    EXTREME_TEMPERATURE_C,
    ELEVATED_PRESSURE_RATIO,
    EXTREME_PRESSURE_RATIO,
    LEL_LOW_FRACTION,
    LEL_MODERATE_FRACTION,
    OVERPRESSURE_PSI,
    THERMAL_RADIATION_KW_M2,
    SAFE_DISTANCE_M,
    DEFAULT_SAFE_DISTANCE_M,
    INITIAL_ISOLATION_FRACTION,
    DOWNWIND_EVACUATION_FRACTION,
)
from data.chemical_database import ChemicalRecord
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.risk import RiskLevel
from models.units import from_mg_m3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlastAssessmentResult:
    """Explosion and fire consequences of a flammable vapor cloud."""

    explosion_risk: RiskLevel
    flammability_risk: RiskLevel
    overpressure: float          # psi
    thermal_radiation: float     # kW/m^2
    safe_distance: float         # m
    comments: str

    @property
    def initial_isolation_distance(self) -> float:
        return self.safe_distance * INITIAL_ISOLATION_FRACTION

    @property
    def protective_action_distance(self) -> float:
        return self.safe_distance

    @property
    def downwind_evacuation_distance(self) -> float:
        return self.safe_distance * DOWNWIND_EVACUATION_FRACTION


def flammability_risk(record: ChemicalRecord, percent: float) -> RiskLevel:
    """Risk of ignition at ``percent`` by volume."""
    if not record.is_flammable:
        return RiskLevel.NONE
    if percent < record.lel * LEL_LOW_FRACTION:
        return RiskLevel.LOW
    if percent < record.lel * LEL_MODERATE_FRACTION:
        return RiskLevel.MODERATE
    if percent < record.lel:
        return RiskLevel.HIGH
    if percent <= record.uel:
        return RiskLevel.EXTREME
    # Rich mixture; may become flammable when diluted
    return RiskLevel.MODERATE


def _in_flammable_band(record: ChemicalRecord, percent: float) -> bool:
    return record.lel > 0 and record.lel <= percent <= record.uel


def explosion_risk(
    record: ChemicalRecord,
    percent: float,
    flammability: RiskLevel,
    temperature: float,
    pressure_ratio: float,
) -> RiskLevel:
    """Risk of a pressure-generating explosion, escalated for hot or pressurized releases."""
    if not record.is_flammable:
        return RiskLevel.NONE

    reactive = (
        (record.reactivity_hazard or 0) >= HIGH_REACTIVITY_HAZARD
        or (record.blast_potential or 0) >= HIGH_BLAST_POTENTIAL
    )
    if reactive:
        # Highly reactive chemicals can detonate outside the flammable band
        risk = max(flammability, RiskLevel.LOW)
    elif _in_flammable_band(record, percent):
        risk = RiskLevel.HIGH
    elif percent >= record.lel * LEL_MODERATE_FRACTION:
        risk = RiskLevel.MODERATE
    elif percent >= record.lel * LEL_LOW_FRACTION:
        risk = RiskLevel.LOW
    else:
        risk = RiskLevel.NONE

    if risk is RiskLevel.NONE:
        return risk
    if temperature > ELEVATED_TEMPERATURE_C and pressure_ratio > ELEVATED_PRESSURE_RATIO:
        risk = risk.raised()
    if temperature > EXTREME_TEMPERATURE_C or pressure_ratio > EXTREME_PRESSURE_RATIO:
        risk = risk.raised()
    return risk


def _blast_comments(
    record: ChemicalRecord,
    percent: float,
    explosion: RiskLevel,
    temperature: float,
    pressure: float,
) -> str:
    if explosion is RiskLevel.NONE:
        comments = "This chemical does not present an explosion hazard under normal conditions."
    elif _in_flammable_band(record, percent):
        comments = (
            f"WARNING: Concentration is within flammable range "
            f"({record.lel:g}%-{record.uel:g}%). "
            "Avoid all ignition sources and implement emergency evacuation."
        )
    elif percent < record.lel:
        comments = (
            f"Concentration is below the Lower Explosive Limit ({record.lel:g}%), "
            "but caution should still be exercised. "
            "Avoid ignition sources and monitor concentration."
        )
    else:
        comments = (
            f"Concentration is above the Upper Explosive Limit ({record.uel:g}%), "
            "but mixture could become explosive if diluted with air. Ventilate carefully."
        )

    if temperature > ELEVATED_TEMPERATURE_C:
        comments += " Elevated temperature increases explosion risk."
    if pressure > ELEVATED_PRESSURE_RATIO:
        comments += " Elevated pressure increases explosion risk."
    return comments


def assess_blast_potential(
    chemical: str,
    concentration: float,
    temperature: float,
    pressure: float = 1.0,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> BlastAssessmentResult:
    """
    Assess explosion and fire risk of a vapor concentration.

    Args:
        chemical: Chemical name (case-insensitive).
        concentration: Vapor concentration (mg/m^3).
        temperature: Ambient temperature (degC).
        pressure: Ambient pressure (atm).
        repository: Chemical property source.

    Returns:
        ``BlastAssessmentResult``.  Unknown chemicals yield NONE/NONE risk,
        zero overpressure and radiation and the 100 m default safe distance.
    """
    record = repository.lookup(chemical)
    if record is None:
        logger.warning("Chemical '%s' not found; blast assessment skipped", chemical)
        return BlastAssessmentResult(
            explosion_risk=RiskLevel.NONE,
            flammability_risk=RiskLevel.NONE,
            overpressure=0.0,
            thermal_radiation=0.0,
            safe_distance=DEFAULT_SAFE_DISTANCE_M,
            comments="Chemical data not found",
        )

    percent = from_mg_m3(concentration, "percent", record.molecular_weight)
    temp_factor = 1.0 + (temperature - REFERENCE_TEMPERATURE_C) / 100.0
    pressure_ratio = pressure / 1.0
    energy_factor = (record.explosion_energy or DEFAULT_EXPLOSION_ENERGY) / DEFAULT_EXPLOSION_ENERGY

    flammability = flammability_risk(record, percent)
    explosion = explosion_risk(record, percent, flammability, temperature, pressure_ratio)

    overpressure = 0.0
    safe_distance = DEFAULT_SAFE_DISTANCE_M
    if explosion is not RiskLevel.NONE:
        reference = OVERPRESSURE_PSI[explosion.name]
        overpressure = reference * temp_factor * pressure_ratio * energy_factor
        # Below-freezing extremes can make the product negative
        safe_distance = SAFE_DISTANCE_M[explosion.name] * float(
            np.sqrt(max(overpressure, 0.0) / reference)
        )

    thermal_radiation = 0.0
    if flammability is not RiskLevel.NONE:
        thermal_radiation = (
            THERMAL_RADIATION_KW_M2[flammability.name] * temp_factor * energy_factor
        )

    logger.debug(
        "Blast assessment for %s: %.4f %% vol, flammability=%s explosion=%s",
        record.name, percent, flammability, explosion,
    )

    return BlastAssessmentResult(
        explosion_risk=explosion,
        flammability_risk=flammability,
        overpressure=overpressure,
        thermal_radiation=thermal_radiation,
        safe_distance=safe_distance,
        comments=_blast_comments(record, percent, explosion, temperature, pressure),
    )
