"""
Concentration Unit Conversion.

Converts between mg/m^3, ppm (by volume) and percent by volume using the
ideal-gas molar volume at 25 degC and 1 atm (24.45 L/mol):

    mg/m^3 = ppm * MW / 24.45
    1 %    = 10,000 ppm

All conversions pivot through mg/m^3.
"""

import logging
from typing import Union

from config import MOLAR_VOLUME_L, PPM_PER_PERCENT
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.risk import ConcentrationUnit

logger = logging.getLogger(__name__)

UnitLike = Union[ConcentrationUnit, str]


def ppm_to_mg_m3(ppm: float, molecular_weight: float) -> float:
    """Convert a volume mixing ratio in ppm to a mass concentration in mg/m^3."""
    return ppm * molecular_weight / MOLAR_VOLUME_L


def mg_m3_to_ppm(mg_m3: float, molecular_weight: float) -> float:
    """Convert a mass concentration in mg/m^3 to ppm by volume."""
    return mg_m3 * MOLAR_VOLUME_L / molecular_weight


def to_mg_m3(value: float, unit: UnitLike, molecular_weight: float) -> float:
    """Convert ``value`` expressed in ``unit`` to mg/m^3."""
    unit = ConcentrationUnit(unit)
    if unit is ConcentrationUnit.PPM:
        return ppm_to_mg_m3(value, molecular_weight)
    if unit is ConcentrationUnit.PERCENT:
        return ppm_to_mg_m3(value * PPM_PER_PERCENT, molecular_weight)
    return value


def from_mg_m3(value: float, unit: UnitLike, molecular_weight: float) -> float:
    """Convert ``value`` in mg/m^3 to ``unit``."""
    unit = ConcentrationUnit(unit)
    if unit is ConcentrationUnit.PPM:
        return mg_m3_to_ppm(value, molecular_weight)
    if unit is ConcentrationUnit.PERCENT:
        return mg_m3_to_ppm(value, molecular_weight) / PPM_PER_PERCENT
    return value


def convert_concentration(
    value: float,
    chemical: str,
    from_unit: UnitLike,
    to_unit: UnitLike,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> float:
    """
    Convert a concentration between units for a given chemical.

    Args:
        value: Concentration value.
        chemical: Chemical name (case-insensitive).
        from_unit: Source unit (``"mg/m3"``, ``"ppm"`` or ``"percent"``).
        to_unit: Target unit.
        repository: Chemical property source.

    Returns:
        The converted value.  If the units are identical or the chemical is
        unknown, ``value`` is returned unchanged.

    Raises:
        ValueError: If either unit is not a recognised ``ConcentrationUnit``.
    """
    from_unit = ConcentrationUnit(from_unit)
    to_unit = ConcentrationUnit(to_unit)
    if from_unit is to_unit:
        return value

    record = repository.lookup(chemical)
    if record is None:
        logger.warning("Unknown chemical '%s'; concentration left unconverted", chemical)
        return value

    mg_m3 = to_mg_m3(value, from_unit, record.molecular_weight)
    return from_mg_m3(mg_m3, to_unit, record.molecular_weight)
