"""
Exposure guidelines and health impact screening.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from config import DOSAGE_FATAL, DOSAGE_HIGH, DOSAGE_MEDIUM
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.units import mg_m3_to_ppm

logger = logging.getLogger(__name__)

# Short labels for the guideline a zone is drawn at
THRESHOLD_DESCRIPTIONS = MappingProxyType({
    "AEGL3": "AEGL-3 (Life threatening)",
    "AEGL2": "AEGL-2 (Serious health effects)",
    "AEGL1": "AEGL-1 (Mild effects)",
    "ERPG3": "ERPG-3",
    "ERPG2": "ERPG-2",
    "ERPG1": "ERPG-1",
    "IDLH": "IDLH",
    "CUSTOM": "Custom",
})

# Long-form meaning of each published guideline
GUIDELINE_DEFINITIONS = MappingProxyType({
    "idlh": "Immediately Dangerous to Life or Health",
    "aegl1": (
        "Notable discomfort, irritation, or non-sensory effects. Effects are "
        "not disabling and are reversible upon cessation of exposure."
    ),
    "aegl2": (
        "Irreversible or other serious, long-lasting adverse health effects "
        "or an impaired ability to escape."
    ),
    "aegl3": "Life-threatening health effects or death.",
    "erpg1": "Maximum concentration with mild, transient health effects.",
    "erpg2": (
        "Maximum concentration below which most could be exposed up to 1 hour "
        "without serious health effects."
    ),
    "erpg3": (
        "Maximum concentration below which most could be exposed up to 1 hour "
        "without life-threatening health effects."
    ),
})


@dataclass(frozen=True)
class ExposureGuidelines:
    """Published exposure limits in ppm (0 or None = not established)."""

    idlh: float
    aegl1: float
    aegl2: float
    aegl3: float
    erpg1: Optional[float] = None
    erpg2: Optional[float] = None
    erpg3: Optional[float] = None


@dataclass(frozen=True)
class HealthImpact:
    severity: str       # low | medium | high | fatal
    description: str


def get_exposure_guidelines(
    chemical: str,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> Optional[ExposureGuidelines]:
    """IDLH / AEGL / ERPG limits for a chemical, or ``None`` if unknown."""
    record = repository.lookup(chemical)
    if record is None:
        return None
    return ExposureGuidelines(
        idlh=record.idlh,
        aegl1=record.aegl1,
        aegl2=record.aegl2,
        aegl3=record.aegl3,
        erpg1=record.erpg1,
        erpg2=record.erpg2,
        erpg3=record.erpg3,
    )


def calculate_health_impact(
    concentration: float,
    exposure_time: float,
    chemical: str,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> HealthImpact:
    """
    Screen the health impact of an exposure.

    Known chemicals are graded by comparing the concentration in ppm with
    AEGL-3/2/1.  Unknown chemicals fall back to the dosage
    (mg/m^3 x minutes): > 1000 fatal, > 500 high, > 100 medium.

    Args:
        concentration: Exposure concentration (mg/m^3).
        exposure_time: Exposure duration (minutes).
        chemical: Chemical name (case-insensitive).
        repository: Chemical property source.
    """
    record = repository.lookup(chemical)
    if record is not None:
        ppm = mg_m3_to_ppm(concentration, record.molecular_weight)
        if record.aegl3 and ppm > record.aegl3:
            return HealthImpact(
                "fatal",
                f"Exceeds AEGL-3 ({record.aegl3:g} ppm): "
                "Life-threatening health effects or death possible",
            )
        if record.aegl2 and ppm > record.aegl2:
            return HealthImpact(
                "high",
                f"Exceeds AEGL-2 ({record.aegl2:g} ppm): "
                "Long-lasting adverse health effects possible",
            )
        if record.aegl1 and ppm > record.aegl1:
            return HealthImpact(
                "medium",
                f"Exceeds AEGL-1 ({record.aegl1:g} ppm): "
                "Notable discomfort, irritation, or non-disabling effects",
            )
        return HealthImpact("low", "Below all applicable exposure guidelines")

    logger.warning("Chemical '%s' not found; grading health impact by dosage", chemical)
    dosage = concentration * exposure_time
    if dosage > DOSAGE_FATAL:
        return HealthImpact("fatal", "Potentially fatal exposure")
    if dosage > DOSAGE_HIGH:
        return HealthImpact("high", "Serious health effects")
    if dosage > DOSAGE_MEDIUM:
        return HealthImpact("medium", "Moderate health effects")
    return HealthImpact("low", "Minor irritation possible")
