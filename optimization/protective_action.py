"""
Protective Action Evaluator.

Compares evacuation against sheltering for a release.  The population has a
fixed 10 minute budget before significant exposure; detection delay eats
into it:

    available = 10 - t_detect

Full evacuation is judged against the time needed to evacuate; indoor
sheltering against how readily the chemical penetrates buildings.
"""

import logging
from dataclasses import dataclass

from config import (
    SIGNIFICANT_EXPOSURE_MIN,
    PARTIAL_EVACUATION_FRACTION,
    EVACUATION_OUTCOMES,
    DEFAULT_BUILDING_PROTECTION,
    GAS_BUILDING_PROTECTION,
    HEAVY_BUILDING_PROTECTION,
    GAS_BOILING_POINT_C,
    HEAVY_BOILING_POINT_C,
    SHELTER_CASUALTY_BONUS,
    VEHICLE_OUTCOME,
)
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.scenario import ReleaseScenario
from optimization.monitoring import time_to_detection

logger = logging.getLogger(__name__)

PROTECTIVE_ACTION_KINDS = ("indoor", "vehicle", "full_evacuation")
SHELTER_RECOMMENDATION = "Shelter in place - close all windows and doors, turn off ventilation"


@dataclass(frozen=True)
class ProtectiveActionResult:
    effectiveness_percent: float
    casualty_reduction_percent: float
    recommendation: str


def building_protection_factor(boiling_point=None) -> float:
    """Fraction of outdoor exposure reaching building occupants.

    Gases (boiling point below 20 degC) penetrate buildings more readily;
    chemicals boiling above 100 degC are held out better.
    """
    if boiling_point is None:
        return DEFAULT_BUILDING_PROTECTION
    if boiling_point < GAS_BOILING_POINT_C:
        return GAS_BUILDING_PROTECTION
    if boiling_point > HEAVY_BOILING_POINT_C:
        return HEAVY_BUILDING_PROTECTION
    return DEFAULT_BUILDING_PROTECTION


def _evacuation_outcome(available: float, evacuation_time: float) -> ProtectiveActionResult:
    if available > evacuation_time:
        key = "full"
    elif available > evacuation_time * PARTIAL_EVACUATION_FRACTION:
        key = "partial"
    else:
        key = "insufficient"
    effectiveness, casualty, text = EVACUATION_OUTCOMES[key]
    return ProtectiveActionResult(effectiveness, casualty, text)


def evaluate_protective_action(
    scenario: ReleaseScenario,
    evacuation_time: float,
    kind: str,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> ProtectiveActionResult:
    """
    Estimate the effectiveness of a protective action.

    Args:
        scenario: Release scenario (monitoring setup drives detection delay).
        evacuation_time: Minutes needed to evacuate the affected population.
        kind: ``"indoor"``, ``"vehicle"`` or ``"full_evacuation"``.
        repository: Chemical property source.

    Returns:
        ``ProtectiveActionResult`` with percentages and a recommendation.

    Raises:
        ValueError: If ``kind`` is not a known protective action.
    """
    if kind not in PROTECTIVE_ACTION_KINDS:
        raise ValueError(
            f"Unknown protective action '{kind}'. "
            f"Use one of: {', '.join(PROTECTIVE_ACTION_KINDS)}"
        )

    if kind == "full_evacuation":
        available = SIGNIFICANT_EXPOSURE_MIN - time_to_detection(scenario)
        logger.debug(
            "Evacuation: %.2f min available, %.2f min required", available, evacuation_time
        )
        return _evacuation_outcome(available, evacuation_time)

    if kind == "indoor":
        record = repository.lookup(scenario.chemical)
        if record is None:
            logger.warning(
                "Chemical '%s' not found; using default building protection",
                scenario.chemical,
            )
        factor = building_protection_factor(record.boiling_point if record else None)
        effectiveness = (1.0 - factor) * 100.0
        return ProtectiveActionResult(
            effectiveness_percent=effectiveness,
            casualty_reduction_percent=effectiveness + SHELTER_CASUALTY_BONUS,
            recommendation=SHELTER_RECOMMENDATION,
        )

    effectiveness, casualty, text = VEHICLE_OUTCOME
    return ProtectiveActionResult(effectiveness, casualty, text)
