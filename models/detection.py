"""
Leak Detection from Point Measurements.

Compares a measured concentration against a detection threshold derived
from the background level and the chemical's AEGL-1:

    threshold = max(background * multiplier, 0.01 * AEGL-1 [mg/m^3])

A reading strictly above the threshold is a leak.  Confidence grows with
the exceedance factor and severity is graded against the AEGL tiers.

Typical chlorine values (background 0.001 mg/m^3, multiplier 5):
    threshold ~0.0145 mg/m^3   (1 % of AEGL-1 = 0.5 ppm)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from config import (
    DEFAULT_BACKGROUND_MG_M3,
    DEFAULT_THRESHOLD_MULTIPLIER,
    AEGL1_THRESHOLD_FRACTION,
    DEFAULT_AEGL1_PPM,
    CONFIDENCE_TIERS,
    BASE_CONFIDENCE,
    TIME_TO_ACTION_MIN,
    DEFAULT_TIME_TO_ACTION_MIN,
)
from data.chemical_database import ChemicalRecord
from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.risk import RiskLevel
from models.units import ppm_to_mg_m3

logger = logging.getLogger(__name__)

ROUTINE_ACTIONS = (
    "Continue routine monitoring",
    "Check monitoring equipment calibration at next maintenance interval",
)
VERIFY_ACTION = "Verify reading with additional monitoring"
SEVERE_ACTIONS = (
    "Activate emergency response protocol",
    "Consider evacuation of affected areas",
    "Use appropriate PPE for response personnel",
    "Identify and isolate the source of the leak",
)
MODERATE_ACTIONS = (
    "Increase ventilation in the affected area",
    "Notify response team and prepare for potential escalation",
    "Begin source identification procedures",
)
LOW_ACTIONS = (
    "Continue monitoring at increased frequency",
    "Prepare response equipment as a precautionary measure",
)
IGNITION_ACTION = "Eliminate all ignition sources in the vicinity"
UNKNOWN_CHEMICAL_ACTION = "Verify chemical properties in database"


@dataclass(frozen=True)
class LeakDetectionResult:
    is_leaking: bool
    confidence: float
    severity_level: RiskLevel
    detection_threshold: float     # mg/m^3
    exceeds_factor: float
    time_to_action: int            # minutes
    recommended_actions: List[str] = field(default_factory=list)


def detection_threshold(
    record: ChemicalRecord,
    background: float = DEFAULT_BACKGROUND_MG_M3,
    multiplier: float = DEFAULT_THRESHOLD_MULTIPLIER,
) -> float:
    """Detection threshold in mg/m^3 (AEGL-1 taken as 1 ppm when not established)."""
    aegl1_ppm = record.aegl1 or DEFAULT_AEGL1_PPM
    return max(
        background * multiplier,
        AEGL1_THRESHOLD_FRACTION * ppm_to_mg_m3(aegl1_ppm, record.molecular_weight),
    )


def detection_confidence(exceeds_factor: float) -> float:
    """Map an exceedance factor (> 1) to a detection confidence."""
    for minimum, confidence in CONFIDENCE_TIERS:
        if exceeds_factor >= minimum:
            return confidence
    return BASE_CONFIDENCE


def severity_level(record: ChemicalRecord, measured: float) -> RiskLevel:
    """Grade a leaking reading (mg/m^3) against the established AEGL tiers."""
    tiers: Tuple[Tuple[float, RiskLevel], ...] = (
        (record.aegl3, RiskLevel.EXTREME),
        (record.aegl2, RiskLevel.HIGH),
        (record.aegl1, RiskLevel.MODERATE),
    )
    for aegl_ppm, level in tiers:
        if aegl_ppm > 0 and measured >= ppm_to_mg_m3(aegl_ppm, record.molecular_weight):
            return level
    return RiskLevel.LOW


def recommended_actions(record: ChemicalRecord, severity: RiskLevel) -> List[str]:
    """Ordered response checklist for a severity level (NONE = no leak)."""
    if severity is RiskLevel.NONE:
        return list(ROUTINE_ACTIONS)

    actions = [VERIFY_ACTION]
    if severity >= RiskLevel.HIGH:
        actions.extend(SEVERE_ACTIONS)
    elif severity is RiskLevel.MODERATE:
        actions.extend(MODERATE_ACTIONS)
    else:
        actions.extend(LOW_ACTIONS)

    if record.lel > 0 and record.uel > 0:
        actions.append(IGNITION_ACTION)
    return actions


def detect_leak(
    chemical: str,
    measured: float,
    background: float = DEFAULT_BACKGROUND_MG_M3,
    multiplier: float = DEFAULT_THRESHOLD_MULTIPLIER,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> LeakDetectionResult:
    """
    Decide whether a concentration reading indicates a leak.

    Args:
        chemical: Chemical name (case-insensitive).
        measured: Measured concentration (mg/m^3).
        background: Normal background level (mg/m^3).
        multiplier: Background multiplier for the threshold.
        repository: Chemical property source.

    Returns:
        ``LeakDetectionResult``.  A reading equal to the threshold is not a
        leak.  Unknown chemicals are reported as not leaking.
    """
    record = repository.lookup(chemical)
    if record is None:
        logger.warning("Chemical '%s' not found; leak detection skipped", chemical)
        return LeakDetectionResult(
            is_leaking=False,
            confidence=0.0,
            severity_level=RiskLevel.NONE,
            detection_threshold=0.0,
            exceeds_factor=0.0,
            time_to_action=DEFAULT_TIME_TO_ACTION_MIN,
            recommended_actions=[UNKNOWN_CHEMICAL_ACTION],
        )

    threshold = detection_threshold(record, background, multiplier)
    is_leaking = measured > threshold

    if is_leaking:
        exceeds = measured / threshold
        confidence = detection_confidence(exceeds)
        severity = severity_level(record, measured)
        time_to_action = TIME_TO_ACTION_MIN[severity.name]
    else:
        exceeds = 0.0
        confidence = 0.0
        severity = RiskLevel.NONE
        time_to_action = DEFAULT_TIME_TO_ACTION_MIN

    return LeakDetectionResult(
        is_leaking=is_leaking,
        confidence=confidence,
        severity_level=severity,
        detection_threshold=threshold,
        exceeds_factor=exceeds,
        time_to_action=time_to_action,
        recommended_actions=recommended_actions(record, severity),
    )
