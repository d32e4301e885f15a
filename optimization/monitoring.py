"""
Monitoring Network Performance.

Screening estimates of how well a sensor network covers a release:

    P(detect)       = 0.75 * min(1, n / 10) * min(1, Q / 50) * f_mode
    t_detect [min]  = max(1, 10 * threshold / max(0.1, Q) * d_mode)
    false alarms    = 2 / (4 * threshold)
    t_evac [min]    = 20 + sqrt(pi * r_yellow^2 * 500 / 100)

where f_mode is 1.0 (continuous) or 0.7 (batch) and d_mode is 1 or 5.

The safety score (0-100) blends detection, response time and evacuation
time into a single planning figure.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from config import (
    BASE_DETECTION_PROBABILITY,
    FULL_COVERAGE_SENSOR_COUNT,
    EASY_DETECTION_RELEASE_RATE,
    BATCH_DETECTION_FACTOR,
    BATCH_DELAY_FACTOR,
    BATCH_SIMULATION_FACTOR,
    MIN_DETECTION_RELEASE_RATE,
    DETECTION_TIME_SCALE_MIN,
    MIN_DETECTION_TIME_MIN,
    EVACUATION_BASE_MIN,
    EVACUATION_POPULATION_DENSITY,
    EVACUATION_POPULATION_SCALE,
    SAFETY_WEIGHTS,
    SAFETY_DETECTION_GAIN,
    SAFETY_RESPONSE_REFERENCE_MIN,
    SAFETY_EVACUATION_REFERENCE_MIN,
)
from models.scenario import ReleaseScenario
from models.zones import ZoneResult


@dataclass(frozen=True)
class MonitoringPerformance:
    detection_probability: float
    time_to_detection: float             # minutes
    detection_threshold: float           # mg/m^3
    false_alarm_rate: Optional[float]    # None for a zero threshold
    evacuation_time: float               # minutes


def _is_batch(scenario: ReleaseScenario) -> bool:
    return scenario.monitoring_mode == "batch"


def detection_probability(scenario: ReleaseScenario) -> float:
    """Probability that the network detects the release at all."""
    probability = (
        BASE_DETECTION_PROBABILITY
        * min(1.0, scenario.sensor_count / FULL_COVERAGE_SENSOR_COUNT)
        * min(1.0, scenario.release_rate / EASY_DETECTION_RELEASE_RATE)
        * (BATCH_DETECTION_FACTOR if _is_batch(scenario) else 1.0)
    )
    return float(np.clip(probability, 0.0, 1.0))


def time_to_detection(scenario: ReleaseScenario) -> float:
    """Expected minutes from release start to first alarm."""
    delay = BATCH_DELAY_FACTOR if _is_batch(scenario) else 1.0
    rate = max(MIN_DETECTION_RELEASE_RATE, scenario.release_rate)
    return max(
        MIN_DETECTION_TIME_MIN,
        DETECTION_TIME_SCALE_MIN * (scenario.sensor_threshold / rate) * delay,
    )


def false_alarm_rate(threshold: float) -> Optional[float]:
    """False alarms per day; lower thresholds trip more often."""
    if threshold <= 0:
        return None
    return 2.0 / (threshold * 4.0)


def evacuation_time(yellow_distance: float) -> float:
    """Minutes to clear the population inside the yellow radius (km)."""
    population = np.pi * yellow_distance ** 2 * EVACUATION_POPULATION_DENSITY
    return float(EVACUATION_BASE_MIN + np.sqrt(population / EVACUATION_POPULATION_SCALE))


def compute_monitoring_performance(
    scenario: ReleaseScenario,
    zones: ZoneResult,
) -> MonitoringPerformance:
    """Summarize network performance for a scenario and its hazard zones."""
    return MonitoringPerformance(
        detection_probability=detection_probability(scenario),
        time_to_detection=time_to_detection(scenario),
        detection_threshold=scenario.sensor_threshold,
        false_alarm_rate=false_alarm_rate(scenario.sensor_threshold),
        evacuation_time=evacuation_time(zones.yellow.distance),
    )


def simulate_leak_detection(
    scenario: ReleaseScenario,
    rng: np.random.Generator,
) -> bool:
    """
    Draw one detection outcome for a release.

    Batch monitoring applies a further 0.8 penalty to the detection
    probability.

    Args:
        scenario: Release scenario.
        rng: Random generator (required so draws are reproducible).

    Returns:
        True if the simulated network detects the release.
    """
    probability = detection_probability(scenario)
    if _is_batch(scenario):
        probability *= BATCH_SIMULATION_FACTOR
    return bool(rng.random() < probability)


def compute_safety_score(performance: MonitoringPerformance) -> int:
    """
    Overall safety score in [0, 100].

    Weighted blend of detection capability (0.4), response speed (0.3) and
    evacuation speed (0.3).  Zero detection or evacuation times fall back to
    neutral sub-scores of 0.5 and 0.3.
    """
    detection = min(1.0, performance.detection_probability * SAFETY_DETECTION_GAIN)

    if performance.time_to_detection:
        response = min(1.0, SAFETY_RESPONSE_REFERENCE_MIN / performance.time_to_detection)
    else:
        response = 0.5

    if performance.evacuation_time:
        evacuation = min(1.0, SAFETY_EVACUATION_REFERENCE_MIN / performance.evacuation_time)
    else:
        evacuation = 0.3

    score = 100.0 * (
        SAFETY_WEIGHTS["detection"] * detection
        + SAFETY_WEIGHTS["response"] * response
        + SAFETY_WEIGHTS["evacuation"] * evacuation
    )
    return int(np.floor(score + 0.5))
