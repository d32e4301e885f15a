"""Tests for monitoring network performance and the safety score."""

import sys
import os
import pytest
import numpy as np
from dataclasses import replace

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.zones import ZoneBand, ZoneResult
from optimization.monitoring import (
    MonitoringPerformance,
    compute_monitoring_performance,
    compute_safety_score,
    detection_probability,
    evacuation_time,
    false_alarm_rate,
    simulate_leak_detection,
    time_to_detection,
)


def zones_with_yellow(distance):
    return ZoneResult(
        red=ZoneBand(distance * 0.3, 10.0),
        orange=ZoneBand(distance * 0.6, 5.0),
        yellow=ZoneBand(distance, 1.0),
    )


class TestDetectionProbability:
    def test_default(self, default_scenario):
        # 0.75 * (5 / 10) * (10 / 50)
        assert detection_probability(default_scenario) == pytest.approx(0.075)

    def test_saturates(self, default_scenario):
        sc = replace(default_scenario, sensor_count=25, release_rate=200.0)
        assert detection_probability(sc) == pytest.approx(0.75)

    def test_batch_penalty(self, default_scenario):
        sc = replace(default_scenario, monitoring_mode="batch")
        assert detection_probability(sc) == pytest.approx(0.075 * 0.7)

    def test_no_release(self, default_scenario):
        assert detection_probability(replace(default_scenario, release_rate=0.0)) == 0.0


class TestTimeToDetection:
    def test_floor(self, default_scenario):
        # 10 * 0.5 / 10 = 0.5 min, floored at 1
        assert time_to_detection(default_scenario) == 1.0

    def test_batch_delay(self, default_scenario):
        sc = replace(default_scenario, monitoring_mode="batch")
        assert time_to_detection(sc) == pytest.approx(2.5)

    def test_small_release_uses_rate_floor(self, default_scenario):
        sc = replace(default_scenario, release_rate=0.0)
        assert time_to_detection(sc) == pytest.approx(10.0 * 0.5 / 0.1)


class TestFalseAlarms:
    def test_default_threshold(self):
        assert false_alarm_rate(0.5) == pytest.approx(1.0)

    def test_lower_threshold_alarms_more(self):
        assert false_alarm_rate(0.1) > false_alarm_rate(1.0)

    def test_zero_threshold(self):
        assert false_alarm_rate(0.0) is None


class TestEvacuationTime:
    def test_no_zone(self):
        assert evacuation_time(0.0) == pytest.approx(20.0)

    def test_scales_with_radius(self):
        np.testing.assert_allclose(evacuation_time(2.0), 20.0 + 2.0 * np.sqrt(5.0 * np.pi))


class TestPerformance:
    def test_reference_release(self, default_scenario):
        yellow = np.sqrt(10.0) * np.sqrt(3.0) / 2.0 * 0.8
        perf = compute_monitoring_performance(default_scenario, zones_with_yellow(yellow))
        assert perf.detection_probability == pytest.approx(0.075)
        assert perf.time_to_detection == 1.0
        assert perf.detection_threshold == 0.5
        assert perf.false_alarm_rate == pytest.approx(1.0)
        np.testing.assert_allclose(perf.evacuation_time, 28.68, atol=0.01)
        assert compute_safety_score(perf) == 64


class TestSafetyScore:
    def test_perfect(self):
        perf = MonitoringPerformance(1.0, 1.0, 0.5, 1.0, 20.0)
        assert compute_safety_score(perf) == 100

    def test_zero_times_use_neutral_scores(self):
        perf = MonitoringPerformance(0.0, 0.0, 0.5, 1.0, 0.0)
        # 100 * (0.3 * 0.5 + 0.3 * 0.3)
        assert compute_safety_score(perf) == 24

    def test_slow_response_lowers_score(self):
        fast = MonitoringPerformance(0.5, 1.0, 0.5, 1.0, 30.0)
        slow = MonitoringPerformance(0.5, 50.0, 0.5, 1.0, 30.0)
        assert compute_safety_score(slow) < compute_safety_score(fast)

    def test_bounds(self):
        for p in np.linspace(0.0, 1.0, 11):
            for t in (0.5, 5.0, 60.0):
                score = compute_safety_score(MonitoringPerformance(p, t, 0.5, 1.0, t * 10))
                assert 0 <= score <= 100


class TestSimulation:
    def test_reproducible(self, default_scenario):
        a = [simulate_leak_detection(default_scenario, np.random.default_rng(7)) for _ in range(5)]
        b = [simulate_leak_detection(default_scenario, np.random.default_rng(7)) for _ in range(5)]
        assert a == b

    def test_matches_generator_draw(self, default_scenario):
        sc = replace(default_scenario, sensor_count=10, release_rate=50.0)
        rng = np.random.default_rng(3)
        reference = np.random.default_rng(3)
        for _ in range(50):
            assert simulate_leak_detection(sc, rng) == (reference.random() < 0.75)

    def test_batch_penalty_applied_twice(self, default_scenario):
        sc = replace(
            default_scenario, sensor_count=10, release_rate=50.0, monitoring_mode="batch"
        )
        rng = np.random.default_rng(11)
        reference = np.random.default_rng(11)
        for _ in range(50):
            expected = reference.random() < 0.75 * 0.7 * 0.8
            assert simulate_leak_detection(sc, rng) == expected

    def test_detection_rate(self, default_scenario, rng):
        sc = replace(default_scenario, sensor_count=10, release_rate=50.0)
        hits = sum(simulate_leak_detection(sc, rng) for _ in range(4000))
        assert hits / 4000 == pytest.approx(0.75, abs=0.03)

    def test_never_detects_without_release(self, default_scenario, rng):
        sc = replace(default_scenario, release_rate=0.0)
        assert not any(simulate_leak_detection(sc, rng) for _ in range(100))
