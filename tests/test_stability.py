"""Tests for Pasquill-Gifford stability classification."""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.stability import classify_stability, stability_label, normalize_wind_speed


class TestDaytime:
    @pytest.mark.parametrize("wind, expected", [
        (1.5, "A"), (2.5, "A"), (4.0, "B"), (5.5, "C"), (7.0, "D"),
    ])
    def test_clear_sky(self, wind, expected):
        assert classify_stability(wind, 20.0, 1) == expected

    @pytest.mark.parametrize("wind, expected", [
        (1.0, "B"), (2.5, "B"), (4.0, "C"), (5.5, "C"), (8.0, "D"),
    ])
    def test_partly_cloudy(self, wind, expected):
        assert classify_stability(wind, 55.0, 1) == expected

    def test_overcast(self):
        assert classify_stability(1.0, 90.0, 1) == "C"
        assert classify_stability(3.0, 90.0, 1) == "D"

    def test_cloud_boundaries(self):
        # 40 % is no longer clear, 70 % is overcast
        assert classify_stability(1.0, 40.0, 1) == "B"
        assert classify_stability(1.0, 70.0, 1) == "C"


class TestNighttime:
    def test_cloudy_night(self):
        assert classify_stability(2.0, 60.0, 0) == "E"
        assert classify_stability(3.0, 60.0, 0) == "D"

    def test_clear_night(self):
        assert classify_stability(2.0, 10.0, 0) == "F"
        assert classify_stability(3.0, 10.0, 0) == "E"
        assert classify_stability(5.0, 10.0, 0) == "D"

    def test_boolean_day_flag(self):
        assert classify_stability(2.0, 10.0, False) == "F"
        assert classify_stability(1.5, 10.0, True) == "A"


class TestTransitionalLabels:
    def test_labels(self):
        assert stability_label(2.5, 20.0, 1) == "A-B"
        assert stability_label(2.5, 55.0, 1) == "B-C"
        assert stability_label(5.5, 55.0, 1) == "C-D"

    def test_classify_resolves_to_unstable_letter(self):
        assert classify_stability(2.5, 20.0, 1) == "A"
        assert classify_stability(5.5, 55.0, 1) == "C"

    def test_always_single_letter(self):
        for wind in (0.0, 1.0, 2.2, 3.3, 4.8, 5.9, 12.0, 50.0):
            for cloud in (0.0, 39.9, 40.0, 69.9, 70.0, 100.0):
                for day in (0, 1):
                    result = classify_stability(wind, cloud, day)
                    assert len(result) == 1 and result in "ABCDEF"


class TestWindUnits:
    def test_kmh_converted(self):
        assert normalize_wind_speed(36.0) == pytest.approx(10.0)

    def test_ms_unchanged(self):
        assert normalize_wind_speed(20.0) == 20.0

    def test_kmh_classification(self):
        # 36 km/h = 10 m/s, clear night -> neutral
        assert classify_stability(36.0, 10.0, 0) == "D"
