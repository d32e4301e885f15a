"""Tests for blast and flammability risk assessment."""

import sys
import os
import pytest
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.blast import assess_blast_potential, flammability_risk
from models.risk import RiskLevel
from models.units import to_mg_m3
from validation.metrics import risk_monotonic


def benzene_mg(percent):
    return to_mg_m3(percent, "percent", 78.11)


def methane_mg(percent):
    return to_mg_m3(percent, "percent", 16.04)


# Benzene explosion energy 3300 -> energy factor 11
BENZENE_ENERGY = 3300.0 / 300.0


class TestRiskLevel:
    def test_ordering(self):
        assert RiskLevel.NONE < RiskLevel.LOW < RiskLevel.MODERATE < RiskLevel.HIGH < RiskLevel.EXTREME

    def test_raise_capped(self):
        assert RiskLevel.LOW.raised() is RiskLevel.MODERATE
        assert RiskLevel.HIGH.raised(3) is RiskLevel.EXTREME
        assert RiskLevel.EXTREME.raised() is RiskLevel.EXTREME

    def test_labels(self):
        assert str(RiskLevel.MODERATE) == "Moderate"
        assert RiskLevel.from_label("extreme") is RiskLevel.EXTREME
        with pytest.raises(ValueError, match="Unknown risk level"):
            RiskLevel.from_label("catastrophic")


class TestNonFlammable:
    def test_scenario_d(self):
        for concentration in (0.0, 1.0, 1e3, 1e6):
            result = assess_blast_potential("chlorine", concentration, 20.0)
            assert result.explosion_risk is RiskLevel.NONE
            assert result.flammability_risk is RiskLevel.NONE
            assert result.overpressure == 0.0
            assert result.thermal_radiation == 0.0
            assert result.safe_distance == 100.0

    def test_comment(self):
        result = assess_blast_potential("phosgene", 10.0, 20.0)
        assert "does not present an explosion hazard" in result.comments


class TestOrdinaryFlammable:
    """Benzene: LEL 1.2 %, UEL 7.8 %, not highly reactive."""

    def test_within_flammable_band(self):
        result = assess_blast_potential("benzene", benzene_mg(3.0), 20.0)
        assert result.flammability_risk is RiskLevel.EXTREME
        assert result.explosion_risk is RiskLevel.HIGH
        np.testing.assert_allclose(result.overpressure, 5.0 * BENZENE_ENERGY)
        np.testing.assert_allclose(result.thermal_radiation, 25.0 * BENZENE_ENERGY)
        np.testing.assert_allclose(result.safe_distance, 500.0 * np.sqrt(BENZENE_ENERGY))
        assert result.comments.startswith("WARNING: Concentration is within flammable range (1.2%-7.8%)")

    def test_approaching_lel(self):
        result = assess_blast_potential("benzene", benzene_mg(0.7), 20.0)
        assert result.flammability_risk is RiskLevel.HIGH
        assert result.explosion_risk is RiskLevel.MODERATE
        assert "below the Lower Explosive Limit (1.2%)" in result.comments

    def test_low_concentration(self):
        result = assess_blast_potential("benzene", benzene_mg(0.2), 20.0)
        assert result.flammability_risk is RiskLevel.MODERATE
        assert result.explosion_risk is RiskLevel.LOW

    def test_trace_concentration(self):
        result = assess_blast_potential("benzene", benzene_mg(0.05), 20.0)
        assert result.flammability_risk is RiskLevel.LOW
        assert result.explosion_risk is RiskLevel.NONE
        assert result.overpressure == 0.0
        assert result.safe_distance == 100.0
        np.testing.assert_allclose(result.thermal_radiation, 1.0 * BENZENE_ENERGY)

    def test_above_uel(self):
        result = assess_blast_potential("benzene", benzene_mg(10.0), 20.0)
        assert result.flammability_risk is RiskLevel.MODERATE
        assert result.explosion_risk is RiskLevel.MODERATE
        assert "above the Upper Explosive Limit (7.8%)" in result.comments


class TestReactive:
    """Methane (blast potential 8) mirrors flammability risk."""

    def test_mirrors_flammability(self):
        for percent, level in [
            (0.1, RiskLevel.LOW),
            (1.0, RiskLevel.MODERATE),
            (4.0, RiskLevel.HIGH),
            (10.0, RiskLevel.EXTREME),
        ]:
            result = assess_blast_potential("methane", methane_mg(percent), 20.0)
            assert result.flammability_risk is level
            assert result.explosion_risk is level

    def test_extreme_distances(self):
        result = assess_blast_potential("methane", methane_mg(10.0), 20.0)
        energy = 882.0 / 300.0
        np.testing.assert_allclose(result.overpressure, 10.0 * energy)
        np.testing.assert_allclose(result.safe_distance, 1000.0 * np.sqrt(energy))

    def test_isolation_distances(self):
        result = assess_blast_potential("methane", methane_mg(10.0), 20.0)
        assert result.initial_isolation_distance == pytest.approx(0.3 * result.safe_distance)
        assert result.protective_action_distance == result.safe_distance
        assert result.downwind_evacuation_distance == pytest.approx(1.5 * result.safe_distance)


class TestEscalation:
    def test_hot_and_pressurized(self):
        result = assess_blast_potential("benzene", benzene_mg(0.2), 60.0, pressure=1.5)
        assert result.explosion_risk is RiskLevel.MODERATE
        assert "Elevated temperature" in result.comments
        assert "Elevated pressure" in result.comments

    def test_very_hot_escalates_twice(self):
        result = assess_blast_potential("benzene", benzene_mg(0.2), 110.0, pressure=1.5)
        assert result.explosion_risk is RiskLevel.HIGH

    def test_high_pressure_alone(self):
        result = assess_blast_potential("benzene", benzene_mg(0.2), 20.0, pressure=2.5)
        assert result.explosion_risk is RiskLevel.MODERATE

    def test_capped_at_extreme(self):
        result = assess_blast_potential("benzene", benzene_mg(3.0), 150.0, pressure=3.0)
        assert result.explosion_risk is RiskLevel.EXTREME

    def test_no_escalation_without_risk(self):
        result = assess_blast_potential("benzene", benzene_mg(0.05), 150.0, pressure=3.0)
        assert result.explosion_risk is RiskLevel.NONE

    def test_overpressure_scales_with_pressure(self):
        base = assess_blast_potential("methane", methane_mg(10.0), 20.0, pressure=1.0)
        # 1.1 atm does not escalate but scales the overpressure
        raised = assess_blast_potential("methane", methane_mg(10.0), 20.0, pressure=1.1)
        np.testing.assert_allclose(raised.overpressure, base.overpressure * 1.1)


class TestMonotonicity:
    def test_benzene_up_to_uel(self):
        concentrations = [benzene_mg(p) for p in np.linspace(0.0, 7.7, 40)]
        assert risk_monotonic("benzene", concentrations)

    def test_methane_up_to_uel(self):
        concentrations = [methane_mg(p) for p in np.linspace(0.0, 14.9, 40)]
        assert risk_monotonic("methane", concentrations)

    def test_flammability_helper(self, repository):
        record = repository.lookup("hydrogen sulfide")
        levels = [flammability_risk(record, p) for p in (0.1, 1.0, 3.0, 20.0)]
        assert levels == sorted(levels)


class TestUnknownChemical:
    def test_defaults(self):
        result = assess_blast_potential("unobtainium", 1000.0, 20.0)
        assert result.explosion_risk is RiskLevel.NONE
        assert result.flammability_risk is RiskLevel.NONE
        assert result.safe_distance == 100.0
        assert result.comments == "Chemical data not found"
