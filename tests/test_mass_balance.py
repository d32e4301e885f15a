"""Tests for the vapor / pool mass balance."""

import sys
import os
import pytest
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.mass_balance import (
    calculate_mass_balance,
    vapor_fraction,
    pool_evaporation_rate,
    MassBalanceResult,
)
from validation.metrics import conservation_error


class TestGasRelease:
    """Chlorine boils at -34 degC, so at 25 degC it is released as pure vapor."""

    def test_scenario_a(self):
        result = calculate_mass_balance("chlorine", 10.0, 60.0, 25.0)
        assert result.vapor_fraction == 1.0
        assert result.total_released == pytest.approx(600.0)
        assert result.vapor_generated == pytest.approx(600.0)
        assert result.pool_formation == 0.0
        assert result.airborne_release == pytest.approx(600.0)

    def test_no_pool_quantities(self):
        result = calculate_mass_balance("chlorine", 10.0, 60.0, 25.0)
        assert result.pool_area is None
        assert result.pool_duration is None
        assert result.pool_evaporation_rate == 0.0

    def test_vapor_generation_rate(self):
        result = calculate_mass_balance("ammonia", 4.0, 30.0, 20.0)
        assert result.mass_release_rate == 4.0
        assert result.vapor_generation_rate == pytest.approx(4.0)


class TestLiquidRelease:
    """Benzene boils at 80 degC and pools at ambient temperature."""

    def test_scenario_b(self):
        result = calculate_mass_balance("benzene", 10.0, 10.0, 20.0)
        np.testing.assert_allclose(result.vapor_fraction, 0.2 + 0.8 * 75 / 760)
        np.testing.assert_allclose(result.vapor_fraction, 0.2789, atol=1e-4)
        assert result.total_released == pytest.approx(100.0)
        np.testing.assert_allclose(result.vapor_generated, 27.89, atol=0.01)
        np.testing.assert_allclose(result.pool_formation, 72.11, atol=0.01)

    def test_pool_evaporation(self):
        result = calculate_mass_balance("benzene", 10.0, 10.0, 20.0)
        pool = result.pool_formation
        expected_rate = 0.005 * 0.75 * np.sqrt(18 / 78.11) * np.sqrt(pool)
        np.testing.assert_allclose(result.pool_evaporation_rate, expected_rate)
        np.testing.assert_allclose(result.pool_evaporation, expected_rate * 10.0)
        assert result.pool_evaporation <= result.pool_formation

    def test_pool_area_and_duration(self):
        result = calculate_mass_balance("benzene", 10.0, 10.0, 20.0)
        np.testing.assert_allclose(result.pool_area, result.pool_formation / 880.0 * 100.0)
        np.testing.assert_allclose(
            result.pool_duration, result.pool_formation / result.pool_evaporation_rate
        )

    def test_breakdown(self):
        result = calculate_mass_balance("benzene", 10.0, 10.0, 20.0)
        assert list(result.breakdown) == [
            "Initial vapor",
            "Pool formation",
            "Pool evaporation",
            "Remaining in pool",
            "Total airborne",
        ]
        assert result.breakdown["Remaining in pool"] == pytest.approx(result.remaining_in_pool)

    def test_warmer_liquid_flashes_more(self):
        cool = calculate_mass_balance("benzene", 10.0, 10.0, 10.0)
        warm = calculate_mass_balance("benzene", 10.0, 10.0, 40.0)
        assert warm.vapor_fraction > cool.vapor_fraction

    def test_long_release_evaporates_pool_fully(self):
        result = calculate_mass_balance("benzene", 0.01, 100000.0, 20.0)
        assert result.pool_evaporation == pytest.approx(result.pool_formation)


class TestHelpers:
    def test_vapor_fraction_bounds(self, repository):
        benzene = repository.lookup("benzene")
        for t in (-40.0, 0.0, 20.0, 79.0):
            assert 0.1 <= vapor_fraction(benzene, t) <= 1.0

    def test_gas_vapor_fraction(self, repository):
        assert vapor_fraction(repository.lookup("hydrogen cyanide"), 30.0) == 1.0

    def test_evaporation_capped(self, repository):
        # Tiny pool: the 10 % per minute cap binds
        record = repository.lookup("benzene")
        rate = pool_evaporation_rate(record, 1e-6, 20.0)
        assert rate == pytest.approx(1e-7)

    def test_empty_pool(self, repository):
        assert pool_evaporation_rate(repository.lookup("benzene"), 0.0, 20.0) == 0.0


class TestContainer:
    def test_time_to_empty(self):
        result = calculate_mass_balance(
            "benzene", 10.0, 10.0, 20.0, container_volume=2.0, initial_mass=500.0
        )
        assert result.time_to_empty == pytest.approx(50.0)

    def test_time_to_empty_requires_both(self):
        result = calculate_mass_balance("benzene", 10.0, 10.0, 20.0, initial_mass=500.0)
        assert result.time_to_empty is None

    def test_zero_rate(self):
        result = calculate_mass_balance(
            "benzene", 0.0, 10.0, 20.0, container_volume=2.0, initial_mass=500.0
        )
        assert result.time_to_empty is None
        assert result.total_released == 0.0
        assert result.pool_area is None


class TestUnknownChemical:
    def test_all_zero(self):
        result = calculate_mass_balance("unobtainium", 10.0, 60.0, 20.0)
        assert result == MassBalanceResult()
        assert result.breakdown == {}
        assert result.time_to_empty is None


class TestConservation:
    def test_every_chemical(self, repository):
        for name in repository.names():
            for temperature in (-20.0, 20.0, 60.0):
                result = calculate_mass_balance(name, 7.5, 45.0, temperature)
                assert conservation_error(result) < 1e-6, name
                assert result.pool_evaporation <= result.pool_formation + 1e-12
