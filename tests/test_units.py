"""Tests for concentration unit conversion."""

import sys
import os
import pytest
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.units import (
    ppm_to_mg_m3,
    mg_m3_to_ppm,
    convert_concentration,
)
from models.risk import ConcentrationUnit


class TestConversionFormulas:
    def test_ppm_to_mg_m3(self):
        # Chlorine: 1 ppm = 70.91 / 24.45 mg/m^3
        np.testing.assert_allclose(ppm_to_mg_m3(1.0, 70.91), 2.9002, rtol=1e-4)

    def test_mg_m3_to_ppm(self):
        # MW equal to the molar volume maps 1:1
        np.testing.assert_allclose(mg_m3_to_ppm(10.0, 24.45), 10.0)
        np.testing.assert_allclose(mg_m3_to_ppm(2.9002, 70.91), 1.0, rtol=1e-4)

    def test_round_trip(self):
        for mw in (2.0, 17.03, 70.91, 250.0):
            for value in (1e-3, 1.0, 537.0):
                np.testing.assert_allclose(
                    mg_m3_to_ppm(ppm_to_mg_m3(value, mw), mw), value, rtol=1e-12
                )


class TestConvertConcentration:
    def test_same_unit_identity(self):
        assert convert_concentration(3.7, "chlorine", "ppm", "ppm") == 3.7

    def test_ppm_to_mg_m3_for_chemical(self):
        result = convert_concentration(20.0, "chlorine", "ppm", "mg/m3")
        np.testing.assert_allclose(result, 20.0 * 70.91 / 24.45)

    def test_percent_to_ppm(self):
        result = convert_concentration(1.0, "methane", "percent", "ppm")
        np.testing.assert_allclose(result, 10000.0)

    def test_mg_m3_to_percent(self):
        mg = 5.0 * 10000.0 * 16.04 / 24.45
        result = convert_concentration(mg, "Methane", "mg/m3", "percent")
        np.testing.assert_allclose(result, 5.0)

    def test_enum_units_accepted(self):
        result = convert_concentration(
            1.0, "ammonia", ConcentrationUnit.PPM, ConcentrationUnit.MG_M3
        )
        np.testing.assert_allclose(result, 17.03 / 24.45)

    def test_round_trip_through_chemical(self):
        mg = convert_concentration(42.0, "benzene", "ppm", "mg/m3")
        back = convert_concentration(mg, "benzene", "mg/m3", "ppm")
        np.testing.assert_allclose(back, 42.0)

    def test_unknown_chemical_identity(self):
        assert convert_concentration(12.5, "unobtainium", "ppm", "mg/m3") == 12.5

    def test_invalid_unit_raises(self):
        with pytest.raises(ValueError):
            convert_concentration(1.0, "chlorine", "ppb", "mg/m3")
