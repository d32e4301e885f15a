"""
Reference scenarios for validating the hazard models.

Each scenario function returns a dict with:
    - inputs: keyword arguments for the model under test
    - expected: reference values (approximate where noted)
    - model: name of the entry point the scenario exercises
    - description: human-readable summary
"""

from typing import Dict, List

from models.scenario import ReleaseScenario


def scenario_a_gas_release() -> dict:
    """Scenario A: Chlorine flashing to vapor.

    Chlorine boils at -34 degC, so at 25 degC the whole release is vapor
    and no pool forms.
    """
    return {
        "model": "calculate_mass_balance",
        "inputs": {
            "chemical": "chlorine",
            "rate": 10.0,
            "duration": 60.0,
            "temperature": 25.0,
        },
        "expected": {
            "vapor_fraction": 1.0,
            "total_released": 600.0,
            "vapor_generated": 600.0,
            "pool_formation": 0.0,
            "airborne_release": 600.0,
        },
        "description": "Chlorine 10 kg/min for 60 min at 25 degC, pure vapor release",
    }


def scenario_b_liquid_release() -> dict:
    """Scenario B: Benzene spill forming a pool.

    Benzene boils at 80 degC; at 20 degC about 28 % flashes and the rest
    pools.  Expected values are approximate.
    """
    return {
        "model": "calculate_mass_balance",
        "inputs": {
            "chemical": "benzene",
            "rate": 10.0,
            "duration": 10.0,
            "temperature": 20.0,
        },
        "expected": {
            "vapor_fraction": 0.2789,
            "total_released": 100.0,
            "vapor_generated": 27.89,
            "pool_formation": 72.11,
        },
        "description": "Benzene 10 kg/min for 10 min at 20 degC, two-phase release",
    }


def scenario_c_leak_reading() -> dict:
    """Scenario C: Chlorine reading well above the detection threshold."""
    return {
        "model": "detect_leak",
        "inputs": {
            "chemical": "chlorine",
            "measured": 0.1,
            "background": 0.001,
            "multiplier": 5.0,
        },
        "expected": {
            "detection_threshold": 0.0145,
            "is_leaking": True,
            "exceeds_factor": 6.9,
            "confidence": 0.85,
        },
        "description": "Chlorine reading of 0.1 mg/m^3 against the AEGL-1 based threshold",
    }


def scenario_d_non_flammable() -> dict:
    """Scenario D: Chlorine is not flammable at any concentration."""
    return {
        "model": "assess_blast_potential",
        "inputs": {
            "chemical": "chlorine",
            "concentration": 50000.0,
            "temperature": 20.0,
        },
        "expected": {
            "explosion_risk": "None",
            "flammability_risk": "None",
        },
        "description": "Chlorine at 50 g/m^3, no fire or explosion hazard",
    }


def reference_release(**overrides) -> ReleaseScenario:
    """Baseline ammonia release used by the dispersion sweeps."""
    params = {
        "chemical": "ammonia",
        "release_rate": 10.0,
        "wind_speed": 3.0,
        "wind_direction": 90.0,
        "stability_class": "D",
        "temperature": 20.0,
        "source_lat": 40.0,
        "source_lng": -75.0,
    }
    params.update(overrides)
    return ReleaseScenario(**params)


def all_scenarios() -> Dict[str, dict]:
    """Return all reference scenarios keyed by label."""
    return {
        "A_gas": scenario_a_gas_release(),
        "B_liquid": scenario_b_liquid_release(),
        "C_leak": scenario_c_leak_reading(),
        "D_non_flammable": scenario_d_non_flammable(),
    }


def scenario_labels() -> List[str]:
    return list(all_scenarios())
