"""
Validation metrics for the hazard models.

Property checks (mass conservation, zone ordering, risk monotonicity) and
a scenario runner that compares model outputs with reference values.
"""

from typing import Dict, Sequence

import numpy as np
from scipy.stats import spearmanr

from data.interfaces import DEFAULT_REPOSITORY, ChemicalRepository
from models.blast import assess_blast_potential
from models.detection import detect_leak
from models.mass_balance import MassBalanceResult, calculate_mass_balance
from models.zones import ZoneResult

MODELS = {
    "calculate_mass_balance": calculate_mass_balance,
    "detect_leak": detect_leak,
    "assess_blast_potential": assess_blast_potential,
}


# ---------------------------------------------------------------------------
# Property checks
# ---------------------------------------------------------------------------

def conservation_error(result: MassBalanceResult) -> float:
    """Largest relative violation of the two mass-balance identities.

        vapor + pool     == total released
        vapor + pool_evap == airborne release

    Returns 0.0 for an empty result.
    """
    if result.total_released == 0:
        return 0.0
    split = abs(result.vapor_generated + result.pool_formation - result.total_released)
    airborne = abs(
        result.vapor_generated + result.pool_evaporation - result.airborne_release
    )
    return max(split, airborne) / result.total_released


def zones_monotonic(zones: ZoneResult) -> bool:
    """Distances non-decreasing and concentrations strictly decreasing red -> yellow."""
    distances = np.array(zones.distances())
    concentrations = np.array(zones.concentrations())
    return bool(
        np.all(np.diff(distances) >= 0) and np.all(np.diff(concentrations) < 0)
    )


def rank_correlation(inputs: Sequence[float], responses: Sequence[float]) -> float:
    """Spearman rank correlation between a swept input and a model response.

    Returns 0.0 when either series is constant.
    """
    if len(set(inputs)) < 2 or len(set(responses)) < 2:
        return 0.0
    rho, _ = spearmanr(inputs, responses)
    return float(rho)


def risk_monotonic(
    chemical: str,
    concentrations: Sequence[float],
    temperature: float = 20.0,
    pressure: float = 1.0,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> bool:
    """True if neither risk level decreases over an increasing concentration sweep."""
    flammability = []
    explosion = []
    for c in sorted(concentrations):
        result = assess_blast_potential(
            chemical, c, temperature, pressure, repository=repository
        )
        flammability.append(int(result.flammability_risk))
        explosion.append(int(result.explosion_risk))
    return bool(
        np.all(np.diff(flammability) >= 0) and np.all(np.diff(explosion) >= 0)
    )


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------

def _compare(actual, expected, rtol: float) -> bool:
    if isinstance(expected, str):
        return str(actual) == expected
    if isinstance(expected, bool) or expected is None:
        return actual == expected
    return bool(np.isclose(actual, expected, rtol=rtol, atol=1e-9))


def evaluate_scenario(
    scenario: dict,
    rtol: float = 0.01,
    repository: ChemicalRepository = DEFAULT_REPOSITORY,
) -> Dict[str, bool]:
    """Run a reference scenario and check each expected field.

    Args:
        scenario: Scenario dict from ``validation.scenarios``.
        rtol: Relative tolerance for numeric fields.
        repository: Chemical property source.

    Returns:
        Dict mapping each expected field name to pass/fail.
    """
    model = MODELS[scenario["model"]]
    result = model(**scenario["inputs"], repository=repository)
    return {
        name: _compare(getattr(result, name), expected, rtol)
        for name, expected in scenario["expected"].items()
    }
