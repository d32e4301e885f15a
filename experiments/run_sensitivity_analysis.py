#!/usr/bin/env python3
"""
One-at-a-Time Sensitivity Analysis.

Sweeps individual release parameters while holding the others at the
reference ammonia release and reports how the hazard footprint responds.
Each sweep is summarized with the Spearman rank correlation between the
parameter and the yellow zone distance.

Usage:
    python experiments/run_sensitivity_analysis.py
    python experiments/run_sensitivity_analysis.py --chemical chlorine --verbose
"""

import sys
import os
import argparse
import logging
from dataclasses import replace

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from models.dispersion import compute_detailed_dispersion
from optimization.monitoring import compute_safety_score
from validation.scenarios import reference_release
from validation.metrics import rank_correlation, zones_monotonic

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parameter sweep definitions
# ---------------------------------------------------------------------------

PARAM_SWEEPS = {
    "release_rate": [1.0, 5.0, 10.0, 50.0, 100.0],
    "wind_speed": [1.0, 2.0, 3.0, 5.0, 8.0],
    "stability_class": ["A", "B", "C", "D", "E", "F"],
    "temperature": [-10.0, 0.0, 20.0, 35.0, 50.0],
    "humidity": [0.0, 25.0, 50.0, 75.0, 100.0],
}

# Numeric stand-in for categorical sweeps when ranking
_STABILITY_RANK = {c: i for i, c in enumerate("ABCDEF")}


# ---------------------------------------------------------------------------
# Single run helper
# ---------------------------------------------------------------------------

def run_single(scenario) -> dict:
    """Evaluate one scenario and return the headline metrics."""
    result = compute_detailed_dispersion(scenario)
    zones = result.zones
    return {
        "red_km": result.red_zone.distance,
        "yellow_km": result.yellow_zone.distance,
        "population_at_risk": result.total_population_at_risk,
        "max_concentration": result.maximum_concentration,
        "safety_score": compute_safety_score(result.monitoring),
        "zones_ok": zones_monotonic(zones),
    }


# ---------------------------------------------------------------------------
# Main sweep
# ---------------------------------------------------------------------------

def run_sensitivity(chemical: str = "ammonia", verbose: bool = True):
    """Run one-at-a-time sensitivity analysis.

    Returns:
        List of dicts, one per (parameter, value) pair.
    """
    base = reference_release(chemical=chemical)
    all_rows = []

    for param_name, values in PARAM_SWEEPS.items():
        if verbose:
            print(f"\n{'='*70}")
            print(f"Sweeping: {param_name}")
            print(f"  Default: {getattr(base, param_name)}")
            print(f"  Values:  {values}")
            print(f"{'='*70}")
            print(f"  {'Value':>10}  {'Red km':>8}  {'Yellow km':>10}  "
                  f"{'Pop':>8}  {'Cmax':>12}  {'Score':>6}")
            print(f"  {'-'*10}  {'-'*8}  {'-'*10}  {'-'*8}  {'-'*12}  {'-'*6}")

        for val in values:
            scenario = replace(base, **{param_name: val})
            metrics = run_single(scenario)
            if not metrics["zones_ok"]:
                logger.warning("Zone ordering violated for %s=%s", param_name, val)

            row = {"parameter": param_name, "value": val, **metrics}
            all_rows.append(row)

            if verbose:
                cmax = metrics["max_concentration"]
                cmax_text = f"{cmax:>12.4g}" if cmax is not None else f"{'n/a':>12}"
                print(
                    f"  {str(val):>10}  "
                    f"{metrics['red_km']:>8.2f}  "
                    f"{metrics['yellow_km']:>10.2f}  "
                    f"{metrics['population_at_risk']:>8}  "
                    f"{cmax_text}  "
                    f"{metrics['safety_score']:>6}"
                )

    return all_rows


def print_summary(rows: list):
    """Print rank correlations between each parameter and the footprint."""
    print(f"\n\n{'='*70}")
    print("SENSITIVITY ANALYSIS SUMMARY")
    print(f"{'='*70}")

    params = {}
    for row in rows:
        params.setdefault(row["parameter"], []).append(row)

    for param_name, param_rows in params.items():
        values = [r["value"] for r in param_rows]
        if param_name == "stability_class":
            values = [_STABILITY_RANK[v] for v in values]
        yellow = [r["yellow_km"] for r in param_rows]
        rho = rank_correlation(values, yellow)
        print(f"\n  {param_name}:")
        print(f"    Spearman rho vs yellow distance: {rho:+.2f}")
        print(f"    Yellow range: {min(yellow):.2f} to {max(yellow):.2f} km "
              f"(mean {np.mean(yellow):.2f})")


def main():
    parser = argparse.ArgumentParser(description="One-at-a-Time Sensitivity Analysis")
    parser.add_argument("--chemical", default="ammonia", help="Chemical to release")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-value output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Sensitivity Analysis")
    print(f"Chemical: {args.chemical}")
    print(f"Parameters: {list(PARAM_SWEEPS.keys())}")

    rows = run_sensitivity(chemical=args.chemical, verbose=not args.quiet)
    print_summary(rows)

    total_runs = sum(len(v) for v in PARAM_SWEEPS.values())
    print(f"\nTotal: {total_runs} scenario runs completed.")


if __name__ == "__main__":
    main()
