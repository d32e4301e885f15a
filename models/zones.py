"""
Hazard zone result types.

Zones are nested downwind footprints ordered by severity:

    red    - AEGL-3 (life-threatening)
    orange - AEGL-2 (serious, irreversible effects)
    yellow - AEGL-1 (notable discomfort)

Distances are in kilometers and concentrations in mg/m^3.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterator, Tuple

ZONE_NAMES = ("red", "orange", "yellow")


@dataclass(frozen=True)
class ZoneBand:
    """Outer edge of one hazard zone."""

    distance: float         # km
    concentration: float    # mg/m^3


@dataclass(frozen=True)
class ZoneResult:
    """The three nested hazard zones of a release."""

    red: ZoneBand
    orange: ZoneBand
    yellow: ZoneBand

    def __iter__(self) -> Iterator[Tuple[str, ZoneBand]]:
        for name in ZONE_NAMES:
            yield name, getattr(self, name)

    def distances(self) -> Tuple[float, float, float]:
        return (self.red.distance, self.orange.distance, self.yellow.distance)

    def concentrations(self) -> Tuple[float, float, float]:
        return (
            self.red.concentration,
            self.orange.concentration,
            self.yellow.concentration,
        )

    def to_dict(self) -> Dict[str, dict]:
        return {name: asdict(band) for name, band in self}


@dataclass(frozen=True)
class ZoneExposure:
    """A zone band with its plume-sector area and exposed population."""

    distance: float             # km
    concentration: float        # mg/m^3
    area: float                 # km^2
    population_at_risk: int
