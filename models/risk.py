"""
Ordered hazard levels and concentration units shared by the assessment models.
"""

from enum import Enum, IntEnum


class RiskLevel(IntEnum):
    """Totally ordered risk scale: NONE < LOW < MODERATE < HIGH < EXTREME."""

    NONE = 0
    LOW = 1
    MODERATE = 2
    HIGH = 3
    EXTREME = 4

    def raised(self, steps: int = 1) -> "RiskLevel":
        """Escalate by ``steps`` levels, capped at EXTREME."""
        return RiskLevel(min(int(self) + steps, int(RiskLevel.EXTREME)))

    @property
    def label(self) -> str:
        """Display label, e.g. ``"Moderate"``."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, label: str) -> "RiskLevel":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown risk level '{label}'") from None


class ConcentrationUnit(str, Enum):
    """Concentration units accepted by the converter."""

    MG_M3 = "mg/m3"
    PPM = "ppm"
    PERCENT = "percent"
