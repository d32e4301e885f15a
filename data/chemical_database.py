"""
Built-in chemical property table.

Physical and hazard constants for the chemicals supported out of the box,
following the ALOHA chemical library conventions:

    - molecular weight in g/mol
    - boiling point in degC
    - vapor pressure in mmHg at 20 degC
    - LEL / UEL in percent by volume (0 for non-flammable gases)
    - IDLH, AEGL-1/2/3 (60 min) and ERPG-1/2/3 in ppm (0 = not established)

The table is exposed through ``data.interfaces.StaticChemicalRepository``;
nothing in the engine reads ``CHEMICAL_TABLE`` directly.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Tuple


@dataclass(frozen=True)
class ChemicalRecord:
    """Immutable physical and hazard constants for one chemical.

    Optional fields are ``None`` when the property is not applicable or not
    published (e.g. flash point of chlorine).
    """

    name: str
    cas: str
    molecular_weight: float
    boiling_point: float
    vapor_pressure: float
    specific_gravity: float
    idlh: float
    lel: float
    uel: float
    aegl1: float
    aegl2: float
    aegl3: float
    erpg1: Optional[float] = None
    erpg2: Optional[float] = None
    erpg3: Optional[float] = None
    water_solubility: str = ""
    description: str = ""
    hazards: Tuple[str, ...] = field(default_factory=tuple)
    flash_point: Optional[float] = None
    autoignition_temp: Optional[float] = None
    explosion_energy: Optional[float] = None
    reactivity_hazard: Optional[int] = None
    blast_potential: Optional[int] = None
    decomposition_temp: Optional[float] = None
    critical_temp: Optional[float] = None
    critical_pressure: Optional[float] = None

    def __post_init__(self):
        if self.molecular_weight <= 0:
            raise ValueError(f"{self.name}: molecular_weight must be > 0")
        if self.lel > 0 and self.uel > 0 and self.lel > self.uel:
            raise ValueError(f"{self.name}: LEL must not exceed UEL")
        established = [v for v in (self.aegl1, self.aegl2, self.aegl3) if v > 0]
        if established != sorted(established):
            raise ValueError(f"{self.name}: AEGL levels must be non-decreasing")
        if not isinstance(self.hazards, tuple):
            object.__setattr__(self, "hazards", tuple(self.hazards))

    @property
    def key(self) -> str:
        """Lookup key (lowercase name)."""
        return self.name.lower()

    @property
    def is_flammable(self) -> bool:
        return not (self.lel == 0 and self.uel == 0)


def _freeze(records):
    return MappingProxyType({rec.key: rec for rec in records})


CHEMICAL_TABLE = _freeze([
    ChemicalRecord(
        name="Chlorine",
        cas="7782-50-5",
        molecular_weight=70.91,
        boiling_point=-34.04,
        vapor_pressure=5168,
        specific_gravity=1.41,
        water_solubility="Slightly soluble",
        idlh=10,
        lel=0,
        uel=0,
        aegl1=0.5,
        aegl2=2.0,
        aegl3=20.0,
        erpg1=1,
        erpg2=3,
        erpg3=20,
        description=(
            "Greenish-yellow gas with a pungent, irritating odor. Common industrial "
            "chemical used in water treatment and manufacturing."
        ),
        hazards=("Respiratory irritant", "Oxidizer", "Environmental hazard"),
        explosion_energy=0,
        reactivity_hazard=3,
        blast_potential=1,
        decomposition_temp=180,
        critical_temp=144,
        critical_pressure=76.1,
    ),
    ChemicalRecord(
        name="Ammonia",
        cas="7664-41-7",
        molecular_weight=17.03,
        boiling_point=-33.34,
        vapor_pressure=6870,
        specific_gravity=0.682,
        water_solubility="Very soluble",
        idlh=300,
        lel=15,
        uel=28,
        aegl1=30,
        aegl2=160,
        aegl3=1100,
        erpg1=25,
        erpg2=150,
        erpg3=750,
        description=(
            "Colorless gas with a strong, pungent odor. Used in fertilizers, "
            "refrigeration, and manufacturing."
        ),
        hazards=("Respiratory irritant", "Corrosive", "Flammable at high concentrations"),
        autoignition_temp=651,
        explosion_energy=382,
        reactivity_hazard=3,
        blast_potential=5,
        decomposition_temp=450,
        critical_temp=132.4,
        critical_pressure=111.3,
    ),
    ChemicalRecord(
        name="Hydrogen Sulfide",
        cas="7783-06-4",
        molecular_weight=34.08,
        boiling_point=-60.33,
        vapor_pressure=15600,
        specific_gravity=0.92,
        water_solubility="Moderately soluble",
        idlh=100,
        lel=4,
        uel=44,
        aegl1=0.51,
        aegl2=27,
        aegl3=50,
        description=(
            "Colorless gas with a strong rotten egg odor. Occurs naturally and in "
            "industrial processes."
        ),
        hazards=("Respiratory irritant", "Neurotoxic", "Flammable", "Odor fatigue risk"),
        flash_point=-60,
        autoignition_temp=260,
        explosion_energy=207,
        reactivity_hazard=3,
        blast_potential=6,
        critical_temp=100.4,
        critical_pressure=88.3,
    ),
    ChemicalRecord(
        name="Sulfur Dioxide",
        cas="7446-09-5",
        molecular_weight=64.07,
        boiling_point=-10.0,
        vapor_pressure=2538,
        specific_gravity=1.434,
        water_solubility="Very soluble",
        idlh=100,
        lel=0,
        uel=0,
        aegl1=0.2,
        aegl2=0.75,
        aegl3=30,
        description=(
            "Colorless gas with a strong, suffocating odor. Used in food "
            "preservation and industrial processes."
        ),
        hazards=("Respiratory irritant", "Corrosive to tissue", "Environmental hazard"),
        explosion_energy=0,
        reactivity_hazard=2,
        blast_potential=2,
        critical_temp=157.5,
        critical_pressure=77.7,
    ),
    ChemicalRecord(
        name="Methane",
        cas="74-82-8",
        molecular_weight=16.04,
        boiling_point=-161.5,
        vapor_pressure=760000,
        specific_gravity=0.42,
        water_solubility="Slightly soluble",
        idlh=0,          # Simple asphyxiant
        lel=5,
        uel=15,
        aegl1=0,
        aegl2=0,
        aegl3=0,
        description=(
            "Colorless, odorless gas. Main component of natural gas. Primarily an "
            "asphyxiation and fire hazard."
        ),
        hazards=("Asphyxiant", "Highly flammable", "Explosion hazard"),
        flash_point=-187,
        autoignition_temp=537,
        explosion_energy=882,
        reactivity_hazard=0,
        blast_potential=8,
        critical_temp=-82.6,
        critical_pressure=45.8,
    ),
    ChemicalRecord(
        name="Carbon Monoxide",
        cas="630-08-0",
        molecular_weight=28.01,
        boiling_point=-191.5,
        vapor_pressure=760000,
        specific_gravity=0.97,
        water_solubility="Slightly soluble",
        idlh=1200,
        lel=12.5,
        uel=74,
        aegl1=0,
        aegl2=83,
        aegl3=330,
        description=(
            "Colorless, odorless gas. Produced by incomplete combustion. Binds to "
            "hemoglobin."
        ),
        hazards=("Asphyxiant", "Hemoglobin binding", "Flammable", "Difficult to detect"),
        autoignition_temp=609,
        explosion_energy=283,
        reactivity_hazard=0,
        blast_potential=7,
        critical_temp=-140,
        critical_pressure=34.5,
    ),
    ChemicalRecord(
        name="Benzene",
        cas="71-43-2",
        molecular_weight=78.11,
        boiling_point=80.1,
        vapor_pressure=75,
        specific_gravity=0.88,
        water_solubility="Slightly soluble",
        idlh=500,
        lel=1.2,
        uel=7.8,
        aegl1=52,
        aegl2=800,
        aegl3=4000,
        description=(
            "Colorless liquid with a sweet odor. Used in manufacturing and as a "
            "solvent."
        ),
        hazards=(
            "Carcinogen",
            "Central nervous system depressant",
            "Flammable",
            "Environmental hazard",
        ),
        flash_point=-11,
        autoignition_temp=498,
        explosion_energy=3300,
        reactivity_hazard=2,
        blast_potential=6,
        critical_temp=289,
        critical_pressure=47.8,
    ),
    ChemicalRecord(
        name="Ethylene Oxide",
        cas="75-21-8",
        molecular_weight=44.05,
        boiling_point=10.4,
        vapor_pressure=1095,
        specific_gravity=0.882,
        water_solubility="Very soluble",
        idlh=800,
        lel=3,
        uel=100,
        aegl1=5,
        aegl2=45,
        aegl3=85,
        description=(
            "Colorless gas with a sweet ether-like odor. Used in sterilization and "
            "manufacturing."
        ),
        hazards=("Carcinogen", "Mutagen", "Highly flammable", "Explosive", "Reactive"),
        flash_point=-20,
        autoignition_temp=429,
        explosion_energy=1700,
        reactivity_hazard=4,
        blast_potential=9,
        critical_temp=195.8,
        critical_pressure=50.9,
    ),
    ChemicalRecord(
        name="Hydrogen Cyanide",
        cas="74-90-8",
        molecular_weight=27.03,
        boiling_point=25.6,
        vapor_pressure=630,
        specific_gravity=0.687,
        water_solubility="Very soluble",
        idlh=50,
        lel=5.6,
        uel=40,
        aegl1=1.0,
        aegl2=7.1,
        aegl3=15,
        description=(
            "Colorless liquid or gas with bitter almond odor. Used in manufacturing "
            "and chemical synthesis."
        ),
        hazards=("Highly toxic", "Metabolic poison", "Flammable", "Rapid acting"),
        flash_point=-18,
        autoignition_temp=538,
        explosion_energy=720,
        reactivity_hazard=3,
        blast_potential=7,
        critical_temp=188,
        critical_pressure=53.9,
    ),
    ChemicalRecord(
        name="Phosgene",
        cas="75-44-5",
        molecular_weight=98.92,
        boiling_point=8.3,
        vapor_pressure=1173,
        specific_gravity=1.432,
        water_solubility="Reacts with water",
        idlh=2,
        lel=0,
        uel=0,
        aegl1=0,
        aegl2=0.2,
        aegl3=0.59,
        description=(
            "Colorless gas with a suffocating odor like musty hay. Used in chemical "
            "manufacturing."
        ),
        hazards=("Pulmonary edema", "Delayed effects", "Corrosive", "Chemical weapon history"),
        explosion_energy=0,
        reactivity_hazard=3,
        blast_potential=3,
        critical_temp=182,
        critical_pressure=55.5,
    ),
])
