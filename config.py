"""
Global configuration and constants for the Chemical Release Hazard Assessment Engine.
"""

# --- Unit Conversion ---
MOLAR_VOLUME_L = 24.45          # Litres per mole of ideal gas at 25 degC, 1 atm
PPM_PER_PERCENT = 10000.0       # 1 % by volume = 10,000 ppm

# --- Scenario Defaults ---
DEFAULT_DURATION_MIN = 60.0     # Release duration when not specified (minutes)
DEFAULT_PRESSURE_ATM = 1.0      # Ambient pressure (atm)
DEFAULT_WIND_SPEED = 3.0        # m/s
DEFAULT_WIND_DIRECTION = 90.0   # Bearing the plume travels toward (degrees, 0 = N, 90 = E)
DEFAULT_STABILITY_CLASS = "D"   # Neutral stability
DEFAULT_SENSOR_THRESHOLD = 0.5  # Sensor alarm threshold (mg/m^3)
DEFAULT_SENSOR_COUNT = 5        # Sensors deployed for monitoring statistics
DEFAULT_PLACEMENT_COUNT = 8     # Sensors requested from the placement planner
STANDARD_PRESSURE_HPA = 1013.25

STABILITY_CLASSES = "ABCDEF"
TERRAIN_TYPES = ("urban", "suburban", "rural", "forest", "water", "flat")
MONITORING_MODES = ("continuous", "batch")

# --- Stability Classification (Pasquill-Gifford from surface observations) ---
KMH_WIND_THRESHOLD = 20.0       # Speeds above this are assumed to be km/h
KMH_TO_MS = 3.6
DAY_CLEAR_CLOUD_PCT = 40.0      # Below: strong insolation
DAY_PARTLY_CLOUD_PCT = 70.0     # Below: moderate insolation, at/above: overcast
NIGHT_CLOUDY_PCT = 50.0         # At/above: cloudy night

# --- Weather Impact ---
WEATHER_LOW_WIND_MS = 5.0
WEATHER_HIGH_WIND_MS = 15.0
WEATHER_LOW_WIND_FACTOR = 0.8
WEATHER_HIGH_WIND_FACTOR = 1.3
WEATHER_WIND_SLOPE = 0.03       # Wind factor gain per m/s between the bounds
WEATHER_STABILITY_FACTORS = {
    "A": 1.3,   # Very unstable - wider plume
    "B": 1.2,
    "C": 1.1,
    "D": 1.0,   # Neutral
    "E": 0.8,
    "F": 0.6,   # Very stable - narrower plume
}
PRECIP_FACTOR_PER_MM = 0.1      # Wet deposition reduction per mm of precipitation
PRECIP_FACTOR_FLOOR = 0.7

# Forecast analysis
FORECAST_LOOKAHEAD_HOURS = 3
WIND_SHIFT_THRESHOLD_DEG = 45.0
WIND_SPEED_CHANGE_THRESHOLD_MS = 5.0
PRECIP_HOUR_THRESHOLD_MM = 0.1
HEAVY_PRECIP_HOUR_THRESHOLD_MM = 1.0

# WMO weather interpretation codes
WEATHER_CODE_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

# --- Dispersion: release rate adjustment ---
REFERENCE_TEMPERATURE_C = 20.0
HUMIDITY_DIVISOR = 200.0        # Humidity factor = 1 - RH / 200
TERRAIN_RELEASE_FACTORS = {
    "urban": 0.8,
    "forest": 0.7,
    "water": 1.2,
}
INDOOR_RELEASE_FACTOR = 0.3

# --- Dispersion: zone geometry ---
# Distance multiplier per Pasquill-Gifford class (stable air carries the plume further)
ZONE_STABILITY_FACTORS = {
    "A": 0.5,   # Very unstable
    "B": 0.7,
    "C": 0.9,
    "D": 1.0,   # Neutral
    "E": 1.2,
    "F": 1.5,   # Very stable
}
CHEMICAL_FACTOR_BOUNDS = (0.8, 2.0)
# Used only when the chemical is missing from the repository
FALLBACK_CHEMICAL_FACTORS = {
    "chlorine": 1.5,
    "ammonia": 1.3,
}
FALLBACK_CHEMICAL_FACTOR = 1.2

ZONE_FRACTIONS = {"red": 0.3, "orange": 0.6, "yellow": 1.0}
ZONE_DISTANCE_BOUNDS_KM = {
    "red": (0.5, 5.0),
    "orange": (1.0, 8.0),
    "yellow": (1.5, 15.0),
}
ZONE_JITTER_FRACTION = 0.05     # Distances scaled by U(1 - f, 1 + f) when a generator is supplied

# Default zone concentrations (mg/m^3) when no guideline is established
DEFAULT_ZONE_CONCENTRATIONS = {"red": 5.0, "orange": 3.0, "yellow": 1.0}
GUIDELINE_TIER_RATIO = 3.0      # Gap-filling ratio between adjacent guideline tiers

# --- Dispersion: detailed results ---
LETHAL_DISTANCE_FRACTION = 0.7  # Of the red zone distance
PLUME_SECTOR_FRACTION = 0.33    # Plume footprint ~ one third of a full circle

POPULATION_DENSITY = {           # people / km^2
    "urban": 3000,
    "suburban": 1000,
    "rural": 100,
    "forest": 50,
    "water": 10,
}
DEFAULT_POPULATION_DENSITY = 500

# Simplified Pasquill-Gifford coefficients: sigma = a * x * (1 + b * x)^-0.5
# x in meters, sigma in meters
DISPERSION_COEFFICIENTS = {
    "A": {"sigma_y": (0.22, 0.0001), "sigma_z": (0.20, 0.0)},
    "B": {"sigma_y": (0.16, 0.0001), "sigma_z": (0.12, 0.0)},
    "C": {"sigma_y": (0.11, 0.0001), "sigma_z": (0.08, 0.0002)},
    "D": {"sigma_y": (0.08, 0.0001), "sigma_z": (0.06, 0.0003)},
    "E": {"sigma_y": (0.06, 0.0001), "sigma_z": (0.03, 0.0004)},
    "F": {"sigma_y": (0.04, 0.0001), "sigma_z": (0.016, 0.0005)},
}

# Concentration profile C(x) = C0 * exp(-k * (x / xmax)^n)
PROFILE_DECAY_PARAMS = {
    "A": (4.0, 1.5),   # Very unstable, rapid dispersion
    "B": (3.5, 1.6),
    "C": (3.0, 1.7),
    "D": (2.5, 1.8),   # Neutral
    "E": (2.0, 1.9),
    "F": (1.5, 2.0),   # Very stable, slower dispersion
}
PROFILE_INTERVALS = 20
PROFILE_EXTENT_FACTOR = 1.2     # Profile extends past the yellow zone
PROFILE_WIND_BOUNDS_MS = (1.0, 10.0)

# --- Mass Balance ---
EVAPORATION_TEMP_COEFF = 0.0555   # Exponential vapor pressure gain per degC
ATMOSPHERIC_MMHG = 760.0
VAPOR_FRACTION_BASE = 0.2
VAPOR_FRACTION_SLOPE = 0.8
VAPOR_FRACTION_BOUNDS = (0.1, 1.0)
POOL_EVAPORATION_COEFF = 0.005
POOL_VAPOR_PRESSURE_NORM = 100.0
WATER_MOLAR_MASS = 18.0
MAX_POOL_EVAPORATION_FRACTION = 0.1   # Pool cannot lose more than 10 % per minute
POOL_DEPTH_FACTOR = 100.0             # Volume (m^3) to area (m^2) at 1 cm depth

# --- Blast Assessment ---
DEFAULT_EXPLOSION_ENERGY = 300.0
HIGH_REACTIVITY_HAZARD = 3
HIGH_BLAST_POTENTIAL = 7
ELEVATED_TEMPERATURE_C = 50.0
EXTREME_TEMPERATURE_C = 100.0
ELEVATED_PRESSURE_RATIO = 1.2
EXTREME_PRESSURE_RATIO = 2.0
LEL_LOW_FRACTION = 0.1
LEL_MODERATE_FRACTION = 0.5

# Keyed by RiskLevel name
OVERPRESSURE_PSI = {"LOW": 0.5, "MODERATE": 2.0, "HIGH": 5.0, "EXTREME": 10.0}
THERMAL_RADIATION_KW_M2 = {"LOW": 1.0, "MODERATE": 5.0, "HIGH": 10.0, "EXTREME": 25.0}
SAFE_DISTANCE_M = {"LOW": 100.0, "MODERATE": 250.0, "HIGH": 500.0, "EXTREME": 1000.0}
DEFAULT_SAFE_DISTANCE_M = 100.0

INITIAL_ISOLATION_FRACTION = 0.3
DOWNWIND_EVACUATION_FRACTION = 1.5

# --- Leak Detection ---
DEFAULT_BACKGROUND_MG_M3 = 0.001
DEFAULT_THRESHOLD_MULTIPLIER = 5.0
AEGL1_THRESHOLD_FRACTION = 0.01
DEFAULT_AEGL1_PPM = 1.0
# (minimum exceedance factor, confidence), checked in order
CONFIDENCE_TIERS = (
    (10.0, 0.95),
    (5.0, 0.85),
    (2.0, 0.70),
)
BASE_CONFIDENCE = 0.50
# Minutes until response action is required, keyed by RiskLevel name
TIME_TO_ACTION_MIN = {"EXTREME": 5, "HIGH": 15, "MODERATE": 30, "LOW": 60}
DEFAULT_TIME_TO_ACTION_MIN = 60

# Health impact fallback (dosage = concentration * minutes) when the chemical is unknown
DOSAGE_FATAL = 1000.0
DOSAGE_HIGH = 500.0
DOSAGE_MEDIUM = 100.0

# --- Sensor Placement ---
KM_PER_DEGREE_LAT = 111.32
DOWNWIND_SENSOR_FRACTION = 0.4
CROSSWIND_SENSOR_FRACTION = 0.3
MAX_SENSORS_PER_RING = 3
CROSSWIND_RADIUS_FRACTION = 0.5   # Of the yellow zone distance
PERIMETER_RADIUS_FRACTION = 0.9   # Of the yellow zone distance

# --- Monitoring Performance ---
BASE_DETECTION_PROBABILITY = 0.75
FULL_COVERAGE_SENSOR_COUNT = 10
EASY_DETECTION_RELEASE_RATE = 50.0     # kg/min
BATCH_DETECTION_FACTOR = 0.7
BATCH_DELAY_FACTOR = 5.0
BATCH_SIMULATION_FACTOR = 0.8
MIN_DETECTION_RELEASE_RATE = 0.1       # kg/min floor in the detection-time estimate
DETECTION_TIME_SCALE_MIN = 10.0
MIN_DETECTION_TIME_MIN = 1.0
EVACUATION_BASE_MIN = 20.0
EVACUATION_POPULATION_DENSITY = 500    # people / km^2
EVACUATION_POPULATION_SCALE = 100.0

# Safety score weights
SAFETY_WEIGHTS = {"detection": 0.4, "response": 0.3, "evacuation": 0.3}
SAFETY_DETECTION_GAIN = 1.3
SAFETY_RESPONSE_REFERENCE_MIN = 5.0
SAFETY_EVACUATION_REFERENCE_MIN = 40.0

# --- Protective Actions ---
SIGNIFICANT_EXPOSURE_MIN = 10.0
PARTIAL_EVACUATION_FRACTION = 0.7
EVACUATION_OUTCOMES = {
    "full": (95.0, 98.0, "Full evacuation recommended - sufficient time available"),
    "partial": (75.0, 85.0, "Partial evacuation possible - prioritize vulnerable populations"),
    "insufficient": (30.0, 40.0, "Insufficient time for evacuation - shelter in place"),
}
# Fraction of outdoor exposure that still reaches building occupants
DEFAULT_BUILDING_PROTECTION = 0.5
GAS_BUILDING_PROTECTION = 0.7       # Boiling point below 20 degC
HEAVY_BUILDING_PROTECTION = 0.3     # Boiling point above 100 degC
GAS_BOILING_POINT_C = 20.0
HEAVY_BOILING_POINT_C = 100.0
SHELTER_CASUALTY_BONUS = 10.0
VEHICLE_OUTCOME = (20.0, 30.0, "Vehicle provides minimal protection - evacuate if possible")
