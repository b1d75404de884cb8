"""
Constants for spoke length calculations and the calculator form.

This module centralizes the numerical limits, conventional values and
identifiers used across the calculator, IO and application layers.

MODIFICATION GUIDELINES:
- Always include units in constant names (_MM) where a unit applies
- Field names are the camelCase keys used in JSON documents and storage
- Add new constants here rather than hardcoding in functions

Constants are grouped by category:
- Form fields: names, limits, defaults
- Conventional values: what most wheel builds use (advisory only)
- Exchange: metadata written into exported documents
- Storage: keys in the durable key-value store
"""

from typing import Dict, Tuple

# =============================================================================
# Form fields
# =============================================================================

ERD = "erd"
PITCH_CIRCLE_LEFT = "pitchCircleLeft"
PITCH_CIRCLE_RIGHT = "pitchCircleRight"
FLANGE_DISTANCE_LEFT = "flangeDistanceLeft"
FLANGE_DISTANCE_RIGHT = "flangeDistanceRight"
SPOKE_HOLE_DIAMETER = "spokeHoleDiameter"
NUMBER_OF_SPOKES = "numberOfSpokes"
CROSSINGS_LEFT = "crossingsLeft"
CROSSINGS_RIGHT = "crossingsRight"

# All nine fields, in form order. Every one must be filled before calculating.
REQUIRED_INPUT_FIELDS: Tuple[str, ...] = (
    ERD,
    PITCH_CIRCLE_LEFT,
    PITCH_CIRCLE_RIGHT,
    FLANGE_DISTANCE_LEFT,
    FLANGE_DISTANCE_RIGHT,
    SPOKE_HOLE_DIAMETER,
    NUMBER_OF_SPOKES,
    CROSSINGS_LEFT,
    CROSSINGS_RIGHT,
)

# Fields parsed as integers; the rest are real-valued millimetres
INTEGER_FIELDS: Tuple[str, ...] = (NUMBER_OF_SPOKES, CROSSINGS_LEFT, CROSSINGS_RIGHT)

# Free-entry numeric fields: (min, max, step)
FIELD_LIMITS: Dict[str, Tuple[float, float, float]] = {
    ERD: (1.0, 1000.0, 1.0),
    PITCH_CIRCLE_LEFT: (1.0, 100.0, 1.0),
    PITCH_CIRCLE_RIGHT: (1.0, 100.0, 1.0),
    FLANGE_DISTANCE_LEFT: (1.0, 100.0, 1.0),
    FLANGE_DISTANCE_RIGHT: (1.0, 100.0, 1.0),
    SPOKE_HOLE_DIAMETER: (1.0, 3.0, 0.1),
}

# Selection fields: the options offered by the form
SPOKE_COUNT_OPTIONS: Tuple[int, ...] = (24, 28, 32, 36)
CROSSING_OPTIONS: Tuple[int, ...] = (0, 1, 2, 3, 4)

FIELD_OPTIONS: Dict[str, Tuple[int, ...]] = {
    NUMBER_OF_SPOKES: SPOKE_COUNT_OPTIONS,
    CROSSINGS_LEFT: CROSSING_OPTIONS,
    CROSSINGS_RIGHT: CROSSING_OPTIONS,
}

# Step size of fields that are reformatted to one decimal when edited
ONE_DECIMAL_STEP: float = 0.1

# Starting values for a fresh form (Hope Pro 5 spoke hole, 32 spokes, 3-cross)
DEFAULT_INPUTS: Dict[str, str] = {
    ERD: "",
    PITCH_CIRCLE_LEFT: "",
    PITCH_CIRCLE_RIGHT: "",
    FLANGE_DISTANCE_LEFT: "",
    FLANGE_DISTANCE_RIGHT: "",
    SPOKE_HOLE_DIAMETER: "2.6",
    NUMBER_OF_SPOKES: "32",
    CROSSINGS_LEFT: "3",
    CROSSINGS_RIGHT: "3",
}

# =============================================================================
# Conventional values (advisory validation only)
# =============================================================================

SPOKE_HOLE_DIAMETER_MIN_MM: float = 1.0
SPOKE_HOLE_DIAMETER_MAX_MM: float = 3.0

MAX_CONVENTIONAL_CROSSINGS: int = 4

# Above this angle the spoke leaves the flange past tangent
MAX_CROSSING_ANGLE_DEG: float = 90.0

# Relative difference in flange distances flagged as a heavily dished wheel
DISH_ASYMMETRY_RATIO: float = 0.5

# =============================================================================
# Exchange
# =============================================================================

CALCULATOR_NAME = "Bicycle Spoke Length Calculator"
EXPORT_FORMAT_VERSION = "1.0"
EXPORT_FILENAME_PREFIX = "spoke-calculation"

# =============================================================================
# Storage
# =============================================================================

SAVED_CALCULATIONS_KEY = "spokeCalculations"
PREFERRED_LANGUAGE_KEY = "preferredLanguage"
DEFAULT_STORAGE_PATH = "~/.spokecalc/storage.json"
