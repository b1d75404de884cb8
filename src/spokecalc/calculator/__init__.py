"""
Spoke Length Calculator - geometry calculations for wheel building.

Example:
    >>> from spokecalc.calculator import compute
    >>> from spokecalc.io import CalculationInputs
    >>>
    >>> inputs = CalculationInputs(
    ...     erd="590", pitch_circle_left="45", pitch_circle_right="45",
    ...     flange_distance_left="35", flange_distance_right="35",
    ...     spoke_hole_diameter="2.6", number_of_spokes="32",
    ...     crossings_left="3", crossings_right="3",
    ... )
    >>> compute(inputs)
    CalculationResult(left=287.9, right=287.9)
"""

from .core import (
    SideGeometry,
    floor_to_tenth,
    crossing_angle,
    chord_length,
    side_geometry,
    geometry_for_side,
    calculate_spoke_length,
    compute,
)

from .parsing import (
    parse_real,
    parse_integer,
    missing_fields,
    parse_inputs,
    sanitize_edit,
    format_on_blur,
)

from .validation import (
    validate_inputs,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from .output import (
    to_json,
    to_markdown,
    to_summary,
)

# Convenience imports
from ..io import CalculationInputs, CalculationResult, SpokeParams


__all__ = [
    # Models
    "CalculationInputs",
    "CalculationResult",
    "SpokeParams",
    "SideGeometry",

    # Formula
    "floor_to_tenth",
    "crossing_angle",
    "chord_length",
    "side_geometry",
    "geometry_for_side",
    "calculate_spoke_length",
    "compute",

    # Parsing
    "parse_real",
    "parse_integer",
    "missing_fields",
    "parse_inputs",
    "sanitize_edit",
    "format_on_blur",

    # Validation
    "validate_inputs",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "to_json",
    "to_markdown",
    "to_summary",
]
