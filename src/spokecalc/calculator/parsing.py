"""
Parsing of raw form text into calculator parameters.

Form fields are strings so that partially typed values ("2.", ".") can be
held while the user is typing. Parsing is a separate step: the formula in
core.py only ever sees a fully parsed SpokeParams.
"""

import math
import re
from typing import Dict, List, Optional

from ..constants import (
    CROSSINGS_LEFT,
    CROSSINGS_RIGHT,
    ERD,
    FIELD_LIMITS,
    FIELD_OPTIONS,
    FLANGE_DISTANCE_LEFT,
    FLANGE_DISTANCE_RIGHT,
    INTEGER_FIELDS,
    NUMBER_OF_SPOKES,
    ONE_DECIMAL_STEP,
    PITCH_CIRCLE_LEFT,
    PITCH_CIRCLE_RIGHT,
    REQUIRED_INPUT_FIELDS,
    SPOKE_HOLE_DIAMETER,
)
from ..errors import ValidationError
from ..io import CalculationInputs, SpokeParams

# Plain decimal notation: "590", "2.6", "2.", ".5", "1e3"
_DECIMAL_RE = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')
_INTEGER_RE = re.compile(r'^[+-]?\d+$')


def parse_real(text: str) -> Optional[float]:
    """Parse a decimal number, returning None if the text is not one."""
    text = text.strip()
    if not _DECIMAL_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def parse_integer(text: str) -> Optional[int]:
    """Parse an integer; integral decimals such as "32.0" are accepted."""
    text = text.strip()
    if _INTEGER_RE.match(text):
        return int(text)
    value = parse_real(text)
    if value is not None and value.is_integer():
        return int(value)
    return None


def missing_fields(inputs: CalculationInputs) -> List[str]:
    """Names of required fields that are empty."""
    return [name for name in REQUIRED_INPUT_FIELDS if not inputs.get_field(name).strip()]


def parse_inputs(inputs: CalculationInputs) -> SpokeParams:
    """
    Parse and check the nine form fields.

    Args:
        inputs: Raw form values

    Returns:
        SpokeParams ready for the formula

    Raises:
        ValidationError: If any field is empty, unparseable, or violates its
            hard constraint (positive dimensions, positive even spoke count,
            non-negative crossings). ``fields`` lists the offending fields.
    """
    missing = missing_fields(inputs)
    if missing:
        raise ValidationError(
            f"Please fill in all fields (missing: {', '.join(missing)})",
            fields=missing
        )

    values: Dict[str, float] = {}
    unparseable = []
    for name in REQUIRED_INPUT_FIELDS:
        text = inputs.get_field(name)
        value = parse_integer(text) if name in INTEGER_FIELDS else parse_real(text)
        if value is None:
            unparseable.append(name)
        else:
            values[name] = value

    if unparseable:
        raise ValidationError(
            f"Invalid number in: {', '.join(unparseable)}",
            fields=unparseable
        )

    out_of_range = [
        name for name in REQUIRED_INPUT_FIELDS
        if name not in INTEGER_FIELDS and values[name] <= 0
    ]
    if out_of_range:
        raise ValidationError(
            f"Dimensions must be greater than zero: {', '.join(out_of_range)}",
            fields=out_of_range
        )

    spokes = values[NUMBER_OF_SPOKES]
    if spokes <= 0 or spokes % 2 != 0:
        raise ValidationError(
            f"Number of spokes must be a positive even number, got {spokes}",
            fields=[NUMBER_OF_SPOKES]
        )

    negative = [name for name in (CROSSINGS_LEFT, CROSSINGS_RIGHT) if values[name] < 0]
    if negative:
        raise ValidationError(
            f"Crossings cannot be negative: {', '.join(negative)}",
            fields=negative
        )

    return SpokeParams(
        erd_mm=values[ERD],
        pitch_circle_left_mm=values[PITCH_CIRCLE_LEFT],
        pitch_circle_right_mm=values[PITCH_CIRCLE_RIGHT],
        flange_distance_left_mm=values[FLANGE_DISTANCE_LEFT],
        flange_distance_right_mm=values[FLANGE_DISTANCE_RIGHT],
        spoke_hole_diameter_mm=values[SPOKE_HOLE_DIAMETER],
        number_of_spokes=spokes,
        crossings_left=values[CROSSINGS_LEFT],
        crossings_right=values[CROSSINGS_RIGHT],
    )


def _format_limit(limit: float) -> str:
    # 1.0 -> "1", 2.5 -> "2.5"
    return str(int(limit)) if float(limit).is_integer() else str(limit)


def sanitize_edit(field: str, new_value: str, previous: str) -> str:
    """
    Apply the form's keystroke policy to an edited field value.

    Numeric fields accept empty text, a lone decimal point and a number with
    a trailing decimal point while typing. Non-numeric text is rejected (the
    previous value is kept). A completed value outside the field's min/max
    is clamped to the limit. Selection fields (spoke count, crossings) accept
    only their listed options or empty text.

    Returns:
        The value the field should hold after the edit
    """
    if field in FIELD_OPTIONS:
        if new_value == "":
            return new_value
        choice = parse_integer(new_value)
        if choice is not None and choice in FIELD_OPTIONS[field]:
            return new_value
        return previous

    if new_value in ("", "."):
        return new_value

    if new_value.endswith(".") and parse_real(new_value[:-1]) is not None:
        return new_value

    number = parse_real(new_value)
    if number is None:
        return previous

    limits = FIELD_LIMITS.get(field)
    if limits is not None and len(new_value) > 1:
        minimum, maximum, _ = limits
        if number < minimum:
            return _format_limit(minimum)
        if number > maximum:
            return _format_limit(maximum)

    return new_value


def format_on_blur(field: str, value: str) -> str:
    """
    Normalize a field when it loses focus.

    Only 0.1-step fields (the spoke hole diameter) are reformatted, to one
    decimal place. Programmatic loads (presets, saved calculations, imports)
    do not go through this.
    """
    if value in ("", "."):
        return value

    limits = FIELD_LIMITS.get(field)
    if limits is None or limits[2] != ONE_DECIMAL_STEP:
        return value

    number = parse_real(value)
    if number is None:
        return value
    return f"{number:.1f}"
