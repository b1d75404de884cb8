"""
Spoke Length Calculator - Validation Rules

Advisory checks on parsed inputs, based on common wheel building practice.
These never block a calculation: hard constraints (missing fields, odd spoke
counts, ...) are enforced by parsing.parse_inputs. This module reports
values that are unusual or geometrically doubtful so the user can
double-check them.
"""

from dataclasses import dataclass, field
from enum import Enum
from math import degrees
from typing import List, Optional

from ..constants import (
    DISH_ASYMMETRY_RATIO,
    MAX_CONVENTIONAL_CROSSINGS,
    MAX_CROSSING_ANGLE_DEG,
    SPOKE_COUNT_OPTIONS,
    SPOKE_HOLE_DIAMETER_MAX_MM,
    SPOKE_HOLE_DIAMETER_MIN_MM,
)
from ..enums import Side
from ..io import SpokeParams
from .core import crossing_angle


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


def validate_inputs(params: SpokeParams) -> ValidationResult:
    """
    Check parsed inputs against wheel building conventions.

    Args:
        params: Parsed inputs

    Returns:
        ValidationResult with all findings
    """
    messages: List[ValidationMessage] = []

    messages.extend(_validate_hub_fits_rim(params))
    messages.extend(_validate_spoke_count(params))
    messages.extend(_validate_crossings(params))
    messages.extend(_validate_spoke_hole(params))
    messages.extend(_validate_dish(params))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_hub_fits_rim(params: SpokeParams) -> List[ValidationMessage]:
    """A flange as large as the rim is impossible geometry."""
    messages = []
    for side in Side:
        pitch_circle, _, _ = params.side(side)
        if pitch_circle >= params.erd_mm:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="HUB_LARGER_THAN_RIM",
                message=(
                    f"{side.value.capitalize()} pitch circle diameter ({pitch_circle:.1f}mm) "
                    f"is not smaller than the ERD ({params.erd_mm:.1f}mm)"
                ),
                suggestion="Check that ERD and pitch circle diameter were entered in the right fields"
            ))
    return messages


def _validate_spoke_count(params: SpokeParams) -> List[ValidationMessage]:
    if params.number_of_spokes in SPOKE_COUNT_OPTIONS:
        return []
    options = ", ".join(str(n) for n in SPOKE_COUNT_OPTIONS)
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="SPOKE_COUNT_UNCOMMON",
        message=f"{params.number_of_spokes} spokes is an uncommon drilling",
        suggestion=f"Most hubs and rims are drilled {options}"
    )]


def _validate_crossings(params: SpokeParams) -> List[ValidationMessage]:
    messages = []
    for side in Side:
        _, _, crossings = params.side(side)

        if crossings == 0:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code="RADIAL_LACING",
                message=f"{side.value.capitalize()} side is radially laced",
                suggestion="Radial lacing cannot transmit hub torque; avoid it on drive or disc-brake sides"
            ))
            continue

        if crossings > MAX_CONVENTIONAL_CROSSINGS:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="CROSSINGS_UNCOMMON",
                message=f"{side.value.capitalize()} side uses {crossings}-cross lacing",
                suggestion=f"Lacing patterns above {MAX_CONVENTIONAL_CROSSINGS}-cross are rarely buildable"
            ))

        angle_deg = degrees(crossing_angle(crossings, params.number_of_spokes))
        if angle_deg > MAX_CROSSING_ANGLE_DEG:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="CROSSING_ANGLE_HIGH",
                message=(
                    f"{side.value.capitalize()} spokes leave the flange at {angle_deg:.1f}°, "
                    f"past tangent ({MAX_CROSSING_ANGLE_DEG:.0f}°)"
                ),
                suggestion="Reduce the number of crossings for this spoke count"
            ))
    return messages


def _validate_spoke_hole(params: SpokeParams) -> List[ValidationMessage]:
    diameter = params.spoke_hole_diameter_mm
    if SPOKE_HOLE_DIAMETER_MIN_MM <= diameter <= SPOKE_HOLE_DIAMETER_MAX_MM:
        return []
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="SPOKE_HOLE_UNCOMMON",
        message=f"Spoke hole diameter {diameter:.1f}mm is outside the usual range",
        suggestion=(
            f"Hub spoke holes are normally {SPOKE_HOLE_DIAMETER_MIN_MM:.1f}-"
            f"{SPOKE_HOLE_DIAMETER_MAX_MM:.1f}mm"
        )
    )]


def _validate_dish(params: SpokeParams) -> List[ValidationMessage]:
    left = params.flange_distance_left_mm
    right = params.flange_distance_right_mm
    larger = max(left, right)
    if (larger - min(left, right)) / larger <= DISH_ASYMMETRY_RATIO:
        return []
    return [ValidationMessage(
        severity=Severity.INFO,
        code="DISH_ASYMMETRY_HIGH",
        message=f"Flange distances differ strongly ({left:.1f}mm vs {right:.1f}mm)",
        suggestion="Heavily dished wheels have low tension on one side; consider a wider-flanged hub"
    )]
