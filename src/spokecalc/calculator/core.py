"""
Spoke Length Calculator - Core Calculations

Pure mathematical functions for spoke length.

Per side, with A = PCD / 2 (flange radius) and B = ERD / 2 (rim radius):

    θ = 2π · crossings / (spokes / 2)
    C = √(A² + B² − 2AB·cos θ)             (law of cosines, in the wheel plane)
    L = √(C² + flange_distance²) − d / 2    (Pythagoras, d = spoke hole diameter)

and L is floored (never rounded up) to 0.1 mm.
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

from ..enums import Side
from ..errors import ValidationError
from ..io import CalculationInputs, CalculationResult, SpokeParams
from .parsing import parse_inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SideGeometry:
    """Intermediate values of the calculation for one side of the wheel."""
    flange_radius_mm: float
    rim_radius_mm: float
    spokes_per_side: float
    crossing_angle_rad: float
    chord_mm: float
    flange_distance_mm: float
    raw_length_mm: float
    length_mm: float

    @property
    def crossing_angle_deg(self) -> float:
        return math.degrees(self.crossing_angle_rad)


def floor_to_tenth(length_mm: float) -> float:
    """Round down to 0.1 mm: 299.96 -> 299.9 (never 300.0)."""
    return math.floor(length_mm * 10) / 10


def crossing_angle(crossings: int, number_of_spokes: int) -> float:
    """
    Angle (radians) between a spoke's flange hole and its rim hole.

    Raises:
        ValidationError: If number_of_spokes is not positive
    """
    spokes_per_side = number_of_spokes / 2
    if spokes_per_side <= 0:
        raise ValidationError(
            f"Number of spokes must be positive, got {number_of_spokes}",
            fields=["numberOfSpokes"]
        )
    return 2 * math.pi * crossings / spokes_per_side


def chord_length(flange_radius_mm: float, rim_radius_mm: float, angle_rad: float) -> float:
    """
    Distance in the wheel plane from flange hole to rim hole.

    A zero angle (radial lacing) gives |A − B| exactly, without evaluating
    cos(0).
    """
    if angle_rad == 0:
        return abs(flange_radius_mm - rim_radius_mm)
    a, b = flange_radius_mm, rim_radius_mm
    return math.sqrt(a * a + b * b - 2 * a * b * math.cos(angle_rad))


def side_geometry(
    erd_mm: float,
    pitch_circle_mm: float,
    flange_distance_mm: float,
    spoke_hole_diameter_mm: float,
    number_of_spokes: int,
    crossings: int
) -> SideGeometry:
    """
    Full calculation for one side, keeping intermediate values.

    Args:
        erd_mm: Effective rim diameter
        pitch_circle_mm: Hub flange pitch circle diameter
        flange_distance_mm: Flange to wheel centre plane distance
        spoke_hole_diameter_mm: Hub flange spoke hole diameter
        number_of_spokes: Total spokes in the wheel
        crossings: Spokes crossed on this side (0 = radial)

    Returns:
        SideGeometry with the floored length in ``length_mm``
    """
    flange_radius = pitch_circle_mm / 2
    rim_radius = erd_mm / 2
    angle = crossing_angle(crossings, number_of_spokes)

    chord = chord_length(flange_radius, rim_radius, angle)
    raw_length = math.sqrt(chord * chord + flange_distance_mm * flange_distance_mm) - spoke_hole_diameter_mm / 2

    return SideGeometry(
        flange_radius_mm=flange_radius,
        rim_radius_mm=rim_radius,
        spokes_per_side=number_of_spokes / 2,
        crossing_angle_rad=angle,
        chord_mm=chord,
        flange_distance_mm=flange_distance_mm,
        raw_length_mm=raw_length,
        length_mm=floor_to_tenth(raw_length),
    )


def calculate_spoke_length(
    erd_mm: float,
    pitch_circle_mm: float,
    flange_distance_mm: float,
    spoke_hole_diameter_mm: float,
    number_of_spokes: int,
    crossings: int
) -> float:
    """Spoke length for one side in mm, floored to 0.1 mm."""
    return side_geometry(
        erd_mm, pitch_circle_mm, flange_distance_mm,
        spoke_hole_diameter_mm, number_of_spokes, crossings
    ).length_mm


def geometry_for_side(params: SpokeParams, side: Side) -> SideGeometry:
    pitch_circle, flange_distance, crossings = params.side(side)
    return side_geometry(
        params.erd_mm,
        pitch_circle,
        flange_distance,
        params.spoke_hole_diameter_mm,
        params.number_of_spokes,
        crossings,
    )


def compute(inputs: Union[CalculationInputs, SpokeParams]) -> CalculationResult:
    """
    Compute left and right spoke lengths.

    Args:
        inputs: Raw form values (parsed first) or already-parsed SpokeParams

    Returns:
        CalculationResult with both sides present

    Raises:
        ValidationError: If a field is missing, unparseable or out of range
    """
    params = parse_inputs(inputs) if isinstance(inputs, CalculationInputs) else inputs

    left = geometry_for_side(params, Side.LEFT).length_mm
    right = geometry_for_side(params, Side.RIGHT).length_mm

    logger.debug(f"Spoke lengths: left={left:.1f}mm right={right:.1f}mm")
    return CalculationResult(left=left, right=right)
