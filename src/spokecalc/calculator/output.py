"""Output formatters for spoke calculations.

Converts inputs/results to the JSON export document, a Markdown report and a
short text summary.
"""

import json
from typing import Optional, TYPE_CHECKING

from ..enums import Side
from ..io import CalculationInputs, CalculationResult, SpokeParams, export_document
from .core import geometry_for_side

if TYPE_CHECKING:
    from .validation import ValidationResult


def _format_length(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else "-"


def to_json(
    inputs: CalculationInputs,
    results: CalculationResult,
    indent: int = 2
) -> str:
    """Export document as JSON text.

    Raises:
        ValidationError: If the result is incomplete
    """
    return json.dumps(export_document(inputs, results), indent=indent)


def to_markdown(
    params: SpokeParams,
    results: CalculationResult,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Markdown report with inputs, intermediate geometry and results.

    Args:
        params: Parsed inputs the results were computed from
        results: Computed results
        validation: Optional validation results to include

    Returns:
        Markdown string
    """
    md = "# Spoke Length Calculation\n\n"

    md += "## Rim & Hub\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| ERD | {params.erd_mm:.1f} mm |\n"
    md += f"| Number of Spokes | {params.number_of_spokes} |\n"
    md += f"| Spoke Hole Diameter | {params.spoke_hole_diameter_mm:.1f} mm |\n\n"

    md += "## Per Side\n\n"
    md += "| | Left | Right |\n"
    md += "|---|------|-------|\n"

    left = geometry_for_side(params, Side.LEFT)
    right = geometry_for_side(params, Side.RIGHT)
    md += f"| Pitch Circle Diameter | {params.pitch_circle_left_mm:.1f} mm | {params.pitch_circle_right_mm:.1f} mm |\n"
    md += f"| Flange Distance | {left.flange_distance_mm:.1f} mm | {right.flange_distance_mm:.1f} mm |\n"
    md += f"| Crossings | {params.crossings_left} | {params.crossings_right} |\n"
    md += f"| Crossing Angle | {left.crossing_angle_deg:.2f}° | {right.crossing_angle_deg:.2f}° |\n"
    md += f"| Chord (wheel plane) | {left.chord_mm:.2f} mm | {right.chord_mm:.2f} mm |\n"
    md += f"| Exact Length | {left.raw_length_mm:.3f} mm | {right.raw_length_mm:.3f} mm |\n"
    md += f"| **Spoke Length** | **{_format_length(results.left)} mm** | **{_format_length(results.right)} mm** |\n\n"

    if validation:
        md += "## Validation\n\n"

        if validation.valid:
            md += "**Status:** ✅ Inputs look reasonable\n\n"
        else:
            md += "**Status:** ❌ Inputs have errors\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "## Notes\n\n"
    md += "- All dimensions in millimeters\n"
    md += "- Lengths are rounded down to 0.1 mm\n"
    md += "- Spoke hole correction subtracts half the hole diameter\n\n"

    md += "---\n"
    md += "*Generated by Bicycle Spoke Length Calculator*\n"

    return md


def to_summary(results: CalculationResult, name: Optional[str] = None) -> str:
    """One-line summary, e.g. 'Left: 287.9mm / Right: 287.9mm'."""
    text = f"Left: {_format_length(results.left)}mm / Right: {_format_length(results.right)}mm"
    if name:
        return f"{name} - {text}"
    return text
