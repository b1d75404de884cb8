"""
JSON models and exchange documents for spoke calculations.

Defines the records shared by the calculator, the saved-calculation store
and the export/import documents, plus the export/import operations.

Uses Pydantic for validation and camelCase key aliasing.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..constants import (
    CALCULATOR_NAME,
    DEFAULT_INPUTS,
    EXPORT_FILENAME_PREFIX,
    EXPORT_FORMAT_VERSION,
)
from ..enums import Side
from ..errors import FormatError, ValidationError
from .schema import validate_json_schema

logger = logging.getLogger(__name__)


class CalculationInputs(BaseModel):
    """Raw form values, kept as strings so partially typed numbers survive.

    Attribute names are snake_case; JSON keys are the camelCase aliases.
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    erd: str = Field("", alias="erd")
    pitch_circle_left: str = Field("", alias="pitchCircleLeft")
    pitch_circle_right: str = Field("", alias="pitchCircleRight")
    flange_distance_left: str = Field("", alias="flangeDistanceLeft")
    flange_distance_right: str = Field("", alias="flangeDistanceRight")
    spoke_hole_diameter: str = Field("", alias="spokeHoleDiameter")
    number_of_spokes: str = Field("", alias="numberOfSpokes")
    crossings_left: str = Field("", alias="crossingsLeft")
    crossings_right: str = Field("", alias="crossingsRight")

    @field_validator('*', mode='before')
    @classmethod
    def coerce_to_text(cls, v):
        # Documents written by hand often carry numbers or nulls here
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        return str(v)

    @classmethod
    def defaults(cls) -> "CalculationInputs":
        """Starting values of a fresh calculator form."""
        return cls.model_validate(DEFAULT_INPUTS)

    def get_field(self, field: str) -> str:
        """Get a value by its JSON key (e.g. ``"pitchCircleLeft"``)."""
        return getattr(self, _attribute_for(field))

    def with_field(self, field: str, value: str) -> "CalculationInputs":
        """Return a copy with one field (by JSON key) replaced."""
        return self.model_copy(update={_attribute_for(field): value})

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


def _attribute_for(field: str) -> str:
    for name, info in CalculationInputs.model_fields.items():
        if info.alias == field or name == field:
            return name
    raise KeyError(f"Unknown input field: {field}")


class CalculationResult(BaseModel):
    """Left/right spoke lengths in mm, or None when not yet computed."""
    model_config = ConfigDict(extra='ignore')

    left: Optional[float] = None
    right: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.left is not None and self.right is not None

    def for_side(self, side: Side) -> Optional[float]:
        return self.left if side == Side.LEFT else self.right


class SpokeParams(BaseModel):
    """Fully parsed calculator inputs. Only this type reaches the formula."""
    model_config = ConfigDict(frozen=True)

    erd_mm: float = Field(gt=0)
    pitch_circle_left_mm: float = Field(gt=0)
    pitch_circle_right_mm: float = Field(gt=0)
    flange_distance_left_mm: float = Field(gt=0)
    flange_distance_right_mm: float = Field(gt=0)
    spoke_hole_diameter_mm: float = Field(gt=0)
    number_of_spokes: int = Field(gt=0)
    crossings_left: int = Field(ge=0)
    crossings_right: int = Field(ge=0)

    def side(self, side: Side) -> Tuple[float, float, int]:
        """(pitch circle diameter, flange distance, crossings) for one side."""
        if side == Side.LEFT:
            return self.pitch_circle_left_mm, self.flange_distance_left_mm, self.crossings_left
        return self.pitch_circle_right_mm, self.flange_distance_right_mm, self.crossings_right


class ExportMetadata(BaseModel):
    """Identifies the tool that wrote a document."""
    model_config = ConfigDict(extra='ignore')

    calculator: str = CALCULATOR_NAME
    version: str = EXPORT_FORMAT_VERSION


class ExportDocument(BaseModel):
    """Export/import document: inputs + results + metadata."""
    model_config = ConfigDict(extra='ignore')

    inputs: CalculationInputs
    results: CalculationResult
    timestamp: Optional[str] = None
    metadata: Optional[ExportMetadata] = None


class PresetDocument(ExportDocument):
    """Bundled preset: an export document with display information."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    display_name: Optional[str] = Field(None, alias="displayName")
    category: Optional[str] = None
    description: Optional[str] = None


class SavedCalculation(BaseModel):
    """A named calculation in the user's saved collection."""
    model_config = ConfigDict(extra='ignore')

    id: int
    name: str
    inputs: CalculationInputs
    results: CalculationResult
    timestamp: str


def _to_dict(model: BaseModel) -> dict:
    """Convert model to a JSON-compatible dict with camelCase keys."""
    return model.model_dump(mode='json', by_alias=True)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC instant with millisecond precision, e.g. 2024-05-01T09:30:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def export_document(
    inputs: CalculationInputs,
    results: CalculationResult,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Build the export document for a computed calculation.

    Args:
        inputs: Working inputs
        results: Results computed from those inputs
        now: Timestamp override (default: current time)

    Returns:
        Dict with inputs, results, timestamp and metadata sections

    Raises:
        ValidationError: If either side of the result is missing
    """
    if not results.is_complete:
        raise ValidationError("Perform a calculation before exporting")

    document = ExportDocument(
        inputs=inputs,
        results=results,
        timestamp=iso_timestamp(now),
        metadata=ExportMetadata(),
    )
    return _to_dict(document)


def export_filename(now: Optional[datetime] = None) -> str:
    """Download file name, e.g. spoke-calculation-2024-05-01T09-30-00.json."""
    stamp = iso_timestamp(now).replace(':', '-').replace('.', '-')[:19]
    return f"{EXPORT_FILENAME_PREFIX}-{stamp}.json"


def import_document(data: Union[str, bytes, Dict[str, Any]]) -> Tuple[CalculationInputs, CalculationResult]:
    """
    Parse an export document back into inputs and results.

    Only the presence of the ``inputs`` and ``results`` objects is checked;
    individual input fields are validated when the calculator runs.

    Args:
        data: JSON text or an already-parsed dict

    Returns:
        (inputs, results)

    Raises:
        FormatError: If the text is not JSON or a required section is missing
    """
    if isinstance(data, (str, bytes)):
        # bytes may fail to decode before JSON parsing starts
        try:
            data = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FormatError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise FormatError("Invalid JSON format - document must be an object")

    report = validate_json_schema(data)
    if not report["valid"]:
        raise FormatError("Invalid JSON format - " + "; ".join(report["errors"]))
    for warning in report["warnings"]:
        logger.debug(f"Import: {warning}")

    try:
        document = ExportDocument.model_validate(data)
    except PydanticValidationError as e:
        raise FormatError(f"Invalid JSON format - {e.error_count()} malformed value(s)") from e

    return document.inputs, document.results


def save_export_json(
    filepath: Union[str, Path],
    inputs: CalculationInputs,
    results: CalculationResult
) -> Path:
    """
    Write an export document to disk.

    Args:
        filepath: Destination file, or a directory to place a timestamped file in

    Returns:
        Path of the written file
    """
    filepath = Path(filepath)
    if filepath.is_dir():
        filepath = filepath / export_filename()

    data = export_document(inputs, results)

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)

    logger.info(f"Exported calculation to {filepath}")
    return filepath


def load_import_json(filepath: Union[str, Path]) -> Tuple[CalculationInputs, CalculationResult]:
    """
    Read an export document from disk.

    Raises:
        FileNotFoundError: If file doesn't exist
        FormatError: If the document is malformed or not UTF-8/16/32 text
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Calculation file not found: {filepath}")

    # Raw bytes: json detects the encoding and skips a UTF-8 BOM
    return import_document(filepath.read_bytes())
