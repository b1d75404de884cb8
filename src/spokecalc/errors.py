"""
Exceptions raised by the spoke calculator.

Library functions raise these; the application controller, the CLI and the
JavaScript bridge catch them at the boundary of the triggering action.
"""

from typing import Iterable, Tuple


class SpokeCalcError(Exception):
    """Base class for all spokecalc errors."""
    pass


class ValidationError(SpokeCalcError, ValueError):
    """Raised when required fields are missing or incomplete.

    Attributes:
        fields: Names of the input fields involved (may be empty, e.g. for
            a missing calculation name).
    """

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields: Tuple[str, ...] = tuple(fields)


class FormatError(SpokeCalcError, ValueError):
    """Raised when an import document is not valid JSON or lacks required sections."""
    pass


class PresetLoadError(SpokeCalcError):
    """Raised when a bundled preset document fails its schema checks."""

    def __init__(self, preset_id: str, reason: str):
        super().__init__(f"Invalid preset format in {preset_id}: {reason}")
        self.preset_id = preset_id
        self.reason = reason
