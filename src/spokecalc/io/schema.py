"""
Structural checks for exchanged spoke calculation documents.

The export/import document and the bundled preset documents share one shape:

    {
        "inputs":    {erd, pitchCircleLeft, ..., crossingsRight},   # strings
        "results":   {"left": number|null, "right": number|null},
        "timestamp": "<ISO-8601>",
        "metadata":  {"calculator": str, "version": str}
    }

Import only requires the two top-level sections; presets must also carry all
nine inputs and numeric results on both sides.
"""

from typing import Any, Dict, List

from ..constants import EXPORT_FORMAT_VERSION, REQUIRED_INPUT_FIELDS

REQUIRED_SECTIONS = ("inputs", "results")


def validate_json_schema(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate the top-level structure of an export document.

    Args:
        data: Parsed JSON data

    Returns:
        {
            "valid": bool,
            "errors": List[str],
            "warnings": List[str],
            "version": str
        }

    Example:
        >>> result = validate_json_schema(json.loads(text))
        >>> if not result["valid"]:
        ...     print(f"Errors: {result['errors']}")
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(data, dict):
        return {
            "valid": False,
            "errors": ["Document must be a JSON object"],
            "warnings": [],
            "version": "unknown",
        }

    for section in REQUIRED_SECTIONS:
        if section not in data:
            errors.append(f"Missing required section: '{section}'")
        elif not isinstance(data[section], dict):
            errors.append(f"Section '{section}' must be an object")

    metadata = data.get("metadata")
    version = "unknown"
    if isinstance(metadata, dict):
        version = str(metadata.get("version", "unknown"))
    if version == "unknown":
        warnings.append("Missing 'metadata.version' field")
    elif version != EXPORT_FORMAT_VERSION:
        warnings.append(f"Document version {version} != current {EXPORT_FORMAT_VERSION}")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "version": version,
    }


def validate_preset_document(data: Dict[str, Any]) -> List[str]:
    """
    Check a preset document strictly enough that it can be loaded as-is.

    Returns:
        List of problems; empty if the preset is usable
    """
    report = validate_json_schema(data)
    if not report["valid"]:
        return report["errors"]

    errors: List[str] = []

    inputs = data["inputs"]
    missing = [name for name in REQUIRED_INPUT_FIELDS if not inputs.get(name)]
    if missing:
        errors.append(f"missing input fields: {', '.join(missing)}")

    results = data["results"]
    for side in ("left", "right"):
        value = results.get(side)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append("results must contain numeric left and right values")
            break

    return errors
