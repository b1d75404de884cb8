"""
Spokecalc - bicycle spoke length calculator.

Computes left/right spoke lengths from rim and hub geometry, keeps a
collection of named saved calculations and exchanges calculations as JSON
documents.

Example:
    >>> from spokecalc import CalculationInputs, compute, export_document
    >>>
    >>> inputs = CalculationInputs.defaults().with_field("erd", "590")
    >>> ...
    >>> results = compute(inputs)
    >>> document = export_document(inputs, results)

Note: All imports are lazy-loaded, so importing the package does not pull in
Pydantic until a model or function is used.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Side", "NoticeLevel", "Language"}

_ERRORS = {"SpokeCalcError", "ValidationError", "FormatError", "PresetLoadError"}

_CALCULATOR = {
    "compute",
    "calculate_spoke_length",
    "floor_to_tenth",
    "parse_inputs",
    "validate_inputs",
    "Severity",
    "ValidationResult",
}

_IO = {
    "CalculationInputs",
    "CalculationResult",
    "SpokeParams",
    "SavedCalculation",
    "export_document",
    "import_document",
    "save_export_json",
    "load_import_json",
    "MemoryStore",
    "JsonFileStore",
    "SavedCalculationStore",
    "load_presets",
}

_APP = {"SpokeCalculatorApp"}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    for names, module_name in (
        (_ENUMS, "enums"),
        (_ERRORS, "errors"),
        (_CALCULATOR, "calculator"),
        (_IO, "io"),
        (_APP, "app"),
    ):
        if name in names:
            if module_name not in _modules:
                from importlib import import_module
                _modules[module_name] = import_module(f".{module_name}", __name__)
            return getattr(_modules[module_name], name)

    raise AttributeError(f"module 'spokecalc' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums
    "Side",
    "NoticeLevel",
    "Language",

    # Errors
    "SpokeCalcError",
    "ValidationError",
    "FormatError",
    "PresetLoadError",

    # Calculator
    "compute",
    "calculate_spoke_length",
    "floor_to_tenth",
    "parse_inputs",
    "validate_inputs",
    "Severity",
    "ValidationResult",

    # IO
    "CalculationInputs",
    "CalculationResult",
    "SpokeParams",
    "SavedCalculation",
    "export_document",
    "import_document",
    "save_export_json",
    "load_import_json",
    "MemoryStore",
    "JsonFileStore",
    "SavedCalculationStore",
    "load_presets",

    # Application
    "SpokeCalculatorApp",
]
