"""
Spokecalc IO - data models, export/import documents, storage and presets.

Example:
    >>> from spokecalc.io import export_document, import_document
    >>> from spokecalc.calculator import compute
    >>>
    >>> results = compute(inputs)
    >>> document = export_document(inputs, results)
    >>>
    >>> # Load back
    >>> inputs, results = import_document(document)
"""

from .loaders import (
    CalculationInputs,
    CalculationResult,
    SpokeParams,
    ExportMetadata,
    ExportDocument,
    PresetDocument,
    SavedCalculation,
    iso_timestamp,
    export_document,
    export_filename,
    import_document,
    save_export_json,
    load_import_json,
)

from .schema import (
    validate_json_schema,
    validate_preset_document,
)

from .storage import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    SavedCalculationStore,
    load_calculation,
)

from .presets import (
    PRESET_FILES,
    Preset,
    PresetCatalog,
    load_presets,
)

__all__ = [
    # Models
    "CalculationInputs",
    "CalculationResult",
    "SpokeParams",
    "ExportMetadata",
    "ExportDocument",
    "PresetDocument",
    "SavedCalculation",

    # Export / import
    "iso_timestamp",
    "export_document",
    "export_filename",
    "import_document",
    "save_export_json",
    "load_import_json",

    # Schema
    "validate_json_schema",
    "validate_preset_document",

    # Storage
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "SavedCalculationStore",
    "load_calculation",

    # Presets
    "PRESET_FILES",
    "Preset",
    "PresetCatalog",
    "load_presets",
]
