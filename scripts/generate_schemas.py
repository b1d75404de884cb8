#!/usr/bin/env python3
"""
Generate JSON Schemas from Pydantic models.

The Pydantic models in spokecalc.io.loaders are the source of truth for the
export document, the saved-calculation records and the bundled presets. The
generated schemas are for front ends and other tools that read those files.

Usage:
    python scripts/generate_schemas.py
"""

import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pydantic import __version__ as PYDANTIC_VERSION

from spokecalc.constants import EXPORT_FORMAT_VERSION
from spokecalc.enums import Language
from spokecalc.io.loaders import ExportDocument, PresetDocument, SavedCalculation

DRAFT = "https://json-schema.org/draft/2020-12/schema"


def get_model_schema(model_class) -> dict:
    """Get JSON schema from a Pydantic model.

    Uses by_alias=True: documents on disk use the camelCase keys.
    """
    return model_class.model_json_schema(by_alias=True)


def main():
    output_dir = Path(__file__).parent.parent / "schemas"
    output_dir.mkdir(exist_ok=True)

    print("Generating JSON schemas from Pydantic models...")
    print(f"  Pydantic version: {PYDANTIC_VERSION}")

    documents = {
        "export-document": (ExportDocument, "Exported spoke calculation (inputs, results, metadata)"),
        "preset-document": (PresetDocument, "Bundled preset: an export document with display information"),
        "saved-calculation": (SavedCalculation, "One entry of the saved-calculation collection"),
    }

    for name, (model, description) in documents.items():
        schema = get_model_schema(model)
        schema["$schema"] = DRAFT
        schema["$id"] = f"{name}-v{EXPORT_FORMAT_VERSION}.json"
        schema["description"] = description

        schema_file = output_dir / f"{name}-v{EXPORT_FORMAT_VERSION}.json"
        with open(schema_file, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"  Generated: {schema_file}")

    # Saved collection is stored as a JSON array of entries
    collection_schema = {
        "$schema": DRAFT,
        "$id": f"saved-calculations-v{EXPORT_FORMAT_VERSION}.json",
        "title": "SavedCalculations",
        "description": "Value stored under the spokeCalculations key",
        "type": "array",
        "items": {"$ref": f"saved-calculation-v{EXPORT_FORMAT_VERSION}.json"},
    }

    collection_file = output_dir / f"saved-calculations-v{EXPORT_FORMAT_VERSION}.json"
    with open(collection_file, "w") as f:
        json.dump(collection_schema, f, indent=2)
    print(f"  Generated: {collection_file}")

    enums_schema = {
        "$schema": DRAFT,
        "$id": f"enums-v{EXPORT_FORMAT_VERSION}.json",
        "title": "SpokecalcEnums",
        "definitions": {
            "Language": {
                "type": "string",
                "enum": [e.value for e in Language],
                "description": "Value stored under the preferredLanguage key"
            }
        }
    }

    enums_file = output_dir / f"enums-v{EXPORT_FORMAT_VERSION}.json"
    with open(enums_file, "w") as f:
        json.dump(enums_schema, f, indent=2)
    print(f"  Generated: {enums_file}")

    print(f"\nAll schemas written to: {output_dir}/")


if __name__ == "__main__":
    main()
